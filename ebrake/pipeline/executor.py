import logging
from typing import List, Sequence
from ebrake.config.models import EncodeConfiguration
from ebrake.domain.errors import EncodeError, TargetDirectoryError
from ebrake.domain.events import JobCompleted, JobFailed, JobStarted
from ebrake.domain.models import EncodeJob
from ebrake.infrastructure.event_bus import EventBus
from ebrake.infrastructure.launcher import ProcessLauncher

INPUT_FLAG = "-i"
OUTPUT_FLAG = "-o"


class EncodeExecutor:
    """Runs the encoder once per job, strictly in order.

    The first failing job aborts the batch: jobs after it are never launched.
    """

    def __init__(self, config: EncodeConfiguration, launcher: ProcessLauncher, event_bus: EventBus):
        self.config = config
        self.launcher = launcher
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)

    def build_command(self, job: EncodeJob) -> List[str]:
        """Constructs the encoder command line for a job."""
        return [
            self.config.encoder_command,
            *self.config.encoder_option_tokens,
            INPUT_FLAG, str(job.source_path),
            OUTPUT_FLAG, str(job.target_path),
        ]

    def _prepare_target_dir(self, job: EncodeJob):
        # Subdirectories of the mirrored tree are created on demand
        try:
            job.target_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TargetDirectoryError(
                f"Cannot create target directory {job.target_path.parent} for {job.source_path} ({exc})"
            ) from exc

    def _fail(self, job: EncodeJob, error: EncodeError):
        self.logger.error(f"ENCODE_FAILED: {job.source_path} - {error}")
        self.event_bus.publish(JobFailed(job=job, error_message=str(error)))
        return error

    def run(self, jobs: Sequence[EncodeJob]) -> int:
        """Encodes every job and returns how many were encoded (or listed, in dry-run)."""
        total = len(jobs)
        done = 0

        for index, job in enumerate(jobs, start=1):
            cmd = self.build_command(job)

            if self.config.dry_run:
                self.event_bus.publish(JobStarted(job=job, command=cmd, index=index, total=total, dry_run=True))
                done += 1
                continue

            self._prepare_target_dir(job)
            self.logger.info(f"ENCODE_START: {job.source_path} -> {job.target_path} ({index}/{total})")
            self.logger.debug(f"ENCODE_CMD: {' '.join(cmd)}")
            self.event_bus.publish(JobStarted(job=job, command=cmd, index=index, total=total))

            try:
                returncode = self.launcher.launch(cmd)
            except OSError as exc:
                error = EncodeError(job.source_path, reason=f"cannot launch {self.config.encoder_command}: {exc}")
                raise self._fail(job, error) from exc

            if returncode != 0:
                raise self._fail(job, EncodeError(job.source_path, returncode=returncode))

            self.logger.info(f"ENCODE_END: {job.source_path} status=completed")
            self.event_bus.publish(JobCompleted(job=job))
            done += 1

        return done
