import logging
import os
from pathlib import Path
from typing import Iterable
from ebrake.config.models import EncodeConfiguration
from ebrake.domain.errors import ExistenceCheckError, PathResolutionError
from ebrake.domain.events import DiscoveryFinished, JobSkipped
from ebrake.domain.models import BatchPlan, EncodeJob, SkippedFile
from ebrake.infrastructure.event_bus import EventBus
from ebrake.infrastructure.file_scanner import file_extension


class BatchPlanner:
    """Maps discovered files to mirrored destinations and drops the ones already encoded.

    Args:
        config: Run configuration (roots, target extension, overwrite policy).
        event_bus: Receives a JobSkipped per skipped candidate and a
            DiscoveryFinished once the plan is complete.
    """

    def __init__(self, config: EncodeConfiguration, event_bus: EventBus):
        self.config = config
        self.event_bus = event_bus
        self.logger = logging.getLogger(__name__)

    def destination_for(self, source_path: Path) -> Path:
        """Mirrors ``source_path`` under the target root with the target extension."""
        try:
            rel_path = Path(source_path).relative_to(self.config.source_root)
        except ValueError as exc:
            raise PathResolutionError(
                f"Failed to find relative path to source file: {source_path} is not under {self.config.source_root}"
            ) from exc

        destination = str(self.config.target_root / rel_path)
        ext = file_extension(destination)
        if ext:
            destination = destination[:-len(ext)]
        return Path(destination + self.config.target_extension)

    def target_exists(self, target_path: Path) -> bool:
        try:
            os.stat(target_path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            raise ExistenceCheckError(f"Unable to determine state of file: {target_path} ({exc})") from exc
        return True

    def plan(self, candidates: Iterable[Path]) -> BatchPlan:
        """Builds the ordered batch. Candidates are consumed eagerly, in order."""
        plan = BatchPlan()
        files_found = 0

        for source_path in candidates:
            files_found += 1
            target_path = self.destination_for(source_path)

            if not self.config.overwrite and self.target_exists(target_path):
                skipped = SkippedFile(source_path=source_path, target_path=target_path)
                plan.skipped.append(skipped)
                self.logger.info(f"PLAN_SKIP: {source_path} (target exists: {target_path})")
                self.event_bus.publish(JobSkipped(skipped=skipped))
                continue

            plan.jobs.append(EncodeJob(source_path=source_path, target_path=target_path))

        self.logger.info(
            f"DISCOVERY_END: found={files_found}, to_process={len(plan.jobs)}, already_encoded={len(plan.skipped)}"
        )
        self.event_bus.publish(
            DiscoveryFinished(
                files_found=files_found,
                files_to_process=len(plan.jobs),
                already_encoded=len(plan.skipped),
            )
        )
        return plan
