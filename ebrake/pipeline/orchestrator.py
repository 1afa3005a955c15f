"""Pipeline orchestrator for one ebrake run.

Sequences the stages of a run, each feeding the next:

- Ensure the target directory exists (create it when missing)
- Discover video files under the source root by extension
- Plan jobs: mirror each file under the target root, skip existing targets
- Encode the jobs one at a time, stopping at the first failure

Errors are not caught here; they reach the CLI as EbrakeError subclasses.
"""

import logging
from ebrake.config.models import EncodeConfiguration
from ebrake.domain.events import DiscoveryStarted, NothingToDo, ProcessingFinished
from ebrake.domain.models import RunSummary
from ebrake.infrastructure.event_bus import EventBus
from ebrake.infrastructure.file_scanner import FileScanner
from ebrake.pipeline.bootstrap import ensure_target_directory
from ebrake.pipeline.executor import EncodeExecutor
from ebrake.pipeline.planner import BatchPlanner


class Orchestrator:
    """Runs bootstrap → discovery → planning → encoding for one invocation.

    Args:
        config: Immutable run configuration.
        event_bus: EventBus shared with the reporter.
        file_scanner: FileScanner for discovering video files.
        planner: BatchPlanner mapping candidates to jobs.
        executor: EncodeExecutor launching the encoder.
    """

    def __init__(
        self,
        config: EncodeConfiguration,
        event_bus: EventBus,
        file_scanner: FileScanner,
        planner: BatchPlanner,
        executor: EncodeExecutor,
    ):
        self.config = config
        self.event_bus = event_bus
        self.file_scanner = file_scanner
        self.planner = planner
        self.executor = executor
        self.logger = logging.getLogger(__name__)

    def run(self) -> RunSummary:
        ensure_target_directory(self.config.target_root, self.event_bus)

        self.logger.info(f"DISCOVERY_START: scanning {self.config.source_root}")
        self.event_bus.publish(DiscoveryStarted(directory=self.config.source_root))
        plan = self.planner.plan(self.file_scanner.scan(self.config.source_root))

        summary = RunSummary(
            files_found=len(plan.jobs) + len(plan.skipped),
            jobs_planned=len(plan.jobs),
            skipped=len(plan.skipped),
            dry_run=self.config.dry_run,
        )
        if plan.is_empty:
            self.logger.info("Nothing to encode")
            self.event_bus.publish(NothingToDo())
            return summary

        summary.encoded = self.executor.run(plan.jobs)
        self.event_bus.publish(ProcessingFinished(encoded=summary.encoded, dry_run=self.config.dry_run))
        return summary
