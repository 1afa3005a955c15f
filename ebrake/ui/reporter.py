from typing import Optional
from rich.console import Console
from rich.markup import escape
from ebrake.infrastructure.event_bus import EventBus
from ebrake.domain.events import (
    TargetDirectoryCreated, JobSkipped, NothingToDo, DiscoveryFinished,
    JobStarted, JobCompleted, JobFailed, ProcessingFinished,
)


class ConsoleReporter:
    """Subscribes to EventBus and prints progress messages to the console.

    The encoder writes to the same terminal, so messages are short single
    lines between encoder runs.
    """

    def __init__(self, bus: EventBus, console: Optional[Console] = None):
        self.bus = bus
        self.console = console or Console(highlight=False, soft_wrap=True)
        self._setup_subscriptions()

    def _setup_subscriptions(self):
        self.bus.subscribe(TargetDirectoryCreated, self.on_target_created)
        self.bus.subscribe(JobSkipped, self.on_job_skipped)
        self.bus.subscribe(DiscoveryFinished, self.on_discovery_finished)
        self.bus.subscribe(NothingToDo, self.on_nothing_to_do)
        self.bus.subscribe(JobStarted, self.on_job_started)
        self.bus.subscribe(JobCompleted, self.on_job_completed)
        self.bus.subscribe(JobFailed, self.on_job_failed)
        self.bus.subscribe(ProcessingFinished, self.on_processing_finished)

    def on_target_created(self, event: TargetDirectoryCreated):
        self.console.print(f"Target directory did not exist; created {escape(str(event.directory))}")

    def on_job_skipped(self, event: JobSkipped):
        self.console.print(
            f"[yellow]Target file already exists, skipping:[/yellow] "
            f"{escape(str(event.skipped.source_path))} → {escape(str(event.skipped.target_path))}"
        )

    def on_discovery_finished(self, event: DiscoveryFinished):
        if event.files_found:
            self.console.print(
                f"Found {event.files_found} video file(s): {event.files_to_process} to encode, "
                f"{event.already_encoded} already encoded"
            )

    def on_nothing_to_do(self, event: NothingToDo):
        self.console.print("Did not find any videos to re-encode.")

    def on_job_started(self, event: JobStarted):
        if event.dry_run:
            self.console.print(" ".join(escape(arg) for arg in event.command))
            return
        self.console.print(
            f"[bold cyan][{event.index}/{event.total}][/bold cyan] "
            f"{escape(str(event.job.source_path))} → {escape(str(event.job.target_path))}"
        )

    def on_job_completed(self, event: JobCompleted):
        self.console.print(f"[green]✓[/green] {escape(str(event.job.target_path))}")

    def on_job_failed(self, event: JobFailed):
        self.console.print(f"[red]✗ {escape(str(event.job.source_path))}[/red]")

    def on_processing_finished(self, event: ProcessingFinished):
        if event.dry_run:
            self.console.print(f"Dry run: {event.encoded} command(s) not executed.")
        else:
            self.console.print(f"[green]Encoded {event.encoded} video(s).[/green]")
