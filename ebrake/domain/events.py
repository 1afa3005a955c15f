"""Domain events for the encode pipeline.

Events flow through the EventBus so the pipeline can report skips, job
boundaries and the end of a run without knowing how (or whether) they are
shown to the user.

See `infrastructure/event_bus.py` for the pub/sub mechanism.
"""

from pathlib import Path
from typing import List
from pydantic import BaseModel
from .models import EncodeJob, SkippedFile


class Event(BaseModel):
    """Base class for all domain events.

    Events are validated Pydantic models. They are not frozen by default.
    """

    pass


class TargetDirectoryCreated(Event):
    """Emitted when the target root did not exist and was created."""

    directory: Path


class DiscoveryStarted(Event):
    """Emitted when the source tree walk begins."""

    directory: Path


class DiscoveryFinished(Event):
    """Emitted after planning, with summary counters."""

    files_found: int
    files_to_process: int = 0
    already_encoded: int = 0


class JobSkipped(Event):
    """Emitted for a candidate whose destination already exists."""

    skipped: SkippedFile


class NothingToDo(Event):
    """Emitted when the plan holds no jobs."""

    pass


class JobEvent(Event):
    """Base class for events related to a specific encode job."""

    job: EncodeJob


class JobStarted(JobEvent):
    """Emitted right before the encoder is launched for a job."""

    command: List[str]
    index: int
    total: int
    dry_run: bool = False


class JobCompleted(JobEvent):
    """Emitted when the encoder exits with status 0."""

    pass


class JobFailed(JobEvent):
    """Emitted when the encoder fails; the batch stops afterwards."""

    error_message: str


class ProcessingFinished(Event):
    """Emitted when every job of the batch has run."""

    encoded: int
    dry_run: bool = False
