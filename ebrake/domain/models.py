from pathlib import Path
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class EncodeJob(BaseModel):
    """A source file paired with the destination the encoder will write."""
    model_config = ConfigDict(frozen=True)

    source_path: Path
    target_path: Path


class SkippedFile(BaseModel):
    """A candidate left out of the batch because its destination exists."""
    model_config = ConfigDict(frozen=True)

    source_path: Path
    target_path: Path


class BatchPlan(BaseModel):
    jobs: List[EncodeJob] = Field(default_factory=list)
    skipped: List[SkippedFile] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.jobs


class RunSummary(BaseModel):
    files_found: int = 0
    jobs_planned: int = 0
    skipped: int = 0
    encoded: int = 0
    dry_run: bool = False
