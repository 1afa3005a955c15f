"""Exception hierarchy for ebrake.

Every fatal condition of a run is raised as an ``EbrakeError`` subclass. The
CLI catches the base class, prints a single message and exits non-zero.
Skipped files are not errors and never raise.
"""

from pathlib import Path
from typing import Optional


class EbrakeError(Exception):
    """Base class for all fatal ebrake errors."""


class ConfigError(EbrakeError):
    """Configuration file is malformed, invalid or unreadable."""


class TargetDirectoryError(EbrakeError):
    """Target directory cannot be created or is not a directory."""


class DiscoveryError(EbrakeError):
    """Walking the source tree failed."""


class PathResolutionError(EbrakeError):
    """A candidate path does not lie under the source root."""


class ExistenceCheckError(EbrakeError):
    """Checking for an existing target failed for a reason other than 'not found'."""


class EncodeError(EbrakeError):
    """The encoder failed to launch or exited with a non-zero status."""

    def __init__(self, source_path: Path, returncode: Optional[int] = None, reason: Optional[str] = None):
        self.source_path = source_path
        self.returncode = returncode
        if reason is None:
            reason = f"exit status {returncode}"
        super().__init__(f"Failed to encode video: {source_path} ({reason})")
