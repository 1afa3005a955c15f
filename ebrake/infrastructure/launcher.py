import logging
import subprocess
from typing import List, Protocol


class ProcessLauncher(Protocol):
    """Runs a command to completion and returns its exit status."""

    def launch(self, cmd: List[str]) -> int:
        ...


class SubprocessLauncher:
    """Launches the encoder as a child process sharing our stdout/stderr.

    The call blocks until the child exits. OSError (missing executable,
    permission denied) is raised to the caller unchanged.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def launch(self, cmd: List[str]) -> int:
        self.logger.debug(f"LAUNCH: {cmd[0]} ({len(cmd) - 1} args)")
        completed = subprocess.run(cmd, check=False)
        return completed.returncode
