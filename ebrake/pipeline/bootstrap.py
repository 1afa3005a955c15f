import logging
from pathlib import Path
from typing import Optional
from ebrake.domain.errors import TargetDirectoryError
from ebrake.domain.events import TargetDirectoryCreated
from ebrake.infrastructure.event_bus import EventBus

logger = logging.getLogger(__name__)


def ensure_target_directory(target_root: Path, event_bus: Optional[EventBus] = None) -> bool:
    """Makes sure ``target_root`` is a usable directory before discovery.

    Returns True when the directory had to be created. Not atomic with respect
    to concurrent changes to the filesystem.
    """
    target_root = Path(target_root)
    if target_root.is_dir():
        return False
    if target_root.exists():
        raise TargetDirectoryError(f"{target_root} is not a directory")

    logger.info(f"TARGET_CREATE: {target_root}")
    try:
        target_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise TargetDirectoryError(f"Target directory does not exist and cannot be created: {target_root} ({exc})") from exc

    if event_bus is not None:
        event_bus.publish(TargetDirectoryCreated(directory=target_root))
    return True
