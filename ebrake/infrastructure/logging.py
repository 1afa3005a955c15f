import logging
from pathlib import Path


def setup_logging(log_path: Path, debug: bool = False) -> logging.Logger:
    """
    Setup logging configuration for ebrake.

    Creates the log file's parent directory and attaches a file handler.
    Console output is left to the reporter so the encoder's own output stays
    readable.

    Args:
        log_path: Path to the log file
        debug: If True, enable DEBUG level logging (includes full commands)
    """
    log_file = Path(log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Configure logging level
    level = logging.DEBUG if debug else logging.INFO

    # Configure logging
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(log_file)],
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized: {log_file} (debug={'ON' if debug else 'OFF'})")

    return logger


def install_null_handler():
    """Keeps log records off stderr until setup_logging installs the file handler.

    Without any root handler, Python's last-resort handler would echo
    records to stderr next to the CLI's own error message.
    """
    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(logging.NullHandler())
