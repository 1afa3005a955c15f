import logging
import typer
from pathlib import Path
from typing import Optional

from ebrake.config.loader import load_config, DEFAULT_CONFIG_NAME
from ebrake.config.models import EncodeConfiguration
from ebrake.domain.errors import EbrakeError
from ebrake.infrastructure.logging import install_null_handler, setup_logging
from ebrake.infrastructure.event_bus import EventBus
from ebrake.infrastructure.file_scanner import FileScanner
from ebrake.infrastructure.launcher import SubprocessLauncher
from ebrake.pipeline.planner import BatchPlanner
from ebrake.pipeline.executor import EncodeExecutor
from ebrake.pipeline.orchestrator import Orchestrator
from ebrake.ui.reporter import ConsoleReporter

__version__ = "0.2.0"

app = typer.Typer(help="Re-encodes a directory of movie files using HandBrake.")


def _version_callback(value: bool):
    if value:
        typer.echo(f"ebrake version {__version__}")
        raise typer.Exit()


@app.command()
def encode(
    source_dir: Path = typer.Argument(..., help="Directory tree to scan for video files"),
    target_dir: Path = typer.Argument(..., help="Directory tree to write encoded files to (created if missing)"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="EBRAKE_CONFIG",
        help=f"Path to YAML config (default is $HOME/{DEFAULT_CONFIG_NAME})",
    ),
    overwrite: Optional[bool] = typer.Option(
        None,
        "--overwrite/--skip-existing",
        help="Re-encode files whose target already exists",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print encoder commands without running them"),
    log_path: Optional[Path] = typer.Option(None, "--log-path", help="Path to log file (overrides config)"),
    debug: bool = typer.Option(False, "--debug/--no-debug", help="Enable verbose debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Print version and exit"
    ),
):
    """Encode every video under SOURCE_DIR into a mirrored tree under TARGET_DIR."""
    install_null_handler()
    logger = logging.getLogger(__name__)

    try:
        file_config = load_config(config_path)
        # Apply CLI overrides
        if log_path is not None: file_config.log_path = str(log_path)
        if debug: file_config.debug = True

        setup_logging(Path(file_config.log_path), debug=file_config.debug)
        config = EncodeConfiguration.from_file_config(
            file_config,
            source_root=source_dir,
            target_root=target_dir,
            overwrite=overwrite,
            dry_run=dry_run,
        )
        logger.info(f"ebrake started: source={config.source_root}, target={config.target_root}")
        logger.info(
            f"Config: command={config.encoder_command}, extensions={sorted(config.recognized_extensions)}, "
            f"target_extension={config.target_extension}, overwrite={config.overwrite}, dry_run={config.dry_run}"
        )

        bus = EventBus()
        ConsoleReporter(bus)

        orchestrator = Orchestrator(
            config=config,
            event_bus=bus,
            file_scanner=FileScanner(config.recognized_extensions),
            planner=BatchPlanner(config, bus),
            executor=EncodeExecutor(config, SubprocessLauncher(), bus),
        )
        summary = orchestrator.run()
        logger.info(
            f"ebrake finished: found={summary.files_found}, planned={summary.jobs_planned}, "
            f"skipped={summary.skipped}, encoded={summary.encoded}"
        )

    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C)")
        typer.secho("\nEncoding stopped by user (Ctrl+C)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=130)

    except typer.Exit:
        raise

    except EbrakeError as e:
        logger.error(f"FATAL: {e}")
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    except Exception as e:
        logger.exception("Unexpected error")
        typer.secho(f"Fatal Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
