"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from hogbridge import __version__
from hogbridge.models.config import CONFIG_DIR

from .commands import config, mapping_group, midi_group, osc_group
from .options import HostPort

logger = logging.getLogger(__name__)


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Log file used for the given flags."""
    if debug and not log_file:
        return Path.cwd() / "hogbridge-debug.log"
    if log_file:
        return log_file
    return CONFIG_DIR / "logs" / "hogbridge.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    file_level = level
    if log_file:
        file_level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    # The bridge is headless, so also report on stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, file_level))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


def run_bridge(
    config_path: Optional[Path],
    device: Optional[str],
    listen: Optional[tuple[str, int]],
    console: Optional[tuple[str, int]],
    log_path: Path,
) -> None:
    """Load configuration, open the bridge and route until interrupted or failed."""
    from hogbridge.core import Bridge
    from hogbridge.exceptions import format_error_for_display
    from hogbridge.models import BridgeConfig

    bridge = None
    try:
        config_obj = BridgeConfig.load_or_default(config_path)

        overrides = {}
        if device:
            overrides["midi_device"] = device
        if listen:
            overrides["listen_host"], overrides["listen_port"] = listen
        if console:
            overrides["console_host"], overrides["console_port"] = console
        if overrides:
            config_obj = config_obj.model_copy(update=overrides)

        logger.info(
            f"Starting bridge: device='{config_obj.midi_device}', "
            f"listen={config_obj.listen_host}:{config_obj.listen_port}, "
            f"console={config_obj.console_host}:{config_obj.console_port}"
        )

        bridge = Bridge(config_obj)
        with bridge:
            click.echo("Bridge running. Press Ctrl+C to stop.", err=True)
            bridge.run()

    except KeyboardInterrupt:
        logger.info("Bridge interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running bridge")

        user_message, recovery_hint = format_error_for_display(e)

        click.echo("\n" + "=" * 70, err=True)
        click.echo(f"ERROR: {user_message}", err=True)
        click.echo("=" * 70, err=True)

        if recovery_hint:
            click.echo(f"\n{recovery_hint}", err=True)

        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="hogbridge")
@click.option(
    '--config', '-c', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.hogbridge/config.json)'
)
@click.option(
    '--device', '-d',
    type=str,
    default=None,
    help='MIDI port name prefix of the control surface (overrides config)'
)
@click.option(
    '--listen', '-l',
    type=HostPort(default_host="0.0.0.0"),
    default=None,
    help='HOST:PORT to receive console status on (overrides config)'
)
@click.option(
    '--console', '-o',
    type=HostPort(default_host="127.0.0.1"),
    default=None,
    help='HOST:PORT of the console OSC input (overrides config)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./hogbridge-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    config_path: Optional[Path],
    device: Optional[str],
    listen: Optional[tuple[str, int]],
    console: Optional[tuple[str, int]],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Hog Bridge - APC Mini control surface for Hog 4 lighting consoles.

    Pads and faders are sent to the console as OSC hardware messages,
    and the console's LED status is shown on the pads.

    \b
    Examples:
      # Run with the saved configuration
      hogbridge

      # Console at 192.168.1.20, status received on port 7002
      hogbridge --console 192.168.1.20:7001 --listen :7002

      # Enable debug logging
      hogbridge --debug

      # List MIDI devices
      hogbridge midi list

      # Show the pad layout
      hogbridge mapping show
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is not None:
        return

    log_path = setup_logging(verbose, debug, log_file, log_level)
    run_bridge(config_path, device, listen, console, log_path)


cli.add_command(config)
cli.add_command(mapping_group)
cli.add_command(midi_group)
cli.add_command(osc_group)

if __name__ == "__main__":
    cli()
