"""
Config command: inspect and update the saved BridgeConfig.

Commands:
    - config show [--field FIELD]           # Display configuration
    - config path                           # Print the config file location
    - config set --option VALUE ...         # Update configuration
    - config reset                          # Restore defaults
"""

import logging
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from hogbridge.exceptions import ConfigurationError, wrap_pydantic_error
from hogbridge.models import BridgeConfig
from hogbridge.models.config import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def _config_path(ctx: click.Context) -> Path:
    return (ctx.obj or {}).get("config_path") or DEFAULT_CONFIG_PATH


def _load(path: Path) -> BridgeConfig:
    try:
        return BridgeConfig.load_or_default(path)
    except ConfigurationError as e:
        raise click.ClickException(e.get_full_message()) from e


@click.group(name="config", invoke_without_command=True)
@click.pass_context
def config(ctx):
    """Configure hogbridge settings."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(show_config)


@config.command(name="show")
@click.option("--field", "-f", type=str, default=None, help="Show only this field")
@click.pass_context
def show_config(ctx, field: Optional[str]):
    """Display configuration values."""
    path = _config_path(ctx)
    config_obj = _load(path)
    values = config_obj.model_dump()

    if field is not None:
        if field not in values:
            raise click.BadParameter(
                f"Unknown field '{field}'. Fields: {', '.join(values)}", param_hint="--field"
            )
        click.echo(values[field])
        return

    click.echo(f"Configuration ({path}):\n")
    for name, value in values.items():
        click.echo(f"  {name}: {value}")


@config.command(name="path")
@click.pass_context
def config_path(ctx):
    """Print the config file location."""
    click.echo(str(_config_path(ctx)))


@config.command(name="set")
@click.option("--midi-device", type=str, default=None, help="MIDI port name prefix of the surface")
@click.option("--listen-host", type=str, default=None, help="Address to receive console status on")
@click.option("--listen-port", type=int, default=None, help="UDP port to receive console status on")
@click.option("--console-host", type=str, default=None, help="Address of the console OSC input")
@click.option("--console-port", type=int, default=None, help="UDP port of the console OSC input")
@click.option("--recv-buffer-size", type=int, default=None, help="Largest datagram read (bytes)")
@click.pass_context
def set_config(ctx, **updates):
    """Update configuration values and save."""
    updates = {name: value for name, value in updates.items() if value is not None}
    if not updates:
        raise click.UsageError("Nothing to set. See 'hogbridge config set --help'.")

    path = _config_path(ctx)
    current = _load(path)

    try:
        updated = BridgeConfig.model_validate({**current.model_dump(), **updates})
    except ValidationError as e:
        raise click.ClickException(wrap_pydantic_error(e, str(path)).get_full_message()) from e

    updated.save(path)
    logger.info(f"Updated config {path}: {updates}")
    for name, value in updates.items():
        click.echo(f"{name} = {value}")


@config.command(name="reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset_config(ctx, yes: bool):
    """Restore default configuration values."""
    path = _config_path(ctx)
    if not yes:
        click.confirm(f"Reset {path} to defaults?", abort=True)
    BridgeConfig().save(path)
    click.echo(f"Configuration reset: {path}")
