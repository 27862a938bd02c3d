"""OSC command implementations."""

import logging
import time
from datetime import datetime
from typing import Optional

import click

from hogbridge.core import TIME_STATUS_PREFIX
from hogbridge.exceptions import HogBridgeError
from hogbridge.models import BridgeConfig
from hogbridge.osc import OscListener
from hogbridge.protocols import ConsoleEvent

from ..options import HostPort

logger = logging.getLogger(__name__)


def format_event(event: ConsoleEvent) -> str:
    """One-line rendering of an OSC message."""
    args = " ".join(repr(arg) for arg in event.args)
    return f"{event.address} {args}".rstrip()


@click.group(name="osc")
def osc_group():
    """OSC network commands."""
    pass


@osc_group.command(name="monitor")
@click.option(
    "--listen", "-l",
    type=HostPort(default_host="0.0.0.0"),
    default=None,
    help="HOST:PORT to listen on (default: from config)",
)
@click.option(
    "--hide-time/--show-time",
    default=True,
    help="Hide /hog/status/time messages (default: hidden)",
)
@click.pass_context
def monitor_osc(ctx, listen: Optional[tuple[str, int]], hide_time: bool):
    """
    Print OSC messages sent by the console.

    Bundles are flattened into their messages. Press Ctrl+C to stop.
    """
    config_obj = BridgeConfig.load_or_default((ctx.obj or {}).get("config_path"))
    host, port = listen or config_obj.listen_address

    def callback(event: ConsoleEvent) -> None:
        if hide_time and event.address.startswith(TIME_STATUS_PREFIX):
            return
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        click.echo(f"[{timestamp}] {format_event(event)}")

    listener = OscListener(host, port, buffer_size=config_obj.recv_buffer_size)
    listener.on_message(callback)

    try:
        listener.start()
    except HogBridgeError as e:
        raise click.ClickException(e.get_full_message()) from e

    click.echo(f"Listening on {host}:{port}. Press Ctrl+C to stop\n")
    try:
        while listener.is_running:
            time.sleep(0.1)
    except KeyboardInterrupt:
        click.echo("\n\nStopping monitor...")
    finally:
        listener.stop()
