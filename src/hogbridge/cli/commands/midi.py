"""MIDI command implementations."""

import contextlib
import logging
import time
from collections.abc import Callable
from datetime import datetime

import click
import mido

from hogbridge.midi import MidiInputManager, MidiManager
from hogbridge.models import BridgeConfig

logger = logging.getLogger(__name__)


@click.group(name="midi")
def midi_group():
    """MIDI device commands."""
    pass


@midi_group.command(name="list")
@click.pass_context
def list_midi(ctx):
    """List available MIDI ports (* marks ports of the configured device)."""
    config_obj = BridgeConfig.load_or_default((ctx.obj or {}).get("config_path"))
    prefix = config_obj.midi_device
    ports = MidiManager.list_ports()

    for direction in ("input", "output"):
        click.echo(f"MIDI {direction.capitalize()} Ports:\n")
        if not ports[direction]:
            click.echo(f"  No MIDI {direction} ports found.")
        else:
            for i, port in enumerate(ports[direction]):
                marker = "*" if port.startswith(prefix) else " "
                click.echo(f" {marker}[{i}] {port}")
        click.echo("")

    click.echo(f"Device prefix: '{prefix}'")


@midi_group.command(name="monitor")
@click.option(
    "--filter-clock/--no-filter-clock",
    default=True,
    help="Filter out clock messages (default: enabled)",
)
def monitor_midi(filter_clock: bool):
    """
    Monitor all MIDI input ports and print incoming messages.

    Press Ctrl+C to stop monitoring.
    """
    ports = mido.get_input_names()

    if not ports:
        click.echo("No MIDI input ports found.")
        return

    click.echo(f"Monitoring {len(ports)} MIDI input port(s):")
    for port in ports:
        click.echo(f"  - {port}")
    click.echo("\nPress Ctrl+C to stop\n")

    managers = []

    try:
        for port_name in ports:
            def make_selector(name: str) -> Callable[[list[str]], str]:
                return lambda candidates: name if name in candidates else candidates[0]

            manager = MidiInputManager(device_prefix=port_name, port_selector=make_selector(port_name))

            def make_callback(name):
                def callback(msg):
                    if filter_clock and msg.type == "clock":
                        return
                    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
                    click.echo(f"[{timestamp}] {name}: {msg}")

                return callback

            manager.on_message(make_callback(port_name))
            manager.start()
            managers.append(manager)

        while True:
            time.sleep(0.1)

    except KeyboardInterrupt:
        click.echo("\n\nStopping monitor...")

    finally:
        for manager in managers:
            with contextlib.suppress(Exception):
                manager.stop()
