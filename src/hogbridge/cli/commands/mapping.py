"""Mapping command implementations."""

import click

from hogbridge.core import hardware_address
from hogbridge.models import Mapping


@click.group(name="mapping")
def mapping_group():
    """Control surface layout commands."""
    pass


@mapping_group.command(name="show")
@click.option("--buttons/--no-buttons", default=True, help="Show buttons (default: yes)")
@click.option("--controllers/--no-controllers", default=True, help="Show faders (default: yes)")
def show_mapping(buttons: bool, controllers: bool):
    """Print the pads and faders and the console controls they drive."""
    mapping = Mapping.apc_mini()

    if buttons:
        click.echo(f"{'NOTE':>4}  {'ON':>3}  {'OFF':>3}  ADDRESS")
        for button in sorted(mapping.all_buttons(), key=lambda b: b.note):
            click.echo(
                f"{button.note:>4}  {button.vel_on:>3}  {button.vel_off:>3}  "
                f"{hardware_address(button.name)}"
            )

    if buttons and controllers:
        click.echo("")

    if controllers:
        click.echo(f"{'CC':>4}  ADDRESS")
        for controller in mapping.all_controllers():
            click.echo(f"{controller.id:>4}  {hardware_address(controller.name)}")
