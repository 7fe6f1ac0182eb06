"""idegw port command - show or change the persisted server port."""

from pathlib import Path

import click

from idegateway.config.settings_store import SettingsStore
from idegateway.core.errors import ConfigError


@click.command()
@click.argument("value", required=False)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: ~/.config/idegateway/server_settings.yaml)",
)
def port_command(value: str | None, settings_path: Path | None) -> None:
    """Show the control server port, or set it to VALUE (1-65535).

    A new port takes effect the next time the server starts.
    """
    store = SettingsStore(settings_path)
    store.load()

    if value is None:
        click.echo(str(store.get_port()))
        return

    try:
        port = store.apply_port_text(value)
    except ConfigError as e:
        raise click.ClickException(e.details.get("reason", e.message)) from e

    store.flush()
    click.echo(f"Port set to {port}. Restart the server to apply.")
