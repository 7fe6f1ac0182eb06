"""idegw status command - query a running control server."""

import json
from pathlib import Path

import click
import httpx

from idegateway.config.settings_store import SettingsStore


@click.command()
@click.option("--port", "-p", type=int, help="Server port (default: persisted setting)")
@click.option("--host", default="127.0.0.1", show_default=True, help="Server host")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: ~/.config/idegateway/server_settings.yaml)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def status_command(port: int | None, host: str, settings_path: Path | None, as_json: bool) -> None:
    """Show control server status."""
    if port is None:
        store = SettingsStore(settings_path)
        store.load()
        port = store.get_port()

    try:
        response = httpx.get(f"http://{host}:{port}/status", timeout=5.0)
        status_data = response.json()
    except (httpx.RequestError, json.JSONDecodeError) as e:
        if as_json:
            click.echo(json.dumps({"running": False, "port": port, "error": str(e)}))
        else:
            click.echo(f"Server: not reachable on port {port}")
            click.echo(f"Error: {e}")
        return

    if as_json:
        click.echo(json.dumps({"running": True, **status_data}))
        return

    click.echo(f"Server: {status_data.get('state', 'unknown')} ({host}:{port})")
    click.echo(f"Version: {status_data.get('version', 'unknown')}")
    click.echo(f"Uptime: {status_data.get('uptime_seconds', 0)}s")
    if status_data.get("last_error"):
        click.echo(f"Last error: {status_data['last_error']}")
