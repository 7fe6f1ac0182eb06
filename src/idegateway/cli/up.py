"""idegw up command - run the control server in the foreground.

Acts as a minimal host: fires the "application ready" hook, waits until
interrupted, then shuts the server down and flushes settings.
"""

import time
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click
from rich.console import Console

from idegateway.config.loader import load_config
from idegateway.config.settings_store import SettingsStore
from idegateway.core.errors import ConfigError
from idegateway.daemon.lifecycle import ServerLifecycleManager, ServerState
from idegateway.daemon.startup import on_app_ready

_console = Console(stderr=True)

_POLL_SEC = 0.5


def _print_banner(host: str, port: int) -> None:
    """Print the ready banner with endpoint info."""
    try:
        ver = version("ide-gateway")
    except PackageNotFoundError:
        ver = "dev"

    banner_width = 64
    rule_line = "─" * banner_width
    base_url = f"http://{host}:{port}"

    _console.print()
    _console.print(rule_line, style="dim cyan", highlight=False)
    _console.print(
        f"ide-gateway v{ver} · Ready".center(banner_width), style="bold cyan", highlight=False
    )
    _console.print(rule_line, style="dim cyan", highlight=False)
    _console.print()
    _console.print(f"  Health Check:    {base_url}/health", highlight=False)
    _console.print(f"  Status:          {base_url}/status", highlight=False)
    _console.print(f"  Logs:            {base_url}/logs", highlight=False)
    _console.print()


@click.command()
@click.option("--port", "-p", type=int, help="Override server port for this run")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: ~/.config/idegateway/server_settings.yaml)",
)
def up_command(port: int | None, settings_path: Path | None) -> None:
    """Start the control server and serve until interrupted."""
    try:
        config = load_config(settings_path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    store = SettingsStore(settings_path)
    store.load()

    # --port and IDEGATEWAY__SERVER__PORT apply to this run only
    effective_port = port if port is not None else config.server.port
    persist = effective_port == store.get_port()
    if not persist:
        try:
            store.set_port(effective_port)
        except ConfigError as e:
            raise click.ClickException(e.message) from e

    manager = ServerLifecycleManager(settings=store, server_config=config.server)
    startup = on_app_ready(manager)
    if startup is not None:
        startup.result()

    server_status = manager.status()
    if server_status.state is ServerState.FAILED:
        manager.shutdown()
        raise click.ClickException(f"Server failed to start: {server_status.last_error}")

    _print_banner(config.server.host, server_status.port or effective_port)

    try:
        while manager.get_state() is ServerState.RUNNING:
            time.sleep(_POLL_SEC)
    except KeyboardInterrupt:
        click.echo("\nStopped")
    finally:
        manager.shutdown()
        if persist:
            store.flush()
