"""ide-gateway CLI - idegw command."""

import click

from idegateway.cli.expand import expand_command
from idegateway.cli.port import port_command
from idegateway.cli.status import status_command
from idegateway.cli.up import up_command
from idegateway.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="idegw")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """ide-gateway - control server and test configuration expansion for IDE hosts."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(up_command, name="up")
cli.add_command(port_command, name="port")
cli.add_command(status_command, name="status")
cli.add_command(expand_command, name="expand")


if __name__ == "__main__":
    cli()
