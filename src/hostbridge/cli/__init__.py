"""
hostbridge CLI.

This package splits CLI commands into focused modules:
- main:  serve
- calls: services, call (against a running server)
"""

import typer

from hostbridge.cli.calls import call, services
from hostbridge.cli.main import configure_logging, register_commands

app = typer.Typer(help="hostbridge - mock editor host bridge for RPC client tests")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging (DEBUG level)"
    ),
):
    """
    hostbridge - mock editor host bridge for RPC client tests.
    """
    ctx.obj = {"verbose": verbose}
    configure_logging(verbose)


register_commands(app)
app.command("services")(services)
app.command("call")(call)

if __name__ == "__main__":
    app()
