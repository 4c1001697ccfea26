"""
Top-level CLI commands: serve.
"""

from typing import Optional

import typer

from hostbridge.errors import ConfigurationError


def configure_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    from hostbridge.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "INFO")


def serve(
    ctx: typer.Context,
    address: Optional[str] = typer.Option(
        None, "--address", "-a", help="Bind address host:port (env HOST_BRIDGE_ADDRESS)"
    ),
    workspace: Optional[str] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace root (env TEST_HOSTBRIDGE_WORKSPACE_DIR)",
    ),
    edit_policy: Optional[str] = typer.Option(
        None, "--edit-policy", help="Out-of-range edits: clamp or skip"
    ),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to file"),
):
    """Start the mock host bridge server in the foreground."""
    from hostbridge.config import load_config
    from hostbridge.logger import setup_logging
    from hostbridge.server import serve as run_server

    try:
        config = load_config(
            address=address,
            workspace_dir=workspace,
            edit_policy=edit_policy,
            log_file=log_file,
        )
    except ConfigurationError as e:
        typer.echo(f"❌ {e.message}")
        raise typer.Exit(code=1)

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    setup_logging(
        level="DEBUG" if verbose else config.log_level, log_file=config.log_file
    )

    typer.echo(f"🖥️  Starting test host bridge on {config.address}")
    typer.echo(f"   Workspace: {config.workspace_paths[0]}")
    typer.echo("   Press Ctrl+C to stop.\n")

    try:
        run_server(config)
    except KeyboardInterrupt:
        typer.echo("\n🛑 Host bridge stopped.")


def register_commands(app: typer.Typer):
    """Register top-level commands on the main app."""
    app.command("serve")(serve)
