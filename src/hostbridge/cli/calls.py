"""
CLI commands that call a running host bridge server.

Usage:
    hostbridge services
    hostbridge call <service> <method> [--params JSON] [key=value ...]
"""

import json
from typing import Optional

import typer

from hostbridge.cli._http import _http_get, _http_post, _http_post_stream
from hostbridge.services import PACKAGE, is_streaming


_KEYWORDS = {"true": True, "false": False, "null": None, "none": None}


def _parse_value(text: str):
    """Read a key=value CLI value as JSON; anything JSON rejects stays a string."""
    keyword = text.lower()
    if keyword in _KEYWORDS:
        return _KEYWORDS[keyword]
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _full_service_name(service: str) -> str:
    return service if "." in service else f"{PACKAGE}.{service}"


def services():
    """List the host services and their methods."""
    data = _http_get("/services")
    entries = data.get("services", [])

    if not entries:
        typer.echo("No services registered.")
        return

    typer.echo(f"📡 Host services ({len(entries)}):\n")
    for entry in entries:
        typer.echo(f"  {entry['name']}")
        for method in entry.get("methods", []):
            marker = " (stream)" if method.get("server_streaming") else ""
            typer.echo(f"     • {method['name']}{marker}")


def call(
    service: str = typer.Argument(help="Service name, e.g. DiffService"),
    method: str = typer.Argument(help="Method name, e.g. openDiff"),
    params: Optional[str] = typer.Option(
        None, "--params", "-p", help='JSON request (e.g., \'{"path":"a.txt"}\')'
    ),
    extra_args: list[str] = typer.Argument(
        None, help="Key=value request fields (e.g. path=a.txt)"
    ),
):
    """
    Call a method on a running host bridge server.

    Examples:
        hostbridge call DiffService openDiff path=src/app.py
        hostbridge call DiffService applyEdits diff_id=diff_1_1 \\
            --params '{"edits":[{"start_line":0,"content":"hi"}]}'
        hostbridge call EnvService subscribeToTelemetrySettings
    """
    request = {}
    if params:
        try:
            request = json.loads(params)
        except json.JSONDecodeError as e:
            typer.echo(f"❌ Invalid JSON params: {e}")
            raise typer.Exit(code=1)

    if extra_args:
        for arg in extra_args:
            if "=" not in arg:
                request[arg] = True
                continue

            key, value_str = arg.split("=", 1)
            request[key] = _parse_value(value_str)

    path = f"/{_full_service_name(service)}/{method}"

    if is_streaming(method):
        count = 0
        for line in _http_post_stream(path, data=request):
            typer.echo(line)
            count += 1
        typer.echo(f"✅ Stream closed after {count} updates")
        return

    result = _http_post(path, data=request)
    typer.echo(json.dumps(result, indent=2))
