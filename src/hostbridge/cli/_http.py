"""
HTTP access to a running host bridge server for the CLI commands.

Every helper exits the CLI with code 1 and a one-line message when the server
cannot be reached or answers with an error status.
"""

import os
from contextlib import contextmanager

import httpx
import typer

from hostbridge.config import DEFAULT_ADDRESS


def get_server_url() -> str:
    """Get the server URL from environment or default."""
    explicit = os.getenv("HOST_BRIDGE_URL")
    if explicit:
        return explicit.rstrip("/")

    address = os.getenv("HOST_BRIDGE_ADDRESS") or DEFAULT_ADDRESS
    return f"http://{address}"


def _error_detail(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or response.reason_phrase
    except ValueError:
        return response.text or response.reason_phrase


@contextmanager
def _exit_on_failure():
    try:
        yield
    except httpx.ConnectError:
        typer.echo(
            f"❌ No host bridge server at {get_server_url()}. "
            "Start one with `hostbridge serve`."
        )
        raise typer.Exit(code=1)
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        typer.echo(f"❌ Server answered {status}: {_error_detail(e.response)}")
        raise typer.Exit(code=1)
    except httpx.HTTPError as e:
        typer.echo(f"❌ Request failed: {e}")
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"❌ Server sent a non-JSON reply: {e}")
        raise typer.Exit(code=1)


def _http_get(path: str) -> dict:
    with _exit_on_failure():
        resp = httpx.get(f"{get_server_url()}{path}", timeout=10.0)
        resp.raise_for_status()
        return resp.json()


def _http_post(path: str, data: dict = None) -> dict:
    with _exit_on_failure():
        resp = httpx.post(f"{get_server_url()}{path}", json=data or {}, timeout=30.0)
        resp.raise_for_status()
        return resp.json()


def _http_post_stream(path: str, data: dict = None):
    """POST to a server-streaming method, yielding each non-empty NDJSON line."""
    url = f"{get_server_url()}{path}"
    with _exit_on_failure(), httpx.Client(timeout=60.0) as client:
        with client.stream("POST", url, json=data or {}) as resp:
            if resp.is_error:
                resp.read()
            resp.raise_for_status()
            for line in resp.iter_lines():
                if line:
                    yield line
