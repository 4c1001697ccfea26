"""
Configuration for the mock host bridge.

Settings come from environment variables (optionally seeded from a ``.env``
file in the working directory):

- HOST_BRIDGE_ADDRESS: bind address, ``host:port`` (default 127.0.0.1:26041)
- TEST_HOSTBRIDGE_WORKSPACE_DIR: workspace root reported to clients and used
  to resolve relative diff paths
- HOST_BRIDGE_EDIT_POLICY: ``clamp`` (default) or ``skip`` for edits whose
  line range falls outside the document
- LOG_LEVEL / LOG_FILE: logging sinks
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from hostbridge.errors import ConfigurationError

DEFAULT_ADDRESS = "127.0.0.1:26041"
# Reported by getWorkspacePaths when no workspace directory is configured.
DEFAULT_WORKSPACE_PATH = "/test-workspace"

EditPolicy = Literal["clamp", "skip"]


class BridgeConfig(BaseModel):
    """Runtime settings for one mock server process."""

    address: str = DEFAULT_ADDRESS
    workspace_dir: str | None = None
    edit_policy: EditPolicy = "clamp"
    log_level: str = "INFO"
    log_file: str | None = None

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        host, sep, port = value.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"expected host:port, got {value!r}")
        if not 0 <= int(port) <= 65535:
            raise ValueError(f"port out of range in {value!r}")
        return value

    @property
    def host(self) -> str:
        host = self.address.rpartition(":")[0]
        # Bracketed IPv6 literals, e.g. [::1]:26041
        return host[1:-1] if host.startswith("[") and host.endswith("]") else host

    @property
    def port(self) -> int:
        return int(self.address.rpartition(":")[2])

    @property
    def workspace_paths(self) -> list[str]:
        """Workspace roots reported to clients."""
        return [self.workspace_dir or DEFAULT_WORKSPACE_PATH]

    @property
    def resolve_root(self) -> Path:
        """Directory that relative diff paths are resolved against."""
        return Path(self.workspace_dir) if self.workspace_dir else Path.cwd()


def load_config(env_file: str | Path | None = None, **overrides) -> BridgeConfig:
    """
    Build a BridgeConfig from the environment.

    Args:
        env_file: Optional ``.env`` file to load before reading variables.
            Existing environment variables win over the file.
        **overrides: Explicit values (e.g. from CLI options); ``None`` values
            are ignored so unset options fall back to the environment.

    Raises:
        ConfigurationError: If a setting fails validation.
    """
    load_dotenv(env_file, override=False)

    values = {
        "address": os.getenv("HOST_BRIDGE_ADDRESS") or DEFAULT_ADDRESS,
        "workspace_dir": os.getenv("TEST_HOSTBRIDGE_WORKSPACE_DIR") or None,
        "edit_policy": os.getenv("HOST_BRIDGE_EDIT_POLICY") or "clamp",
        "log_level": os.getenv("LOG_LEVEL") or "INFO",
        "log_file": os.getenv("LOG_FILE") or None,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return BridgeConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid host bridge configuration: {e}") from e
