"""Exception hierarchy for hostbridge."""


class HostBridgeError(Exception):
    """Base exception for hostbridge errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(HostBridgeError, ValueError):
    """Invalid bind address, edit policy or other setting."""


class BindError(HostBridgeError):
    """The server could not bind its configured address."""

    def __init__(self, address: str, cause: Exception):
        super().__init__(
            f"Failed to bind test host bridge server to {address}: {cause}",
            {"address": address},
        )
        self.address = address
        self.cause = cause
