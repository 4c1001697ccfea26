"""
Mock dispatcher for host bridge calls.

Every inbound call goes through ``MockDispatcher.handle`` (or ``stream`` for
server-streaming methods). Methods with a registered responder get its
result; every other method gets an empty response. Responders are plain
coroutines keyed by method name in a table built once per dispatcher.
"""

import socket
from enum import IntEnum
from typing import Any, AsyncIterator, Awaitable, Callable

from hostbridge.config import BridgeConfig
from hostbridge.diff import (
    ApplyEditsRequest,
    DiffIdRequest,
    DiffSessionManager,
    OpenDiffRequest,
)
from hostbridge.logger import get_logger

logger = get_logger(__name__)

Responder = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]

FAKE_WEBVIEW_HTML = "<html><body>Fake Webview</body></html>"


class TelemetrySetting(IntEnum):
    UNSUPPORTED = 0
    ENABLED = 1
    DISABLED = 2


def responder(*methods: str):
    """Mark a MockDispatcher method as the responder for ``methods``."""

    def decorator(fn):
        fn._responds_to = methods  # type: ignore[attr-defined]
        return fn

    return decorator


class MockDispatcher:
    """
    Routes host bridge calls to responders or to the default empty response.

    Args:
        config: Server settings (workspace root for getWorkspacePaths).
        sessions: Diff session manager used by the DiffService responders.
    """

    def __init__(self, config: BridgeConfig, sessions: DiffSessionManager):
        self.config = config
        self.sessions = sessions
        self._handlers: dict[str, Responder] = {}

        for attr in dir(type(self)):
            fn = getattr(type(self), attr)
            for method in getattr(fn, "_responds_to", ()):
                self._handlers[method] = getattr(self, attr)

    @property
    def methods(self) -> list[str]:
        """Method names with a dedicated responder."""
        return sorted(self._handlers)

    def has_responder(self, method: str) -> bool:
        return method in self._handlers

    def register_handler(self, method: str, handler: Responder) -> None:
        """Add or replace the responder for ``method``."""
        self._handlers[method] = handler

    def _log_call(self, service: str, method: str, request: Any) -> None:
        logger.info(f"Hostbridge: {service}.{method} called with: {request}")

    async def handle(
        self, service: str, method: str, request: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Answer a unary call.

        Responder exceptions propagate to the caller unchanged.
        """
        request = request if request is not None else {}
        self._log_call(service, method, request)

        handler = self._handlers.get(method)
        if handler is None:
            return {}
        return await handler(request)

    async def stream(
        self, service: str, method: str, request: dict[str, Any] | None = None
    ) -> AsyncIterator[dict[str, Any]]:
        """Answer a server-streaming call: the stream ends with no updates."""
        self._log_call(service, method, request if request is not None else {})
        logger.debug(f"{service}.{method}: ending stream immediately")
        return
        yield  # unreachable; marks this as an async generator

    # ─── Canned responders ───────────────────────────────────────────

    @responder("getWorkspacePaths")
    async def _workspace_paths(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"paths": self.config.workspace_paths}

    @responder("getMachineId")
    async def _machine_id(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"value": f"fake-machine-id-{socket.gethostname()}"}

    @responder("getTelemetrySettings")
    async def _telemetry_settings(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"is_enabled": int(TelemetrySetting.DISABLED)}

    @responder("clipboardReadText")
    async def _clipboard_read(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"value": ""}

    @responder("getWebviewHtml")
    async def _webview_html(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"html": FAKE_WEBVIEW_HTML}

    @responder("showTextDocument")
    async def _show_text_document(self, request: dict[str, Any]) -> dict[str, Any]:
        return {
            "document_path": request.get("path") or "",
            "view_column": 1,
            "is_active": True,
        }

    @responder("getOpenTabs", "getVisibleTabs", "showOpenDialogue")
    async def _empty_paths(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"paths": []}

    @responder("getDiagnostics")
    async def _diagnostics(self, request: dict[str, Any]) -> dict[str, Any]:
        return {"file_diagnostics": []}

    # ─── Diff session responders ─────────────────────────────────────

    @responder("openDiff")
    async def _open_diff(self, request: dict[str, Any]) -> dict[str, Any]:
        req = OpenDiffRequest.model_validate(request)
        return {"diff_id": self.sessions.open(req.path)}

    @responder("getDocumentText")
    async def _document_text(self, request: dict[str, Any]) -> dict[str, Any]:
        req = DiffIdRequest.model_validate(request)
        return {"content": self.sessions.get_text(req.diff_id) or ""}

    @responder("applyEdits")
    async def _apply_edits(self, request: dict[str, Any]) -> dict[str, Any]:
        req = ApplyEditsRequest.model_validate(request)
        self.sessions.apply_edits(req.diff_id, req.edits)
        return {}

    @responder("saveDocument")
    async def _save_document(self, request: dict[str, Any]) -> dict[str, Any]:
        req = DiffIdRequest.model_validate(request)
        self.sessions.save(req.diff_id)
        return {}

    @responder("closeDiff")
    async def _close_diff(self, request: dict[str, Any]) -> dict[str, Any]:
        req = DiffIdRequest.model_validate(request)
        self.sessions.close(req.diff_id)
        return {}

    @responder("closeAllDiffs")
    async def _close_all_diffs(self, request: dict[str, Any]) -> dict[str, Any]:
        self.sessions.close_all()
        return {}
