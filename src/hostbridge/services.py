"""
Catalog of the host bridge services.

Each service groups the remote methods an editor host exposes. The catalog is
informational: it backs the ``/services`` listing and tells the HTTP layer
which methods are server-streaming. The dispatcher answers for any method
name, listed here or not.
"""

from dataclasses import dataclass, field

PACKAGE = "host"


@dataclass(frozen=True)
class ServiceSpec:
    """
    Describes one host service.

    Example:
        ServiceSpec(
            name="EnvService",
            methods=("getMachineId", "subscribeToTelemetrySettings"),
            streaming=frozenset({"subscribeToTelemetrySettings"}),
        )
    """

    name: str
    methods: tuple[str, ...]
    streaming: frozenset[str] = field(default_factory=frozenset)

    @property
    def full_name(self) -> str:
        return f"{PACKAGE}.{self.name}"

    def to_dict(self) -> dict:
        return {
            "name": self.full_name,
            "methods": [
                {"name": m, "server_streaming": m in self.streaming}
                for m in self.methods
            ],
        }


SERVICES: tuple[ServiceSpec, ...] = (
    ServiceSpec(
        name="WorkspaceService",
        methods=(
            "getWorkspacePaths",
            "saveOpenDocumentIfDirty",
            "getDiagnostics",
            "openProblemsPanel",
            "openInFileExplorerPanel",
            "openClineSidebarPanel",
            "openTerminalPanel",
            "executeCommandInTerminal",
            "openFolder",
        ),
    ),
    ServiceSpec(
        name="WindowService",
        methods=(
            "showTextDocument",
            "showOpenDialogue",
            "showMessage",
            "showInputBox",
            "showSaveDialog",
            "openFile",
            "openSettings",
            "getOpenTabs",
            "getVisibleTabs",
            "getActiveEditor",
        ),
    ),
    ServiceSpec(
        name="EnvService",
        methods=(
            "clipboardWriteText",
            "clipboardReadText",
            "getMachineId",
            "getHostVersion",
            "getIdeRedirectUri",
            "getTelemetrySettings",
            "subscribeToTelemetrySettings",
            "openExternal",
            "shutdown",
        ),
        streaming=frozenset({"subscribeToTelemetrySettings"}),
    ),
    ServiceSpec(
        name="DiffService",
        methods=(
            "openDiff",
            "getDocumentText",
            "applyEdits",
            "replaceText",
            "scrollDiff",
            "truncateDocument",
            "saveDocument",
            "closeDiff",
            "closeAllDiffs",
            "openMultiFileDiff",
        ),
    ),
    ServiceSpec(
        name="TestingService",
        methods=("getWebviewHtml",),
    ),
)

_BY_NAME: dict[str, ServiceSpec] = {s.name: s for s in SERVICES}


def find_service(name: str) -> ServiceSpec | None:
    """Look up a service by short (``DiffService``) or full (``host.DiffService``) name."""
    short = name.removeprefix(f"{PACKAGE}.")
    return _BY_NAME.get(short)


def is_streaming(method: str) -> bool:
    """True if any service declares ``method`` as server-streaming."""
    return any(method in s.streaming for s in SERVICES)
