"""
File-system collaborator for the diff session manager.

The manager only talks to disk through this interface, so tests can swap in
a failing or in-memory implementation.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class FileSystem(ABC):
    """Minimal file operations needed by diff sessions."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        pass

    @abstractmethod
    def read_text(self, path: Path, encoding: str) -> str:
        pass

    @abstractmethod
    def ensure_parent(self, path: Path) -> None:
        """Create any missing parent directories of ``path``."""
        pass

    @abstractmethod
    def write_text(self, path: Path, text: str, encoding: str) -> None:
        pass


class LocalFileSystem(FileSystem):
    """pathlib-backed implementation used by the server."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_text(self, path: Path, encoding: str) -> str:
        # newline="" disables newline translation on read and write
        with path.open("r", encoding=encoding, newline="") as f:
            return f.read()

    def ensure_parent(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

    def write_text(self, path: Path, text: str, encoding: str) -> None:
        with path.open("w", encoding=encoding, newline="") as f:
            f.write(text)
