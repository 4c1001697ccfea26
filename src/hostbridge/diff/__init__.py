"""
Diff sessions for hostbridge.

A diff session is a server-side record of in-progress virtual edits to one
file. Sessions are opened against a path, edited by line ranges, saved to
disk and closed, all through the DiffSessionManager.
"""

from hostbridge.diff.filesystem import FileSystem, LocalFileSystem
from hostbridge.diff.manager import DiffSessionManager
from hostbridge.diff.models import (
    ApplyEditsRequest,
    DiffIdRequest,
    DiffSession,
    OpenDiffRequest,
    TextEdit,
)

__all__ = [
    "ApplyEditsRequest",
    "DiffIdRequest",
    "DiffSession",
    "DiffSessionManager",
    "FileSystem",
    "LocalFileSystem",
    "OpenDiffRequest",
    "TextEdit",
]
