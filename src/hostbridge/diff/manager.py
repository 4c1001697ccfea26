"""
Manager for diff sessions.

Emulates an editor's "open a diff view, edit it, save it, close it" protocol
against real files. Responsible for the session table, id allocation and
line-range edit application.

Failures are never raised to the RPC caller: unknown session ids and file
errors are logged and the operation completes as a no-op.
"""

import dataclasses
import os
import threading
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from hostbridge.config import EditPolicy
from hostbridge.diff.filesystem import FileSystem, LocalFileSystem
from hostbridge.diff.models import (
    DEFAULT_ENCODING,
    LINE_BREAK,
    DiffSession,
    TextEdit,
)
from hostbridge.logger import get_logger

logger = get_logger(__name__)


class DiffSessionManager:
    """
    Owns every DiffSession, keyed by session id.

    Other components only reach session content through these methods.
    The table and id counter are shared across concurrent calls and guarded
    by a lock; operations on one session are expected to arrive in order.

    Args:
        workspace_root: Base directory for relative paths. When None,
            relative paths resolve against the current working directory.
        fs: File-system collaborator (defaults to LocalFileSystem).
        edit_policy: "clamp" applies out-of-range edits best-effort,
            "skip" drops them. Both log a warning.
    """

    def __init__(
        self,
        workspace_root: str | Path | None = None,
        fs: FileSystem | None = None,
        edit_policy: EditPolicy = "clamp",
    ):
        self.workspace_root = Path(workspace_root) if workspace_root else None
        self.fs = fs or LocalFileSystem()
        self.edit_policy = edit_policy
        self._sessions: dict[str, DiffSession] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def resolve_path(self, path: str | Path) -> Path:
        """Make ``path`` absolute, relative to the workspace root."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        root = self.workspace_root or Path.cwd()
        return (root / candidate).absolute()

    def _next_id(self) -> str:
        with self._lock:
            self._counter += 1
            return f"diff_{os.getpid()}_{self._counter}"

    def _lookup(self, session_id: str | None) -> DiffSession | None:
        with self._lock:
            return self._sessions.get(session_id) if session_id else None

    # ─── Lifecycle ───────────────────────────────────────────────────

    def open(self, path: str | Path) -> str:
        """
        Start a session for ``path`` and return its id.

        The file's current text becomes the session content. A missing or
        unreadable file starts the session empty.
        """
        full_path = self.resolve_path(path)

        lines: list[str] = []
        try:
            if self.fs.exists(full_path):
                lines = self.fs.read_text(full_path, DEFAULT_ENCODING).split(LINE_BREAK)
        except Exception as e:
            logger.warning(f"[openDiff] Could not read {full_path}: {e}")
            lines = []

        session_id = self._next_id()
        session = DiffSession(
            session_id=session_id,
            original_path=full_path,
            lines=lines,
            encoding=DEFAULT_ENCODING,
        )
        with self._lock:
            self._sessions[session_id] = session

        logger.info(
            f"[openDiff] Created session {session_id} for {full_path} ({len(lines)} lines)"
        )
        return session_id

    def apply_edits(
        self,
        session_id: str | None,
        edits: Iterable[TextEdit | Any],
    ) -> bool:
        """
        Apply ``edits`` in order to the session's current content.

        Each edit sees the content left by the edits before it. Items that
        do not validate as a TextEdit are logged and skipped.

        Returns:
            True if the session exists, False otherwise (nothing changes).
        """
        session = self._lookup(session_id)
        if session is None:
            logger.info(f"[applyEdits] Session {session_id} not found")
            return False

        for index, edit in enumerate(edits):
            if not isinstance(edit, TextEdit):
                try:
                    edit = TextEdit.model_validate(edit)
                except ValidationError as e:
                    logger.warning(
                        f"[applyEdits] Skipped malformed edit #{index} in "
                        f"{session.session_id}: {e.errors()[0]['msg']}"
                    )
                    continue
            self._apply_edit(session, edit)
        return True

    def _apply_edit(self, session: DiffSession, edit: TextEdit) -> None:
        lines = session.lines
        size = len(lines)
        start, end = edit.start_line, edit.last_line
        new_lines = edit.new_lines

        # end < start is an insertion before start; start == size appends
        out_of_range = start < 0 or start > size or (end > start and end >= size)
        if out_of_range:
            if self.edit_policy == "skip":
                logger.warning(
                    f"[applyEdits] Skipped edit at lines {start}-{end} in "
                    f"{session.session_id}: document has {size} lines"
                )
                return
            logger.warning(
                f"[applyEdits] Clamped edit at lines {start}-{end} in "
                f"{session.session_id}: document has {size} lines"
            )

        start = min(max(start, 0), size)
        stop = min(max(end + 1, start), size)
        lines[start:stop] = new_lines

        logger.info(
            f"[applyEdits] Applied edit at lines {start}-{end}: {len(new_lines)} new lines"
        )

    def save(self, session_id: str | None) -> bool:
        """
        Write the session content to its file, creating parent directories.

        Write errors are logged, not raised.

        Returns:
            True if the session exists, False otherwise.
        """
        session = self._lookup(session_id)
        if session is None:
            logger.info(f"[saveDocument] Session {session_id} not found")
            return False

        path = session.original_path
        content = session.text
        try:
            self.fs.ensure_parent(path)
            self.fs.write_text(path, content, session.encoding)
            logger.info(f"[saveDocument] Saved {path} ({len(content)} bytes)")
        except Exception as e:
            logger.error(f"[saveDocument] Failed to save {path}: {e}")
        return True

    def close(self, session_id: str | None) -> bool:
        """
        Drop a session. Closing an unknown or already-closed id is a no-op.

        Returns:
            True if a session was removed.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None) if session_id else None

        if session is not None:
            logger.info(f"[closeDiff] Closed session {session_id}")
            return True
        return False

    def close_all(self) -> int:
        """Drop every open session and return how many were closed."""
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        if count:
            logger.info(f"[closeAllDiffs] Closed {count} sessions")
        return count

    # ─── Read access ─────────────────────────────────────────────────

    def get(self, session_id: str | None) -> DiffSession | None:
        """Return a detached copy of a session, or None."""
        session = self._lookup(session_id)
        if session is None:
            return None
        return dataclasses.replace(session, lines=list(session.lines))

    def get_text(self, session_id: str | None) -> str | None:
        session = self._lookup(session_id)
        return session.text if session else None

    def session_ids(self) -> list[str]:
        with self._lock:
            return list(self._sessions)
