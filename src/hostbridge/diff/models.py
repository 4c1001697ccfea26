"""
Data models for diff sessions.

Covers:
- DiffSession, the in-memory record owned by the DiffSessionManager
- Pydantic request models for the diff RPC methods
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_ENCODING = "utf-8"
LINE_BREAK = "\n"


@dataclass
class DiffSession:
    """An in-progress virtual edit of one file."""

    session_id: str
    original_path: Path
    lines: list[str] = field(default_factory=list)
    encoding: str = DEFAULT_ENCODING

    @property
    def text(self) -> str:
        return LINE_BREAK.join(self.lines)


# ─── RPC request models ──────────────────────────────────────────────


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TextEdit(_Lenient):
    """
    Replace the inclusive line range ``[start_line, end_line]``.

    ``end_line`` defaults to ``start_line``. Accepts both the wire spelling
    (start_line/end_line/content) and camel case (startLine/endLine/newText).
    """

    start_line: int = Field(
        0, validation_alias=AliasChoices("start_line", "startLine")
    )
    end_line: int | None = Field(
        None, validation_alias=AliasChoices("end_line", "endLine")
    )
    new_text: str = Field(
        "", validation_alias=AliasChoices("content", "new_text", "newText")
    )

    @field_validator("start_line", "new_text", mode="before")
    @classmethod
    def _null_to_default(cls, value, info):
        if value is None:
            return 0 if info.field_name == "start_line" else ""
        return value

    @property
    def last_line(self) -> int:
        return self.start_line if self.end_line is None else self.end_line

    @property
    def new_lines(self) -> list[str]:
        return self.new_text.split(LINE_BREAK)


def _as_text(value):
    """Scalars become their string form; anything else is treated as absent."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class OpenDiffRequest(_Lenient):
    path: str = ""

    @field_validator("path", mode="before")
    @classmethod
    def _coerce_path(cls, value):
        return _as_text(value) or ""


class DiffIdRequest(_Lenient):
    diff_id: str | None = Field(
        None,
        validation_alias=AliasChoices("diff_id", "diffId", "session_id", "sessionId"),
    )

    @field_validator("diff_id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return _as_text(value)


class ApplyEditsRequest(DiffIdRequest):
    """
    Edits stay raw here; DiffSessionManager validates them one at a time so a
    bad edit is skipped without dropping the rest of the batch.
    """

    edits: list[Any] = Field(default_factory=list)

    @field_validator("edits", mode="before")
    @classmethod
    def _as_list(cls, value):
        if value is None:
            return []
        return value if isinstance(value, list) else [value]
