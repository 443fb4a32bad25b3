"""Screen-level types shared by the classifier, segmenter and mirror."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Union

Snapshot = Union[str, Sequence[str]]


class Role(Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class Block:
    """One message recovered from a screen."""

    role: Role
    content: str  # first line without its marker, continuation rows joined by "\n"

    @property
    def text(self) -> str:
        return f"{self.role.value}: {self.content}"

    def __str__(self) -> str:
        return self.text


@dataclass
class ChatArea:
    """Scrollback rows above the live prompt, with UI noise removed."""

    lines: list[str] = field(default_factory=list)
    prompt_row: int | None = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def split_rows(screen: Snapshot) -> list[str]:
    """Normalize a snapshot into a list of rows.

    Strings are split on "\\n" only and a final newline does not produce an
    extra empty row. A trailing "\\r" is dropped from every row, whichever
    form the snapshot came in.
    """
    if isinstance(screen, str):
        if not screen:
            return []
        rows = screen.split("\n")
        if screen.endswith("\n"):
            rows.pop()
    else:
        rows = [str(row) for row in screen]

    return [row[:-1] if row.endswith("\r") else row for row in rows]


def screen_text(screen: Snapshot) -> str:
    """Return the snapshot as a single string."""
    if isinstance(screen, str):
        return screen
    return "\n".join(screen)
