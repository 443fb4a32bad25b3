"""Row predicates and the ordered row classifier.

Every decision about what a single screen row means goes through
``classify_row``. The order of the checks is the priority order: a row that
matches several predicates gets the first kind that applies.
"""

from __future__ import annotations

import re
from enum import Enum

from . import Role

BUSY_PHRASE = "esc to interrupt"
WORKING_PHRASE = "Working"

PROMPT_MARKERS = (">", "›")
BULLET = "• "
TIP_PREFIX = "Tip:"
WARNING_GLYPH = "⚠"
HEADS_UP = "Heads up,"
HEADS_UP_MAX_OFFSET = 4
HEADS_UP_KEYWORDS = ("weekly limit", "/status", "%")
HANGING_INDENT = "  "

NOISE_PREFIXES = (
    "? for shortcuts",
    "model:",
    "directory:",
    # box borders
    "╭",
    "╰",
    "│",
    # idle spinner
    "◦",
    "◯",
    "○",
)

_CONTEXT_LEFT_RE = re.compile(r"^([0-9]+)\s*% context left$")


class RowKind(Enum):
    BLANK = "blank"
    NOISE = "noise"
    TIP = "tip"
    NOTICE = "notice"
    LIVE_PROMPT = "live_prompt"
    EMPTY_PROMPT = "empty_prompt"
    USER = "user"
    BUSY = "busy"
    ASSISTANT = "assistant"
    TEXT = "text"


_OPENER_ROLES = {
    RowKind.TIP: Role.SYSTEM,
    RowKind.NOTICE: Role.SYSTEM,
    RowKind.USER: Role.USER,
    RowKind.ASSISTANT: Role.ASSISTANT,
}

# Rows that close whatever block is open, regardless of its role.
_BLOCK_ENDERS = frozenset({
    RowKind.NOISE,
    RowKind.NOTICE,
    RowKind.LIVE_PROMPT,
    RowKind.EMPTY_PROMPT,
    RowKind.USER,
    RowKind.BUSY,
    RowKind.ASSISTANT,
})


def is_context_left(trimmed: str) -> bool:
    """Match the "37% context left" footer (digits only before the percent)."""
    return _CONTEXT_LEFT_RE.match(trimmed) is not None


def is_ui_noise_line(raw: str) -> bool:
    """Return True for TUI chrome that never belongs to the transcript."""
    trimmed = raw.strip()
    return (
        is_context_left(trimmed)
        or raw.startswith(NOISE_PREFIXES)
        or BUSY_PHRASE in trimmed
    )


def is_prompt_marker_line(raw: str) -> bool:
    return any(raw == marker or raw.startswith(marker + " ") for marker in PROMPT_MARKERS)


def strip_prompt_marker(raw: str) -> str | None:
    """Return the text after a prompt marker, or None if the row has none."""
    for marker in PROMPT_MARKERS:
        if raw == marker:
            return ""
        if raw.startswith(marker + " "):
            return raw[len(marker) + 1:]
    return None


def strip_hanging_indent(raw: str) -> str:
    if raw.startswith(HANGING_INDENT):
        return raw[len(HANGING_INDENT):]
    return raw


def is_system_notice_line(trimmed_start: str) -> bool:
    """Detect quota warnings such as "⚠ Heads up, you have less than 25% ...".

    The "Heads up," form only counts near the start of the row and only
    alongside a limit keyword, so assistant prose quoting the phrase is
    not picked up.
    """
    if (
        trimmed_start.startswith(TIP_PREFIX)
        or trimmed_start.startswith(BULLET)
        or is_prompt_marker_line(trimmed_start)
    ):
        return False

    trimmed = trimmed_start.strip()
    if trimmed.startswith(WARNING_GLYPH):
        return True

    # Offset is measured in UTF-8 bytes, so one emoji already uses it up
    idx = trimmed.find(HEADS_UP)
    if idx >= 0 and len(trimmed[:idx].encode("utf-8")) <= HEADS_UP_MAX_OFFSET:
        return any(keyword in trimmed for keyword in HEADS_UP_KEYWORDS)

    return False


def classify_row(raw: str, index: int | None = None, prompt_row: int | None = None) -> RowKind:
    """Classify one right-trimmed screen row.

    Args:
        raw: The row with trailing whitespace removed.
        index: Row position on the screen.
        prompt_row: Position of the live prompt, if one is visible.
    """
    trimmed_start = raw.lstrip()

    if not trimmed_start:
        return RowKind.BLANK
    if is_ui_noise_line(raw):
        return RowKind.NOISE
    if trimmed_start.startswith(TIP_PREFIX):
        return RowKind.TIP
    if is_system_notice_line(trimmed_start):
        return RowKind.NOTICE

    content = strip_prompt_marker(raw)
    if content is not None:
        if index is not None and index == prompt_row:
            return RowKind.LIVE_PROMPT
        if not content.strip():
            return RowKind.EMPTY_PROMPT
        return RowKind.USER

    if raw.startswith(BULLET):
        if WORKING_PHRASE in trimmed_start or BUSY_PHRASE in trimmed_start:
            return RowKind.BUSY
        return RowKind.ASSISTANT

    return RowKind.TEXT


def block_role(kind: RowKind) -> Role | None:
    """Role of the block a row of this kind opens, or None if it opens nothing."""
    return _OPENER_ROLES.get(kind)


def ends_block(kind: RowKind, role: Role) -> bool:
    """Return True if a row of this kind closes an open block of ``role``.

    System blocks also close at a "Tip:" row; user and assistant blocks keep
    such rows as part of their text.
    """
    if kind in _BLOCK_ENDERS:
        return True
    return kind is RowKind.TIP and role is Role.SYSTEM
