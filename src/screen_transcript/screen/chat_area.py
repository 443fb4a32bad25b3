"""Locate the live prompt and cut the scrollback area out of a screen."""

from __future__ import annotations

from . import ChatArea, Snapshot, split_rows
from .rows import is_prompt_marker_line, is_ui_noise_line


def find_prompt_row(rows: list[str]) -> int | None:
    """Return the index of the live input prompt.

    Transient frames can show more than one marker row; the last one is the
    prompt the user is typing into.
    """
    prompt_row = None
    for i, row in enumerate(rows):
        if is_prompt_marker_line(row):
            prompt_row = i
    return prompt_row


def extract_chat_area(screen: Snapshot) -> ChatArea:
    """Return the rows above the live prompt with UI noise removed.

    If no prompt is visible every row is considered. Rows are right-trimmed
    and trailing blank rows are dropped.
    """
    rows = split_rows(screen)
    prompt_row = find_prompt_row(rows)
    end = len(rows) if prompt_row is None else prompt_row

    lines: list[str] = []
    for row in rows[:end]:
        row = row.rstrip()
        if is_ui_noise_line(row):
            continue
        lines.append(row)

    while lines and not lines[-1].strip():
        lines.pop()

    return ChatArea(lines=lines, prompt_row=prompt_row)
