"""Split a screen into role-tagged message blocks.

The segmenter is stateless: every screen is segmented from scratch and the
caller decides which blocks are new (see ``session.gate``).
"""

from __future__ import annotations

from . import Block, Role, Snapshot, split_rows
from .chat_area import find_prompt_row
from .rows import (
    BULLET,
    RowKind,
    block_role,
    classify_row,
    ends_block,
    strip_hanging_indent,
    strip_prompt_marker,
)


def _opening_line(raw: str, kind: RowKind) -> str:
    if kind in (RowKind.TIP, RowKind.NOTICE):
        return raw.strip()
    if kind is RowKind.USER:
        return (strip_prompt_marker(raw) or "").rstrip()
    return raw[len(BULLET):]


def _continuation_line(raw: str, opener: RowKind) -> str:
    # Tips can show formatted examples; keep their indentation as drawn.
    if opener is RowKind.TIP:
        return raw
    return strip_hanging_indent(raw)


def extract_blocks(screen: Snapshot) -> list[Block]:
    """Recover the message blocks visible on ``screen`` in top-to-bottom order.

    A block starts at a tip/notice, user or assistant row and absorbs the rows
    below it until another block starts, a noise row appears, or the screen
    ends. Blank runs inside a block collapse to a single empty line; trailing
    blank runs are dropped. The live prompt row never belongs to a block.
    """
    rows = [row.rstrip() for row in split_rows(screen)]
    prompt_row = find_prompt_row(split_rows(screen))

    blocks: list[Block] = []
    i = 0
    while i < len(rows):
        opener = classify_row(rows[i], i, prompt_row)
        role = block_role(opener)
        i += 1
        if role is None:
            continue

        lines = [_opening_line(rows[i - 1], opener)]
        pending_blank = False
        while i < len(rows):
            raw = rows[i]
            kind = classify_row(raw, i, prompt_row)
            if kind is RowKind.BLANK:
                pending_blank = True
                i += 1
                continue
            if ends_block(kind, role):
                break
            if pending_blank:
                lines.append("")
                pending_blank = False
            lines.append(_continuation_line(raw, opener))
            i += 1

        content = "\n".join(lines).strip()
        if content:
            blocks.append(Block(role=role, content=content))

    return blocks


def extract_transcript_candidates(screen: Snapshot) -> list[str]:
    """Return the role-prefixed text of every block on ``screen``."""
    return [block.text for block in extract_blocks(screen)]
