"""Fixed-height projection of a screen with chrome and the prompt blanked."""

from __future__ import annotations

from . import Snapshot, split_rows
from .chat_area import find_prompt_row
from .rows import is_ui_noise_line


def mirror_screen(screen: Snapshot, rows: int) -> list[str]:
    """Project ``screen`` onto exactly ``rows`` rows.

    The screen is padded with blank rows or truncated from the bottom first.
    Noise rows are then blanked in place, as are the live prompt row and
    everything below it. Other rows are right-trimmed.
    """
    rows = max(rows, 0)
    out = [row.rstrip() for row in split_rows(screen)[:rows]]
    out.extend([""] * (rows - len(out)))

    prompt_row = find_prompt_row(out)

    for i, row in enumerate(out):
        if is_ui_noise_line(row) or (prompt_row is not None and i >= prompt_row):
            out[i] = ""

    return out
