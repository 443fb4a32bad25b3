"""Replay recorded screens through a session.

A recording is a text file holding consecutive screen snapshots separated by
``Config.snapshot_separator`` (a form feed by default).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator

from .screen import Block, Snapshot
from .session import FrameUpdate, ScreenSession

_LOGGER = logging.getLogger(__name__)


def split_snapshots(raw: str, separator: str = "\f") -> list[str]:
    """Split a recording into snapshots.

    One newline directly after a separator belongs to the separator. Empty
    chunks are dropped.
    """
    snapshots = []
    for chunk in raw.split(separator):
        if chunk.startswith("\n"):
            chunk = chunk[1:]
        if chunk:
            snapshots.append(chunk)
    return snapshots


def read_snapshots(path: Path, separator: str = "\f") -> list[str]:
    """Load all snapshots from a recording file."""
    snapshots = split_snapshots(path.read_text(encoding="utf-8"), separator)
    _LOGGER.debug("Loaded %d snapshot(s) from %s", len(snapshots), path)
    return snapshots


def replay_frames(
    snapshots: Iterable[Snapshot],
    session: ScreenSession | None = None,
) -> Iterator[FrameUpdate]:
    """Feed snapshots to ``session`` in order, yielding one update per snapshot."""
    if session is None:
        session = ScreenSession()
    for snapshot in snapshots:
        yield session.feed(snapshot)


def replay_blocks(
    snapshots: Iterable[Snapshot],
    session: ScreenSession | None = None,
) -> Iterator[Block]:
    """Yield every newly emitted block, in screen order then document order."""
    for update in replay_frames(snapshots, session):
        yield from update.blocks


def transcript_envelope(block: Block) -> str:
    """Render a block as one JSON line of the transcript stream."""
    text = block.text
    if not text.endswith("\n"):
        text += "\n"
    return json.dumps({"type": "transcript", "text": text}, ensure_ascii=False)
