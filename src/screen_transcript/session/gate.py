"""Frame gate: decide which blocks on a screen are new for this session."""

from __future__ import annotations

import logging

from ..screen import Block, Snapshot, screen_text
from ..screen.chat_area import extract_chat_area
from ..screen.rows import BUSY_PHRASE
from ..screen.segment import extract_blocks

_LOGGER = logging.getLogger(__name__)


def transcript_key(text: str) -> str:
    """Canonical form used to compare blocks: whitespace runs become one space."""
    return " ".join(text.split())


class FrameGate:
    """Emit each block at most once per session.

    Nothing is emitted until a screen has shown the input prompt at least
    once, and busy frames (spinner with "esc to interrupt") are skipped
    entirely because they interleave partial renders.
    """

    def __init__(self) -> None:
        self.printed_keys: set[str] = set()
        self.saw_prompt = False
        self._last_screen: str | None = None

    def on_screen(self, screen: Snapshot) -> list[Block]:
        """Return the blocks on ``screen`` that have not been emitted yet."""
        text = screen_text(screen)
        if text == self._last_screen:
            return []
        self._last_screen = text

        if not self.saw_prompt and extract_chat_area(screen).prompt_row is not None:
            _LOGGER.debug("Prompt visible; transcript emission enabled")
            self.saw_prompt = True

        if not self.saw_prompt:
            return []

        if BUSY_PHRASE in text:
            _LOGGER.debug("Skipping busy frame")
            return []

        emitted: list[Block] = []
        for block in extract_blocks(screen):
            key = transcript_key(block.text)
            if key in self.printed_keys:
                continue
            self.printed_keys.add(key)
            emitted.append(block)

        if emitted:
            _LOGGER.debug("Emitting %d new block(s), %d seen", len(emitted), len(self.printed_keys))
        return emitted
