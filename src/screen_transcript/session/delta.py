"""Character-level streaming of the chat area between frames."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

_LOGGER = logging.getLogger(__name__)


class DeltaKind(Enum):
    INITIAL = "initial"
    APPEND = "append"
    REWRITE = "rewrite"
    NO_CHANGE = "no_change"


@dataclass
class DeltaUpdate:
    kind: DeltaKind
    delta: str = ""


def common_prefix_length(a: str, b: str) -> int:
    """Number of leading characters ``a`` and ``b`` have in common."""
    n = 0
    for ch_a, ch_b in zip(a, b):
        if ch_a != ch_b:
            break
        n += 1
    return n


class DeltaEmitter:
    """Turn successive chat-area texts into append-only deltas.

    When the new text does not extend the previous one the update is a
    REWRITE with an empty delta; consumers must re-read the whole text.
    """

    def __init__(self) -> None:
        self.prev = ""
        self.rewrite_events = 0
        self.total_emitted_chars = 0
        self.last_delta_chars = 0

    def on_chat_text(self, chat_text: str) -> DeltaUpdate:
        if chat_text == self.prev:
            self.last_delta_chars = 0
            return DeltaUpdate(DeltaKind.NO_CHANGE)

        if not self.prev:
            return self._emit(DeltaKind.INITIAL, chat_text, chat_text)

        lcp = common_prefix_length(self.prev, chat_text)
        if lcp == len(self.prev):
            return self._emit(DeltaKind.APPEND, chat_text, chat_text[lcp:])

        self.prev = chat_text
        self.rewrite_events += 1
        self.last_delta_chars = 0
        _LOGGER.debug("Chat text rewritten (%d rewrites so far)", self.rewrite_events)
        return DeltaUpdate(DeltaKind.REWRITE)

    def _emit(self, kind: DeltaKind, chat_text: str, delta: str) -> DeltaUpdate:
        self.prev = chat_text
        self.total_emitted_chars += len(delta)
        self.last_delta_chars = len(delta)
        return DeltaUpdate(kind, delta)
