"""Per-session state: one frame gate and one delta emitter per terminal."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..screen import Block, ChatArea, Snapshot
from ..screen.chat_area import extract_chat_area
from .delta import DeltaEmitter, DeltaKind, DeltaUpdate
from .gate import FrameGate, transcript_key


@dataclass
class FrameUpdate:
    """Everything one screen produced for a session."""

    blocks: list[Block] = field(default_factory=list)
    delta: DeltaUpdate = field(default_factory=lambda: DeltaUpdate(DeltaKind.NO_CHANGE))
    chat: ChatArea = field(default_factory=ChatArea)


class ScreenSession:
    """State for one terminal session.

    Owned by a single caller and fed screens in arrival order. There is no
    locking; a multi-threaded host must serialize calls per session.
    """

    def __init__(self) -> None:
        self.gate = FrameGate()
        self.deltas = DeltaEmitter()

    def feed(self, screen: Snapshot) -> FrameUpdate:
        chat = extract_chat_area(screen)
        return FrameUpdate(
            blocks=self.gate.on_screen(screen),
            delta=self.deltas.on_chat_text(chat.text),
            chat=chat,
        )
