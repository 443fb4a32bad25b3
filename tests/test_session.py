"""Tests for the frame gate, the delta emitter and the session wrapper."""

from screen_transcript.screen import Role
from screen_transcript.session import (
    DeltaEmitter,
    DeltaKind,
    FrameGate,
    ScreenSession,
    transcript_key,
)
from screen_transcript.session.delta import common_prefix_length


def _texts(blocks):
    return [block.text for block in blocks]


class TestTranscriptKey:
    def test_collapses_whitespace_runs(self):
        assert transcript_key("assistant:  a \n\n\tb  ") == "assistant: a b"

    def test_unicode_whitespace(self):
        assert transcript_key("a 　b") == "a b"

    def test_empty(self):
        assert transcript_key("   ") == ""


class TestFrameGate:
    def test_emits_only_once_prompt_seen(self):
        streaming = "• The smell of pizza drifted down the hallway.\n  Warm and peppery.\n"
        streaming_ws = "• The smell   of  pizza drifted down the hallway.\n  Warm   and peppery.\n"
        settled = "• The smell of pizza drifted down the hallway.\n  Warm and peppery.\n> prompt\n"

        gate = FrameGate()
        assert gate.on_screen(streaming) == []
        assert gate.on_screen(streaming_ws) == []
        assert not gate.saw_prompt

        out = gate.on_screen(settled)
        assert _texts(out) == ["assistant: The smell of pizza drifted down the hallway.\nWarm and peppery."]
        assert gate.saw_prompt

        assert gate.on_screen(settled) == []

    def test_suppresses_busy_frames(self):
        busy = "• First line\n  continuation\n◦ Working (1s • esc to interrupt)\n> prompt\n"
        settled = "• First line\n  continuation\n> prompt\n"

        gate = FrameGate()
        assert gate.on_screen(busy) == []
        # The busy frame still counts as having shown the prompt
        assert gate.saw_prompt

        assert _texts(gate.on_screen(settled)) == ["assistant: First line\ncontinuation"]
        assert gate.on_screen(settled) == []

    def test_whitespace_only_difference_does_not_reemit(self):
        gate = FrameGate()
        assert len(gate.on_screen("• a  b\n> p\n")) == 1
        assert gate.on_screen("• a b\n\n> p\n") == []

    def test_new_blocks_in_document_order(self):
        gate = FrameGate()
        assert _texts(gate.on_screen("> hi\n• hello\n> \n")) == ["user: hi", "assistant: hello"]

        out = gate.on_screen("> hi\n• hello\n> again\n• second\n⚠ Heads up, 5% left\n> \n")
        assert _texts(out) == ["user: again", "assistant: second", "system: ⚠ Heads up, 5% left"]
        assert [block.role for block in out] == [Role.USER, Role.ASSISTANT, Role.SYSTEM]

    def test_prompt_flag_is_sticky(self):
        gate = FrameGate()
        gate.on_screen("• a\n> p\n")
        assert _texts(gate.on_screen("• b\n")) == ["assistant: b"]

    def test_identical_screen_short_circuits(self):
        gate = FrameGate()
        screen = ["• one", "> p"]
        assert len(gate.on_screen(screen)) == 1
        assert gate.on_screen(list(screen)) == []
        assert gate.printed_keys == {"assistant: one"}

    def test_degenerate_input(self):
        gate = FrameGate()
        assert gate.on_screen("") == []
        assert gate.on_screen(">") == []
        assert gate.saw_prompt


class TestDeltaEmitter:
    def test_initial_append_rewrite(self):
        d = DeltaEmitter()

        a = d.on_chat_text("Hello")
        assert a.kind is DeltaKind.INITIAL
        assert a.delta == "Hello"

        b = d.on_chat_text("Hello world")
        assert b.kind is DeltaKind.APPEND
        assert b.delta == " world"

        c = d.on_chat_text("Different")
        assert c.kind is DeltaKind.REWRITE
        assert c.delta == ""
        assert d.rewrite_events == 1

    def test_no_change(self):
        d = DeltaEmitter()
        d.on_chat_text("abc")
        update = d.on_chat_text("abc")
        assert update.kind is DeltaKind.NO_CHANGE
        assert update.delta == ""
        assert d.last_delta_chars == 0

    def test_empty_text_before_anything(self):
        d = DeltaEmitter()
        assert d.on_chat_text("").kind is DeltaKind.NO_CHANGE
        assert d.on_chat_text("x").kind is DeltaKind.INITIAL

    def test_appends_concatenate_to_final_text(self):
        d = DeltaEmitter()
        texts = ["• He", "• Hello", "• Hello,\n  wor", "• Hello,\n  world."]
        updates = [d.on_chat_text(t) for t in texts]

        assert [u.kind for u in updates] == [DeltaKind.INITIAL] + [DeltaKind.APPEND] * 3
        assert "".join(u.delta for u in updates) == texts[-1]
        assert d.total_emitted_chars == len(texts[-1])
        assert d.rewrite_events == 0

    def test_counts_characters_not_bytes(self):
        d = DeltaEmitter()
        d.on_chat_text("héllo")
        update = d.on_chat_text("héllo wörld 🙂")
        assert update.delta == " wörld 🙂"
        assert d.last_delta_chars == 8
        assert d.total_emitted_chars == 13

    def test_rewrite_counts_once_per_change(self):
        d = DeltaEmitter()
        d.on_chat_text("abc")
        assert d.on_chat_text("abX").kind is DeltaKind.REWRITE
        assert d.on_chat_text("abX").kind is DeltaKind.NO_CHANGE
        assert d.on_chat_text("a").kind is DeltaKind.REWRITE
        assert d.rewrite_events == 2
        assert d.total_emitted_chars == 3

    def test_common_prefix_length(self):
        assert common_prefix_length("abc", "abd") == 2
        assert common_prefix_length("", "abc") == 0
        assert common_prefix_length("ab", "abc") == 2
        assert common_prefix_length("é1", "é2") == 1


class TestScreenSession:
    def test_feed(self):
        session = ScreenSession()

        first = session.feed("• hello\n> \n")
        assert _texts(first.blocks) == ["assistant: hello"]
        assert first.delta.kind is DeltaKind.INITIAL
        assert first.delta.delta == "• hello"
        assert first.chat.prompt_row == 1

        second = session.feed("• hello\n  there\n> \n")
        assert _texts(second.blocks) == ["assistant: hello\nthere"]
        assert second.delta.kind is DeltaKind.APPEND
        assert second.delta.delta == "\n  there"

    def test_sessions_are_independent(self):
        a, b = ScreenSession(), ScreenSession()
        assert len(a.feed("• x\n> \n").blocks) == 1
        assert len(b.feed("• x\n> \n").blocks) == 1
