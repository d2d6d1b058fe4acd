"""Tests for conversation sessions and streamed replies."""

import pytest

from hayat_ai.models import GREETING, ConversationSession
from hayat_ai.services.chat import APOLOGY, stream_reply
from hayat_ai.utils.exceptions import BackendCallError, RequestValidationError


class StubClient:
    """Minimal client returning scripted fragments."""

    def __init__(self, fragments, fail_after=None):
        self.fragments = fragments
        self.fail_after = fail_after
        self.histories = []

    def send_turn(self, session, text):
        if not text.strip():
            raise RequestValidationError("Message cannot be empty")
        self.histories.append([t.model_copy() for t in session.history()])
        return self._stream()

    async def _stream(self):
        for i, fragment in enumerate(self.fragments):
            if self.fail_after is not None and i == self.fail_after:
                raise BackendCallError("stream broke")
            yield fragment


class TestConversationSession:
    """Tests for ConversationSession."""

    def test_seeded_with_greeting(self):
        session = ConversationSession()
        assert len(session.turns) == 1
        assert session.turns[0].role == "model"
        assert session.turns[0].text == GREETING

    def test_sessions_are_independent(self):
        first = ConversationSession()
        second = ConversationSession()
        first.add_turn("user", "hi")
        assert len(second.turns) == 1

    def test_history_skips_greeting_and_empty_turns(self):
        session = ConversationSession()
        session.add_turn("user", "hi")
        session.add_turn("model", "hello")
        session.add_turn("model")

        assert [(t.role, t.text) for t in session.history()] == [("user", "hi"), ("model", "hello")]


class TestStreamReply:
    """Tests for stream_reply."""

    async def test_accumulates_fragments(self):
        session = ConversationSession()
        client = StubClient(["Hel", "lo ", "there"])

        seen = [turn.text async for turn in stream_reply(client, session, "Hi")]

        assert seen == ["Hel", "Hello ", "Hello there"]
        assert [(t.role, t.text) for t in session.turns[1:]] == [("user", "Hi"), ("model", "Hello there")]

    async def test_history_excludes_new_message(self):
        session = ConversationSession()
        client = StubClient(["ok"])

        [_ async for _ in stream_reply(client, session, "first")]
        [_ async for _ in stream_reply(client, session, "second")]

        assert client.histories[0] == []
        assert [t.text for t in client.histories[1]] == ["first", "ok"]

    async def test_failure_replaces_partial_reply_with_apology(self):
        session = ConversationSession()
        client = StubClient(["partial ", "answer"], fail_after=1)
        seen = []

        with pytest.raises(BackendCallError):
            async for turn in stream_reply(client, session, "Hi"):
                seen.append(turn.text)

        assert seen == ["partial "]
        assert session.turns[-1].role == "model"
        assert session.turns[-1].text == APOLOGY

    async def test_empty_message_leaves_session_untouched(self):
        session = ConversationSession()

        with pytest.raises(RequestValidationError):
            [_ async for _ in stream_reply(StubClient([]), session, "   ")]

        assert len(session.turns) == 1
