"""
Tests for the chat service and application facade.

Covers the caller-side error policy: validation, missing credentials,
upstream failures and empty answers.
"""
from unittest.mock import patch

import pytest

from mindful_chat.app import MindfulChatApp
from mindful_chat.config import MindfulChatConfig
from mindful_chat.exceptions import AppNotInitializedError, MissingCredentialError, UpstreamError
from mindful_chat.schemas import ChatResponse
from mindful_chat.security import ValidationError
from mindful_chat.service import NO_RESPONSE_PLACEHOLDER, MindfulChatService

from conftest import FakeCompletionClient


@pytest.fixture
def service(test_config, processor, fake_client):
    return MindfulChatService(test_config, processor, fake_client)


class TestChat:
    def test_successful_turn(self, service, processor, fake_client):
        response = service.chat("I feel anxious", session_id="s1")

        assert isinstance(response, ChatResponse)
        assert response.answer == "Try a slow breathing exercise."
        assert response.session_id == "s1"
        assert response.message_count == 2
        assert response.latency_ms >= 0
        assert response.upstream["source"] == "fake"
        assert fake_client.turns[0].prompt == "I feel anxious"

    def test_second_turn_sends_history(self, service, fake_client):
        service.chat("I feel anxious", session_id="s1")
        response = service.chat("What should I do?", session_id="s1")

        assert response.message_count == 4
        prompt = fake_client.turns[1].prompt
        assert "User: I feel anxious" in prompt
        assert "Assistant: Try a slow breathing exercise." in prompt
        assert prompt.endswith("Current question: What should I do?")

    def test_query_is_stripped(self, service, fake_client):
        service.chat("  hello  ", session_id="s1")
        assert fake_client.turns[0].user_text == "hello"

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_empty_query_rejected(self, service, registry, query):
        with pytest.raises(ValidationError, match="Query is required"):
            service.chat(query, session_id="s1")
        assert registry.count() == 0

    def test_too_long_query_rejected(self, registry, processor, fake_client):
        config = MindfulChatConfig(api_key="k", max_query_length=10, enable_sweeper=False)
        service = MindfulChatService(config, processor, fake_client)
        with pytest.raises(ValidationError, match="maximum length"):
            service.chat("x" * 11, session_id="s1")

    def test_blank_session_id_rejected(self, service):
        with pytest.raises(ValidationError):
            service.chat("hello", session_id="  ")


class TestFailurePolicy:
    def test_missing_credential_leaves_registry_untouched(self, test_config, processor, registry):
        client = FakeCompletionClient(credentials=False)
        service = MindfulChatService(test_config, processor, client)

        with pytest.raises(MissingCredentialError):
            service.chat("hello", session_id="s1")

        assert registry.count() == 0
        assert client.turns == []

    def test_upstream_failure_keeps_only_user_message(self, test_config, processor):
        client = FakeCompletionClient(error="API error: 500 - boom")
        service = MindfulChatService(test_config, processor, client)

        with pytest.raises(UpstreamError):
            service.chat("hello", session_id="s1")

        messages = processor.snapshot("s1")
        assert [m.content for m in messages] == ["hello"]

    def test_retry_after_failure_sees_accurate_history(self, test_config, processor):
        client = FakeCompletionClient(error="down")
        service = MindfulChatService(test_config, processor, client)
        with pytest.raises(UpstreamError):
            service.chat("first try", session_id="s1")

        client.error = None
        response = service.chat("second try", session_id="s1")

        assert response.message_count == 3
        assert client.turns[-1].prompt == (
            "Previous conversation:\nUser: first try\n\nCurrent question: second try"
        )

    @pytest.mark.parametrize("answer", [None, ""])
    def test_empty_answer_gets_placeholder(self, test_config, processor, answer):
        service = MindfulChatService(test_config, processor, FakeCompletionClient(answer=answer))
        response = service.chat("hello", session_id="s1")
        assert response.answer == NO_RESPONSE_PLACEHOLDER
        assert processor.snapshot("s1")[-1].content == NO_RESPONSE_PLACEHOLDER

    def test_message_count_taken_when_reply_recorded(self, service, processor):
        """A turn landing after the reply does not inflate the reported count."""
        original_record_reply = processor.record_reply

        def reply_then_concurrent_turn(session_id, answer_text):
            count = original_record_reply(session_id, answer_text)
            processor.handle_turn(session_id, "concurrent turn")
            return count

        with patch.object(processor, "record_reply", side_effect=reply_then_concurrent_turn):
            response = service.chat("hello", session_id="s1")

        assert response.message_count == 2
        assert processor.message_count("s1") == 3

    def test_message_count_when_session_expires_during_call(self, test_config, processor, registry):
        client = FakeCompletionClient()
        original_complete = client.complete

        def complete_then_expire(turn):
            registry.remove(turn.session_id)
            return original_complete(turn)

        client.complete = complete_then_expire
        service = MindfulChatService(test_config, processor, client)

        response = service.chat("hello", session_id="s1")

        assert response.answer == "Try a slow breathing exercise."
        assert response.message_count == 1
        assert registry.get("s1") is None


class TestMindfulChatApp:
    def test_chat_before_initialize(self, test_config, fake_client):
        app = MindfulChatApp(test_config, completion_client=fake_client)
        with pytest.raises(AppNotInitializedError):
            app.chat("hello", session_id="s1")

    def test_lifecycle(self, test_config, fake_client, clock):
        app = MindfulChatApp(test_config, completion_client=fake_client, clock=clock)
        app.initialize()
        try:
            app.chat("hello", session_id="s1")
            app.chat("hello", session_id="s2")
            assert app.active_sessions() == 2
            assert app.sweeper is not None
            assert not app.sweeper.is_running  # disabled in test_config

            clock.advance(test_config.session_ttl_seconds + 1)
            assert app.sweep_now() == 2
            assert app.active_sessions() == 0
        finally:
            app.shutdown()

        assert not app.is_initialized
        assert app.active_sessions() == 0

    def test_initialize_starts_sweeper_when_enabled(self, fake_client):
        config = MindfulChatConfig(api_key="k", enable_sweeper=True, sweep_interval_seconds=60)
        app = MindfulChatApp(config, completion_client=fake_client)
        app.initialize()
        try:
            assert app.sweeper.is_running
        finally:
            app.shutdown()

    def test_initialize_is_idempotent(self, test_config, fake_client):
        app = MindfulChatApp(test_config, completion_client=fake_client)
        app.initialize()
        registry = app.registry
        app.initialize()
        assert app.registry is registry
        app.shutdown()

    def test_shutdown_twice(self, test_config, fake_client):
        app = MindfulChatApp(test_config, completion_client=fake_client)
        app.initialize()
        app.shutdown()
        app.shutdown()

    def test_shutdown_closes_client(self, test_config, fake_client):
        app = MindfulChatApp(test_config, completion_client=fake_client)
        app.initialize()
        assert fake_client.closed is False
        app.shutdown()
        assert fake_client.closed is True
