"""
Shared fixtures: a controllable clock and a scripted completion client.
"""
import pytest

from mindful_chat.completion import CompletionClient, CompletionResult
from mindful_chat.config import MindfulChatConfig
from mindful_chat.exceptions import UpstreamError
from mindful_chat.sessions import SessionRegistry, TurnProcessor


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCompletionClient(CompletionClient):
    """Returns canned answers and records every turn it saw."""

    def __init__(self, answer="Try a slow breathing exercise.", credentials=True, error=None):
        self.answer = answer
        self.credentials = credentials
        self.error = error
        self.turns = []
        self.closed = False

    def has_credentials(self) -> bool:
        return self.credentials

    def complete(self, turn):
        self.turns.append(turn)
        if self.error:
            raise UpstreamError(self.error)
        return CompletionResult(answer=self.answer, raw={"answer": self.answer, "source": "fake"})

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return SessionRegistry(clock=clock)


@pytest.fixture
def processor(registry):
    return TurnProcessor(registry, max_messages=20, context_messages=10)


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def test_config():
    """Config with the background sweeper disabled."""
    return MindfulChatConfig(api_key="test-key-1234567890", enable_sweeper=False)
