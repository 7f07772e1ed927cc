"""
Session domain objects.

Pure domain models - no Flask, no HTTP, no LLM logic.
"""
from dataclasses import dataclass, field
from enum import Enum
from threading import Lock
from typing import List


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single chat message."""
    role: Role
    content: str
    timestamp: float

    def render(self) -> str:
        """Render as '<Role>: <content>' for prompt context."""
        return f"{self.role.value.title()}: {self.content}"


@dataclass
class Session:
    """
    One user's ongoing conversation.

    Mutated only while holding ``lock``. ``removed`` is set by the registry
    when the session is evicted so a racing turn knows to start over.
    """
    id: str
    created_at: float
    last_activity: float
    messages: List[Message] = field(default_factory=list)
    removed: bool = False
    lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def append(self, message: Message, max_messages: int) -> None:
        """Append and enforce the FIFO cap (oldest dropped first)."""
        self.messages.append(message)
        if len(self.messages) > max_messages:
            self.messages = self.messages[-max_messages:]

    def touch(self, now: float) -> None:
        # last_activity never moves backwards
        if now > self.last_activity:
            self.last_activity = now


@dataclass(frozen=True)
class SessionLookup:
    """Result of get_or_create: the session and whether it was just created."""
    session: Session
    created: bool
