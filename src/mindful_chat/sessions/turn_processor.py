"""
Turn processing: append, trim, build context, assemble prompt.

Does not call the completion API; the caller does that between
handle_turn() and record_reply().
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..prompts import build_contextual_prompt
from .models import Message, Role, Session
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnContext:
    """Snapshot handed to the caller for one user turn."""
    session_id: str
    prompt: str
    message_count: int
    created: bool
    # Prior messages in the context window (oldest first), current turn excluded
    history: List[Message]
    user_text: str


def render_context(messages: List[Message]) -> str:
    """Render messages as '<Role>: <content>' lines."""
    return "\n".join(message.render() for message in messages)


class TurnProcessor:
    """
    Applies user turns and assistant replies to sessions in a registry.
    
    :param registry: Session store shared with the expiry sweeper
    :param max_messages: Messages retained per session (FIFO)
    :param context_messages: Prior messages rendered into each prompt
    :param preamble: Optional persona text prepended to every prompt
    """
    
    def __init__(
        self,
        registry: SessionRegistry,
        max_messages: int = 20,
        context_messages: int = 10,
        preamble: Optional[str] = None,
    ):
        self._registry = registry
        self._max_messages = max_messages
        self._context_messages = context_messages
        self._preamble = preamble
    
    def handle_turn(self, session_id: str, user_text: str) -> TurnContext:
        """
        Record a user message and build the prompt for it.
        
        Append, trim and timestamp update happen under the session's lock.
        If the expiry sweep removed the session between lookup and lock,
        a fresh session is created and the turn applied to it.
        
        :param session_id: Session identifier
        :param user_text: Non-empty user message (validated by the caller)
        :return: TurnContext with the prompt and current message count
        """
        while True:
            lookup = self._registry.get_or_create(session_id)
            session = lookup.session
            with session.lock:
                if session.removed:
                    logger.debug(f"Session {session_id} expired mid-turn, recreating")
                    continue
                return self._apply_turn(session, user_text, lookup.created)
    
    def record_reply(self, session_id: str, answer_text: str) -> Optional[int]:
        """
        Append the assistant's answer to a session.
        
        Silently ignored if the session has expired since its turn started.
        
        :return: Message count right after the append, or None if dropped
        """
        session = self._registry.get(session_id)
        if session is None:
            logger.debug(f"Reply for unknown session {session_id} dropped")
            return None
        with session.lock:
            if session.removed:
                logger.debug(f"Reply for expired session {session_id} dropped")
                return None
            now = self._registry.now()
            session.append(
                Message(role=Role.ASSISTANT, content=answer_text, timestamp=now),
                self._max_messages,
            )
            session.touch(now)
            return len(session.messages)
    
    def message_count(self, session_id: str) -> int:
        session = self._registry.get(session_id)
        if session is None:
            return 0
        with session.lock:
            return len(session.messages)
    
    def snapshot(self, session_id: str) -> List[Message]:
        """Copy of a session's messages (empty if absent)."""
        session = self._registry.get(session_id)
        if session is None:
            return []
        with session.lock:
            return list(session.messages)
    
    def _apply_turn(self, session: Session, user_text: str, created: bool) -> TurnContext:
        # Caller holds session.lock
        now = self._registry.now()
        session.append(
            Message(role=Role.USER, content=user_text, timestamp=now),
            self._max_messages,
        )
        
        message_count = len(session.messages)
        history = session.messages[:-1][-self._context_messages:]
        
        prompt = build_contextual_prompt(
            user_text,
            history=render_context(history) if message_count > 1 else "",
            preamble=self._preamble,
        )
        session.touch(now)
        
        return TurnContext(
            session_id=session.id,
            prompt=prompt,
            message_count=message_count,
            created=created,
            history=list(history),
            user_text=user_text,
        )
