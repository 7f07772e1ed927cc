"""
Session layer: in-memory conversation state.

- models: Message / Session domain objects
- registry: thread-safe session store
- turn_processor: append, trim and prompt assembly per turn
- sweeper: periodic eviction of idle sessions
"""
from .models import Message, Role, Session, SessionLookup
from .registry import SessionRegistry
from .turn_processor import TurnContext, TurnProcessor, render_context
from .sweeper import SessionSweeper

__all__ = [
    "Message",
    "Role",
    "Session",
    "SessionLookup",
    "SessionRegistry",
    "TurnContext",
    "TurnProcessor",
    "render_context",
    "SessionSweeper",
]
