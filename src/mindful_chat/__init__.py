"""
Mindful Chat Service.

In-memory conversational session management in front of an external
completion API.
"""
from .app import MindfulChatApp
from .config import MindfulChatConfig
from .config_loader import load_config_from_env
from .schemas import ChatResponse

__all__ = [
    "MindfulChatApp",
    "MindfulChatConfig",
    "load_config_from_env",
    "ChatResponse",
]
