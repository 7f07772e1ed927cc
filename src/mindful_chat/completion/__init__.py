"""
Completion layer: clients for the upstream model.
"""
from .base import CompletionClient, CompletionResult
from .http_client import HttpCompletionClient
from .chat_model_client import ChatModelCompletionClient, to_lc_messages
from .factory import create_completion_client

__all__ = [
    "CompletionClient",
    "CompletionResult",
    "HttpCompletionClient",
    "ChatModelCompletionClient",
    "to_lc_messages",
    "create_completion_client",
]
