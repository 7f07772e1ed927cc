from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigurationError


@dataclass
class MindfulChatConfig:
    # Upstream completion API
    api_key: Optional[str] = None
    upstream_url: str = "http://localhost:8000/query"
    request_timeout_seconds: float = 30.0

    # 'http' relays the assembled prompt; 'openai' / 'groq' use a chat model
    completion_provider: str = "http"
    llm_model: str = "gpt-4o-mini"

    # Session retention
    max_messages: int = 20
    context_messages: int = 10
    session_ttl_seconds: float = 3600.0
    sweep_interval_seconds: float = 300.0
    enable_sweeper: bool = True

    # Prompt
    persona_preamble: Optional[str] = None

    # Input limits
    max_query_length: int = 2000

    def validate(self) -> "MindfulChatConfig":
        """
        Check retention bounds and timing values.

        :return: self, for chaining
        :raises: ConfigurationError if any bound is invalid
        """
        if self.max_messages < 1:
            raise ConfigurationError("max_messages must be at least 1.")
        if self.context_messages < 1:
            raise ConfigurationError("context_messages must be at least 1.")
        if self.context_messages > self.max_messages:
            raise ConfigurationError(
                f"context_messages ({self.context_messages}) cannot exceed "
                f"max_messages ({self.max_messages})."
            )
        if self.session_ttl_seconds <= 0:
            raise ConfigurationError("session_ttl_seconds must be positive.")
        if self.sweep_interval_seconds <= 0:
            raise ConfigurationError("sweep_interval_seconds must be positive.")
        if self.request_timeout_seconds <= 0:
            raise ConfigurationError("request_timeout_seconds must be positive.")
        if self.max_query_length < 1:
            raise ConfigurationError("max_query_length must be at least 1.")
        return self
