from ..config import MindfulChatConfig
from .base import CompletionClient
from .http_client import HttpCompletionClient
from .chat_model_client import ChatModelCompletionClient


def create_completion_client(config: MindfulChatConfig) -> CompletionClient:
    """
    Build the completion client named by config.completion_provider.

    :param config: MindfulChatConfig instance
    :return: CompletionClient
    :raises: ValueError for an unknown provider
    """
    provider = config.completion_provider.lower()

    if provider == "http":
        return HttpCompletionClient(
            url=config.upstream_url,
            api_key=config.api_key,
            timeout=config.request_timeout_seconds,
        )

    if provider in ("openai", "groq"):
        # Imported here so the http provider doesn't pull in chat model SDKs at wiring time
        from ..llm_factory import get_llm_instance
        llm = get_llm_instance(
            provider=provider,
            model=config.llm_model,
            timeout=config.request_timeout_seconds,
        )
        return ChatModelCompletionClient(llm)

    raise ValueError(f"Unknown completion provider: {config.completion_provider}")
