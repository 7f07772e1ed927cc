import logging
from typing import Any

from langchain_groq import ChatGroq
from langchain_openai import ChatOpenAI

from .config_validator import get_required_env

logger = logging.getLogger(__name__)

KNOWN_GROQ_MODELS = [
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
    "mixtral-8x7b-32768",
]


def get_llm_instance(provider: str, model: str, timeout: float = 30.0) -> Any:
    """
    Factory to return a ready-to-use chat model based on provider name.

    :param provider: 'groq' or 'openai'
    :param model: LLM model name
    :param timeout: Request timeout in seconds
    :return: LangChain chat model
    :raises: ConfigurationError if the provider's API key is missing
    """
    provider = provider.lower()

    if provider == "groq":
        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key for LLM (get from https://console.groq.com/keys)"
        )
        if model not in KNOWN_GROQ_MODELS:
            # Warn but don't fail - Groq adds models regularly
            logger.warning(
                f"Model '{model}' not in known Groq models. Known models: {KNOWN_GROQ_MODELS}"
            )
        return ChatGroq(
            model=model,
            api_key=api_key,
            timeout=timeout,
            streaming=False,
        )

    elif provider == "openai":
        api_key = get_required_env(
            "OPENAI_API_KEY",
            description="OpenAI API key for LLM (get from https://platform.openai.com/api-keys)"
        )
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            timeout=timeout,
            streaming=False,
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
