"""
Configuration loader with validation.

Builds MindfulChatConfig from environment variables (and a local .env file).
"""
import logging
from dotenv import load_dotenv
from .config import MindfulChatConfig
from .config_validator import (
    get_optional_env,
    get_int_env,
    get_float_env,
    get_bool_env,
    mask_secret,
)

logger = logging.getLogger(__name__)


def load_config_from_env(use_dotenv: bool = True) -> MindfulChatConfig:
    """
    Load configuration from environment variables with validation.
    
    The API key is optional here: a missing key is reported per turn so the
    service can still start and answer health checks.
    
    Usage:
        config = load_config_from_env()
        app = MindfulChatApp(config)
        app.initialize()
    
    :param use_dotenv: Load a .env file first (local development)
    :return: Validated MindfulChatConfig instance
    :raises: ConfigurationError if a value is malformed or out of range
    """
    if use_dotenv:
        load_dotenv()
    
    defaults = MindfulChatConfig()
    config = MindfulChatConfig(
        api_key=get_optional_env("API_KEY"),
        upstream_url=get_optional_env(
            "UPSTREAM_API_URL", default=defaults.upstream_url, check_placeholder=False
        ),
        request_timeout_seconds=get_float_env(
            "UPSTREAM_TIMEOUT_SECONDS", defaults.request_timeout_seconds
        ),
        completion_provider=get_optional_env(
            "COMPLETION_PROVIDER", default=defaults.completion_provider, check_placeholder=False
        ).lower(),
        llm_model=get_optional_env(
            "LLM_MODEL", default=defaults.llm_model, check_placeholder=False
        ),
        max_messages=get_int_env("SESSION_MAX_MESSAGES", defaults.max_messages),
        context_messages=get_int_env("SESSION_CONTEXT_MESSAGES", defaults.context_messages),
        session_ttl_seconds=get_float_env("SESSION_TTL_SECONDS", defaults.session_ttl_seconds),
        sweep_interval_seconds=get_float_env(
            "SESSION_SWEEP_INTERVAL_SECONDS", defaults.sweep_interval_seconds
        ),
        enable_sweeper=get_bool_env("ENABLE_SESSION_SWEEPER", defaults.enable_sweeper),
        persona_preamble=get_optional_env("PERSONA_PREAMBLE", check_placeholder=False),
        max_query_length=get_int_env("MAX_QUERY_LENGTH", defaults.max_query_length),
    )
    
    logger.info(
        f"Config loaded: provider={config.completion_provider}, "
        f"api_key={'set (' + mask_secret(config.api_key) + ')' if config.api_key else 'missing'}, "
        f"ttl={config.session_ttl_seconds}s, sweep={config.sweep_interval_seconds}s"
    )
    
    return config.validate()
