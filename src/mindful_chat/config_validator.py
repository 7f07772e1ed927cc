"""
Configuration validation utilities.

Environment lookups with placeholder detection and typed parsing.
"""
import os
import warnings
from typing import Optional
from .exceptions import ConfigurationError


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.
    
    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or invalid
    """
    value = os.getenv(key)
    
    if not value:
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Please set it using one of these methods:\n"
            f"  1. Environment variable: export {key}='your-value'\n"
            f"  2. .env file: Create .env in project root with {key}=your-value\n\n"
            f"Description: {desc}"
        )
    
    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value.\n"
            f"Please set a real value. Current value: {mask_secret(value)}"
        )
    
    return value


def get_optional_env(
    key: str,
    default: Optional[str] = None,
    check_placeholder: bool = True,
) -> Optional[str]:
    """
    Get optional environment variable.
    
    :param key: Environment variable name
    :param default: Default value if not set
    :param check_placeholder: Discard placeholder-looking values (credentials only;
        free text and URLs may legitimately contain words like "replace")
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)
    
    if check_placeholder and value and _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default
    
    return value


def get_int_env(key: str, default: int) -> int:
    """Parse an integer environment variable, falling back to default."""
    raw = get_optional_env(key, check_placeholder=False)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'.")


def get_float_env(key: str, default: float) -> float:
    """Parse a float environment variable, falling back to default."""
    raw = get_optional_env(key, check_placeholder=False)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got '{raw}'.")


def get_bool_env(key: str, default: bool) -> bool:
    raw = get_optional_env(key, check_placeholder=False)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False
    
    placeholder_patterns = [
        "your_",
        "placeholder",
        "xxx",
        "sk-0000",
        "gsk_0000",
        "replace",
        "todo",
    ]
    
    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)


def mask_secret(secret: Optional[str], show_chars: int = 4) -> str:
    """
    Mask secret for safe display in logs and error messages.
    
    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"
    
    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
