class MindfulChatError(Exception):
    """Base exception for mindful chat service."""


class ConfigurationError(MindfulChatError):
    """Raised when configuration is missing or invalid."""


class MissingCredentialError(ConfigurationError):
    """Raised when the upstream API key is not configured."""


class UpstreamError(MindfulChatError):
    """Raised when the completion API fails or is unreachable."""


class AppNotInitializedError(MindfulChatError):
    """Raised when the app is used before initialize()."""
