"""
Security-related exceptions.
"""


class SecurityError(Exception):
    """Base exception for security violations."""

    pass


class ValidationError(SecurityError):
    """Raised when input validation fails."""

    pass
