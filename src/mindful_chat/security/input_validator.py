"""
Input validation and sanitization.

OOP: Single Responsibility - Only handles input validation and sanitization.
"""

from typing import Any

from .exceptions import ValidationError


class InputValidator:
    """
    Validates user input before it reaches the session layer.
    
    Text is relayed to the upstream model as-is (no HTML escaping); only
    emptiness, length and control bytes are checked.
    """

    MAX_QUERY_LENGTH = 2000
    MAX_SESSION_ID_LENGTH = 128

    @staticmethod
    def sanitize_query(query: Any, max_length: int = MAX_QUERY_LENGTH) -> str:
        """
        Validate and clean a user query.
        
        :param query: Raw query from the request body
        :param max_length: Maximum allowed characters
        :return: Stripped query string
        :raises ValidationError: If query is empty or too long
        """
        if not isinstance(query, str):
            raise ValidationError("Query is required")

        sanitized = query.replace("\x00", "").strip()

        if not sanitized:
            raise ValidationError("Query is required")

        if len(sanitized) > max_length:
            raise ValidationError(
                f"Query exceeds maximum length of {max_length} characters"
            )

        return sanitized

    @staticmethod
    def validate_session_id(session_id: Any) -> str:
        """
        Validate a caller-supplied session id.
        
        :param session_id: Raw session id
        :return: Stripped session id
        :raises ValidationError: If not a non-empty string within length limits
        """
        if not isinstance(session_id, str) or not session_id.strip():
            raise ValidationError("Session id must be a non-empty string")

        session_id = session_id.strip()
        if len(session_id) > InputValidator.MAX_SESSION_ID_LENGTH:
            raise ValidationError(
                f"Session id exceeds maximum length of "
                f"{InputValidator.MAX_SESSION_ID_LENGTH} characters"
            )

        return session_id
