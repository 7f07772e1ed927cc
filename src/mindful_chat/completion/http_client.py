"""
HTTP completion client.

POSTs the assembled prompt as {"query": ...} to the configured endpoint and
reads {"answer": ...} back.
"""
import logging
from typing import Optional

import requests

from ..exceptions import UpstreamError
from ..sessions import TurnContext
from .base import CompletionClient, CompletionResult

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
MAX_ERROR_BODY_CHARS = 500


class HttpCompletionClient(CompletionClient):
    """
    Relays prompts to an external completion endpoint.
    
    :param url: Endpoint accepting POST {"query": "..."}
    :param api_key: Sent as the x-api-key header
    :param timeout: Seconds before the request is abandoned
    :param session: Optional requests.Session (connection reuse, tests)
    """
    
    def __init__(
        self,
        url: str,
        api_key: Optional[str],
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._http = session or requests.Session()
    
    def has_credentials(self) -> bool:
        return bool(self._api_key)
    
    def complete(self, turn: TurnContext) -> CompletionResult:
        logger.info(f"Making request to external API with context (session={turn.session_id})")
        try:
            response = self._http.post(
                self._url,
                json={"query": turn.prompt},
                headers={
                    "Content-Type": "application/json",
                    API_KEY_HEADER: self._api_key or "",
                },
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            raise UpstreamError(f"API timed out after {self._timeout}s") from e
        except requests.RequestException as e:
            raise UpstreamError(f"API request failed: {e}") from e
        
        logger.info(f"External API response status: {response.status_code}")
        
        if not response.ok:
            error_text = response.text[:MAX_ERROR_BODY_CHARS]
            logger.error(f"External API error: {error_text}")
            raise UpstreamError(f"API error: {response.status_code} - {error_text}")
        
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("API returned a non-JSON response") from e
        
        if not isinstance(data, dict):
            raise UpstreamError("API returned an unexpected payload")
        
        return CompletionResult(answer=data.get("answer"), raw=data)
    
    def close(self) -> None:
        """Close pooled connections."""
        self._http.close()
