import logging
from time import time

from .config import MindfulChatConfig
from .completion import CompletionClient
from .exceptions import MissingCredentialError, UpstreamError
from .schemas import ChatResponse
from .security import InputValidator
from .sessions import TurnProcessor

logger = logging.getLogger(__name__)

NO_RESPONSE_PLACEHOLDER = "No response received"


class MindfulChatService:
    """
    Handles one user turn end to end.
    The ONLY entry point for the HTTP layer.
    """

    def __init__(
        self,
        config: MindfulChatConfig,
        turn_processor: TurnProcessor,
        completion_client: CompletionClient,
    ):
        self.config = config
        self._turns = turn_processor
        self._client = completion_client

    def chat(self, query: str, session_id: str) -> ChatResponse:
        """
        Validate, record the user turn, call the upstream model and record
        its reply.

        On upstream failure the session keeps only the user message, so a
        retried turn still sees accurate history.

        :raises ValidationError: Empty or over-long query
        :raises MissingCredentialError: No API key; the session is untouched
        :raises UpstreamError: Completion call failed
        """
        query = InputValidator.sanitize_query(query, max_length=self.config.max_query_length)
        session_id = InputValidator.validate_session_id(session_id)

        if not self._client.has_credentials():
            logger.error("API key not found in configuration")
            raise MissingCredentialError("API key not configured")

        start_time = time()

        turn = self._turns.handle_turn(session_id, query)
        logger.info(
            f"Turn accepted - Session: {session_id}, New: {turn.created}, "
            f"Messages: {turn.message_count}"
        )

        try:
            result = self._client.complete(turn)
        except UpstreamError as e:
            logger.error(f"Upstream failure - Session: {session_id}: {e}")
            raise

        answer = result.answer if result.answer else NO_RESPONSE_PLACEHOLDER
        message_count = self._turns.record_reply(session_id, answer)
        if message_count is None:
            # Session expired while the upstream call was in flight
            message_count = turn.message_count

        latency_ms = int((time() - start_time) * 1000)

        return ChatResponse(
            answer=answer,
            session_id=session_id,
            message_count=message_count,
            latency_ms=latency_ms,
            upstream=result.raw,
        )
