"""
Public application facade for Mindful Chat Service.

Composition root and lifecycle owner: the session registry is created in
initialize() and torn down in shutdown(), and the expiry sweeper holds a
reference to that same registry.
"""
import logging
import time
from typing import Callable, Optional

from .config import MindfulChatConfig
from .completion import CompletionClient, create_completion_client
from .exceptions import AppNotInitializedError
from .schemas import ChatResponse
from .service import MindfulChatService
from .sessions import SessionRegistry, SessionSweeper, TurnProcessor

logger = logging.getLogger(__name__)


class MindfulChatApp:
    """
    Public application facade for Mindful Chat Service.
    
    Usage:
        config = load_config_from_env()
        app = MindfulChatApp(config)
        app.initialize()
        response = app.chat("I feel anxious", session_id="s1")
        ...
        app.shutdown()
    """
    
    def __init__(
        self,
        config: MindfulChatConfig,
        completion_client: Optional[CompletionClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        :param config: MindfulChatConfig instance
        :param completion_client: Overrides the client built from config
        :param clock: Time source for session timestamps
        """
        self._config = config.validate()
        self._completion_client = completion_client
        self._clock = clock
        self._registry: Optional[SessionRegistry] = None
        self._sweeper: Optional[SessionSweeper] = None
        self._service: Optional[MindfulChatService] = None
        self._client: Optional[CompletionClient] = None
    
    @property
    def config(self) -> MindfulChatConfig:
        return self._config
    
    @property
    def registry(self) -> Optional[SessionRegistry]:
        return self._registry
    
    @property
    def sweeper(self) -> Optional[SessionSweeper]:
        return self._sweeper
    
    @property
    def is_initialized(self) -> bool:
        return self._service is not None
    
    def initialize(self) -> None:
        """
        Create the registry, turn processor, completion client and service,
        then start the expiry sweeper if enabled. Idempotent.
        """
        if self._service:
            return
        
        self._registry = SessionRegistry(clock=self._clock)
        turn_processor = TurnProcessor(
            self._registry,
            max_messages=self._config.max_messages,
            context_messages=self._config.context_messages,
            preamble=self._config.persona_preamble,
        )
        
        self._client = self._completion_client or create_completion_client(self._config)
        self._service = MindfulChatService(self._config, turn_processor, self._client)
        
        self._sweeper = SessionSweeper(
            self._registry,
            ttl_seconds=self._config.session_ttl_seconds,
            interval_seconds=self._config.sweep_interval_seconds,
        )
        if self._config.enable_sweeper:
            self._sweeper.start()
        
        logger.info(f"Mindful chat initialized (provider={self._config.completion_provider})")
    
    def shutdown(self) -> None:
        """Stop the sweeper, drop all sessions and close the client. Safe to call twice."""
        if self._sweeper:
            self._sweeper.stop()
        if self._registry:
            self._registry.clear()
        if self._client:
            self._client.close()
        self._client = None
        self._sweeper = None
        self._registry = None
        self._service = None
        logger.info("Mindful chat shut down")
    
    def chat(self, query: str, session_id: str) -> ChatResponse:
        """
        Send one user turn.
        
        :raises AppNotInitializedError: if initialize() has not been called
        """
        if not self._service:
            raise AppNotInitializedError("App not initialized. Call initialize() first.")
        return self._service.chat(query, session_id=session_id)
    
    def sweep_now(self) -> int:
        """Run one expiry sweep immediately; returns the number removed."""
        if not self._sweeper:
            raise AppNotInitializedError("App not initialized. Call initialize() first.")
        return len(self._sweeper.run_once())
    
    def active_sessions(self) -> int:
        return self._registry.count() if self._registry else 0
