"""
Periodic expiry of idle sessions.

Runs on a daemon thread that waits on a threading.Event between sweeps, so
stop() returns promptly instead of waiting out the interval.
"""
import logging
import threading
from typing import List, Optional

from .registry import SessionRegistry

logger = logging.getLogger(__name__)


class SessionSweeper:
    """
    Removes sessions idle for longer than ttl_seconds.
    
    Usage:
        sweeper = SessionSweeper(registry, ttl_seconds=3600, interval_seconds=300)
        sweeper.start()
        ...
        sweeper.stop()
    """
    
    def __init__(
        self,
        registry: SessionRegistry,
        ttl_seconds: float = 3600.0,
        interval_seconds: float = 300.0,
    ):
        self._registry = registry
        self._ttl_seconds = ttl_seconds
        self._interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
    
    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
    
    def run_once(self, now: Optional[float] = None) -> List[str]:
        """
        Sweep the registry a single time.
        
        :param now: Reference time (defaults to the registry clock)
        :return: Ids of the sessions removed by this sweep
        """
        if now is None:
            now = self._registry.now()
        
        removed = [
            session_id
            for session_id in self._registry.all_expired(now, self._ttl_seconds)
            if self._registry.remove_if_expired(session_id, now, self._ttl_seconds)
        ]
        
        if removed:
            logger.info(
                f"Expiry sweep removed {len(removed)} session(s), "
                f"{self._registry.count()} active"
            )
        return removed
    
    def start(self) -> None:
        """Start the background thread. No-op if already running."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="session-sweeper", daemon=True
        )
        self._thread.start()
        logger.info(
            f"Session sweeper started (ttl={self._ttl_seconds}s, "
            f"interval={self._interval_seconds}s)"
        )
    
    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Signal the thread to exit and wait for it."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Session sweeper did not stop within timeout")
            return
        logger.info("Session sweeper stopped")
        self._thread = None
    
    def _run(self) -> None:
        while not self._stop_event.wait(self._interval_seconds):
            try:
                self.run_once()
            except Exception as e:
                # Keep sweeping; one bad pass must not kill the thread
                logger.error(f"Expiry sweep failed: {e}", exc_info=True)
