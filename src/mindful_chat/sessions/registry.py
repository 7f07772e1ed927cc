"""
In-memory session registry.

Owns every Session keyed by session id. Lost on process restart.
"""
import logging
import time
from threading import Lock
from typing import Callable, Dict, List, Optional

from .models import Session, SessionLookup

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Thread-safe map of session id -> Session.
    
    Locking:
    - ``_lock`` guards only the dict itself and is never held while waiting
      on a session lock.
    - Each Session carries its own lock for its messages and timestamps, so
      turns on different sessions never block each other.
    """
    
    def __init__(self, clock: Callable[[], float] = time.time):
        """
        :param clock: Returns the current time in seconds (injectable for tests)
        """
        self._sessions: Dict[str, Session] = {}
        self._lock = Lock()
        self._clock = clock
    
    def now(self) -> float:
        return self._clock()
    
    def get_or_create(self, session_id: str) -> SessionLookup:
        """
        Get the session for an id, creating and registering it if unseen.
        
        :param session_id: Opaque caller-supplied identifier
        :return: SessionLookup with created=True for a new session
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                return SessionLookup(session=session, created=False)
            now = self._clock()
            session = Session(id=session_id, created_at=now, last_activity=now)
            self._sessions[session_id] = session
        logger.info(f"Created new session: {session_id}")
        return SessionLookup(session=session, created=True)
    
    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)
    
    def remove(self, session_id: str) -> None:
        """Delete a session unconditionally. No-op if absent."""
        session = self.get(session_id)
        if session is None:
            return
        with session.lock:
            self._detach(session)
    
    def all_expired(self, now: float, ttl: float) -> List[str]:
        """
        Ids of every session idle longer than ttl.
        
        :param now: Reference time in seconds
        :param ttl: Idle threshold in seconds
        :return: Session ids whose last_activity < now - ttl
        """
        cutoff = now - ttl
        with self._lock:
            sessions = list(self._sessions.values())
        return [s.id for s in sessions if s.last_activity < cutoff]
    
    def remove_if_expired(self, session_id: str, now: float, ttl: float) -> bool:
        """
        Remove a session only if it is still expired once its lock is held.
        
        A turn that touched the session after all_expired() was computed
        keeps it alive.
        
        :return: True if the session was removed
        """
        session = self.get(session_id)
        if session is None:
            return False
        with session.lock:
            if session.removed or session.last_activity >= now - ttl:
                return False
            self._detach(session)
        return True
    
    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
    
    def clear(self) -> None:
        """Drop every session (shutdown and tests)."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            with session.lock:
                session.removed = True
    
    def _detach(self, session: Session) -> None:
        # Caller holds session.lock
        session.removed = True
        with self._lock:
            if self._sessions.get(session.id) is session:
                del self._sessions[session.id]
