"""
Session Registry

Keeps one FormStateStore per editing session, in memory only. Nothing is
persisted: a restart discards every session.

The HTTP server may run handlers on worker threads, so the registry map and
each session's store are guarded by locks. A store transition swaps the whole
snapshot, so a reader never sees a half-applied edit.
"""

import logging
import threading
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional
from uuid import uuid4

from ... import config
from .store import FormStateStore, blank_state, seeded_state

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is not (or no longer) registered."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(session_id)

    def __str__(self) -> str:
        return f"Session '{self.session_id}' not found"


@dataclass
class LetterSession:
    """One editing session: its store plus the lock that serializes edits."""
    session_id: str
    store: FormStateStore
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class SessionRegistry:
    """
    In-memory session map.

    Args:
        max_sessions: oldest sessions are evicted once this many exist
    """

    def __init__(self, max_sessions: int = config.MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, LetterSession]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, blank: bool = False) -> LetterSession:
        """Open a session with seeded defaults (or an empty letter)."""
        initial = blank_state() if blank else seeded_state()
        session = LetterSession(session_id=uuid4().hex, store=FormStateStore(initial))
        with self._lock:
            self._sessions[session.session_id] = session
            while len(self._sessions) > self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.warning(f"Session cap {self.max_sessions} reached, evicted {evicted_id}")
        logger.info(f"Created letter session {session.session_id} (blank={blank})")
        return session

    def get(self, session_id: str) -> LetterSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info(f"Discarded letter session {session_id}")

    @contextmanager
    def edit(self, session_id: str) -> Iterator[FormStateStore]:
        """Hold the session lock while the caller mutates its store."""
        session = self.get(session_id)
        with session.lock:
            yield session.store


# =============================================================================
# FACTORY FUNCTIONS
# =============================================================================

_registry: Optional[SessionRegistry] = None


def get_registry() -> SessionRegistry:
    """Get or create the process-wide registry. Also used as a FastAPI dependency."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry
