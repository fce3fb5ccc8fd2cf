"""In-memory session store."""

import asyncio
import time
from dataclasses import dataclass, replace
from typing import Callable, Protocol

from ..logging_config import get_logger
from ..models import ConversationState, Session

logger = get_logger(__name__)


class ISessionStore(Protocol):
    """Owner of every Session record, keyed by session id."""

    def get(self, session_id: str) -> Session:
        """Return the session, creating an Initial one if absent."""
        ...

    def put(self, session_id: str, session: Session) -> None:
        """Overwrite the session record."""
        ...

    def lock(self, session_id: str) -> asyncio.Lock:
        """Per-session lock serializing event handling for one id."""
        ...


def expire(session: Session) -> Session:
    """What is kept of a session once its idle timeout runs out.

    Cached data and documents are dropped; the state is kept and marked so
    the next event can tell the user what happened.
    """
    return replace(session, extracted_data=None, documents=(), expired=True)


@dataclass
class _Record:
    session: Session
    touched_at: float


class SessionStore:
    """Session table with one lock per session id and idle expiry.

    There is no lock shared by all sessions: two sessions never wait on
    each other. A ``ttl_seconds`` of None (or <= 0) disables expiry.

    Expiry happens in two steps. A session idle for longer than the TTL
    loses its cached data and is marked expired; if it stays idle for
    another TTL (or was still Initial) the record is dropped.
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None
        self._clock = clock
        self._records: dict[str, _Record] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, session_id: str) -> Session:
        """Return the session, creating an Initial one if absent.

        An expired session comes back marked ``expired`` with its data
        dropped.
        """
        self.evict_expired()

        record = self._records.get(session_id)
        if record is not None and self._is_expired(record):
            # The caller may hold this session's lock, so the sweep skipped it
            record = self._expire(session_id, record)
        if record is None:
            record = _Record(Session(session_id=session_id), self._clock())
            self._records[session_id] = record
        return record.session

    def put(self, session_id: str, session: Session) -> None:
        """Overwrite the session record and refresh its idle timer."""
        if session.session_id != session_id:
            raise ValueError(
                f"Session id mismatch: {session.session_id!r} stored under {session_id!r}"
            )
        self._records[session_id] = _Record(session, self._clock())

    def lock(self, session_id: str) -> asyncio.Lock:
        """Per-session lock; hold it while handling one event."""
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock

    def evict_expired(self) -> int:
        """Expire sessions idle for longer than the TTL. Returns how many."""
        if self._ttl is None:
            return 0

        expired = [
            (session_id, record)
            for session_id, record in self._records.items()
            if self._is_expired(record) and not self._is_locked(session_id)
        ]
        for session_id, record in expired:
            self._expire(session_id, record)
        return len(expired)

    def clear(self) -> None:
        """Forget every session not currently being handled."""
        for session_id in list(self._records):
            if not self._is_locked(session_id):
                del self._records[session_id]
                self._locks.pop(session_id, None)

    def _expire(self, session_id: str, record: _Record) -> _Record | None:
        """Mark the record expired, or drop it. Returns the surviving record."""
        session = record.session
        if session.expired or session.state is ConversationState.INITIAL:
            del self._records[session_id]
            if not self._is_locked(session_id):
                self._locks.pop(session_id, None)
            logger.info("Session %s dropped", session_id)
            return None

        marked = _Record(expire(session), self._clock())
        self._records[session_id] = marked
        logger.info("Session %s expired in state %s", session_id, session.state.value)
        return marked

    def _is_expired(self, record: _Record) -> bool:
        return self._ttl is not None and self._clock() - record.touched_at > self._ttl

    def _is_locked(self, session_id: str) -> bool:
        lock = self._locks.get(session_id)
        return lock is not None and lock.locked()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._records

    def __len__(self) -> int:
        return len(self._records)
