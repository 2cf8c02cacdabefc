"""
Session storage used to authorize itinerary and recommendation requests.

Credential checks happen elsewhere; this only maps opaque session ids to users.
The store lives on ``app.state`` so tests can swap it out.
"""

import logging
import secrets
import time
from dataclasses import dataclass, field
from typing import Protocol

from fastapi import Header, HTTPException, Request, status

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TIMEOUT_SECONDS = 60 * 60


@dataclass(frozen=True)
class Session:
    session_id: str
    user_id: str
    username: str
    created_at: float = field(default_factory=time.time)


class SessionStore(Protocol):
    def create(self, user_id: str, username: str) -> str: ...

    def lookup(self, session_id: str) -> Session | None: ...

    def invalidate(self, session_id: str) -> None: ...


class InMemorySessionStore:
    def __init__(self, timeout_seconds: int = DEFAULT_SESSION_TIMEOUT_SECONDS):
        self.timeout_seconds = timeout_seconds
        self._sessions: dict[str, Session] = {}

    def create(self, user_id: str, username: str) -> str:
        session_id = secrets.token_hex(16)
        self._sessions[session_id] = Session(session_id, user_id, username)
        return session_id

    def lookup(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if time.time() - session.created_at > self.timeout_seconds:
            self._sessions.pop(session_id, None)
            return None
        return session

    def invalidate(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


def require_session(
    request: Request,
    x_session_id: str | None = Header(None),
) -> Session:
    """Dependency that resolves the ``x-session-id`` header or raises 401."""
    store: SessionStore = request.app.state.session_store
    session = store.lookup(x_session_id) if x_session_id else None
    if session is None:
        logger.debug("Rejected request with missing or expired session")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return session
