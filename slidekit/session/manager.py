"""
Session Manager - Creates and manages editing sessions.

One session = one store, constructed when an editor opens a deck and
handed by reference to everything that reads or edits it.

Sessions are in-memory only. Saving a deck is the caller's job: read
`session.store.collection` and write it wherever it belongs.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..store import TreeStore

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of an editing session."""
    ACTIVE = "active"
    CLOSED = "closed"


@dataclass
class EditingSession:
    """An in-memory editing session around one TreeStore."""
    session_id: str
    store: TreeStore
    created_at: float
    title: str | None = None
    state: SessionState = SessionState.ACTIVE
    last_modified: float = 0.0

    # Session metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE


class SessionManager:
    """
    Manages editing sessions.

    Responsibilities:
    - Create sessions around a fresh store
    - Track active sessions
    - Clean up old sessions
    """

    def __init__(self):
        self._sessions: dict[str, EditingSession] = {}

    def create_session(
        self,
        initial: list | None = None,
        title: str | None = None,
    ) -> EditingSession:
        """
        Create a new editing session.

        Args:
            initial: Starting collection (empty when omitted)
            title: Optional deck title

        Returns:
            New active EditingSession
        """
        now = time.time()
        session = EditingSession(
            session_id=str(uuid.uuid4()),
            store=TreeStore(initial=initial),
            created_at=now,
            title=title,
            last_modified=now,
        )

        def touch(_collection) -> None:
            session.last_modified = time.time()

        session.store.subscribe(touch)
        self._sessions[session.session_id] = session
        logger.info("Created session %s (%d slides)", session.session_id, len(session.store.collection))
        return session

    def get_session(self, session_id: str) -> EditingSession | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Close a session and drop it. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.CLOSED
        logger.info("Closed session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_idle_seconds: int = 3600) -> list[str]:
        """
        Close sessions that have not been modified for `max_idle_seconds`.

        Returns the IDs of the closed sessions.
        """
        current_time = time.time()
        stale = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_modified > max_idle_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return stale
