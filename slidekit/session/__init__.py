"""
Session Module - Manages in-memory editing sessions.

A session represents one editor working on one deck:
- Created when the deck is opened
- Holds the TreeStore every consumer shares
- Dropped when the editor closes it

Sessions are EPHEMERAL: nothing is persisted here.
"""

from .manager import SessionManager, EditingSession, SessionState

__all__ = [
    "SessionManager",
    "EditingSession",
    "SessionState",
]
