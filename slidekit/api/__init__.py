"""
API Module - HTTP interface for deck editors.

Exposes editing sessions over REST:
1. Open a deck (validated) as a session
2. Read and patch values by path
3. Insert/remove elements, run bulk operations
4. Render a slide to JSON

All state is session-scoped and in-memory.
"""

from .schemas import (
    CreateSessionRequest,
    GetValueRequest,
    PatchValueRequest,
    InsertElementRequest,
    RemoveElementRequest,
    SetScoreRequest,
    SessionResponse,
    ValueResponse,
    MutationResponse,
    RenderResponse,
    ErrorResponse,
    ErrorCode,
    ScoreInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    "CreateSessionRequest",
    "GetValueRequest",
    "PatchValueRequest",
    "InsertElementRequest",
    "RemoveElementRequest",
    "SetScoreRequest",
    "SessionResponse",
    "ValueResponse",
    "MutationResponse",
    "RenderResponse",
    "ErrorResponse",
    "ErrorCode",
    "ScoreInfo",
    "APIService",
    "create_app",
]
