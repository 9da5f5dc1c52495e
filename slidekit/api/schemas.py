"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between an editor front end and the
store. Paths are JSON arrays of keys: strings select object fields,
non-negative integers select list indices.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or was closed
- INVALID_DOCUMENT: Submitted deck failed validation
- VALIDATION_ERROR: Request body failed schema validation
- INTERNAL_ERROR: Unexpected server error
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from ..schema.nodes import ElementNode

PathKey = Union[int, str]


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_DOCUMENT = "INVALID_DOCUMENT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ScoreInfo(BaseModel):
    """Score aggregates for the current collection."""
    total: float = 0
    current: float = 0
    element_count: int = 0
    percent: int = 0


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """
    Open a deck for editing.

    POST /api/v1/sessions
    """
    title: Optional[str] = None
    slides: list[list[ElementNode]] = Field(default_factory=list)


class GetValueRequest(BaseModel):
    """POST /api/v1/sessions/{id}/value"""
    path: list[PathKey] = Field(default_factory=list)
    default: Any = None


class PatchValueRequest(BaseModel):
    """PATCH /api/v1/sessions/{id}/value"""
    path: list[PathKey]
    value: Any = None


class InsertElementRequest(BaseModel):
    """POST /api/v1/sessions/{id}/elements"""
    path: list[PathKey] = Field(description="Path of the target list, e.g. [slide_index]")
    index: Optional[int] = Field(default=None, description="Insert position; omitted appends")
    value: Any


class RemoveElementRequest(BaseModel):
    """DELETE /api/v1/sessions/{id}/elements"""
    path: list[PathKey]
    index: int


class SetScoreRequest(BaseModel):
    """POST /api/v1/sessions/{id}/score"""
    score: float = Field(ge=0)


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Session summary."""
    session_id: str
    title: Optional[str] = None
    slide_count: int = 0
    selected_slide_index: int = 0
    version: int = 0
    created_at: float
    score: ScoreInfo = Field(default_factory=ScoreInfo)


class SessionListResponse(BaseModel):
    sessions: list[str] = Field(default_factory=list)
    count: int = 0


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class ValueResponse(BaseModel):
    session_id: str
    path: list[PathKey]
    found: bool
    value: Any = None


class MutationResponse(BaseModel):
    """Outcome of a store mutation."""
    session_id: str
    changed: bool
    version: int
    message: Optional[str] = None
    score: ScoreInfo = Field(default_factory=ScoreInfo)


class RenderResponse(BaseModel):
    """Rendered view of one slide."""
    session_id: str
    slide_index: int
    nodes: list[Any] = Field(default_factory=list)
    rendered: int = 0
    unknown_types: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str
