"""
FastAPI Application - REST API for deck editors.

Endpoints:
    GET    /api/v1/health                        Health check
    POST   /api/v1/sessions                      Open a deck for editing
    GET    /api/v1/sessions                      List sessions
    GET    /api/v1/sessions/{id}                 Session summary and scores
    DELETE /api/v1/sessions/{id}                 Close a session
    POST   /api/v1/sessions/{id}/value           Read the value at a path
    PATCH  /api/v1/sessions/{id}/value           Write the value at a path
    POST   /api/v1/sessions/{id}/elements        Insert into a list
    DELETE /api/v1/sessions/{id}/elements        Remove from a list
    POST   /api/v1/sessions/{id}/uncheck-all     Clear every checked flag
    POST   /api/v1/sessions/{id}/score           Set the score of every element
    GET    /api/v1/sessions/{id}/render          Render a slide

Sessions live in memory; nothing is persisted.
"""

from typing import Optional
import os

from .. import __version__

# Environment configuration
SLIDEKIT_ENV = os.getenv("SLIDEKIT_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        GetValueRequest,
        PatchValueRequest,
        InsertElementRequest,
        RemoveElementRequest,
        SetScoreRequest,
        SessionResponse,
        SessionListResponse,
        EndSessionResponse,
        ValueResponse,
        MutationResponse,
        RenderResponse,
        HealthResponse,
        ErrorResponse,
        ErrorCode,
    )

    app = FastAPI(
        title="slidekit API",
        description="Edit slide decks of interactive elements and render them.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def error_response(error: ErrorResponse) -> JSONResponse:
        status_codes = {
            ErrorCode.SESSION_NOT_FOUND: 404,
            ErrorCode.INVALID_DOCUMENT: 400,
            ErrorCode.VALIDATION_ERROR: 422,
            ErrorCode.INTERNAL_ERROR: 500,
        }
        return JSONResponse(
            status_code=status_codes.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(result):
        if isinstance(result, ErrorResponse):
            return error_response(result)
        return result

    error_responses = {404: {"model": ErrorResponse}}

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, environment=SLIDEKIT_ENV)

    # =========================================================================
    # Sessions
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Open a deck for editing",
    )
    async def create_session(request: CreateSessionRequest):
        return respond(api_service.create_session(request))

    @app.get("/api/v1/sessions", response_model=SessionListResponse, tags=["Sessions"])
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses=error_responses,
        tags=["Sessions"],
    )
    async def get_session(session_id: str):
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        responses=error_responses,
        tags=["Sessions"],
    )
    async def end_session(session_id: str):
        if not api_service.end_session(session_id):
            return error_response(ErrorResponse(
                error=f"Session {session_id} not found",
                error_code=ErrorCode.SESSION_NOT_FOUND,
            ))
        return EndSessionResponse(success=True, session_id=session_id)

    # =========================================================================
    # Values and elements
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/value",
        response_model=ValueResponse,
        responses=error_responses,
        tags=["Store"],
        summary="Read the value at a path",
    )
    async def get_value(session_id: str, request: GetValueRequest):
        return respond(api_service.get_value(session_id, request))

    @app.patch(
        "/api/v1/sessions/{session_id}/value",
        response_model=MutationResponse,
        responses=error_responses,
        tags=["Store"],
        summary="Write the value at a path",
    )
    async def patch_value(session_id: str, request: PatchValueRequest):
        return respond(api_service.patch_value(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/elements",
        response_model=MutationResponse,
        responses=error_responses,
        tags=["Store"],
    )
    async def add_element(session_id: str, request: InsertElementRequest):
        return respond(api_service.add_element(session_id, request))

    @app.delete(
        "/api/v1/sessions/{session_id}/elements",
        response_model=MutationResponse,
        responses=error_responses,
        tags=["Store"],
    )
    async def remove_element(session_id: str, request: RemoveElementRequest):
        return respond(api_service.remove_element(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/uncheck-all",
        response_model=MutationResponse,
        responses=error_responses,
        tags=["Store"],
    )
    async def uncheck_all(session_id: str):
        return respond(api_service.uncheck_all(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/score",
        response_model=MutationResponse,
        responses=error_responses,
        tags=["Store"],
    )
    async def set_score_for_all(session_id: str, request: SetScoreRequest):
        return respond(api_service.set_score_for_all(session_id, request))

    # =========================================================================
    # Rendering
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/render",
        response_model=RenderResponse,
        responses=error_responses,
        tags=["Render"],
    )
    async def render(
        session_id: str,
        slide_index: Optional[int] = Query(default=None, ge=0, description="Defaults to the selected slide"),
    ):
        return respond(api_service.render_slide(session_id, slide_index))

    return app


# For running directly: uvicorn slidekit.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
