"""
API Service - Business logic layer between the API and the store.

The service:
1. Translates API requests into store calls
2. Manages editing sessions
3. Renders slides through a renderer registry
4. Formats responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..render import RenderReport, RendererRegistry, collect_types, json_registry, render_slide, to_jsonable
from ..schema import validate_collection
from ..session import EditingSession, SessionManager
from ..store import MutationResult
from ..tree import ABSENT
from .schemas import (
    CreateSessionRequest,
    ErrorCode,
    ErrorResponse,
    GetValueRequest,
    InsertElementRequest,
    MutationResponse,
    PatchValueRequest,
    RemoveElementRequest,
    RenderResponse,
    ScoreInfo,
    SessionResponse,
    SetScoreRequest,
    ValueResponse,
)

logger = logging.getLogger(__name__)


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        session = service.create_session(CreateSessionRequest(slides=[...]))
        service.patch_value(session.session_id, PatchValueRequest(path=[0, 0, "props", "checked"], value=True))

    With no registry, slides render through JSON renderers built from the
    type tags present in the deck.
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    registry: RendererRegistry | None = None

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        collection = [
            [element.model_dump() for element in slide]
            for slide in request.slides
        ]
        known = list(self.registry) if self.registry is not None else None
        result = validate_collection(collection, known_types=known)
        if not result.valid:
            return ErrorResponse(
                error="Deck failed validation",
                error_code=ErrorCode.INVALID_DOCUMENT,
                details={"errors": result.errors},
            )
        for warning in result.warnings:
            logger.info("Deck warning: %s", warning)

        session = self.session_manager.create_session(initial=collection, title=request.title)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Reads and mutations
    # =========================================================================

    def get_value(self, session_id: str, request: GetValueRequest) -> ValueResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        value = session.store.get_value(request.path)
        found = value is not ABSENT
        return ValueResponse(
            session_id=session_id,
            path=request.path,
            found=found,
            value=to_jsonable(value) if found else request.default,
        )

    def patch_value(self, session_id: str, request: PatchValueRequest) -> MutationResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._mutation_response(session, session.store.patch_value(request.path, request.value))

    def add_element(self, session_id: str, request: InsertElementRequest) -> MutationResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        result = session.store.add_element(request.path, request.index, request.value)
        return self._mutation_response(session, result)

    def remove_element(self, session_id: str, request: RemoveElementRequest) -> MutationResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        result = session.store.remove_element(request.path, request.index)
        return self._mutation_response(session, result)

    def uncheck_all(self, session_id: str) -> MutationResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._mutation_response(session, session.store.uncheck_all())

    def set_score_for_all(self, session_id: str, request: SetScoreRequest) -> MutationResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._mutation_response(session, session.store.set_score_for_all(request.score))

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_slide(self, session_id: str, slide_index: int | None = None) -> RenderResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        store = session.store
        if slide_index is None:
            slide_index = store.selected_slide_index
        registry = self.registry
        if registry is None:
            registry = json_registry(collect_types(store.collection))

        report = RenderReport()
        nodes = render_slide(store, registry, slide_index=slide_index, report=report)
        return RenderResponse(
            session_id=session_id,
            slide_index=slide_index,
            nodes=to_jsonable(nodes),
            rendered=report.rendered,
            unknown_types=report.unknown_types,
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _score_info(self, session: EditingSession) -> ScoreInfo:
        summary = session.store.score_summary()
        return ScoreInfo(
            total=summary.total,
            current=summary.current,
            element_count=summary.element_count,
            percent=summary.percent,
        )

    def _session_to_response(self, session: EditingSession) -> SessionResponse:
        store = session.store
        return SessionResponse(
            session_id=session.session_id,
            title=session.title,
            slide_count=len(store.collection) if isinstance(store.collection, list) else 0,
            selected_slide_index=store.selected_slide_index,
            version=store.version,
            created_at=session.created_at,
            score=self._score_info(session),
        )

    def _mutation_response(self, session: EditingSession, result: MutationResult) -> MutationResponse:
        return MutationResponse(
            session_id=session.session_id,
            changed=result.changed,
            version=result.version,
            message=result.error,
            score=self._score_info(session),
        )
