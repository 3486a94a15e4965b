"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel

from diet_planner.api.tracking import router as tracking_router
from diet_planner.api.ui import INDEX_HTML
from diet_planner.api.views import render_session
from diet_planner.app_logging import configure_logging
from diet_planner.containers import AppContainer
from diet_planner.domain.errors import ExportError, SessionNotFoundError
from diet_planner.domain.profile import UserProfile
from diet_planner.domain.session import PlanReady
from diet_planner.services.export import export_filename
from diet_planner.services.shopping import build_shopping_list


class AnswersRequest(BaseModel):
    """Answers keyed by the question text."""

    answers: dict[str, str]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Diet Planner", lifespan=lifespan)
    app.state.container = container

    app.include_router(tracking_router)

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"Unknown session {exc}"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Minimal browser client for the planner."""
        return HTMLResponse(INDEX_HTML)

    @app.post("/sessions")
    async def create_session(request: Request) -> dict[str, object]:
        """Open a new planning session on the profile form."""
        state_container: AppContainer = request.app.state.container
        session_id = state_container.session_service.start()
        state = state_container.session_service.get(session_id)
        return render_session(state_container, session_id, state)

    @app.get("/sessions/{session_id}")
    async def get_session(session_id: UUID, request: Request) -> dict[str, object]:
        """Return the current view of a session."""
        state_container: AppContainer = request.app.state.container
        state = state_container.session_service.get(session_id)
        return render_session(state_container, session_id, state)

    @app.post("/sessions/{session_id}/profile")
    async def submit_profile(
        session_id: UUID, profile: UserProfile, request: Request
    ) -> dict[str, object]:
        """Send the intake form to the planner."""
        state_container: AppContainer = request.app.state.container
        logger.info("Profile submitted", extra={"session": str(session_id)})
        state = await state_container.session_service.submit_profile(
            session_id, profile
        )
        return render_session(state_container, session_id, state)

    @app.post("/sessions/{session_id}/answers")
    async def submit_answers(
        session_id: UUID, body: AnswersRequest, request: Request
    ) -> dict[str, object]:
        """Send clarifying answers and wait for the final plan."""
        state_container: AppContainer = request.app.state.container
        state = await state_container.session_service.submit_answers(
            session_id, body.answers
        )
        return render_session(state_container, session_id, state)

    @app.post("/sessions/{session_id}/reset")
    async def reset_session(session_id: UUID, request: Request) -> dict[str, object]:
        """Discard the profile and plan and return to the form."""
        state_container: AppContainer = request.app.state.container
        state = state_container.session_service.reset(session_id)
        return render_session(state_container, session_id, state)

    @app.post("/sessions/{session_id}/tracker")
    async def toggle_tracker(session_id: UUID, request: Request) -> dict[str, object]:
        """Open or close the weight tracker."""
        state_container: AppContainer = request.app.state.container
        state = state_container.session_service.toggle_tracker(session_id)
        return render_session(state_container, session_id, state)

    @app.get("/sessions/{session_id}/shopping-list")
    async def shopping_list(session_id: UUID, request: Request) -> dict[str, object]:
        """Return the aggregated shopping list for the displayed plan."""
        state_container: AppContainer = request.app.state.container
        state = _require_plan(state_container, session_id)
        return {"items": build_shopping_list(state.plan)}

    @app.get("/sessions/{session_id}/export.pdf")
    async def export_pdf(session_id: UUID, request: Request) -> Response:
        """Download the displayed plan as a PDF."""
        state_container: AppContainer = request.app.state.container
        state = _require_plan(state_container, session_id)
        favorite_ids = frozenset(state_container.favorites_service.list_ids())
        try:
            content = state_container.export_service.render(
                state.profile, state.plan, favorite_ids
            )
        except ExportError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=_format_error(
                    state_container, exc, "PDF oluşturulurken bir hata oluştu."
                ),
            ) from exc
        filename = export_filename(state.profile)
        return Response(
            content=content,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return app


def _require_plan(container: AppContainer, session_id: UUID) -> PlanReady:
    """Return the session's plan state or reject the request."""
    state = container.session_service.get(session_id)
    if not isinstance(state, PlanReady):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No plan is ready for this session.",
        )
    return state


def _format_error(container: AppContainer, exc: Exception, fallback: str) -> str:
    """Return a user-facing error message with local debug info."""
    if container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
