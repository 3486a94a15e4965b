"""Planning session orchestration."""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID, uuid4

from diet_planner.domain.errors import RequestError, SessionNotFoundError
from diet_planner.domain.plan import AIResponse, DietPlan, QuestionsResponse
from diet_planner.domain.profile import UserProfile
from diet_planner.domain.session import (
    Idle,
    PlanReceived,
    QuestionsReceived,
    RequestFailed,
    Reset,
    SessionEvent,
    SessionState,
    SubmitAnswers,
    SubmitProfile,
    Submitting,
    ToggleTracker,
)
from diet_planner.services.session_machine import transition

ANALYZE_FAILED_MESSAGE = "Analiz sırasında bir hata oluştu."
FINALIZE_FAILED_MESSAGE = "Diyet planı oluşturulamadı. Lütfen tekrar deneyin."
MAX_SESSIONS = 1000

_logger = logging.getLogger(__name__)


class DietPlanner(Protocol):
    """The AI capability a session needs."""

    async def analyze(self, profile: UserProfile) -> AIResponse:
        """Return clarifying questions or a finished plan."""

    async def finalize(
        self, profile: UserProfile, answers: dict[str, str]
    ) -> DietPlan:
        """Return a finished plan built from clarifying answers."""


@dataclass
class SessionService:
    """Keeps one state per planning session and runs planner round trips.

    At most ``max_sessions`` sessions are kept; the least recently used one is
    dropped when a new session would exceed the limit. Error detail is added
    to failure messages only when ``debug`` is set.
    """

    planner: DietPlanner
    sessions: OrderedDict[UUID, SessionState] = field(default_factory=OrderedDict)
    max_sessions: int = MAX_SESSIONS
    debug: bool = False

    def start(self) -> UUID:
        """Open a new session on the profile form."""
        session_id = uuid4()
        self.sessions[session_id] = Idle()
        while len(self.sessions) > self.max_sessions:
            evicted, _ = self.sessions.popitem(last=False)
            _logger.info("Session evicted", extra={"session": str(evicted)})
        return session_id

    def get(self, session_id: UUID) -> SessionState:
        """Return the current state of a session."""
        try:
            state = self.sessions[session_id]
        except KeyError as exc:
            raise SessionNotFoundError(str(session_id)) from exc
        self.sessions.move_to_end(session_id)
        return state

    async def submit_profile(
        self, session_id: UUID, profile: UserProfile
    ) -> SessionState:
        """Send a profile to the planner and record the outcome."""
        state = self.get(session_id)
        submitting = self._apply(session_id, state, SubmitProfile(profile))
        if submitting is state:
            return state
        try:
            response = await self.planner.analyze(profile)
        except RequestError as exc:
            _logger.warning("Analysis request failed", extra={"session": session_id})
            message = self._failure_message(ANALYZE_FAILED_MESSAGE, exc)
            return self._finish(session_id, RequestFailed(message))
        if isinstance(response, QuestionsResponse):
            return self._finish(session_id, QuestionsReceived(response.questions))
        return self._finish(session_id, PlanReceived(response.plan))

    async def submit_answers(
        self, session_id: UUID, answers: dict[str, str]
    ) -> SessionState:
        """Ask the planner for the final plan using clarifying answers."""
        state = self.get(session_id)
        submitting = self._apply(session_id, state, SubmitAnswers(answers))
        if submitting is state or not isinstance(submitting, Submitting):
            return state
        try:
            plan = await self.planner.finalize(submitting.profile, answers)
        except RequestError as exc:
            _logger.warning("Final plan request failed", extra={"session": session_id})
            message = self._failure_message(FINALIZE_FAILED_MESSAGE, exc)
            return self._finish(session_id, RequestFailed(message))
        return self._finish(session_id, PlanReceived(plan))

    def reset(self, session_id: UUID) -> SessionState:
        """Return to the profile form, discarding in-memory plan data."""
        return self._apply(session_id, self.get(session_id), Reset())

    def toggle_tracker(self, session_id: UUID) -> SessionState:
        """Open or close the weight tracker."""
        return self._apply(session_id, self.get(session_id), ToggleTracker())

    def _apply(
        self, session_id: UUID, state: SessionState, event: SessionEvent
    ) -> SessionState:
        new_state = transition(state, event)
        self.sessions[session_id] = new_state
        return new_state

    def _finish(self, session_id: UUID, event: SessionEvent) -> SessionState:
        state = self.sessions.get(session_id)
        if state is None:
            return Idle()
        return self._apply(session_id, state, event)

    def _failure_message(self, fallback: str, exc: Exception) -> str:
        detail = str(exc).strip()
        if self.debug and detail:
            return f"{fallback} (debug: {detail})"
        return fallback
