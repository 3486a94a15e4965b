"""Transition function for planning sessions."""

from diet_planner.domain.session import (
    AwaitingAnswers,
    Failed,
    Idle,
    PlanReady,
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
    TrackerOpen,
    View,
)


def transition(  # noqa: PLR0911
    state: SessionState, event: SessionEvent
) -> SessionState:
    """Return the state reached by applying an event.

    Events that are not valid for the current state leave it unchanged and
    the same object is returned, so callers can detect a rejected event with
    an identity check.
    """
    if isinstance(event, SubmitProfile):
        if isinstance(state, Idle | TrackerOpen):
            return Submitting(profile=event.profile, stage="analyze")
        return state

    if isinstance(event, SubmitAnswers):
        if isinstance(state, AwaitingAnswers):
            return Submitting(profile=state.profile, stage="finalize")
        return state

    if isinstance(event, QuestionsReceived):
        if isinstance(state, Submitting):
            return AwaitingAnswers(profile=state.profile, questions=event.questions)
        return state

    if isinstance(event, PlanReceived):
        if isinstance(state, Submitting):
            return PlanReady(profile=state.profile, plan=event.plan)
        return state

    if isinstance(event, RequestFailed):
        if isinstance(state, Submitting):
            return Failed(message=event.message)
        return state

    if isinstance(event, ToggleTracker):
        if isinstance(state, TrackerOpen):
            return Idle()
        if isinstance(state, Idle | PlanReady | Failed):
            return TrackerOpen()
        return state

    if isinstance(event, Reset):
        if isinstance(state, Submitting):
            return state
        return Idle()

    return state


def view_for(state: SessionState) -> View:
    """Return the single view rendered for a state."""
    if isinstance(state, Submitting):
        return View.LOADING
    if isinstance(state, AwaitingAnswers):
        return View.QUESTIONS
    if isinstance(state, PlanReady):
        return View.DASHBOARD
    if isinstance(state, Failed):
        return View.ERROR
    if isinstance(state, TrackerOpen):
        return View.TRACKER
    return View.FORM
