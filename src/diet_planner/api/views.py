"""JSON views rendered for each session state."""

from uuid import UUID

from diet_planner.containers import AppContainer
from diet_planner.domain.session import (
    AwaitingAnswers,
    Failed,
    PlanReady,
    SessionState,
    TrackerOpen,
)
from diet_planner.domain.tracking import WeightEntry
from diet_planner.services.dashboard import (
    basal_metabolic_rate,
    day_calories,
    macro_breakdown,
)
from diet_planner.services.session_machine import view_for


def render_session(
    container: AppContainer, session_id: UUID, state: SessionState
) -> dict[str, object]:
    """Return the payload for the one view a state renders."""
    view = view_for(state)
    payload: dict[str, object] = {"session_id": str(session_id), "view": view.value}
    if isinstance(state, Failed):
        payload["message"] = state.message
    elif isinstance(state, AwaitingAnswers):
        payload["questions"] = list(state.questions)
    elif isinstance(state, PlanReady):
        payload.update(render_dashboard(container, state))
    elif isinstance(state, TrackerOpen):
        payload["weight_history"] = render_weights(
            container.weight_history_service.list_entries()
        )
    return payload


def render_dashboard(container: AppContainer, state: PlanReady) -> dict[str, object]:
    """Return plan details with chart data and favorites."""
    plan = state.plan
    favorites = container.favorites_service.favorites_in_plan(plan)
    return {
        "profile": state.profile.model_dump(by_alias=True, mode="json"),
        "plan": plan.model_dump(by_alias=True, mode="json"),
        "bmr": basal_metabolic_rate(state.profile),
        "macro_chart": [
            {"name": item.name, "percent": round(item.percent, 1), "color": item.color}
            for item in macro_breakdown(plan.macros)
        ],
        "day_calories": [
            {"day": day.day, "calories": day_calories(day)}
            for day in plan.weekly_plan
        ],
        "favorite_ids": [meal.id for meal in favorites],
        "favorite_meals": [
            meal.model_dump(by_alias=True, mode="json") for meal in favorites
        ],
    }


def render_weights(history: list[WeightEntry]) -> list[dict[str, object]]:
    """Serialize the weight journal."""
    return [entry.model_dump(mode="json") for entry in history]
