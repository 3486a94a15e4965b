"""Diet plan generation using LLM structured outputs."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from diet_planner.domain.errors import RequestError
from diet_planner.domain.plan import (
    AIResponse,
    DietPlan,
    PlanResponse,
    QuestionsResponse,
)
from diet_planner.domain.profile import UserProfile

_logger = logging.getLogger(__name__)


def _nullable(schema: dict[str, object]) -> dict[str, object]:
    return {"anyOf": [schema, {"type": "null"}]}


_STRING_LIST: dict[str, object] = {"type": "array", "items": {"type": "string"}}

MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "id": {
            "type": "string",
            "description": "Unique meal id across the week, e.g. gun1-kahvalti",
        },
        "time": {"type": "string"},
        "dish": {"type": "string"},
        "description": {"type": "string"},
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbs": {"type": "number"},
        "fat": {"type": "number"},
        "prepTime": _nullable({"type": "string", "description": "e.g. 20 dakika"}),
        "servings": _nullable({"type": "string", "description": "e.g. 1 porsiyon"}),
        "ingredients": _nullable(_STRING_LIST),
        "alternatives": _nullable(_STRING_LIST),
    },
    "required": [
        "id",
        "time",
        "dish",
        "description",
        "calories",
        "protein",
        "carbs",
        "fat",
        "prepTime",
        "servings",
        "ingredients",
        "alternatives",
    ],
    "additionalProperties": False,
}

PLAN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "summary": {"type": "string"},
        "dailyCalories": {"type": "number"},
        "macros": {
            "type": "object",
            "properties": {
                "protein": {"type": "number"},
                "carbs": {"type": "number"},
                "fat": {"type": "number"},
            },
            "required": ["protein", "carbs", "fat"],
            "additionalProperties": False,
        },
        "weeklyPlan": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "day": {"type": "string"},
                    "meals": {"type": "array", "items": MEAL_SCHEMA},
                },
                "required": ["day", "meals"],
                "additionalProperties": False,
            },
        },
        "tips": _STRING_LIST,
    },
    "required": ["summary", "dailyCalories", "macros", "weeklyPlan", "tips"],
    "additionalProperties": False,
}

ANALYZE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "enum": ["questions", "plan"]},
        "questions": _nullable(
            {
                **_STRING_LIST,
                "description": "2-3 follow-up questions when type is questions",
            }
        ),
        "plan": _nullable(PLAN_SCHEMA),
    },
    "required": ["type", "questions", "plan"],
    "additionalProperties": False,
}


class PlannerClient(Protocol):
    """Interface for structured LLM generation."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the parsed JSON object produced by the model."""


@dataclass
class PlannerService:
    """Builds planner prompts and validates the model's answers."""

    client: PlannerClient
    model: str
    reasoning_effort: str | None
    store: bool
    language: str = "Türkçe"

    async def analyze(self, profile: UserProfile) -> AIResponse:
        """Ask the model for clarifying questions or a finished plan."""
        raw = await self._generate(
            "diet_analysis", ANALYZE_SCHEMA, self._analyze_prompt(profile)
        )
        return parse_analysis(raw)

    async def finalize(
        self, profile: UserProfile, answers: dict[str, str]
    ) -> DietPlan:
        """Build the weekly plan from the profile and clarifying answers."""
        raw = await self._generate(
            "diet_plan", PLAN_SCHEMA, self._finalize_prompt(profile, answers)
        )
        return parse_plan(raw)

    async def _generate(
        self, schema_name: str, schema: dict[str, object], prompt: str
    ) -> dict[str, object]:
        try:
            return await self.client.generate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema_name=schema_name,
                schema=schema,
                prompt=prompt,
            )
        except RequestError:
            raise
        except Exception as exc:
            _logger.exception("Planner request failed", extra={"schema": schema_name})
            raise RequestError(f"Planner request failed: {exc}") from exc

    def _analyze_prompt(self, profile: UserProfile) -> str:
        restrictions = ", ".join(profile.restrictions) or "-"
        return (
            "The user wants a diet plan. Their data is listed below.\n"
            "If important details are missing, ask 2-3 short follow-up questions "
            "(for example budget, kitchen equipment or working hours) and answer "
            'with type "questions" and plan set to null.\n'
            'If the data is sufficient, answer with type "plan", questions set to '
            "null and a complete 7-day plan.\n\n"
            "User data:\n"
            f"- Age: {profile.age}, Gender: {profile.gender}\n"
            f"- Weight: {profile.weight} kg, Height: {profile.height} cm\n"
            f"- Goal: {profile.goal}, Activity: {profile.activity_level}\n"
            f"- Restrictions: {restrictions}\n"
            f"- Allergies: {profile.allergies or '-'}\n"
            f"- Disliked foods: {profile.disliked_foods or '-'}\n"
            f"- Medical conditions: {profile.medical_conditions or '-'}\n"
            f"- Special requests: {profile.extra_notes or '-'}\n\n"
            f"Write all text in {self.language}."
        )

    def _finalize_prompt(self, profile: UserProfile, answers: dict[str, str]) -> str:
        answer_lines = "\n".join(
            f"Question: {question}\nAnswer: {answer}"
            for question, answer in answers.items()
        )
        profile_json = profile.model_dump_json(by_alias=True)
        return (
            "Below are the user's base data and their answers to follow-up "
            "questions. Create a professional, flexible and detailed 7-day diet "
            "plan.\n"
            "Give every meal a unique id (e.g. gun1-kahvalti), a preparation "
            "time, a serving size, an ingredient list with quantities and 1-2 "
            "alternatives.\n\n"
            "Pay particular attention to this request from the user: "
            f'"{profile.extra_notes or "-"}"\n\n'
            f"Base data: {profile_json}\n"
            f"Follow-up answers:\n{answer_lines or '-'}\n\n"
            f"Write all text in {self.language}."
        )


def parse_analysis(raw: object) -> AIResponse:
    """Convert a tagged analysis payload into a typed response."""
    if not isinstance(raw, dict):
        raise RequestError("Planner returned a non-object payload")
    kind = raw.get("type")
    try:
        if kind == "questions":
            return QuestionsResponse.model_validate(
                {"questions": raw.get("questions")}
            )
        if kind == "plan":
            return PlanResponse.model_validate({"plan": raw.get("plan")})
    except ValidationError as exc:
        raise RequestError(f"Planner returned an invalid {kind} payload") from exc
    raise RequestError(f"Planner returned an unknown response type: {kind!r}")


def parse_plan(raw: object) -> DietPlan:
    """Validate a plan payload."""
    try:
        return DietPlan.model_validate(raw)
    except ValidationError as exc:
        raise RequestError("Planner returned an invalid plan") from exc


def parse_json_text(text: str | None) -> dict[str, object]:
    """Decode the model's JSON text output."""
    if not text:
        raise RequestError("Planner returned an empty response")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RequestError("Planner returned malformed JSON") from exc
    if not isinstance(payload, dict):
        raise RequestError("Planner returned a non-object payload")
    return payload
