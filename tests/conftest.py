"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from diet_planner.config import Settings
from diet_planner.containers import AppContainer
from diet_planner.domain.errors import PersistenceReadError, RequestError
from diet_planner.domain.plan import (
    AIResponse,
    DietPlan,
    PlanResponse,
    QuestionsResponse,
)
from diet_planner.domain.profile import UserProfile
from diet_planner.services.export import PlanExportService
from diet_planner.services.persistence import (
    FavoritesService,
    KeyValueStore,
    WeightHistoryService,
)
from diet_planner.services.planner import PlannerClient, PlannerService
from diet_planner.services.sessions import SessionService

DAY_NAMES = [
    "Pazartesi",
    "Salı",
    "Çarşamba",
    "Perşembe",
    "Cuma",
    "Cumartesi",
    "Pazar",
]


def make_plan_payload(
    ingredients: list[list[str]] | None = None,
) -> dict[str, object]:
    """Build a valid 7-day plan payload in wire format.

    ``ingredients`` gives the ingredient list for each meal of the first
    day; every other meal has none.
    """
    first_day = ingredients or [["2 adet yumurta", "1 dilim ekmek"], ["100g tavuk"]]
    weekly_plan = []
    for index, day in enumerate(DAY_NAMES, start=1):
        meals = []
        for slot, time in enumerate(["Kahvaltı", "Öğle"]):
            meal_ingredients = None
            if index == 1 and slot < len(first_day):
                meal_ingredients = first_day[slot]
            meals.append(
                {
                    "id": f"gun{index}-{slot}",
                    "time": time,
                    "dish": f"Yemek {index}-{slot}",
                    "description": "Hafif ve dengeli",
                    "calories": 500,
                    "protein": 30,
                    "carbs": 50,
                    "fat": 15,
                    "prepTime": "15 dakika",
                    "servings": "1 porsiyon",
                    "ingredients": meal_ingredients,
                    "alternatives": ["Salata"],
                }
            )
        weekly_plan.append({"day": day, "meals": meals})
    return {
        "summary": "Dengeli bir kilo verme planı.",
        "dailyCalories": 1800,
        "macros": {"protein": 120, "carbs": 180, "fat": 60},
        "weeklyPlan": weekly_plan,
        "tips": ["Bol su için."],
    }


def make_plan(ingredients: list[list[str]] | None = None) -> DietPlan:
    return DietPlan.model_validate(make_plan_payload(ingredients))


def make_profile(**overrides: object) -> UserProfile:
    data: dict[str, object] = {
        "age": 30,
        "gender": "male",
        "weight": 70,
        "height": 175,
        "activityLevel": "moderate",
        "goal": "lose",
        "restrictions": [],
    }
    data.update(overrides)
    return UserProfile.model_validate(data)


@dataclass
class FakePlannerClient(PlannerClient):
    """Fake LLM client returning queued payloads and recording prompts."""

    payloads: list[dict[str, object]] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None

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
        self.calls.append({"schema_name": schema_name, "prompt": prompt})
        if self.error is not None:
            raise self.error
        return self.payloads.pop(0)


@dataclass
class FakeDietPlanner:
    """Canned planner used to drive the session service."""

    analysis: AIResponse = field(
        default_factory=lambda: QuestionsResponse(questions=("Bütçeniz nedir?",))
    )
    plan: DietPlan = field(default_factory=make_plan)
    fail_analyze: bool = False
    fail_finalize: bool = False
    analyze_calls: list[UserProfile] = field(default_factory=list)
    finalize_calls: list[tuple[UserProfile, dict[str, str]]] = field(
        default_factory=list
    )

    async def analyze(self, profile: UserProfile) -> AIResponse:
        self.analyze_calls.append(profile)
        if self.fail_analyze:
            raise RequestError("Planner request failed: timeout")
        return self.analysis

    async def finalize(
        self, profile: UserProfile, answers: dict[str, str]
    ) -> DietPlan:
        self.finalize_calls.append((profile, answers))
        if self.fail_finalize:
            raise RequestError("Planner returned an invalid plan")
        return self.plan


def plan_response() -> PlanResponse:
    return PlanResponse(plan=make_plan())


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store keeping serialized values like browser storage."""

    values: dict[str, str] = field(default_factory=dict)
    writes: int = 0

    def get(self, key: str) -> object | None:
        raw = self.values.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceReadError(key) from exc

    def set(self, key: str, value: object) -> None:
        self.values[key] = json.dumps(value)
        self.writes += 1


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key", environment="test")


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def planner() -> FakeDietPlanner:
    return FakeDietPlanner()


@pytest.fixture
def container(
    settings: Settings, store: InMemoryKeyValueStore, planner: FakeDietPlanner
) -> AppContainer:
    planner_service = PlannerService(
        client=FakePlannerClient(),
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        planner_service=planner_service,
        session_service=SessionService(
            planner, debug=settings.environment == "local"
        ),
        weight_history_service=WeightHistoryService(store),
        favorites_service=FavoritesService(store),
        export_service=PlanExportService(),
        close_resources=close_resources,
    )
