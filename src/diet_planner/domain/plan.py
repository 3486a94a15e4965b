"""Diet plan models returned by the AI planner."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

DAYS_PER_PLAN = 7


class _PlanModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class Macros(_PlanModel):
    """Daily macronutrient targets in grams."""

    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)


class Meal(_PlanModel):
    """A single meal slot within a day."""

    id: str = Field(min_length=1)
    time: str
    dish: str
    description: str
    calories: float
    protein: float
    carbs: float
    fat: float
    prep_time: str | None = None
    servings: str | None = None
    ingredients: tuple[str, ...] | None = None
    alternatives: tuple[str, ...] | None = None


class DayPlan(_PlanModel):
    """Meals planned for one day."""

    day: str
    meals: tuple[Meal, ...]


class DietPlan(_PlanModel):
    """A complete weekly diet plan."""

    summary: str
    daily_calories: float
    macros: Macros
    weekly_plan: tuple[DayPlan, ...] = Field(
        min_length=DAYS_PER_PLAN, max_length=DAYS_PER_PLAN
    )
    tips: tuple[str, ...]

    @model_validator(mode="after")
    def check_unique_meal_ids(self) -> "DietPlan":
        seen: set[str] = set()
        for meal in self.meals():
            if meal.id in seen:
                raise ValueError(f"duplicate meal id: {meal.id}")
            seen.add(meal.id)
        return self

    def meals(self) -> list[Meal]:
        """Return every meal of the week in plan order."""
        return [meal for day in self.weekly_plan for meal in day.meals]


class QuestionsResponse(BaseModel):
    """The planner needs more information before building a plan."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["questions"] = "questions"
    questions: tuple[str, ...] = Field(min_length=1)


class PlanResponse(BaseModel):
    """The planner returned a finished plan directly."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plan"] = "plan"
    plan: DietPlan


AIResponse = QuestionsResponse | PlanResponse
