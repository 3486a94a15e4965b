"""Derived figures shown next to a plan."""

from dataclasses import dataclass

from diet_planner.domain.plan import DayPlan, Macros
from diet_planner.domain.profile import UserProfile

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}

_MACRO_LABELS = (
    ("protein", "Protein", "#10b981"),
    ("carbs", "Karbonhidrat", "#3b82f6"),
    ("fat", "Yağ", "#f59e0b"),
)


@dataclass(frozen=True)
class MacroSlice:
    """Share of daily calories contributed by one macronutrient."""

    name: str
    percent: float
    color: str


def macro_breakdown(macros: Macros) -> list[MacroSlice]:
    """Return calorie percentages per macro, omitting empty slices."""
    calories = {
        key: getattr(macros, key) * KCAL_PER_GRAM[key] for key in KCAL_PER_GRAM
    }
    total = sum(calories.values())
    if total == 0:
        return []
    return [
        MacroSlice(name=label, percent=calories[key] / total * 100, color=color)
        for key, label, color in _MACRO_LABELS
        if calories[key] > 0
    ]


def basal_metabolic_rate(profile: UserProfile) -> int:
    """Estimate BMR with the Mifflin-St Jeor equation."""
    offset = 5 if profile.gender == "male" else -161
    return round(
        10 * profile.weight + 6.25 * profile.height - 5 * profile.age + offset
    )


def day_calories(day: DayPlan) -> float:
    """Sum the calories of a day's meals."""
    return sum(meal.calories for meal in day.meals)
