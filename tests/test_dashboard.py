"""Tests for dashboard figures."""

import pytest

from diet_planner.domain.plan import Macros
from diet_planner.services.dashboard import (
    basal_metabolic_rate,
    day_calories,
    macro_breakdown,
)
from tests.conftest import make_plan, make_profile


def test_macro_breakdown_uses_calorie_weights() -> None:
    slices = macro_breakdown(Macros(protein=100, carbs=100, fat=0))

    assert [item.name for item in slices] == ["Protein", "Karbonhidrat"]
    assert [item.percent for item in slices] == [50.0, 50.0]


def test_macro_breakdown_weights_fat_by_nine() -> None:
    slices = macro_breakdown(Macros(protein=90, carbs=0, fat=40))

    assert slices[0].percent == pytest.approx(50.0)
    assert slices[1].name == "Yağ"
    assert slices[1].percent == pytest.approx(50.0)


def test_macro_breakdown_empty_when_no_calories() -> None:
    assert macro_breakdown(Macros(protein=0, carbs=0, fat=0)) == []


def test_basal_metabolic_rate_by_gender() -> None:
    assert basal_metabolic_rate(make_profile()) == 1649
    assert basal_metabolic_rate(make_profile(gender="female")) == 1483


def test_day_calories_sums_meals() -> None:
    assert day_calories(make_plan().weekly_plan[0]) == 1000
