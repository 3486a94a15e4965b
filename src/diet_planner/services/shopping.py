"""Shopping list aggregation from a weekly plan."""

import re
from dataclasses import dataclass

from diet_planner.domain.plan import DietPlan

# Longer units first so "kg" wins over "g".
UNIT_VOCABULARY: tuple[str, ...] = (
    "yemek kaşığı",
    "çay kaşığı",
    "bardak",
    "adet",
    "kase",
    "kg",
    "ml",
    "lt",
    "g",
)

_INGREDIENT_RE = re.compile(
    r"^\s*(?P<quantity>\d+(?:\.\d+)?)\s*"
    r"(?:(?P<unit>" + "|".join(re.escape(unit) for unit in UNIT_VOCABULARY) + r")"
    r"(?=\s|$))?\s*(?P<item>.*)$",
    re.IGNORECASE,
)
_UNIT_PATTERNS = tuple(
    (unit, re.compile(re.escape(unit), re.IGNORECASE)) for unit in UNIT_VOCABULARY
)


@dataclass(frozen=True)
class ParsedIngredient:
    """An ingredient line split into quantity, unit and item."""

    quantity: float
    unit: str | None
    item: str

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.item, self.unit)


def parse_ingredient(line: str) -> ParsedIngredient:
    """Parse a free-text line such as "2 adet elma" or "100g tavuk"."""
    match = _INGREDIENT_RE.match(line)
    if match is None:
        return ParsedIngredient(quantity=1.0, unit=None, item=line.strip().lower())
    quantity = float(match.group("quantity")) or 1.0
    unit = match.group("unit")
    return ParsedIngredient(
        quantity=quantity,
        unit=_canonical_unit(unit) if unit else None,
        item=match.group("item").strip().lower(),
    )


def build_shopping_list(plan: DietPlan) -> list[str]:
    """Merge every ingredient of the week into a sorted shopping list."""
    totals: dict[tuple[str, str | None], float] = {}
    for meal in plan.meals():
        for line in meal.ingredients or ():
            if not line.strip():
                continue
            parsed = parse_ingredient(line)
            totals[parsed.key] = totals.get(parsed.key, 0.0) + parsed.quantity
    return sorted(
        _format_entry(quantity, unit, item)
        for (item, unit), quantity in totals.items()
    )


def _format_entry(quantity: float, unit: str | None, item: str) -> str:
    parts = [_format_quantity(quantity), unit or "", item]
    return " ".join(part for part in parts if part)


def _format_quantity(quantity: float) -> str:
    if quantity.is_integer():
        return str(int(quantity))
    return f"{quantity:.10g}"


def _canonical_unit(matched: str) -> str:
    for unit, pattern in _UNIT_PATTERNS:
        if pattern.fullmatch(matched):
            return unit
    return matched.lower()
