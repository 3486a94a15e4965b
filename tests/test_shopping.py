"""Tests for shopping list aggregation."""

from diet_planner.services.shopping import (
    ParsedIngredient,
    build_shopping_list,
    parse_ingredient,
)
from tests.conftest import make_plan


def test_parse_ingredient_with_unit() -> None:
    assert parse_ingredient("2 adet elma") == ParsedIngredient(2.0, "adet", "elma")


def test_parse_ingredient_unit_attached_to_number() -> None:
    assert parse_ingredient("100g Tavuk") == ParsedIngredient(100.0, "g", "tavuk")


def test_parse_ingredient_multiword_unit_case_insensitive() -> None:
    parsed = parse_ingredient("1.5 Yemek kaşığı zeytinyağı")

    assert parsed.quantity == 1.5
    assert parsed.unit == "yemek kaşığı"
    assert parsed.item == "zeytinyağı"


def test_parse_ingredient_without_quantity_defaults_to_one() -> None:
    assert parse_ingredient("  Taze Nane ") == ParsedIngredient(1.0, None, "taze nane")


def test_parse_ingredient_zero_quantity_counts_as_one() -> None:
    assert parse_ingredient("0 adet limon").quantity == 1.0


def test_parse_ingredient_unknown_word_folds_into_item() -> None:
    parsed = parse_ingredient("2 dilim ekmek")

    assert parsed.unit is None
    assert parsed.item == "dilim ekmek"


def test_parse_ingredient_unit_prefix_is_not_a_unit() -> None:
    parsed = parse_ingredient("3 galeta")

    assert parsed.unit is None
    assert parsed.item == "galeta"


def test_shopping_list_keeps_bare_and_unit_keys_apart() -> None:
    plan = make_plan([["2 adet elma", "100g tavuk"], ["elma"]])

    result = build_shopping_list(plan)

    assert result == ["1 elma", "100 g tavuk", "2 adet elma"]


def test_shopping_list_sums_quantities_across_meals() -> None:
    plan = make_plan(
        [["100g tavuk", "1 adet soğan"], ["150 G tavuk", "0.5 adet soğan"]]
    )

    result = build_shopping_list(plan)

    assert result == ["1.5 adet soğan", "250 g tavuk"]


def test_shopping_list_is_sorted_and_unique() -> None:
    plan = make_plan(
        [["2 kg un", "1 bardak süt", "yumurta"], ["500 g un", "1 bardak süt", ""]]
    )

    result = build_shopping_list(plan)

    assert result == sorted(result)
    assert len(result) == len(set(result))
    assert "2 bardak süt" in result
    assert "2 kg un" in result
    assert "500 g un" in result


def test_shopping_list_ignores_meals_without_ingredients() -> None:
    plan = make_plan([[], []])

    assert build_shopping_list(plan) == []


def test_parse_ingredient_uppercase_unit_maps_to_vocabulary() -> None:
    assert parse_ingredient("1 YEMEK KAŞIĞI yağ").unit == "yemek kaşığı"


def test_shopping_list_merges_units_regardless_of_case() -> None:
    plan = make_plan(
        [["1 YEMEK KAŞIĞI zeytinyağı"], ["2 yemek kaşığı zeytinyağı"]]
    )

    assert build_shopping_list(plan) == ["3 yemek kaşığı zeytinyağı"]


def test_shopping_list_keeps_small_quantities_exact() -> None:
    plan = make_plan([["0.125 kg tuz"], ["0.005 kg karabiber"]])

    assert build_shopping_list(plan) == ["0.005 kg karabiber", "0.125 kg tuz"]


def test_shopping_list_hides_float_noise_in_sums() -> None:
    plan = make_plan([["0.1 kg tuz"], ["0.2 kg tuz"]])

    assert build_shopping_list(plan) == ["0.3 kg tuz"]
