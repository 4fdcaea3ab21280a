"""Test product comparison and match matrices."""
import pytest

from storefront.errors import CatalogIntegrityError
from storefront.menu import build_menu
from storefront.models import MatchLevel, OptionInstance, OptionPlacement, ProductConfiguration
from storefront.products.matching import (
    MATCH_MATRIX,
    compare_products,
    compare_to_instance,
    extract_match,
    products_equal,
)
from verticals.pizzeria.catalog import build_sample_catalog

MENU = build_menu(build_sample_catalog())
ENTRY = MENU.product_entry("pizza")


def _pizza(size="small", **toppings):
    modifiers = {"size": [OptionInstance(option_id=size)]} if size else {}
    if toppings:
        modifiers["toppings"] = [
            OptionInstance(option_id=option_id, placement=placement)
            for option_id, placement in toppings.items()
        ]
    return ProductConfiguration(product_id="pizza", modifiers=modifiers)


def test_match_matrix_is_verbatim():
    assert MATCH_MATRIX[OptionPlacement.NONE][OptionPlacement.NONE] == (
        MatchLevel.EXACT_MATCH, MatchLevel.EXACT_MATCH, False
    )
    assert MATCH_MATRIX[OptionPlacement.LEFT][OptionPlacement.RIGHT] == (
        MatchLevel.NO_MATCH, MatchLevel.NO_MATCH, False
    )
    assert MATCH_MATRIX[OptionPlacement.WHOLE][OptionPlacement.NONE] == (
        MatchLevel.AT_LEAST, MatchLevel.AT_LEAST, True
    )


def test_extract_match_is_minimum():
    assert extract_match([]) == MatchLevel.EXACT_MATCH
    assert extract_match([[MatchLevel.EXACT_MATCH, MatchLevel.AT_LEAST], [MatchLevel.EXACT_MATCH]]) == MatchLevel.AT_LEAST


def test_identical_whole_configurations_mirror():
    a = _pizza(mushroom=OptionPlacement.WHOLE, pepperoni=OptionPlacement.WHOLE)
    b = _pizza(mushroom=OptionPlacement.WHOLE, pepperoni=OptionPlacement.WHOLE)
    result = compare_products(a, b, MENU)
    assert result.mirror
    assert result.match == (MatchLevel.EXACT_MATCH, MatchLevel.EXACT_MATCH)
    assert products_equal(a, b, MENU)


def test_cross_class_never_matches():
    other = ProductConfiguration(product_id="calzone", modifiers={})
    result = compare_products(_pizza(), other, MENU)
    assert result.match == (MatchLevel.NO_MATCH, MatchLevel.NO_MATCH)
    assert not result.mirror
    assert result.match_matrix == ([], [])
    assert not products_equal(_pizza(), other, MENU)


def test_extra_topping_is_at_least_the_base():
    result = compare_to_instance(_pizza(mushroom=OptionPlacement.WHOLE), ENTRY.base_instance, MENU)
    assert result.match == (MatchLevel.AT_LEAST, MatchLevel.AT_LEAST)
    toppings_index = 1
    mushroom_index = MENU.option("toppings", "mushroom").index
    assert result.match_matrix[0][toppings_index][mushroom_index] == MatchLevel.AT_LEAST
    assert not result.mirror


def test_missing_topping_does_not_match_instance():
    pepperoni_pizza = ENTRY.instances["pepperoni_pizza"]
    result = compare_to_instance(_pizza(mushroom=OptionPlacement.WHOLE), pepperoni_pizza, MENU)
    assert result.match == (MatchLevel.NO_MATCH, MatchLevel.NO_MATCH)


def test_half_topping_matches_one_side():
    pepperoni_pizza = ENTRY.instances["pepperoni_pizza"]
    result = compare_to_instance(_pizza(pepperoni=OptionPlacement.LEFT), pepperoni_pizza, MENU)
    assert result.match == (MatchLevel.EXACT_MATCH, MatchLevel.NO_MATCH)


def test_single_select_different_choice_is_at_least():
    result = compare_to_instance(_pizza(size="large"), ENTRY.base_instance, MENU)
    large_index = MENU.option("size", "large").index
    assert result.match_matrix[0][0][large_index] == MatchLevel.AT_LEAST
    assert result.match_matrix[1][0][large_index] == MatchLevel.AT_LEAST
    assert result.match == (MatchLevel.AT_LEAST, MatchLevel.AT_LEAST)
    assert not result.mirror


def test_single_select_without_selection_writes_no_cells(caplog):
    result = compare_to_instance(_pizza(size=None), ENTRY.base_instance, MENU)
    assert result.match == (MatchLevel.EXACT_MATCH, MatchLevel.EXACT_MATCH)
    assert "no selection" not in caplog.text


def test_single_select_empty_on_both_sides_warns(caplog):
    result = compare_products(_pizza(size=None), _pizza(size=None), MENU)
    assert result.match == (MatchLevel.EXACT_MATCH, MatchLevel.EXACT_MATCH)
    assert "no selection on either side" in caplog.text


def test_mirrored_halves_count_as_equal():
    a = _pizza(mushroom=OptionPlacement.LEFT)
    b = _pizza(mushroom=OptionPlacement.RIGHT)
    result = compare_products(a, b, MENU)
    assert result.match == (MatchLevel.NO_MATCH, MatchLevel.NO_MATCH)
    assert result.mirror
    assert products_equal(a, b, MENU)


def test_unknown_option_fails_comparison():
    bogus = _pizza(size="xxl", pineapple=OptionPlacement.WHOLE)
    with pytest.raises(CatalogIntegrityError, match="xxl"):
        compare_products(bogus, _pizza(), MENU)
    with pytest.raises(CatalogIntegrityError, match="pineapple"):
        products_equal(_pizza(), _pizza(pineapple=OptionPlacement.WHOLE), MENU)


def test_unknown_option_fails_instance_comparison():
    with pytest.raises(CatalogIntegrityError, match="pineapple"):
        compare_to_instance(_pizza(pineapple=OptionPlacement.LEFT), ENTRY.base_instance, MENU)
