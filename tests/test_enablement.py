"""Test option enablement rules."""
from datetime import datetime, timezone

from storefront.functional import CatalogFunctionEvaluator, ExpressionContext
from storefront.menu import build_menu
from storefront.models import (
    DisableReason,
    OptionInstance,
    OptionPlacement,
    ProductConfiguration,
    ProductModifierRef,
    TimeInterval,
)
from storefront.products.enablement import (
    DELTA_MATRIX,
    check_bake_capacity,
    check_flavor_capacity,
    check_split_differential,
    disable_data_check,
    is_option_enabled,
    modifier_type_enable_state,
)
from verticals.pizzeria.catalog import build_sample_catalog

MENU = build_menu(build_sample_catalog())
PIZZA = MENU.product_entry("pizza").product
EVALUATOR = CatalogFunctionEvaluator()


def _context(size="small"):
    selection = ProductConfiguration(
        product_id="pizza",
        modifiers={
            "size": [OptionInstance(option_id=size)],
            "toppings": [OptionInstance(option_id="mushroom")],
        },
    )
    return ExpressionContext(product=selection, menu=MENU)


def _enabled(option_id, bake, proposed, flavor=(1, 1), current=OptionPlacement.NONE, size="small"):
    return is_option_enabled(
        MENU.option("toppings", option_id), current, bake, flavor, proposed, PIZZA, _context(size), EVALUATOR
    )


def test_delta_matrix_removing_whole():
    assert DELTA_MATRIX[OptionPlacement.WHOLE][OptionPlacement.LEFT] == (0, -1)
    assert DELTA_MATRIX[OptionPlacement.NONE][OptionPlacement.WHOLE] == (1, 1)


def test_split_at_differential_limit_is_enabled():
    state = _enabled("mushroom", (2, 2), OptionPlacement.LEFT)
    assert state.reason == DisableReason.ENABLED
    assert state.enabled


def test_split_past_differential_limit_is_disabled():
    state = _enabled("mushroom", (4, 2), OptionPlacement.LEFT)
    assert state.reason == DisableReason.DISABLED_SPLIT_DIFFERENTIAL


def test_whole_past_bake_max_is_disabled():
    state = _enabled("mushroom", (6, 6), OptionPlacement.WHOLE)
    assert state.reason == DisableReason.DISABLED_WEIGHT


def test_flavor_max_applies_after_weight():
    state = _enabled("pepperoni", (1, 1), OptionPlacement.WHOLE, flavor=(6, 6))
    assert state.reason == DisableReason.DISABLED_FLAVORS


def test_differential_reported_before_weight():
    # both the differential and bake max are exceeded
    state = _enabled("mushroom", (6, 3), OptionPlacement.LEFT)
    assert state.reason == DisableReason.DISABLED_SPLIT_DIFFERENTIAL


def test_reselecting_current_placement_removes_it():
    # mushroom already WHOLE at (6, 6); choosing WHOLE again takes it off
    state = _enabled("mushroom", (6, 6), OptionPlacement.WHOLE, current=OptionPlacement.WHOLE)
    assert state.enabled


def test_bigger_factor_never_reenables():
    light = _enabled("pepperoni", (5, 5), OptionPlacement.WHOLE)
    heavy = _enabled("mushroom", (5, 5), OptionPlacement.WHOLE)
    assert light.enabled
    assert heavy.reason == DisableReason.DISABLED_WEIGHT


def test_enable_function_result():
    small = _enabled("anchovy", (0, 0), OptionPlacement.WHOLE, size="small")
    large = _enabled("anchovy", (0, 0), OptionPlacement.WHOLE, size="large")
    assert small.reason == DisableReason.DISABLED_FUNCTION
    assert small.function_id == "fn_large_only"
    assert large.enabled


def test_rule_functions():
    assert check_split_differential((3, 1), 2).enabled
    assert not check_split_differential((3.5, 1), 2).enabled
    assert not check_bake_capacity((1, 7), 6).enabled
    assert check_flavor_capacity((6, 6), 6).enabled


def test_disable_data_check_blanket():
    state = disable_data_check(TimeInterval(start=1, end=0), datetime(2026, 10, 19, tzinfo=timezone.utc))
    assert state.reason == DisableReason.DISABLED_BLANKET


def test_disable_data_check_time_window():
    service_time = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    ms = int(service_time.timestamp() * 1000)
    inside = TimeInterval(start=ms - 1000, end=ms + 1000)
    before = TimeInterval(start=ms - 2000, end=ms - 1000)
    assert disable_data_check(inside, service_time).reason == DisableReason.DISABLED_TIME
    assert disable_data_check(before, service_time).enabled
    assert disable_data_check(None, service_time).enabled


def test_fulfillment_disable_beats_function():
    ref = ProductModifierRef(
        modifier_type_id="toppings",
        enable_function_id="fn_large_only",
        disabled_fulfillments=["delivery"],
    )
    delivery = modifier_type_enable_state(ref, "delivery", _context(), EVALUATOR)
    pickup = modifier_type_enable_state(ref, "pickup", _context(), EVALUATOR)
    assert delivery.reason == DisableReason.DISABLED_FULFILLMENT_TYPE
    assert delivery.fulfillment_id == "delivery"
    assert pickup.reason == DisableReason.DISABLED_FUNCTION
