"""Test orderability filters."""
from datetime import datetime

from storefront.menu import build_menu
from storefront.models import (
    OptionInstance,
    OptionPlacement,
    ProductConfiguration,
    ProductInstanceDisplayFlags,
    ProductModifierRef,
    TimeInterval,
)
from storefront.products.filters import (
    can_be_ordered,
    filter_product_instance,
    filter_product_selector,
    menu_visible,
    order_visible,
    required_modifiers_available,
)
from storefront.products.metadata import generate_metadata
from verticals.pizzeria.catalog import build_sample_catalog

SERVICE_TIME = datetime(2026, 10, 19, 18, 0)
SERVICE_MS = int(SERVICE_TIME.timestamp() * 1000)
MENU = build_menu(build_sample_catalog())


def _pizza(size="large", **toppings):
    modifiers = {"size": [OptionInstance(option_id=size)]} if size else {}
    if toppings:
        modifiers["toppings"] = [
            OptionInstance(option_id=option_id, placement=placement) for option_id, placement in toppings.items()
        ]
    return ProductConfiguration(product_id="pizza", modifiers=modifiers)


def _menu_with(product_update=None, option_id=None, option_update=None):
    catalog = build_sample_catalog()
    if product_update:
        catalog.products[0] = catalog.products[0].model_copy(update=product_update)
    if option_id:
        catalog.options = [o.model_copy(update=option_update) if o.id == option_id else o for o in catalog.options]
    return build_menu(catalog)


def test_complete_pizza_can_be_ordered():
    assert can_be_ordered(_pizza(mushroom=OptionPlacement.WHOLE), MENU, SERVICE_TIME, "pickup")


def test_incomplete_pizza_only_passes_when_allowed():
    selection = _pizza(size=None)
    assert not can_be_ordered(selection, MENU, SERVICE_TIME, "pickup", filter_incomplete=True)
    assert can_be_ordered(selection, MENU, SERVICE_TIME, "pickup", filter_incomplete=False)


def test_unknown_option_cannot_be_ordered():
    selection = _pizza(pineapple=OptionPlacement.WHOLE)
    assert not can_be_ordered(selection, MENU, SERVICE_TIME, "pickup")


def test_function_disabled_option_cannot_be_ordered():
    selection = _pizza(size="small", anchovy=OptionPlacement.WHOLE)
    assert not can_be_ordered(selection, MENU, SERVICE_TIME, "pickup")
    assert can_be_ordered(_pizza(size="large", anchovy=OptionPlacement.WHOLE), MENU, SERVICE_TIME, "pickup")


def test_fully_loaded_pizza_can_be_ordered():
    selection = _pizza(
        mushroom=OptionPlacement.WHOLE, pepperoni=OptionPlacement.WHOLE, anchovy=OptionPlacement.WHOLE
    )
    # each placed option is checked with itself taken off
    assert can_be_ordered(selection, MENU, SERVICE_TIME, "pickup")


def test_product_disabled_for_fulfillment():
    menu = _menu_with(product_update={"disabled_fulfillments": ["delivery"]})
    assert can_be_ordered(_pizza(), menu, SERVICE_TIME, "pickup")
    assert not can_be_ordered(_pizza(), menu, SERVICE_TIME, "delivery")


def test_product_disabled_during_window():
    window = TimeInterval(start=SERVICE_MS - 60_000, end=SERVICE_MS + 60_000)
    menu = _menu_with(product_update={"disabled": window})
    assert not can_be_ordered(_pizza(), menu, SERVICE_TIME, "pickup")
    assert can_be_ordered(_pizza(), menu, datetime(2026, 10, 20, 18, 0), "pickup")


def test_filter_product_selector_checks_placement_state():
    selection = _pizza(mushroom=OptionPlacement.LEFT)
    metadata = generate_metadata(selection, MENU, SERVICE_TIME, "pickup")
    product = MENU.product_entry("pizza").product
    assert filter_product_selector(product, selection, metadata, MENU, SERVICE_TIME, "pickup", True)

    unsplittable = _pizza(anchovy=OptionPlacement.LEFT)
    metadata = generate_metadata(unsplittable, MENU, SERVICE_TIME, "pickup")
    assert not filter_product_selector(product, unsplittable, metadata, MENU, SERVICE_TIME, "pickup", True)


def test_filter_product_instance():
    entry = MENU.product_entry("pizza")
    assert filter_product_instance(entry.instances["pepperoni_pizza"], MENU, SERVICE_TIME, "pickup")

    menu = _menu_with(option_id="pepperoni", option_update={"disabled": TimeInterval(start=1, end=0)})
    pepperoni_pizza = menu.product_entry("pizza").instances["pepperoni_pizza"]
    assert not filter_product_instance(pepperoni_pizza, menu, SERVICE_TIME, "pickup")
    assert filter_product_instance(menu.product_entry("pizza").base_instance, menu, SERVICE_TIME, "pickup")


def test_required_modifiers_disabled_for_fulfillment():
    menu = _menu_with(product_update={
        "modifiers": [
            ProductModifierRef(modifier_type_id="size"),
            ProductModifierRef(modifier_type_id="toppings", disabled_fulfillments=["delivery"]),
        ],
    })
    product = menu.product_entry("pizza").product
    selection = _pizza(mushroom=OptionPlacement.WHOLE)
    assert required_modifiers_available(product, selection, menu, SERVICE_TIME, "pickup")
    assert not required_modifiers_available(product, selection, menu, SERVICE_TIME, "delivery")


def test_hide_flags_filter_instances():
    pepperoni_pizza = MENU.product_entry("pizza").instances["pepperoni_pizza"].model_copy(
        update={"display_flags": ProductInstanceDisplayFlags(hide_from_menu=True)}
    )
    assert filter_product_instance(pepperoni_pizza, MENU, SERVICE_TIME, "pickup")
    assert not filter_product_instance(pepperoni_pizza, MENU, SERVICE_TIME, "pickup", is_visible=menu_visible)
    assert filter_product_instance(pepperoni_pizza, MENU, SERVICE_TIME, "pickup", is_visible=order_visible)

    hidden_from_order = pepperoni_pizza.model_copy(
        update={"display_flags": ProductInstanceDisplayFlags(hide_from_order=True)}
    )
    assert filter_product_instance(hidden_from_order, MENU, SERVICE_TIME, "pickup", is_visible=menu_visible)
    assert not filter_product_instance(hidden_from_order, MENU, SERVICE_TIME, "pickup", is_visible=order_visible)
