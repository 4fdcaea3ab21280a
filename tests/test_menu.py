"""Test menu indexing and catalog integrity checks."""
import pytest

from storefront.errors import CatalogIntegrityError
from storefront.menu import build_menu, does_product_exist_in_menu, select_product_instances_in_category
from storefront.models import (
    Category,
    OptionInstance,
    OptionPlacement,
    Product,
    ProductConfiguration,
    ProductInstance,
    ProductModifierRef,
)
from verticals.pizzeria.catalog import build_sample_catalog


def test_options_ordered_by_ordinal():
    menu = build_menu(build_sample_catalog())
    toppings = menu.modifier_entry("toppings")
    assert [o.option.id for o in toppings.options_list] == ["mushroom", "pepperoni", "anchovy"]
    assert toppings.options["anchovy"].index == 2


def test_base_instance_scanned_last():
    catalog = build_sample_catalog()
    catalog.product_instances.reverse()
    menu = build_menu(catalog)
    entry = menu.product_entry("pizza")
    assert [pi.id for pi in entry.instances_list] == ["pepperoni_pizza", "cheese_pizza"]
    assert entry.base_instance.id == "cheese_pizza"


def test_modifier_refs_follow_type_ordinal():
    catalog = build_sample_catalog()
    catalog.products[0] = catalog.products[0].model_copy(update={
        "modifiers": [ProductModifierRef(modifier_type_id="toppings"), ProductModifierRef(modifier_type_id="size")],
    })
    menu = build_menu(catalog)
    refs = [ref.modifier_type_id for ref in menu.product_entry("pizza").product.modifiers]
    assert refs == ["size", "toppings"]
    # the catalog itself is left untouched
    assert catalog.products[0].modifiers[0].modifier_type_id == "toppings"


def test_product_without_base_is_excluded(caplog):
    catalog = build_sample_catalog()
    catalog.products.append(Product(id="calzone"))
    catalog.product_instances.append(
        ProductInstance(id="plain_calzone", product_id="calzone", display_name="Calzone")
    )
    menu = build_menu(catalog)
    assert "calzone" not in menu.products
    assert "0 base instances" in menu.excluded_products["calzone"]
    assert "Excluding product calzone" in caplog.text
    with pytest.raises(CatalogIntegrityError, match="calzone is unavailable"):
        menu.product_entry("calzone")


def test_product_with_two_bases_is_excluded():
    catalog = build_sample_catalog()
    catalog.product_instances.append(
        ProductInstance(id="second_base", product_id="pizza", is_base=True, display_name="Plain")
    )
    menu = build_menu(catalog)
    assert "pizza" in menu.excluded_products
    assert "2 base instances" in menu.excluded_products["pizza"]


def test_unknown_modifier_type_reference_is_excluded():
    catalog = build_sample_catalog()
    catalog.products[0] = catalog.products[0].model_copy(update={
        "modifiers": [ProductModifierRef(modifier_type_id="sauce")],
    })
    menu = build_menu(catalog)
    assert "unknown modifier type sauce" in menu.excluded_products["pizza"]


def test_lookup_errors():
    menu = build_menu(build_sample_catalog())
    with pytest.raises(CatalogIntegrityError, match="Unknown modifier type"):
        menu.modifier_entry("sauce")
    with pytest.raises(CatalogIntegrityError, match="Unknown modifier option"):
        menu.option("toppings", "pineapple")
    with pytest.raises(CatalogIntegrityError, match="Unknown product instance function"):
        menu.function("fn_missing")


def test_does_product_exist_in_menu():
    menu = build_menu(build_sample_catalog())
    good = ProductConfiguration(product_id="pizza", modifiers={"size": [OptionInstance(option_id="large")]})
    bad_option = ProductConfiguration(product_id="pizza", modifiers={"size": [OptionInstance(option_id="huge")]})
    bad_type = ProductConfiguration(product_id="pizza", modifiers={"sauce": []})
    assert does_product_exist_in_menu(good, menu)
    assert not does_product_exist_in_menu(bad_option, menu)
    assert not does_product_exist_in_menu(bad_type, menu)
    assert not does_product_exist_in_menu(ProductConfiguration(product_id="calzone"), menu)


def test_selection_placed_option_lookup():
    selection = ProductConfiguration(
        product_id="pizza",
        modifiers={"toppings": [OptionInstance(option_id="mushroom", placement=OptionPlacement.LEFT)]},
    )
    assert selection.placed_option("toppings", "mushroom").placement == OptionPlacement.LEFT
    assert selection.placed_option("toppings", "pepperoni") is None
    assert selection.placed_option("size", "small") is None
    assert selection.placement_of("toppings", "mushroom") == OptionPlacement.LEFT
    assert selection.placement_of("toppings", "pepperoni") == OptionPlacement.NONE


def test_select_product_instances_in_category():
    menu = build_menu(build_sample_catalog())
    pizzas = menu.category("pizzas")
    assert [pi.id for pi in select_product_instances_in_category(pizzas, menu)] == ["pepperoni_pizza", "cheese_pizza"]

    mixed = Category(id="specials", name="Specials", product_ids=["calzone", "pizza"])
    assert [pi.id for pi in select_product_instances_in_category(mixed, menu)] == ["pepperoni_pizza", "cheese_pizza"]
    assert select_product_instances_in_category(Category(id="empty", name="Empty"), menu) == []


def test_unknown_category_raises():
    menu = build_menu(build_sample_catalog())
    with pytest.raises(CatalogIntegrityError, match="Unknown category"):
        menu.category("desserts")
