"""Sample pizzeria catalog and fulfillment schedule.

One product class, ``pizza``, with a single-select size and splittable
toppings. Instances are listed in scan order: the specific pies first,
the base Cheese Pizza last.
"""

from storefront.availability.engine import FulfillmentConfig
from storefront.models import (
    Catalog,
    Category,
    ConstLiteralExpression,
    DisplayAs,
    LogicalExpression,
    LogicalOperator,
    ModifierInstance,
    ModifierOption,
    ModifierOptionMetadata,
    ModifierPlacementExpression,
    ModifierType,
    ModifierTypeDisplayFlags,
    Money,
    OptionInstance,
    OptionPlacement,
    Product,
    ProductDisplayFlags,
    ProductInstance,
    ProductInstanceFunction,
    ProductModifierRef,
)

PIZZA = "pizza"
SIZE = "size"
TOPPINGS = "toppings"
LARGE_ONLY = "fn_large_only"


def _whole(option_id: str) -> OptionInstance:
    return OptionInstance(option_id=option_id, placement=OptionPlacement.WHOLE)


def build_sample_catalog() -> Catalog:
    modifier_types = [
        ModifierType(
            id=SIZE,
            name="size",
            display_name="Size",
            ordinal=0,
            min_selected=1,
            max_selected=1,
            display_flags=ModifierTypeDisplayFlags(empty_display_as=DisplayAs.YOUR_CHOICE_OF),
        ),
        ModifierType(
            id=TOPPINGS,
            name="toppings",
            display_name="Toppings",
            ordinal=1,
            min_selected=0,
            display_flags=ModifierTypeDisplayFlags(
                template_string="toppings",
                non_empty_group_prefix="with ",
            ),
        ),
    ]
    options = [
        ModifierOption(id="small", modifier_type_id=SIZE, display_name="Small", shortcode="S", ordinal=0),
        ModifierOption(
            id="large", modifier_type_id=SIZE, display_name="Large", shortcode="L",
            ordinal=1, price=Money(amount=400),
        ),
        ModifierOption(
            id="mushroom", modifier_type_id=TOPPINGS, display_name="Mushroom", shortcode="M",
            ordinal=0, price=Money(amount=200),
            metadata=ModifierOptionMetadata(bake_factor=2, flavor_factor=1, can_split=True),
        ),
        ModifierOption(
            id="pepperoni", modifier_type_id=TOPPINGS, display_name="Pepperoni", shortcode="P",
            ordinal=1, price=Money(amount=200),
            metadata=ModifierOptionMetadata(bake_factor=1, flavor_factor=1, can_split=True),
        ),
        ModifierOption(
            id="anchovy", modifier_type_id=TOPPINGS, display_name="Anchovy", shortcode="A",
            ordinal=2, price=Money(amount=150), enable_function_id=LARGE_ONLY,
            metadata=ModifierOptionMetadata(bake_factor=1, flavor_factor=2, can_split=False),
        ),
    ]
    pizza = Product(
        id=PIZZA,
        price=Money(amount=1200),
        display_flags=ProductDisplayFlags(bake_max=6, bake_differential=2, flavor_max=6),
        modifiers=[
            ProductModifierRef(modifier_type_id=SIZE),
            ProductModifierRef(modifier_type_id=TOPPINGS),
        ],
    )
    instances = [
        ProductInstance(
            id="pepperoni_pizza",
            product_id=PIZZA,
            ordinal=0,
            display_name="Pepperoni Pizza",
            shortcode="PEP",
            description="Tomato, mozzarella, pepperoni",
            modifiers=[
                ModifierInstance(modifier_type_id=SIZE, options=[_whole("small")]),
                ModifierInstance(modifier_type_id=TOPPINGS, options=[_whole("pepperoni")]),
            ],
        ),
        ProductInstance(
            id="cheese_pizza",
            product_id=PIZZA,
            ordinal=10,
            is_base=True,
            display_name="Cheese Pizza",
            shortcode="CHZ",
            description="Tomato, mozzarella",
            modifiers=[ModifierInstance(modifier_type_id=SIZE, options=[_whole("small")])],
        ),
    ]
    functions = [
        ProductInstanceFunction(
            id=LARGE_ONLY,
            name="Large pies only",
            expression=LogicalExpression(
                operator=LogicalOperator.EQ,
                operand_a=ModifierPlacementExpression(modifier_type_id=SIZE, option_id="large"),
                operand_b=ConstLiteralExpression(value=OptionPlacement.WHOLE),
            ),
        ),
    ]
    return Catalog(
        modifier_types=modifier_types,
        options=options,
        products=[pizza],
        product_instances=instances,
        product_instance_functions=functions,
        categories=[Category(id="pizzas", name="Pizzas", product_ids=[PIZZA])],
        version="sample",
    )


def build_sample_fulfillments() -> dict[str, FulfillmentConfig]:
    """Pickup 11:00-22:00 daily; delivery 17:00-21:00 daily."""
    return {
        "pickup": FulfillmentConfig(
            id="pickup",
            operating_hours=[[(660, 1320)] for _ in range(7)],
            time_step=15,
            lead_time=20,
        ),
        "delivery": FulfillmentConfig(
            id="delivery",
            operating_hours=[[(1020, 1260)] for _ in range(7)],
            time_step=30,
            lead_time=45,
        ),
    }
