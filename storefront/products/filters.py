"""Orderability filters.

Answer "can this be put in a cart right now, for this fulfillment?" for
catalog instances and for customer selections. Each filter returns a
plain bool; the per-option reasons live in ``ProductMetadata``.
"""

from datetime import datetime
from typing import Callable, Optional

from storefront.config import EngineConfig
from storefront.functional.expressions import ExpressionEvaluator
from storefront.menu import Menu, does_product_exist_in_menu
from storefront.models.catalog import Product, ProductConfiguration, ProductInstance, ProductInstanceDisplayFlags
from storefront.models.enums import OptionPlacement
from storefront.models.metadata import ProductMetadata
from storefront.products.enablement import disable_data_check
from storefront.products.metadata import generate_metadata

VisibilityGetter = Callable[[ProductInstanceDisplayFlags], bool]


def _product_is_available(product: Product, service_time: datetime, fulfillment_id: str) -> bool:
    return (
        fulfillment_id not in product.disabled_fulfillments
        and disable_data_check(product.disabled, service_time).enabled
    )


def required_modifiers_available(
    product: Product,
    selection: ProductConfiguration,
    menu: Menu,
    service_time: datetime,
    fulfillment_id: str,
) -> bool:
    """Every selected modifier type is offered for the fulfillment and every
    selected option exists and is not time-disabled."""
    refs = {ref.modifier_type_id: ref for ref in product.modifiers}
    for modifier_type_id, placed_options in selection.modifiers.items():
        ref = refs.get(modifier_type_id)
        if ref is None or fulfillment_id in ref.disabled_fulfillments:
            return False
        options = menu.modifier_entry(modifier_type_id).options
        for placed in placed_options:
            option_entry = options.get(placed.option_id)
            if option_entry is None:
                return False
            if not disable_data_check(option_entry.option.disabled, service_time).enabled:
                return False
    return True


def menu_visible(flags: ProductInstanceDisplayFlags) -> bool:
    return not flags.hide_from_menu


def order_visible(flags: ProductInstanceDisplayFlags) -> bool:
    return not flags.hide_from_order


def ignore_hide_flags(flags: ProductInstanceDisplayFlags) -> bool:
    return True


def filter_product_instance(
    instance: ProductInstance,
    menu: Menu,
    service_time: datetime,
    fulfillment_id: str,
    is_visible: VisibilityGetter = ignore_hide_flags,
) -> bool:
    """True if a catalog instance is visible and available to order.

    ``is_visible`` picks which hide flag applies: ``menu_visible`` for menu
    listings, ``order_visible`` for the ordering flow.
    """
    product_entry = menu.products.get(instance.product_id)
    if product_entry is None:
        return False
    if not is_visible(instance.display_flags):
        return False
    return _product_is_available(product_entry.product, service_time, fulfillment_id) and (
        required_modifiers_available(
            product_entry.product,
            ProductConfiguration.from_instance(instance),
            menu,
            service_time,
            fulfillment_id,
        )
    )


def filter_product_selector(
    product: Product,
    selection: ProductConfiguration,
    metadata: ProductMetadata,
    menu: Menu,
    service_time: datetime,
    fulfillment_id: str,
    filter_incomplete: bool,
) -> bool:
    """True if a configured selection passes every availability check.

    ``metadata`` must be computed for the same selection, time and
    fulfillment. Incomplete selections pass unless ``filter_incomplete``
    is set, so a product being configured is not pulled from under the
    customer.
    """
    if filter_incomplete and metadata.incomplete:
        return False
    if not _product_is_available(product, service_time, fulfillment_id):
        return False
    for modifier_type_id, placed_options in selection.modifiers.items():
        modifier_metadata = metadata.modifier_map.get(modifier_type_id)
        if modifier_metadata is None:
            return False
        options = menu.modifier_entry(modifier_type_id).options
        for placed in placed_options:
            option_entry = options.get(placed.option_id)
            option_metadata = modifier_metadata.options.get(placed.option_id)
            if option_entry is None or option_metadata is None:
                return False
            if placed.placement == OptionPlacement.LEFT:
                state = option_metadata.enable_left
            elif placed.placement == OptionPlacement.RIGHT:
                state = option_metadata.enable_right
            elif placed.placement == OptionPlacement.WHOLE:
                state = option_metadata.enable_whole
            else:
                return False
            if not state.enabled:
                return False
            if not disable_data_check(option_entry.option.disabled, service_time).enabled:
                return False
    return True


def can_be_ordered(
    selection: ProductConfiguration,
    menu: Menu,
    service_time: datetime,
    fulfillment_id: str,
    filter_incomplete: bool = True,
    evaluator: Optional[ExpressionEvaluator] = None,
    config: Optional[EngineConfig] = None,
) -> bool:
    """Compute metadata for ``selection`` and run ``filter_product_selector``."""
    if not does_product_exist_in_menu(selection, menu):
        return False
    metadata = generate_metadata(selection, menu, service_time, fulfillment_id, evaluator, config)
    return filter_product_selector(
        menu.product_entry(selection.product_id).product,
        selection,
        metadata,
        menu,
        service_time,
        fulfillment_id,
        filter_incomplete,
    )
