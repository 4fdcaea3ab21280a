"""
Storefront Products: enablement, matching, metadata and orderability.

- enablement: pure rule functions deciding whether an option can be placed
- matching: comparison of a selection against catalog instances
- metadata: derived name, price and per-option state of a selection
- filters: can a product or selection be ordered right now
"""
from storefront.products.enablement import (
    DELTA_MATRIX,
    apply_delta,
    check_bake_capacity,
    check_enable_function,
    check_flavor_capacity,
    check_split_differential,
    disable_data_check,
    is_option_enabled,
    modifier_type_enable_state,
)
from storefront.products.matching import (
    MATCH_MATRIX,
    compare_modifiers,
    compare_products,
    compare_to_instance,
    extract_match,
    products_equal,
)
from storefront.products.metadata import (
    compute_potential_prices,
    find_best_match,
    generate_metadata,
)
from storefront.products.filters import (
    can_be_ordered,
    filter_product_instance,
    filter_product_selector,
    ignore_hide_flags,
    menu_visible,
    order_visible,
    required_modifiers_available,
)

__all__ = [
    # Enablement
    "DELTA_MATRIX",
    "apply_delta",
    "check_bake_capacity",
    "check_enable_function",
    "check_flavor_capacity",
    "check_split_differential",
    "disable_data_check",
    "is_option_enabled",
    "modifier_type_enable_state",
    # Matching
    "MATCH_MATRIX",
    "compare_modifiers",
    "compare_products",
    "compare_to_instance",
    "extract_match",
    "products_equal",
    # Metadata
    "compute_potential_prices",
    "find_best_match",
    "generate_metadata",
    # Filters
    "can_be_ordered",
    "filter_product_instance",
    "filter_product_selector",
    "ignore_hide_flags",
    "menu_visible",
    "order_visible",
    "required_modifiers_available",
]
