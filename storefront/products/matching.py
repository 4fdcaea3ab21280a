"""Product comparison: how a configuration matches another of its class.

The comparison walks every modifier type of the product class (in menu
order) and every option of that type, producing a left and a right match
matrix. ``MatchLevel`` is ordered NO_MATCH < AT_LEAST < EXACT_MATCH, so a
side's overall match is the minimum over its matrix.
"""

import logging
from typing import Callable

from storefront.menu import Menu, ProductEntry
from storefront.models.catalog import OptionInstance, ProductConfiguration, ProductInstance, find_placed_option
from storefront.models.enums import MatchLevel, OptionPlacement, Side
from storefront.models.metadata import CompareResult

logger = logging.getLogger(__name__)

NO_MATCH = MatchLevel.NO_MATCH
AT_LEAST = MatchLevel.AT_LEAST
EXACT_MATCH = MatchLevel.EXACT_MATCH

ModifiersGetter = Callable[[str], list[OptionInstance]]

# (left match, right match, breaks mirror) indexed by [placement on A][placement on B]
MATCH_MATRIX: tuple[tuple[tuple[MatchLevel, MatchLevel, bool], ...], ...] = (
    ((EXACT_MATCH, EXACT_MATCH, False), (NO_MATCH, EXACT_MATCH, True), (EXACT_MATCH, NO_MATCH, True), (NO_MATCH, NO_MATCH, True)),  # NONE
    ((AT_LEAST, EXACT_MATCH, True), (EXACT_MATCH, EXACT_MATCH, True), (NO_MATCH, NO_MATCH, False), (EXACT_MATCH, NO_MATCH, True)),  # LEFT
    ((EXACT_MATCH, AT_LEAST, True), (NO_MATCH, NO_MATCH, False), (EXACT_MATCH, EXACT_MATCH, True), (NO_MATCH, EXACT_MATCH, True)),  # RIGHT
    ((AT_LEAST, AT_LEAST, True), (EXACT_MATCH, AT_LEAST, True), (AT_LEAST, EXACT_MATCH, True), (EXACT_MATCH, EXACT_MATCH, False)),  # WHOLE
    # ( NONE ), ( LEFT ), ( RIGHT ), ( WHOLE )
)


def extract_match(matrix: list[list[MatchLevel]]) -> MatchLevel:
    """Minimum level in a side's matrix; EXACT_MATCH when it is empty."""
    return min((level for row in matrix for level in row), default=EXACT_MATCH)


def _getter(modifiers: dict[str, list[OptionInstance]]) -> ModifiersGetter:
    return lambda modifier_type_id: modifiers.get(modifier_type_id, [])


def _placement(options: list[OptionInstance], option_id: str) -> OptionPlacement:
    placed = find_placed_option(options, option_id)
    return placed.placement if placed else OptionPlacement.NONE


def _check_references(modifiers: dict[str, list[OptionInstance]], menu: Menu) -> None:
    """Raise ``CatalogIntegrityError`` for any selected option missing from the menu."""
    for modifier_type_id, placed_options in modifiers.items():
        for placed in placed_options:
            menu.option(modifier_type_id, placed.option_id)


def compare_modifiers(
    product_entry: ProductEntry,
    side_a: ModifiersGetter,
    side_b: ModifiersGetter,
    menu: Menu,
) -> CompareResult:
    """Compare two modifier sets of the same product class.

    Single-select types (min = max = 1) only flag A's chosen option as
    AT_LEAST when B chose something else or nothing. When A has no
    selection the type's cells stay EXACT_MATCH.
    """
    left: list[list[MatchLevel]] = []
    right: list[list[MatchLevel]] = []
    mirror = True

    for ref in product_entry.product.modifiers:
        entry = menu.modifier_entry(ref.modifier_type_id)
        left_row = [EXACT_MATCH] * len(entry.options_list)
        right_row = [EXACT_MATCH] * len(entry.options_list)
        left.append(left_row)
        right.append(right_row)

        a_options = side_a(ref.modifier_type_id)
        b_options = side_b(ref.modifier_type_id)

        if entry.modifier_type.is_single_select:
            if len(a_options) != 1:
                if not a_options and not b_options:
                    logger.warning(
                        "Single select modifier %s has no selection on either side of product %s",
                        ref.modifier_type_id, product_entry.product.id,
                    )
                continue
            chosen = a_options[0].option_id
            if len(b_options) == 1 and b_options[0].option_id == chosen:
                continue
            option_entry = entry.options.get(chosen)
            if option_entry is not None:
                left_row[option_entry.index] = AT_LEAST
                right_row[option_entry.index] = AT_LEAST
                mirror = False
            continue

        for option_entry in entry.options_list:
            placement_a = _placement(a_options, option_entry.option.id)
            placement_b = _placement(b_options, option_entry.option.id)
            match_left, match_right, breaks_mirror = MATCH_MATRIX[placement_a][placement_b]
            left_row[option_entry.index] = match_left
            right_row[option_entry.index] = match_right
            mirror = mirror and not breaks_mirror

    return CompareResult(
        mirror=mirror,
        match_matrix=(left, right),
        match=(extract_match(left), extract_match(right)),
    )


def _cross_class() -> CompareResult:
    return CompareResult(mirror=False, match_matrix=([], []), match=(NO_MATCH, NO_MATCH))


def compare_products(a: ProductConfiguration, b: ProductConfiguration, menu: Menu) -> CompareResult:
    """Compare two selections.

    Raises:
        CatalogIntegrityError: either selection names an unknown modifier
            type or option.
    """
    if a.product_id != b.product_id:
        return _cross_class()
    _check_references(a.modifiers, menu)
    _check_references(b.modifiers, menu)
    return compare_modifiers(
        menu.product_entry(a.product_id), _getter(a.modifiers), _getter(b.modifiers), menu
    )


def compare_to_instance(a: ProductConfiguration, b: ProductInstance, menu: Menu) -> CompareResult:
    if a.product_id != b.product_id:
        return _cross_class()
    _check_references(a.modifiers, menu)
    return compare_modifiers(
        menu.product_entry(a.product_id), _getter(a.modifiers), _getter(b.modifiers_map()), menu
    )


def products_equal(a: ProductConfiguration, b: ProductConfiguration, menu: Menu) -> bool:
    result = compare_products(a, b, menu)
    return result.mirror or (
        result.match[Side.LEFT] == EXACT_MATCH and result.match[Side.RIGHT] == EXACT_MATCH
    )
