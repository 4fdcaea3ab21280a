"""Product metadata: the derived, customer-facing view of a selection.

``generate_metadata`` runs in four passes:

1. find the catalog instance that best names each half of the product,
2. accumulate bake/flavor counts, price and whether the product is split,
3. walk every modifier type of the product class computing enable states,
   selection counts, additional/exhaustive option lists and completeness,
4. assemble the name, short name and description, then fill templates.

Nothing here mutates the selection or the menu; a new ``ProductMetadata``
is returned on every call.
"""

import logging
from datetime import datetime
from itertools import product as cartesian
from typing import Optional

from opentelemetry import trace

from storefront.config import EngineConfig, NamingConfig
from storefront.engine.template_engine import run_templating
from storefront.errors import CatalogIntegrityError
from storefront.functional.expressions import (
    CatalogFunctionEvaluator,
    ExpressionContext,
    ExpressionEvaluator,
)
from storefront.menu import Menu, OptionEntry, ProductEntry
from storefront.models.catalog import ModifierOption, ProductConfiguration, ProductInstance
from storefront.models.enums import DisableReason, DisplayAs, MatchLevel, OptionPlacement, OptionQualifier, Side
from storefront.models.metadata import (
    CompareResult,
    EnableState,
    ModifierDisplayList,
    ModifierMetadataEntry,
    ModifierOptionRef,
    OptionMetadataEntry,
    ProductMetadata,
)
from storefront.products.enablement import (
    disable_data_check,
    is_option_enabled,
    modifier_type_enable_state,
)
from storefront.products.matching import AT_LEAST, EXACT_MATCH, NO_MATCH, compare_to_instance

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

NO_SPLITTING = EnableState(DisableReason.DISABLED_NO_SPLITTING)


# ---------------------------------------------------------------------------
# Best match
# ---------------------------------------------------------------------------

class _MatchInfo:
    """Per-side best matching instance, filled during the instance scan."""

    def __init__(self):
        self.instances: list[Optional[ProductInstance]] = [None, None]
        self.matrices: list[list[list[MatchLevel]]] = [[], []]
        self.levels: list[MatchLevel] = [EXACT_MATCH, EXACT_MATCH]

    def offer(self, side: Side, instance: ProductInstance, result: CompareResult) -> None:
        if self.instances[side] is None and result.match[side] != NO_MATCH:
            self.instances[side] = instance
            self.matrices[side] = result.match_matrix[side]
            self.levels[side] = result.match[side]

    @property
    def resolved(self) -> bool:
        return self.instances[Side.LEFT] is not None and self.instances[Side.RIGHT] is not None


def find_best_match(selection: ProductConfiguration, product_entry: ProductEntry, menu: Menu) -> _MatchInfo:
    """Scan instances most specific first; the first non-NO_MATCH per side wins."""
    info = _MatchInfo()
    for instance in product_entry.instances_list:
        result = compare_to_instance(selection, instance, menu)
        info.offer(Side.LEFT, instance, result)
        info.offer(Side.RIGHT, instance, result)
        if info.resolved:
            break
    if not info.resolved:
        raise CatalogIntegrityError(
            f"Unable to determine product metadata for {selection.product_id}: "
            "no catalog instance matches both halves"
        )
    logger.debug(
        "Matched %s to %s | %s",
        selection.product_id, info.instances[Side.LEFT].id, info.instances[Side.RIGHT].id,
    )
    return info


# ---------------------------------------------------------------------------
# Per-option helpers
# ---------------------------------------------------------------------------

def _option_enable_states(
    option_entry: OptionEntry,
    type_state: EnableState,
    current: OptionPlacement,
    bake_count: tuple[float, float],
    flavor_count: tuple[float, float],
    product_entry: ProductEntry,
    context: ExpressionContext,
    evaluator: ExpressionEvaluator,
    service_time: datetime,
) -> tuple[EnableState, EnableState, EnableState]:
    """(left, right, whole) enable states for one option."""
    if not type_state.enabled:
        return type_state, type_state, type_state
    time_state = disable_data_check(option_entry.option.disabled, service_time)
    if not time_state.enabled:
        return time_state, time_state, time_state

    def check(proposed: OptionPlacement) -> EnableState:
        return is_option_enabled(
            option_entry, current, bake_count, flavor_count, proposed,
            product_entry.product, context, evaluator,
        )

    whole = check(OptionPlacement.WHOLE)
    if not option_entry.option.metadata.can_split:
        return NO_SPLITTING, NO_SPLITTING, whole
    return check(OptionPlacement.LEFT), check(OptionPlacement.RIGHT), whole


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------

def _names(options: list[ModifierOption]) -> list[str]:
    return [o.display_name for o in options if not o.display_flags.omit_from_name]


def _shortnames(options: list[ModifierOption]) -> list[str]:
    return [o.shortcode for o in options if not o.display_flags.omit_from_shortname]


def _wrap_side(components: list[str], num_options: int, naming: NamingConfig) -> str:
    joined = naming.option_separator.join(components)
    if len(components) > 1 or num_options > 1:
        return f"( {joined} )"
    return joined


def _split_side_components(base: list[str], additions: list[ModifierOption], joined: str, naming: NamingConfig) -> list[str]:
    components = list(base)
    if additions:
        components.append(joined)
    if components:
        components.append(naming.empty_split_placeholder)
    return components


def _assemble_names(
    metadata_fields: dict,
    additional: dict[str, list[ModifierOption]],
    left_pi: ProductInstance,
    right_pi: ProductInstance,
    is_compare_to_base: tuple[bool, bool],
    show_base_name: bool,
    naming: NamingConfig,
) -> None:
    sep = naming.option_separator
    name_components = _names(additional["whole"])
    short_components = _shortnames(additional["whole"])

    if not metadata_fields["is_split"]:
        if not is_compare_to_base[Side.LEFT] or show_base_name:
            name_components.insert(0, left_pi.display_name)
            short_components.insert(0, left_pi.shortcode)
        description = left_pi.description
    else:
        side_names = [naming.empty_split_placeholder, naming.empty_split_placeholder]
        side_shortnames = [naming.empty_split_placeholder, naming.empty_split_placeholder]
        num_names = [0, 0]
        num_shortnames = [0, 0]
        for side, key in ((Side.LEFT, "left"), (Side.RIGHT, "right")):
            if additional[key]:
                names = _names(additional[key])
                shortnames = _shortnames(additional[key])
                num_names[side] = len(names)
                num_shortnames[side] = len(shortnames)
                side_names[side] = sep.join(names)
                side_shortnames[side] = sep.join(shortnames)

        if left_pi.id == right_pi.id:
            if not is_compare_to_base[Side.LEFT] or show_base_name:
                name_components.insert(0, left_pi.display_name)
                short_components.insert(0, left_pi.shortcode)
            name_components.append(f"({naming.split_separator.join(side_names)})")
            short_components.append(f"({naming.split_separator.join(side_shortnames)})")
            description = left_pi.description
        else:
            shows = [
                not is_compare_to_base[Side.LEFT] or show_base_name,
                not is_compare_to_base[Side.RIGHT] or show_base_name,
            ]
            left_name = _wrap_side(
                _split_side_components([left_pi.display_name] if shows[Side.LEFT] else [],
                                       additional["left"], side_names[Side.LEFT], naming),
                num_names[Side.LEFT], naming,
            )
            right_name = _wrap_side(
                _split_side_components([right_pi.display_name] if shows[Side.RIGHT] else [],
                                       additional["right"], side_names[Side.RIGHT], naming),
                num_names[Side.RIGHT], naming,
            )
            left_short = _wrap_side(
                _split_side_components([left_pi.shortcode] if shows[Side.LEFT] else [],
                                       additional["left"], side_shortnames[Side.LEFT], naming),
                num_shortnames[Side.LEFT], naming,
            )
            right_short = _wrap_side(
                _split_side_components([right_pi.shortcode] if shows[Side.RIGHT] else [],
                                       additional["right"], side_shortnames[Side.RIGHT], naming),
                num_shortnames[Side.RIGHT], naming,
            )
            split_name = f"{left_name}{naming.split_separator}{right_name}"
            split_short = f"{left_short}{naming.split_separator}{right_short}"
            name_components.append(f"( {split_name} )" if name_components else split_name)
            short_components.append(f"( {split_short} )" if short_components else split_short)
            if left_pi.description and right_pi.description:
                description = f"( {left_pi.description} ){naming.split_separator}( {right_pi.description} )"
            else:
                description = ""

    metadata_fields["name"] = sep.join(name_components)
    metadata_fields["shortname"] = sep.join(short_components) if short_components else left_pi.shortcode
    metadata_fields["description"] = description


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def generate_metadata(
    selection: ProductConfiguration,
    menu: Menu,
    service_time: datetime,
    fulfillment_id: str,
    evaluator: Optional[ExpressionEvaluator] = None,
    config: Optional[EngineConfig] = None,
) -> ProductMetadata:
    """Compute the derived metadata of a product selection.

    Raises:
        CatalogIntegrityError: the product class is unknown or excluded,
            the selection references unknown options, or no instance
            matches one of the halves.
    """
    evaluator = evaluator or CatalogFunctionEvaluator()
    config = config or EngineConfig.default()

    with tracer.start_as_current_span(
        "products.generate_metadata",
        attributes={"product.id": selection.product_id, "fulfillment.id": fulfillment_id},
    ) as span:
        product_entry = menu.product_entry(selection.product_id)
        product = product_entry.product
        match_info = find_best_match(selection, product_entry, menu)
        left_pi = match_info.instances[Side.LEFT]
        right_pi = match_info.instances[Side.RIGHT]

        bake = [0.0, 0.0]
        flavor = [0.0, 0.0]
        price = product.price.amount
        is_split = False
        for modifier_type_id, placed_options in selection.modifiers.items():
            for placed in placed_options:
                option = menu.option(modifier_type_id, placed.option_id).option
                if placed.placement in (OptionPlacement.LEFT, OptionPlacement.WHOLE):
                    bake[Side.LEFT] += option.metadata.bake_factor
                    flavor[Side.LEFT] += option.metadata.flavor_factor
                if placed.placement in (OptionPlacement.RIGHT, OptionPlacement.WHOLE):
                    bake[Side.RIGHT] += option.metadata.bake_factor
                    flavor[Side.RIGHT] += option.metadata.flavor_factor
                if placed.placement != OptionPlacement.NONE:
                    price += option.price.amount
                is_split = is_split or placed.placement in (OptionPlacement.LEFT, OptionPlacement.RIGHT)
        bake_count = (bake[Side.LEFT], bake[Side.RIGHT])
        flavor_count = (flavor[Side.LEFT], flavor[Side.RIGHT])

        base_id = product_entry.base_id
        is_compare_to_base = (left_pi.id == base_id, right_pi.id == base_id)
        context = ExpressionContext(product=selection, menu=menu)

        modifier_map: dict[str, ModifierMetadataEntry] = {}
        additional: dict[str, list[ModifierOptionRef]] = {"left": [], "right": [], "whole": []}
        exhaustive: dict[str, list[ModifierOptionRef]] = {"left": [], "right": [], "whole": []}
        advanced_eligible = False
        advanced_selected = False
        incomplete = False

        for mt_idx, ref in enumerate(product.modifiers):
            modifier_type_id = ref.modifier_type_id
            entry = menu.modifier_entry(modifier_type_id)
            modifier_type = entry.modifier_type
            is_base_product_edge_case = (
                modifier_type.is_single_select and not product.display_flags.show_name_of_base_product
            )
            type_state = modifier_type_enable_state(ref, fulfillment_id, context, evaluator)

            has_selectable = False
            options: dict[str, OptionMetadataEntry] = {}
            for option_entry in entry.options_list:
                placed = selection.placed_option(modifier_type_id, option_entry.option.id)
                current = placed.placement if placed else OptionPlacement.NONE
                left, right, whole = _option_enable_states(
                    option_entry, type_state, current, bake_count, flavor_count,
                    product_entry, context, evaluator, service_time,
                )
                options[option_entry.option.id] = OptionMetadataEntry(
                    placement=current,
                    qualifier=placed.qualifier if placed else OptionQualifier.REGULAR,
                    enable_left=left,
                    enable_right=right,
                    enable_whole=whole,
                )
                advanced_eligible = advanced_eligible or left.enabled or right.enabled
                has_selectable = has_selectable or left.enabled or right.enabled or whole.enabled

            num_selected = [0, 0]
            for placed in selection.options_for(modifier_type_id):
                option_ref = (modifier_type_id, placed.option_id)
                mo_idx = menu.option(modifier_type_id, placed.option_id).index
                if placed.placement == OptionPlacement.LEFT:
                    exhaustive["left"].append(option_ref)
                    num_selected[Side.LEFT] += 1
                    advanced_selected = True
                elif placed.placement == OptionPlacement.RIGHT:
                    exhaustive["right"].append(option_ref)
                    num_selected[Side.RIGHT] += 1
                    advanced_selected = True
                elif placed.placement == OptionPlacement.WHOLE:
                    exhaustive["whole"].append(option_ref)
                    num_selected[Side.LEFT] += 1
                    num_selected[Side.RIGHT] += 1

                cmp_left = match_info.matrices[Side.LEFT][mt_idx][mo_idx]
                cmp_right = match_info.matrices[Side.RIGHT][mt_idx][mo_idx]
                if (cmp_left == AT_LEAST and cmp_right == AT_LEAST) or (
                    is_base_product_edge_case and all(is_compare_to_base)
                    and cmp_left == EXACT_MATCH and cmp_right == EXACT_MATCH
                ):
                    additional["whole"].append(option_ref)
                elif cmp_right == AT_LEAST or (
                    is_base_product_edge_case and is_compare_to_base[Side.RIGHT] and cmp_right == EXACT_MATCH
                ):
                    additional["right"].append(option_ref)
                elif cmp_left == AT_LEAST or (
                    is_base_product_edge_case and is_compare_to_base[Side.LEFT] and cmp_left == EXACT_MATCH
                ):
                    additional["left"].append(option_ref)

            min_selected = modifier_type.min_selected
            shows_placeholder = (
                modifier_type.display_flags.empty_display_as != DisplayAs.OMIT and has_selectable
            )
            left_short = num_selected[Side.LEFT] < min_selected
            right_short = num_selected[Side.RIGHT] < min_selected
            if left_short or right_short:
                section = "whole" if left_short and right_short else ("left" if left_short else "right")
                if shows_placeholder:
                    exhaustive[section].append((modifier_type_id, ""))
                meets_minimum = not has_selectable
                incomplete = incomplete or has_selectable
            else:
                meets_minimum = True

            modifier_map[modifier_type_id] = ModifierMetadataEntry(
                has_selectable=has_selectable,
                meets_minimum=meets_minimum,
                options=options,
            )

        fields = dict(
            name="",
            shortname="",
            description="",
            price=price,
            pi=(left_pi.id, right_pi.id),
            is_split=is_split,
            incomplete=incomplete,
            modifier_map=modifier_map,
            advanced_option_eligible=advanced_eligible,
            advanced_option_selected=advanced_selected,
            additional_modifiers=ModifierDisplayList(
                left=tuple(additional["left"]),
                right=tuple(additional["right"]),
                whole=tuple(additional["whole"]),
            ),
            exhaustive_modifiers=ModifierDisplayList(
                left=tuple(exhaustive["left"]),
                right=tuple(exhaustive["right"]),
                whole=tuple(exhaustive["whole"]),
            ),
            bake_count=bake_count,
            flavor_count=flavor_count,
        )

        exact = (
            match_info.levels[Side.LEFT] == EXACT_MATCH and match_info.levels[Side.RIGHT] == EXACT_MATCH
        )
        if not is_split and exact:
            fields["name"] = left_pi.display_name
            fields["shortname"] = left_pi.shortcode
            fields["description"] = left_pi.description
        else:
            _assemble_names(
                fields,
                {
                    key: [menu.option(mtid, oid).option for mtid, oid in refs]
                    for key, refs in additional.items()
                },
                left_pi,
                right_pi,
                is_compare_to_base,
                product.display_flags.show_name_of_base_product,
                config.naming,
            )

        span.set_attribute("product.incomplete", incomplete)
        span.set_attribute("product.is_split", is_split)
        return run_templating(product, menu, ProductMetadata(**fields))


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------

def compute_potential_prices(metadata: ProductMetadata, menu: Menu) -> list[int]:
    """Ascending list of prices the product could end up at once completed.

    Only meaningful when the unfilled modifier types are single-select and
    independent of each other. Each unfilled type contributes the distinct
    prices of its options that can be placed WHOLE; a complete product has
    exactly one potential price.
    """
    price_groups: list[list[int]] = []
    for modifier_type_id, entry in metadata.modifier_map.items():
        if entry.meets_minimum:
            continue
        prices = [
            o.option.price.amount
            for o in menu.modifier_entry(modifier_type_id).options_list
            if entry.options[o.option.id].enable_whole.enabled
        ]
        price_groups.append(list(dict.fromkeys(prices)))

    if not price_groups:
        return [metadata.price]
    combined = {sum(combo) for combo in cartesian(*price_groups)}
    return sorted(p + metadata.price for p in combined)
