"""Option enablement rules as pure functions.

Each rule takes the state a proposed placement would produce and returns
an ``EnableState``. ``is_option_enabled`` chains them in a fixed order so
that exactly one disable reason is reported when several apply:

1. split differential
2. bake (weight) capacity
3. flavor capacity
4. the option's custom enable function
"""

from datetime import datetime
from typing import Optional

from storefront.functional.expressions import ExpressionContext, ExpressionEvaluator
from storefront.menu import OptionEntry
from storefront.models.catalog import Product, ProductModifierRef, TimeInterval
from storefront.models.enums import DisableReason, OptionPlacement, Side
from storefront.models.metadata import ENABLED, EnableState

LR = tuple[float, float]

# proposed [left, right] delta indexed by [current placement][proposed placement]
DELTA_MATRIX: tuple[tuple[tuple[int, int], ...], ...] = (
    ((+0, +0), (+1, +0), (+0, +1), (+1, +1)),  # NONE
    ((-1, +0), (-1, +0), (-1, +1), (+0, +1)),  # LEFT
    ((+0, -1), (+1, -1), (+0, -1), (+1, +0)),  # RIGHT
    ((-1, -1), (+0, -1), (-1, +0), (-1, -1)),  # WHOLE
    # ( NONE  ), ( LEFT  ), ( RIGHT ), ( WHOLE )
)


def apply_delta(count: LR, factor: float, delta: tuple[int, int]) -> LR:
    return (
        count[Side.LEFT] + factor * delta[Side.LEFT],
        count[Side.RIGHT] + factor * delta[Side.RIGHT],
    )


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def check_split_differential(bake_after: LR, bake_differential: float) -> EnableState:
    if abs(bake_after[Side.LEFT] - bake_after[Side.RIGHT]) > bake_differential:
        return EnableState(DisableReason.DISABLED_SPLIT_DIFFERENTIAL)
    return ENABLED


def check_bake_capacity(bake_after: LR, bake_max: float) -> EnableState:
    if bake_after[Side.LEFT] > bake_max or bake_after[Side.RIGHT] > bake_max:
        return EnableState(DisableReason.DISABLED_WEIGHT)
    return ENABLED


def check_flavor_capacity(flavor_after: LR, flavor_max: float) -> EnableState:
    if flavor_after[Side.LEFT] > flavor_max or flavor_after[Side.RIGHT] > flavor_max:
        return EnableState(DisableReason.DISABLED_FLAVORS)
    return ENABLED


def check_enable_function(
    function_id: Optional[str],
    context: ExpressionContext,
    evaluator: ExpressionEvaluator,
) -> EnableState:
    if function_id is not None and not evaluator(function_id, context):
        return EnableState(DisableReason.DISABLED_FUNCTION, function_id=function_id)
    return ENABLED


def disable_data_check(disabled: Optional[TimeInterval], service_time: datetime) -> EnableState:
    """Time-window disable check for a catalog item.

    ``start > end`` is a blanket disable; otherwise the item is disabled
    while the service time falls inside ``[start, end]``.
    """
    if disabled is None:
        return ENABLED
    if disabled.start > disabled.end:
        return EnableState(DisableReason.DISABLED_BLANKET)
    service_ms = int(service_time.timestamp() * 1000)
    if disabled.start <= service_ms <= disabled.end:
        return EnableState(DisableReason.DISABLED_TIME)
    return ENABLED


def modifier_type_enable_state(
    ref: ProductModifierRef,
    fulfillment_id: str,
    context: ExpressionContext,
    evaluator: ExpressionEvaluator,
) -> EnableState:
    """Fulfillment disable beats the type's enable function."""
    if fulfillment_id in ref.disabled_fulfillments:
        return EnableState(DisableReason.DISABLED_FULFILLMENT_TYPE, fulfillment_id=fulfillment_id)
    return check_enable_function(ref.enable_function_id, context, evaluator)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def is_option_enabled(
    option: OptionEntry,
    current_placement: OptionPlacement,
    bake_count: LR,
    flavor_count: LR,
    proposed: OptionPlacement,
    product: Product,
    context: ExpressionContext,
    evaluator: ExpressionEvaluator,
) -> EnableState:
    """Decide whether moving ``option`` to ``proposed`` is allowed.

    ``bake_count``/``flavor_count`` are the product's current totals,
    which already include the option at ``current_placement``.
    """
    flags = product.display_flags
    metadata = option.option.metadata
    delta = DELTA_MATRIX[current_placement][proposed]
    bake_after = apply_delta(bake_count, metadata.bake_factor, delta)
    flavor_after = apply_delta(flavor_count, metadata.flavor_factor, delta)

    for result in (
        check_split_differential(bake_after, flags.bake_differential),
        check_bake_capacity(bake_after, flags.bake_max),
        check_flavor_capacity(flavor_after, flags.flavor_max),
    ):
        if not result.enabled:
            return result
    return check_enable_function(option.option.enable_function_id, context, evaluator)
