"""Derived, customer-facing state computed for a product selection.

Everything here is immutable and recomputed from scratch on every call;
none of it is persisted by the engine.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from storefront.models.enums import DisableReason, MatchLevel, OptionPlacement, OptionQualifier

# (modifier_type_id, option_id); option_id is "" for an unfilled placeholder
ModifierOptionRef = tuple[str, str]


@dataclass(frozen=True)
class EnableState:
    """Tagged disable reason for one placement of one option."""

    reason: DisableReason
    function_id: Optional[str] = None
    fulfillment_id: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self.reason == DisableReason.ENABLED


ENABLED = EnableState(DisableReason.ENABLED)


@dataclass(frozen=True)
class OptionMetadataEntry:
    placement: OptionPlacement
    qualifier: OptionQualifier
    enable_left: EnableState
    enable_right: EnableState
    enable_whole: EnableState


@dataclass(frozen=True)
class ModifierMetadataEntry:
    has_selectable: bool
    meets_minimum: bool
    options: Mapping[str, OptionMetadataEntry] = field(default_factory=dict)


@dataclass(frozen=True)
class ModifierDisplayList:
    left: tuple[ModifierOptionRef, ...] = ()
    right: tuple[ModifierOptionRef, ...] = ()
    whole: tuple[ModifierOptionRef, ...] = ()


@dataclass(frozen=True)
class CompareResult:
    """Outcome of comparing a configuration with another of the same class.

    ``match_matrix[side][modifier_index][option_index]`` follows the
    product class's modifier order and each type's option order.
    """

    mirror: bool
    match_matrix: tuple[list[list[MatchLevel]], list[list[MatchLevel]]]
    match: tuple[MatchLevel, MatchLevel]


@dataclass(frozen=True)
class ProductMetadata:
    name: str
    shortname: str
    description: str
    price: int
    pi: tuple[str, str]
    is_split: bool
    incomplete: bool
    modifier_map: Mapping[str, ModifierMetadataEntry]
    advanced_option_eligible: bool
    advanced_option_selected: bool
    additional_modifiers: ModifierDisplayList
    exhaustive_modifiers: ModifierDisplayList
    bake_count: tuple[float, float]
    flavor_count: tuple[float, float]
