"""Pydantic schemas for the catalog snapshot and the customer selection.

The catalog is owned upstream and is read-only to the engine. The
selection (``ProductConfiguration``) is owned by the caller; the engine
reads it but never mutates it.
"""

from typing import Optional

from pydantic import BaseModel, Field

from storefront.models.enums import DisplayAs, OptionPlacement, OptionQualifier
from storefront.models.expressions import ProductInstanceFunction


# ---------------------------------------------------------------------------
# Shared value types
# ---------------------------------------------------------------------------

class Money(BaseModel):
    amount: int = Field(0, description="Amount in minor currency units (cents)")
    currency: str = "USD"


class TimeInterval(BaseModel):
    """Epoch-millisecond window. ``start > end`` marks a permanent disable."""

    start: int
    end: int


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------

class ModifierTypeDisplayFlags(BaseModel):
    empty_display_as: DisplayAs = DisplayAs.OMIT
    template_string: str = ""
    multiple_item_separator: str = " + "
    non_empty_group_prefix: str = ""
    non_empty_group_suffix: str = ""


class ModifierType(BaseModel):
    id: str
    name: str
    display_name: str = ""
    ordinal: int = 0
    min_selected: int = Field(0, ge=0)
    max_selected: Optional[int] = Field(None, ge=0)
    display_flags: ModifierTypeDisplayFlags = Field(default_factory=ModifierTypeDisplayFlags)

    @property
    def is_single_select(self) -> bool:
        return self.min_selected == 1 and self.max_selected == 1


class ModifierOptionMetadata(BaseModel):
    flavor_factor: float = 0
    bake_factor: float = 0
    can_split: bool = False


class ModifierOptionDisplayFlags(BaseModel):
    omit_from_shortname: bool = False
    omit_from_name: bool = False


class ModifierOption(BaseModel):
    id: str
    modifier_type_id: str
    display_name: str
    shortcode: str = ""
    description: str = ""
    price: Money = Field(default_factory=Money)
    disabled: Optional[TimeInterval] = None
    ordinal: int = 0
    metadata: ModifierOptionMetadata = Field(default_factory=ModifierOptionMetadata)
    enable_function_id: Optional[str] = None
    display_flags: ModifierOptionDisplayFlags = Field(default_factory=ModifierOptionDisplayFlags)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class ProductDisplayFlags(BaseModel):
    flavor_max: float = 10
    bake_max: float = 10
    bake_differential: float = 100
    show_name_of_base_product: bool = True


class ProductModifierRef(BaseModel):
    modifier_type_id: str
    enable_function_id: Optional[str] = None
    disabled_fulfillments: list[str] = Field(default_factory=list)


class Product(BaseModel):
    id: str
    price: Money = Field(default_factory=Money)
    disabled: Optional[TimeInterval] = None
    disabled_fulfillments: list[str] = Field(default_factory=list)
    display_flags: ProductDisplayFlags = Field(default_factory=ProductDisplayFlags)
    modifiers: list[ProductModifierRef] = Field(default_factory=list)


class OptionInstance(BaseModel):
    option_id: str
    placement: OptionPlacement = OptionPlacement.WHOLE
    qualifier: OptionQualifier = OptionQualifier.REGULAR


class ModifierInstance(BaseModel):
    modifier_type_id: str
    options: list[OptionInstance] = Field(default_factory=list)


def find_placed_option(options: list[OptionInstance], option_id: str) -> Optional[OptionInstance]:
    for placed in options:
        if placed.option_id == option_id:
            return placed
    return None


class ProductInstanceDisplayFlags(BaseModel):
    hide_from_menu: bool = False
    hide_from_order: bool = False


class ProductInstance(BaseModel):
    """A named, catalog-defined configuration of a product class."""

    id: str
    product_id: str
    ordinal: int = 0
    is_base: bool = False
    modifiers: list[ModifierInstance] = Field(default_factory=list)
    display_name: str
    shortcode: str = ""
    description: str = ""
    display_flags: ProductInstanceDisplayFlags = Field(default_factory=ProductInstanceDisplayFlags)

    def modifiers_map(self) -> dict[str, list[OptionInstance]]:
        return {m.modifier_type_id: list(m.options) for m in self.modifiers}


class Category(BaseModel):
    """A menu section listing product classes in display order."""

    id: str
    name: str
    description: str = ""
    ordinal: int = 0
    parent_id: Optional[str] = None
    product_ids: list[str] = Field(default_factory=list)
    disabled_fulfillments: list[str] = Field(default_factory=list)


class Catalog(BaseModel):
    modifier_types: list[ModifierType] = Field(default_factory=list)
    options: list[ModifierOption] = Field(default_factory=list)
    products: list[Product] = Field(default_factory=list)
    product_instances: list[ProductInstance] = Field(default_factory=list)
    product_instance_functions: list[ProductInstanceFunction] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    version: str = ""


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

class ProductConfiguration(BaseModel):
    """A customer's concrete selection of a product class.

    ``modifiers`` need not cover every modifier type of the product; an
    absent key means nothing is selected for that type.
    """

    product_id: str
    modifiers: dict[str, list[OptionInstance]] = Field(default_factory=dict)

    def options_for(self, modifier_type_id: str) -> list[OptionInstance]:
        return self.modifiers.get(modifier_type_id, [])

    def placed_option(self, modifier_type_id: str, option_id: str) -> Optional[OptionInstance]:
        return find_placed_option(self.options_for(modifier_type_id), option_id)

    def placement_of(self, modifier_type_id: str, option_id: str) -> OptionPlacement:
        placed = self.placed_option(modifier_type_id, option_id)
        return placed.placement if placed else OptionPlacement.NONE

    @classmethod
    def from_instance(cls, instance: ProductInstance) -> "ProductConfiguration":
        return cls(product_id=instance.product_id, modifiers=instance.modifiers_map())
