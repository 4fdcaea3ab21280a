"""
Storefront models: catalog input schemas and derived metadata.

- catalog: pydantic schemas for the catalog snapshot and the selection
- expressions: pydantic tagged-union schemas for enable functions
- metadata: frozen dataclasses returned by the engines
"""
from storefront.models.enums import (
    DayIndex,
    DisableReason,
    DisplayAs,
    MatchLevel,
    OptionPlacement,
    OptionQualifier,
    Side,
)
from storefront.models.expressions import (
    AbstractExpression,
    ConstLiteralExpression,
    HasAnyOfModifierExpression,
    IfElseExpression,
    LogicalExpression,
    LogicalOperator,
    MetadataField,
    ModifierPlacementExpression,
    ProductInstanceFunction,
    ProductMetadataExpression,
)
from storefront.models.catalog import (
    Catalog,
    Category,
    ModifierInstance,
    ModifierOption,
    ModifierOptionDisplayFlags,
    ModifierOptionMetadata,
    ModifierType,
    ModifierTypeDisplayFlags,
    Money,
    OptionInstance,
    Product,
    ProductConfiguration,
    ProductDisplayFlags,
    ProductInstance,
    ProductInstanceDisplayFlags,
    ProductModifierRef,
    TimeInterval,
)
from storefront.models.metadata import (
    ENABLED,
    CompareResult,
    EnableState,
    ModifierDisplayList,
    ModifierMetadataEntry,
    ModifierOptionRef,
    OptionMetadataEntry,
    ProductMetadata,
)

__all__ = [
    # Enums
    "DayIndex",
    "DisableReason",
    "DisplayAs",
    "MatchLevel",
    "OptionPlacement",
    "OptionQualifier",
    "Side",
    # Expressions
    "AbstractExpression",
    "ConstLiteralExpression",
    "HasAnyOfModifierExpression",
    "IfElseExpression",
    "LogicalExpression",
    "LogicalOperator",
    "MetadataField",
    "ModifierPlacementExpression",
    "ProductInstanceFunction",
    "ProductMetadataExpression",
    # Catalog
    "Catalog",
    "Category",
    "ModifierInstance",
    "ModifierOption",
    "ModifierOptionDisplayFlags",
    "ModifierOptionMetadata",
    "ModifierType",
    "ModifierTypeDisplayFlags",
    "Money",
    "OptionInstance",
    "Product",
    "ProductConfiguration",
    "ProductDisplayFlags",
    "ProductInstance",
    "ProductInstanceDisplayFlags",
    "ProductModifierRef",
    "TimeInterval",
    # Metadata
    "ENABLED",
    "CompareResult",
    "EnableState",
    "ModifierDisplayList",
    "ModifierMetadataEntry",
    "ModifierOptionRef",
    "OptionMetadataEntry",
    "ProductMetadata",
]
