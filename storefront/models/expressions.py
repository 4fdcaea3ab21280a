"""Pydantic schemas for product instance function expression trees.

An expression is a closed tagged union keyed on ``discriminator``. The
catalog stores these trees on ``ProductInstanceFunction`` records; the
evaluator in ``storefront.functional.expressions`` walks them.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from storefront.models.enums import OptionPlacement, Side


class LogicalOperator(str, Enum):
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GE = "GE"
    LT = "LT"
    LE = "LE"


class MetadataField(str, Enum):
    FLAVOR = "FLAVOR"
    WEIGHT = "WEIGHT"


# ---------------------------------------------------------------------------
# Expression variants
# ---------------------------------------------------------------------------

class ConstLiteralExpression(BaseModel):
    discriminator: Literal["ConstLiteral"] = "ConstLiteral"
    value: Union[bool, int, float, str, OptionPlacement]


class IfElseExpression(BaseModel):
    discriminator: Literal["IfElse"] = "IfElse"
    test: AbstractExpression
    true_branch: AbstractExpression
    false_branch: AbstractExpression


class LogicalExpression(BaseModel):
    discriminator: Literal["Logical"] = "Logical"
    operator: LogicalOperator
    operand_a: AbstractExpression
    operand_b: Optional[AbstractExpression] = None


class ModifierPlacementExpression(BaseModel):
    """Placement of one option within the product being evaluated."""

    discriminator: Literal["ModifierPlacement"] = "ModifierPlacement"
    modifier_type_id: str
    option_id: str


class HasAnyOfModifierExpression(BaseModel):
    """True when any option of the modifier type is placed."""

    discriminator: Literal["HasAnyOfModifierType"] = "HasAnyOfModifierType"
    modifier_type_id: str


class ProductMetadataExpression(BaseModel):
    """Sum of bake (WEIGHT) or flavor factors placed on one half."""

    discriminator: Literal["ProductMetadata"] = "ProductMetadata"
    metadata_field: MetadataField
    location: Side


AbstractExpression = Annotated[
    Union[
        ConstLiteralExpression,
        IfElseExpression,
        LogicalExpression,
        ModifierPlacementExpression,
        HasAnyOfModifierExpression,
        ProductMetadataExpression,
    ],
    Field(discriminator="discriminator"),
]


class ProductInstanceFunction(BaseModel):
    id: str
    name: str
    expression: AbstractExpression


IfElseExpression.model_rebuild()
LogicalExpression.model_rebuild()
ProductInstanceFunction.model_rebuild()
