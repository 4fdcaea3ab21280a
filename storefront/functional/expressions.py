"""Evaluator for product instance function expressions.

The metadata engine only depends on the ``ExpressionEvaluator`` call
contract: ``evaluator(function_id, context) -> value``. The evaluator
must always return and must not call back into the metadata engine.
``CatalogFunctionEvaluator`` is the default implementation, resolving
function ids against the menu and walking the expression tree.
"""

from dataclasses import dataclass
from typing import Protocol, Union

from storefront.errors import CatalogIntegrityError
from storefront.menu import Menu
from storefront.models.catalog import ProductConfiguration
from storefront.models.enums import OptionPlacement, Side
from storefront.models.expressions import (
    AbstractExpression,
    ConstLiteralExpression,
    HasAnyOfModifierExpression,
    IfElseExpression,
    LogicalExpression,
    LogicalOperator,
    MetadataField,
    ModifierPlacementExpression,
    ProductMetadataExpression,
)

ExpressionValue = Union[bool, int, float, str, OptionPlacement]


@dataclass(frozen=True)
class ExpressionContext:
    product: ProductConfiguration
    menu: Menu


class ExpressionEvaluator(Protocol):
    def __call__(self, function_id: str, context: ExpressionContext) -> ExpressionValue:
        ...


# ---------------------------------------------------------------------------
# Tree walking
# ---------------------------------------------------------------------------

def _operand_b(stmt: LogicalExpression) -> AbstractExpression:
    if stmt.operand_b is None:
        raise CatalogIntegrityError(f"{stmt.operator.value} expression is missing its second operand")
    return stmt.operand_b


def _logical(stmt: LogicalExpression, context: ExpressionContext) -> bool:
    op = stmt.operator
    a = evaluate_expression(stmt.operand_a, context)
    if op == LogicalOperator.NOT:
        return not a
    if op == LogicalOperator.AND:
        return bool(a) and bool(evaluate_expression(_operand_b(stmt), context))
    if op == LogicalOperator.OR:
        return bool(a) or bool(evaluate_expression(_operand_b(stmt), context))

    b = evaluate_expression(_operand_b(stmt), context)
    if op == LogicalOperator.EQ:
        return a == b
    if op == LogicalOperator.NE:
        return a != b
    if op == LogicalOperator.GT:
        return a > b
    if op == LogicalOperator.GE:
        return a >= b
    if op == LogicalOperator.LT:
        return a < b
    return a <= b


def _product_metadata(stmt: ProductMetadataExpression, context: ExpressionContext) -> float:
    side_placements = (
        (OptionPlacement.LEFT, OptionPlacement.WHOLE)
        if stmt.location == Side.LEFT
        else (OptionPlacement.RIGHT, OptionPlacement.WHOLE)
    )
    total = 0.0
    for modifier_type_id, placed in context.product.modifiers.items():
        for option_instance in placed:
            if option_instance.placement not in side_placements:
                continue
            metadata = context.menu.option(modifier_type_id, option_instance.option_id).option.metadata
            if stmt.metadata_field == MetadataField.FLAVOR:
                total += metadata.flavor_factor
            else:
                total += metadata.bake_factor
    return total


def evaluate_expression(stmt: AbstractExpression, context: ExpressionContext) -> ExpressionValue:
    """Evaluate one expression node against a product selection."""
    if isinstance(stmt, ConstLiteralExpression):
        return stmt.value
    if isinstance(stmt, IfElseExpression):
        if evaluate_expression(stmt.test, context):
            return evaluate_expression(stmt.true_branch, context)
        return evaluate_expression(stmt.false_branch, context)
    if isinstance(stmt, LogicalExpression):
        return _logical(stmt, context)
    if isinstance(stmt, ModifierPlacementExpression):
        return context.product.placement_of(stmt.modifier_type_id, stmt.option_id)
    if isinstance(stmt, HasAnyOfModifierExpression):
        return any(
            p.placement != OptionPlacement.NONE
            for p in context.product.options_for(stmt.modifier_type_id)
        )
    if isinstance(stmt, ProductMetadataExpression):
        return _product_metadata(stmt, context)
    raise CatalogIntegrityError(f"Unsupported expression: {stmt!r}")


class CatalogFunctionEvaluator:
    """Evaluates catalog-defined product instance functions by id.

    Usage::

        evaluator = CatalogFunctionEvaluator()
        allowed = evaluator("fn_no_anchovies_on_gf", ExpressionContext(selection, menu))
    """

    def __call__(self, function_id: str, context: ExpressionContext) -> ExpressionValue:
        return evaluate_expression(context.menu.function(function_id).expression, context)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def expression_to_string(stmt: AbstractExpression, menu: Menu) -> str:
    """Human-readable rendering of an expression, for catalog authoring UIs."""
    if isinstance(stmt, ConstLiteralExpression):
        return str(stmt.value)
    if isinstance(stmt, IfElseExpression):
        return (
            f"IF({expression_to_string(stmt.test, menu)}) "
            f"{{ {expression_to_string(stmt.true_branch, menu)} }} "
            f"ELSE {{ {expression_to_string(stmt.false_branch, menu)} }}"
        )
    if isinstance(stmt, LogicalExpression):
        operand_a = expression_to_string(stmt.operand_a, menu)
        if stmt.operator == LogicalOperator.NOT or stmt.operand_b is None:
            return f"NOT ({operand_a})"
        return f"({operand_a} {stmt.operator.value} {expression_to_string(stmt.operand_b, menu)})"
    if isinstance(stmt, ModifierPlacementExpression):
        entry = menu.option(stmt.modifier_type_id, stmt.option_id)
        return f"{entry.modifier_type.name}.{entry.option.display_name}"
    if isinstance(stmt, HasAnyOfModifierExpression):
        return f"ANY {menu.modifier_entry(stmt.modifier_type_id).modifier_type.name}"
    if isinstance(stmt, ProductMetadataExpression):
        return f"{stmt.metadata_field.value}@{stmt.location.name}"
    raise CatalogIntegrityError(f"Unsupported expression: {stmt!r}")
