"""Enable-function evaluation for catalog expressions."""
from storefront.functional.expressions import (
    CatalogFunctionEvaluator,
    ExpressionContext,
    ExpressionEvaluator,
    ExpressionValue,
    evaluate_expression,
    expression_to_string,
)

__all__ = [
    "CatalogFunctionEvaluator",
    "ExpressionContext",
    "ExpressionEvaluator",
    "ExpressionValue",
    "evaluate_expression",
    "expression_to_string",
]
