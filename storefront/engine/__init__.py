"""Text rendering for product names, descriptions and option lists."""
from storefront.engine.template_engine import (
    EMPTY_RENDERERS,
    TEMPLATE_REGEX,
    display_options,
    option_name,
    render_empty_modifier,
    run_templating,
)

__all__ = [
    "EMPTY_RENDERERS",
    "TEMPLATE_REGEX",
    "display_options",
    "option_name",
    "render_empty_modifier",
    "run_templating",
]
