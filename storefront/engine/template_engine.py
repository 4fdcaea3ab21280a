"""Template engine: turns modifier selections into customer-facing text.

Covers three jobs:
- rendering an unfilled modifier type through its empty-display mode
- substituting ``{token}`` placeholders in product names and descriptions
- building the Whole / Left / Right option sections shown on a product

Empty-display renderers live in a read-only table keyed by ``DisplayAs``. OMIT is
never rendered: the metadata engine leaves omitted placeholders out.
"""

import re
from dataclasses import replace
from types import MappingProxyType
from typing import Callable, Mapping

from storefront.errors import UnknownDisplayModeError
from storefront.menu import Menu, ModifierEntry
from storefront.models.catalog import Product
from storefront.models.enums import DisplayAs
from storefront.models.metadata import ModifierDisplayList, ModifierOptionRef, ProductMetadata

TEMPLATE_REGEX = re.compile(r"\{[A-Za-z0-9]+\}")


# ---------------------------------------------------------------------------
# Empty modifier renderers
# ---------------------------------------------------------------------------

def render_your_choice_of(entry: ModifierEntry) -> str:
    modifier_type = entry.modifier_type
    return f"Your choice of {modifier_type.display_name or modifier_type.name}"


def render_list_choices(entry: ModifierEntry) -> str:
    choices = [o.option.display_name for o in entry.options_list]
    if len(choices) < 3:
        return " or ".join(choices)
    return f"{', '.join(choices[:-1])}, or {choices[-1]}"


EmptyModifierRenderer = Callable[[ModifierEntry], str]

EMPTY_RENDERERS: Mapping[DisplayAs, EmptyModifierRenderer] = MappingProxyType({
    DisplayAs.YOUR_CHOICE_OF: render_your_choice_of,
    DisplayAs.LIST_CHOICES: render_list_choices,
})


def render_empty_modifier(entry: ModifierEntry) -> str:
    mode = entry.modifier_type.display_flags.empty_display_as
    renderer = EMPTY_RENDERERS.get(mode)
    if renderer is None:
        raise UnknownDisplayModeError(
            f"Unknown value for empty_display_as flag: {mode} on {entry.modifier_type.id}"
        )
    return renderer(entry)


# ---------------------------------------------------------------------------
# Option names
# ---------------------------------------------------------------------------

def option_name(menu: Menu, ref: ModifierOptionRef, omit_filtered: bool = False) -> str:
    """Name of a ``(modifier_type_id, option_id)`` entry.

    An empty option id is an unfilled placeholder and renders through the
    type's empty-display mode.
    """
    modifier_type_id, option_id = ref
    if option_id == "":
        return render_empty_modifier(menu.modifier_entry(modifier_type_id))
    option = menu.option(modifier_type_id, option_id).option
    if omit_filtered and option.display_flags.omit_from_name:
        return ""
    return option.display_name


def display_options(menu: Menu, exhaustive_modifiers: ModifierDisplayList) -> list[tuple[str, str]]:
    """Customer-facing option sections, e.g. ``[("Whole", "Mushroom + Olive")]``."""
    sections = []
    for label, refs in (
        ("Whole", exhaustive_modifiers.whole),
        ("Left", exhaustive_modifiers.left),
        ("Right", exhaustive_modifiers.right),
    ):
        if refs:
            names = [n for n in (option_name(menu, ref, omit_filtered=True) for ref in refs) if n]
            sections.append((label, " + ".join(names)))
    return sections


# ---------------------------------------------------------------------------
# Templating
# ---------------------------------------------------------------------------

def run_templating(product: Product, menu: Menu, metadata: ProductMetadata) -> ProductMetadata:
    """Replace ``{token}`` placeholders in the name and description.

    A token matching a modifier type's ``template_string`` becomes the
    joined names of that type's whole-placed options, wrapped in the
    type's prefix and suffix. Any other token becomes an empty string.
    """
    name_tokens = set(TEMPLATE_REGEX.findall(metadata.name))
    description_tokens = set(TEMPLATE_REGEX.findall(metadata.description))
    if not name_tokens and not description_tokens:
        return metadata

    values: dict[str, str] = {}
    for ref in product.modifiers:
        flags = menu.modifier_entry(ref.modifier_type_id).modifier_type.display_flags
        if not flags.template_string:
            continue
        token = f"{{{flags.template_string}}}"
        if token not in name_tokens and token not in description_tokens:
            continue
        names = [
            n for n in (
                option_name(menu, whole_ref)
                for whole_ref in metadata.exhaustive_modifiers.whole
                if whole_ref[0] == ref.modifier_type_id
            )
            if n
        ]
        if names:
            values[token] = (
                flags.non_empty_group_prefix
                + flags.multiple_item_separator.join(names)
                + flags.non_empty_group_suffix
            )

    def substitute(match: re.Match) -> str:
        return values.get(match.group(0), "")

    return replace(
        metadata,
        name=TEMPLATE_REGEX.sub(substitute, metadata.name),
        description=TEMPLATE_REGEX.sub(substitute, metadata.description),
    )
