"""Read-only index over a catalog snapshot.

``build_menu`` orders everything the engines depend on:

- options of a modifier type by ``ordinal``; the resulting position is the
  option's index in match matrices,
- a product's modifier refs by the referenced type's ``ordinal``,
- a product's instances in scan order: non-base instances by ascending
  ``ordinal`` (most specific first), the base instance last.

The scan order is a precondition of product naming: the first instance
that matches a half wins, so the generic base product must come last.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping

from storefront.errors import CatalogIntegrityError
from storefront.models.catalog import (
    Catalog,
    Category,
    ModifierOption,
    ModifierType,
    Product,
    ProductConfiguration,
    ProductInstance,
)
from storefront.models.expressions import ProductInstanceFunction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionEntry:
    option: ModifierOption
    modifier_type: ModifierType
    index: int


@dataclass(frozen=True)
class ModifierEntry:
    modifier_type: ModifierType
    options_list: tuple[OptionEntry, ...]
    options: Mapping[str, OptionEntry]


@dataclass(frozen=True)
class ProductEntry:
    product: Product
    base_id: str
    instances_list: tuple[ProductInstance, ...]
    instances: Mapping[str, ProductInstance]

    @property
    def base_instance(self) -> ProductInstance:
        return self.instances[self.base_id]


@dataclass(frozen=True)
class Menu:
    modifiers: Mapping[str, ModifierEntry]
    products: Mapping[str, ProductEntry]
    functions: Mapping[str, ProductInstanceFunction]
    excluded_products: Mapping[str, str] = field(default_factory=dict)
    categories: Mapping[str, Category] = field(default_factory=dict)
    version: str = ""

    def modifier_entry(self, modifier_type_id: str) -> ModifierEntry:
        entry = self.modifiers.get(modifier_type_id)
        if entry is None:
            raise CatalogIntegrityError(f"Unknown modifier type: {modifier_type_id}")
        return entry

    def option(self, modifier_type_id: str, option_id: str) -> OptionEntry:
        entry = self.modifier_entry(modifier_type_id).options.get(option_id)
        if entry is None:
            raise CatalogIntegrityError(
                f"Unknown modifier option {option_id} for modifier type {modifier_type_id}"
            )
        return entry

    def product_entry(self, product_id: str) -> ProductEntry:
        entry = self.products.get(product_id)
        if entry is None:
            reason = self.excluded_products.get(product_id, "not in catalog")
            raise CatalogIntegrityError(f"Product {product_id} is unavailable: {reason}")
        return entry

    def function(self, function_id: str) -> ProductInstanceFunction:
        func = self.functions.get(function_id)
        if func is None:
            raise CatalogIntegrityError(f"Unknown product instance function: {function_id}")
        return func

    def category(self, category_id: str) -> Category:
        category = self.categories.get(category_id)
        if category is None:
            raise CatalogIntegrityError(f"Unknown category: {category_id}")
        return category


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def _build_modifiers(catalog: Catalog) -> dict[str, ModifierEntry]:
    options_by_type: dict[str, list[ModifierOption]] = {}
    for option in catalog.options:
        options_by_type.setdefault(option.modifier_type_id, []).append(option)

    modifiers = {}
    for modifier_type in catalog.modifier_types:
        ordered = sorted(options_by_type.get(modifier_type.id, []), key=lambda o: o.ordinal)
        options_list = tuple(
            OptionEntry(option=o, modifier_type=modifier_type, index=idx)
            for idx, o in enumerate(ordered)
        )
        modifiers[modifier_type.id] = ModifierEntry(
            modifier_type=modifier_type,
            options_list=options_list,
            options={e.option.id: e for e in options_list},
        )
    return modifiers


def _build_product(
    product: Product,
    instances: list[ProductInstance],
    modifiers: Mapping[str, ModifierEntry],
) -> ProductEntry:
    bases = [pi for pi in instances if pi.is_base]
    if len(bases) != 1:
        raise CatalogIntegrityError(
            f"Product {product.id} has {len(bases)} base instances, expected exactly one"
        )
    for ref in product.modifiers:
        if ref.modifier_type_id not in modifiers:
            raise CatalogIntegrityError(
                f"Product {product.id} references unknown modifier type {ref.modifier_type_id}"
            )

    ordered_refs = sorted(
        product.modifiers,
        key=lambda ref: modifiers[ref.modifier_type_id].modifier_type.ordinal,
    )
    scan_order = tuple(sorted(instances, key=lambda pi: (pi.is_base, pi.ordinal)))
    return ProductEntry(
        product=product.model_copy(update={"modifiers": ordered_refs}),
        base_id=bases[0].id,
        instances_list=scan_order,
        instances={pi.id: pi for pi in scan_order},
    )


def build_menu(catalog: Catalog) -> Menu:
    """Index a catalog snapshot for the metadata and matching engines.

    Products failing integrity checks are left out of ``Menu.products``
    and reported in ``Menu.excluded_products``.
    """
    modifiers = _build_modifiers(catalog)

    instances_by_product: dict[str, list[ProductInstance]] = {}
    for pi in catalog.product_instances:
        instances_by_product.setdefault(pi.product_id, []).append(pi)

    products: dict[str, ProductEntry] = {}
    excluded: dict[str, str] = {}
    for product in catalog.products:
        try:
            products[product.id] = _build_product(
                product, instances_by_product.get(product.id, []), modifiers
            )
        except CatalogIntegrityError as exc:
            logger.warning("Excluding product %s from menu: %s", product.id, exc)
            excluded[product.id] = str(exc)

    return Menu(
        modifiers=modifiers,
        products=products,
        functions={f.id: f for f in catalog.product_instance_functions},
        excluded_products=excluded,
        categories={c.id: c for c in catalog.categories},
        version=catalog.version,
    )


def does_product_exist_in_menu(selection: ProductConfiguration, menu: Menu) -> bool:
    """Check that every object the selection references exists.

    Does not check availability or orderability.
    """
    if selection.product_id not in menu.products:
        return False
    for modifier_type_id, placed in selection.modifiers.items():
        entry = menu.modifiers.get(modifier_type_id)
        if entry is None:
            return False
        if any(p.option_id not in entry.options for p in placed):
            return False
    return True


def select_product_instances_in_category(category: Category, menu: Menu) -> list[ProductInstance]:
    """Instances of every product class listed in the category.

    Products are taken in the category's order and each product's
    instances in scan order. Products missing from the menu are skipped.
    """
    instances: list[ProductInstance] = []
    for product_id in category.product_ids:
        product_entry = menu.products.get(product_id)
        if product_entry is not None:
            instances.extend(product_entry.instances_list)
    return instances
