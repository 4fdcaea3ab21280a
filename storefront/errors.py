"""Exception types raised by the storefront rules engine.

Disable reasons are never raised: they are returned as part of the
computed metadata. Exceptions here mean the catalog snapshot itself is
unusable for the requested computation.
"""


class StorefrontError(Exception):
    """Base class for all engine errors."""


class CatalogIntegrityError(StorefrontError, ValueError):
    """The catalog is malformed or does not contain a referenced object.

    Examples: a product class without exactly one base instance, a
    selection referencing an unknown modifier option, or a match search
    that could not resolve both halves of a product.
    """


class UnknownDisplayModeError(StorefrontError, ValueError):
    """A modifier type's empty-display mode cannot be rendered."""
