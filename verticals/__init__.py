"""Reference verticals built on the storefront rules engine."""
