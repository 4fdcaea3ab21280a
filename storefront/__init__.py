"""
Storefront rules engine.

Computes what a customer can order and when:
- products: option enablement, instance matching, derived names and prices
- availability: operating hours, blocked-off time and order slots
- functional: catalog-defined enable functions
"""
