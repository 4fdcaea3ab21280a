"""Pizzeria vertical: complete reference catalog.

Demonstrates every engine feature working together in one domain:
- single-select size and multi-select, splittable toppings
- bake and flavor capacity limits with a split differential
- a catalog enable function (anchovies on large pies only)
- pickup and delivery fulfillments with weekly hours and blocked-off time
- dataclass engine configuration
"""
