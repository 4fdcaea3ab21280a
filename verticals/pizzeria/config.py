"""Pizzeria vertical configuration.

Re-exports the EngineConfig from the storefront package, with the
pizzeria's own per-pie lead time.
"""

from storefront.config import AvailabilityConfig, EngineConfig

# Default configuration instance
config = EngineConfig(availability=AvailabilityConfig(additional_unit_lead_time=5, default_time_step=15))
