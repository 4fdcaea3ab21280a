"""Dataclass-based engine configuration.

Thresholds and rendering strings that are not part of the catalog live
here as frozen dataclasses. Engine functions accept an optional config
and fall back to ``EngineConfig.default()``.
"""

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AvailabilityConfig:
    """Lead time and slot stepping defaults."""

    additional_unit_lead_time: int = 5  # minutes per extra unit in the order
    default_time_step: int = 15  # minutes


@dataclass(frozen=True)
class NamingConfig:
    """Separators used when assembling product names."""

    option_separator: str = " + "
    split_separator: str = " | "
    empty_split_placeholder: str = "∅"


# ---------------------------------------------------------------------------
# Top-level engine config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineConfig:
    """Complete configuration for the rules engine.

    Usage::

        config = EngineConfig.from_env()
        info = compute_availability_info(fulfillments, day, ["pickup"], order_size=3, engine_config=config)
    """

    availability: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    naming: NamingConfig = field(default_factory=NamingConfig)

    @classmethod
    def default(cls) -> "EngineConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "STOREFRONT_") -> "EngineConfig":
        """Create config from environment variables.

        Example: STOREFRONT_ADDITIONAL_UNIT_LEAD_TIME=10
        """
        import os

        availability = {}
        lead_time = os.getenv(f"{prefix}ADDITIONAL_UNIT_LEAD_TIME")
        if lead_time:
            availability["additional_unit_lead_time"] = int(lead_time)
        time_step = os.getenv(f"{prefix}DEFAULT_TIME_STEP")
        if time_step:
            availability["default_time_step"] = int(time_step)

        return cls(availability=AvailabilityConfig(**availability))
