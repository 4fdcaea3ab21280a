"""
Storefront Availability: interval math and order time slots.

- intervals: union and stepped subtraction of minute intervals
- engine: per-day operating/blocked-off unions, first slot and slot sweep
"""
from storefront.availability.intervals import (
    Interval,
    compute_subtraction,
    compute_unions,
    interval_contains,
)
from storefront.availability.engine import (
    UNAVAILABLE,
    AvailabilityInfo,
    AvailabilitySlot,
    FulfillmentConfig,
    available_slots,
    blocked_off_for_services_and_date,
    compute_availability_info,
    compute_service_datetime,
    date_key,
    day_index,
    first_available_time,
    has_operating_hours_for_service,
    minutes_to_print_time,
    operating_hours_for_services_and_date,
    operating_hours_for_services_and_day,
    operating_times_for_date,
    resolve_against_blocked_off,
)

__all__ = [
    # Intervals
    "Interval",
    "compute_subtraction",
    "compute_unions",
    "interval_contains",
    # Engine
    "UNAVAILABLE",
    "AvailabilityInfo",
    "AvailabilitySlot",
    "FulfillmentConfig",
    "available_slots",
    "blocked_off_for_services_and_date",
    "compute_availability_info",
    "compute_service_datetime",
    "date_key",
    "day_index",
    "first_available_time",
    "has_operating_hours_for_service",
    "minutes_to_print_time",
    "operating_hours_for_services_and_date",
    "operating_hours_for_services_and_day",
    "operating_times_for_date",
    "resolve_against_blocked_off",
]
