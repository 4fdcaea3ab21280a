"""Fulfillment availability: operating hours, blocked-off time and slots.

Times of day are integer minutes from midnight. DST transitions are not
handled: a day is always treated as 1440 minutes.

Example::

    info = compute_availability_info(fulfillments, date(2026, 10, 19), ["pickup"])
    first = first_available_time(info, date(2026, 10, 19), datetime.now())
    slots = available_slots(info, date(2026, 10, 19), datetime.now())
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Mapping, Optional

from opentelemetry import trace
from pydantic import BaseModel, Field

from storefront.availability.intervals import Interval, compute_unions
from storefront.config import EngineConfig
from storefront.models.enums import DayIndex

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

UNAVAILABLE = -1
MINUTES_PER_DAY = 1440


# ---------------------------------------------------------------------------
# Fulfillment configuration
# ---------------------------------------------------------------------------

class FulfillmentConfig(BaseModel):
    """Operating schedule of one fulfillment (pickup, delivery, dine-in...).

    ``operating_hours`` is indexed by ``DayIndex`` (0 = Sunday).
    ``special_hours`` and ``blocked_off`` are keyed by ISO date.
    """

    id: str
    operating_hours: list[list[Interval]] = Field(default_factory=lambda: [[] for _ in range(7)])
    special_hours: dict[str, list[Interval]] = Field(default_factory=dict)
    blocked_off: dict[str, list[Interval]] = Field(default_factory=dict)
    time_step: int = Field(15, gt=0)
    lead_time: int = Field(0, ge=0)


FulfillmentConfigMap = Mapping[str, FulfillmentConfig]


@dataclass(frozen=True)
class AvailabilityInfo:
    blocked_off_union: list[Interval] = field(default_factory=list)
    operating_intervals: list[Interval] = field(default_factory=list)
    min_time_step: int = 15
    lead_time: int = 0

    def __post_init__(self):
        if self.min_time_step <= 0:
            raise ValueError(f"min_time_step must be positive, got {self.min_time_step}")


@dataclass(frozen=True)
class AvailabilitySlot:
    value: int
    disabled: bool = False


def date_key(day: date) -> str:
    return day.isoformat()


def day_index(day: date) -> DayIndex:
    return DayIndex(day.isoweekday() % 7)


# ---------------------------------------------------------------------------
# Per-day unions
# ---------------------------------------------------------------------------

def blocked_off_for_services_and_date(
    config: FulfillmentConfigMap,
    services: list[str],
    iso_date: str,
) -> list[Interval]:
    """Union of blocked-off intervals of every listed service on a date."""
    blocked: list[Interval] = []
    for fulfillment_id in services:
        blocked.extend(config[fulfillment_id].blocked_off.get(iso_date, []))
    return compute_unions(blocked)


def operating_hours_for_services_and_day(
    config: FulfillmentConfigMap,
    services: list[str],
    day_of_week: DayIndex,
) -> list[Interval]:
    """Union of the weekly operating hours of every listed service."""
    hours: list[Interval] = []
    for fulfillment_id in services:
        hours.extend(config[fulfillment_id].operating_hours[day_of_week])
    return compute_unions(hours)


def operating_hours_for_services_and_date(
    config: FulfillmentConfigMap,
    services: list[str],
    iso_date: str,
    day_of_week: DayIndex,
) -> list[Interval]:
    """Like the weekly union, but a service's special hours replace its weekly hours on that date."""
    special = [f for f in services if iso_date in config[f].special_hours]
    weekly = [f for f in services if f not in special]
    hours = operating_hours_for_services_and_day(config, weekly, day_of_week)
    for fulfillment_id in special:
        hours.extend(config[fulfillment_id].special_hours[iso_date])
    return compute_unions(hours)


def compute_availability_info(
    config: FulfillmentConfigMap,
    day: date,
    services: list[str],
    order_size: int = 1,
    cart_based_lead_time: int = 0,
    engine_config: Optional[EngineConfig] = None,
) -> AvailabilityInfo:
    """Assemble everything slot computation needs for one date.

    The per-unit lead time and the cart-based lead time do not stack:
    the larger of the two wins.
    """
    engine_config = engine_config or EngineConfig.default()
    iso_date = date_key(day)
    size = max(order_size, 1)
    min_time_step = min(
        (config[f].time_step for f in services),
        default=engine_config.availability.default_time_step,
    )
    min_lead_time = min((config[f].lead_time for f in services), default=0)
    lead_time = max(
        min_lead_time + (size - 1) * engine_config.availability.additional_unit_lead_time,
        cart_based_lead_time,
    )
    return AvailabilityInfo(
        blocked_off_union=blocked_off_for_services_and_date(config, services, iso_date),
        operating_intervals=operating_hours_for_services_and_date(
            config, services, iso_date, day_index(day)
        ),
        min_time_step=min_time_step,
        lead_time=lead_time,
    )


# ---------------------------------------------------------------------------
# Slot resolution
# ---------------------------------------------------------------------------

def resolve_against_blocked_off(
    blocked_off: list[Interval],
    operating_intervals: list[Interval],
    start: int,
    step: int,
) -> int:
    """First time at or after ``start`` that is open and not blocked off.

    Blocked-off time pushes the candidate to ``blocked_end + step``; a
    candidate pushed past an operating interval moves on to the next one.
    Returns ``UNAVAILABLE`` when nothing is left on the day.
    """
    pushed = start
    for op_start, op_end in operating_intervals:
        pushed = max(pushed, op_start)
        if pushed > op_end:
            continue
        moved = True
        while moved:
            moved = False
            for bo_start, bo_end in blocked_off:
                if bo_start <= pushed <= bo_end:
                    pushed = bo_end + step
                    moved = True
        if pushed <= op_end:
            return pushed
    return UNAVAILABLE


def first_available_time(info: AvailabilityInfo, day: date, now: datetime) -> int:
    """Earliest selectable minute on ``day``, or ``UNAVAILABLE``."""
    if not info.operating_intervals:
        return UNAVAILABLE
    earliest = now + timedelta(minutes=info.lead_time)
    if day == earliest.date():
        minutes_from_midnight = earliest.hour * 60 + earliest.minute
        if minutes_from_midnight > info.operating_intervals[0][0]:
            clamped = math.ceil(minutes_from_midnight / info.min_time_step) * info.min_time_step
            return resolve_against_blocked_off(
                info.blocked_off_union, info.operating_intervals, clamped, info.min_time_step
            )
    if day < earliest.date():
        return UNAVAILABLE
    return resolve_against_blocked_off(
        info.blocked_off_union,
        info.operating_intervals,
        info.operating_intervals[0][0],
        info.min_time_step,
    )


def available_slots(info: AvailabilityInfo, day: date, now: datetime) -> list[AvailabilitySlot]:
    """Every selectable time on ``day``, stepping by ``min_time_step``."""
    with tracer.start_as_current_span(
        "availability.available_slots",
        attributes={"availability.date": date_key(day)},
    ) as span:
        earliest = first_available_time(info, day, now)
        slots: list[AvailabilitySlot] = []
        if earliest == UNAVAILABLE:
            span.set_attribute("availability.slot_count", 0)
            return slots
        for op_start, op_end in info.operating_intervals:
            earliest = max(op_start, earliest)
            while earliest != UNAVAILABLE and earliest <= op_end:
                slots.append(AvailabilitySlot(value=earliest))
                earliest = resolve_against_blocked_off(
                    info.blocked_off_union,
                    info.operating_intervals,
                    earliest + info.min_time_step,
                    info.min_time_step,
                )
            if earliest == UNAVAILABLE:
                break
        span.set_attribute("availability.slot_count", len(slots))
        logger.debug("Computed %d slots for %s", len(slots), date_key(day))
        return slots


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def operating_times_for_date(operating_ranges: list[Interval], step: int, lead_time_min: int) -> list[int]:
    """Every stepped time in the ranges, starting no earlier than ``lead_time_min``."""
    times: list[int] = []
    for range_start, range_end in operating_ranges:
        earliest = max(lead_time_min, range_start)
        while earliest <= range_end:
            times.append(earliest)
            earliest += step
    return times


def minutes_to_print_time(minutes: int) -> str:
    """Format minutes from midnight as ``8:05AM``; negative input renders ``ERROR``."""
    if minutes < 0:
        return "ERROR"
    hour, minute = divmod(minutes, 60)
    meridian = "PM" if hour >= 12 else "AM"
    print_hour = 12 if hour % 12 == 0 else hour % 12
    return f"{print_hour}:{minute:02d}{meridian}"


def compute_service_datetime(day: date, minutes: int) -> datetime:
    return datetime(day.year, day.month, day.day) + timedelta(minutes=minutes)


def has_operating_hours_for_service(config: FulfillmentConfigMap, fulfillment_id: str) -> bool:
    """True if the service has at least one valid weekly operating interval."""
    fulfillment = config.get(fulfillment_id)
    if fulfillment is None:
        return False
    return any(
        start < end and start >= 0 and end <= MINUTES_PER_DAY
        for day_hours in fulfillment.operating_hours
        for start, end in day_hours
    )
