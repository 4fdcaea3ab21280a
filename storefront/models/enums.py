"""Enumerations shared by the catalog, the selection and the derived metadata."""

from enum import Enum, IntEnum


class OptionPlacement(IntEnum):
    """Where a modifier option sits on a (possibly two-sided) product.

    The integer values index the placement lookup tables.
    """

    NONE = 0
    LEFT = 1
    RIGHT = 2
    WHOLE = 3


class OptionQualifier(str, Enum):
    REGULAR = "REGULAR"
    LITE = "LITE"
    HEAVY = "HEAVY"
    OTS = "OTS"


class Side(IntEnum):
    LEFT = 0
    RIGHT = 1


class MatchLevel(IntEnum):
    """How closely a configuration matches a catalog instance on one half."""

    NO_MATCH = 0
    AT_LEAST = 1
    EXACT_MATCH = 2


class DisplayAs(str, Enum):
    """Rendering of a modifier type that has nothing selected."""

    OMIT = "OMIT"
    YOUR_CHOICE_OF = "YOUR_CHOICE_OF"
    LIST_CHOICES = "LIST_CHOICES"


class DisableReason(str, Enum):
    ENABLED = "ENABLED"
    DISABLED_BLANKET = "DISABLED_BLANKET"
    DISABLED_TIME = "DISABLED_TIME"
    DISABLED_WEIGHT = "DISABLED_WEIGHT"
    DISABLED_FLAVORS = "DISABLED_FLAVORS"
    DISABLED_SPLIT_DIFFERENTIAL = "DISABLED_SPLIT_DIFFERENTIAL"
    DISABLED_NO_SPLITTING = "DISABLED_NO_SPLITTING"
    DISABLED_FUNCTION = "DISABLED_FUNCTION"
    DISABLED_FULFILLMENT_TYPE = "DISABLED_FULFILLMENT_TYPE"


class DayIndex(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
