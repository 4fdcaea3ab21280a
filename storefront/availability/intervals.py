"""Interval arithmetic over closed integer-minute intervals.

An interval is a ``(start, end)`` tuple with ``start <= end``, in minutes
from midnight (or absolute minutes for multi-day ranges). All functions
are pure and return new lists.
"""

Interval = tuple[int, int]


def compute_unions(intervals: list[Interval]) -> list[Interval]:
    """Sort by start and merge overlapping or touching intervals.

    Example::

        compute_unions([(600, 660), (480, 620), (700, 720)])
        # [(480, 660), (700, 720)]
    """
    if not intervals:
        return []
    ordered = sorted(intervals, key=lambda iv: iv[0])
    unions = [ordered[0]]
    for start, end in ordered[1:]:
        current_start, current_end = unions[-1]
        if start <= current_end:
            unions[-1] = (current_start, max(current_end, end))
        else:
            unions.append((start, end))
    return unions


def compute_subtraction(a: list[Interval], b: list[Interval], step: int) -> list[Interval]:
    """Remove every portion of ``a`` covered by ``b``.

    Both inputs must be sorted by start. Remainders are aligned to
    ``step``: a cut at minute ``p`` leaves the remainder starting at
    ``p + step`` (or ending at ``p - step``). Empty remainders are dropped.
    """
    if not a or not b:
        return list(a)

    result: list[Interval] = []
    for a_start, a_end in a:
        cursor = a_start
        eclipsed = False
        for b_start, b_end in b:
            if b_end < cursor:
                continue
            if b_start > a_end:
                break
            if b_start <= cursor:
                if b_end < a_end:
                    # clipped from the beginning
                    cursor = min(b_end + step, a_end)
                else:
                    eclipsed = True
                    break
            else:
                result.append((cursor, b_start - step))
                if b_end < a_end:
                    # bisected
                    cursor = b_end + step
                else:
                    eclipsed = True
                    break
        if not eclipsed:
            result.append((cursor, a_end))
    return [iv for iv in result if iv[0] <= iv[1]]


def interval_contains(interval: Interval, value: int) -> bool:
    return interval[0] <= value <= interval[1]
