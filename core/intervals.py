from typing import Any, Iterable, List, Optional, Sequence, Tuple

"""
Interval algebra shared by the coverage analyzer and the change-tracked store.

All intervals are half-open `[start, end)`. Bounds can be any totally ordered
values (datetimes, numbers). Callers are responsible for passing well-formed
intervals (`start < end`); nothing here raises on malformed input.
"""


def overlaps(a_start: Any, a_end: Any, b_start: Any, b_end: Any) -> bool:
    """Return True if `[a_start, a_end)` and `[b_start, b_end)` intersect.

    Touching intervals (`a_end == b_start`) do not overlap.
    """
    return a_start < b_end and b_start < a_end


def find_overlapping(
    resource_id: str,
    start: Any,
    end: Any,
    assignments: Iterable,
    exclude_assignment_id: Optional[str] = None,
) -> list:
    """
    Return every assignment of `resource_id` whose period overlaps `[start, end)`.

    Args:
        resource_id (str): The resource being checked.
        start: Start of the proposed period.
        end: End of the proposed period (exclusive).
        assignments (Iterable[Assignment]): Assignments to search, in any order.
        exclude_assignment_id (str, optional): Id to skip, used when an
            assignment is validated against the others during an edit.

    Returns:
        list[Assignment]: The overlapping assignments, in input order.
    """
    return [
        a
        for a in assignments
        if a.resourceId == resource_id
        and not (exclude_assignment_id and a.id == exclude_assignment_id)
        and overlaps(start, end, a.start, a.end)
    ]


def can_create_assignment(
    resource_id: str,
    start: Any,
    end: Any,
    assignments: Iterable,
    allow_overlap: bool = False,
) -> Tuple[bool, list]:
    """Check whether a resource is free for `[start, end)`; returns `(valid, conflicts)`."""
    if allow_overlap:
        return True, []

    conflicts = find_overlapping(resource_id, start, end, assignments)
    return len(conflicts) == 0, conflicts


def merge_intervals(intervals: Iterable[Sequence[Any]]) -> List[Tuple[Any, Any]]:
    """
    Collapse intervals into maximal non-overlapping runs.

    Intervals are sorted by start, then folded whenever the next one starts at
    or before the end of the current run, so touching intervals are merged too.
    """
    merged: List[Tuple[Any, Any]] = []
    for start, end in sorted(intervals, key=lambda iv: iv[0]):
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, end if end > last_end else last_end)
        else:
            merged.append((start, end))
    return merged


def clip(start: Any, end: Any, window_start: Any, window_end: Any) -> Optional[Tuple[Any, Any]]:
    """Intersect `[start, end)` with a window; None when the intersection is empty."""
    lo = start if start > window_start else window_start
    hi = end if end < window_end else window_end
    if lo < hi:
        return lo, hi
    return None
