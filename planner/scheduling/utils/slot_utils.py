"""
Interval arithmetic for computing free windows within a day.
"""

from typing import Iterable, List
from ..core.time_slot import TimeInterval


def subtract_interval(windows: Iterable[TimeInterval], blocked: TimeInterval) -> List[TimeInterval]:
    """
    Remove a blocked interval from a set of free windows.

    Each overlapping window is split into at most two remainders; windows that
    end up empty are dropped. A degenerate block (end <= start) leaves the
    windows untouched.
    """
    windows = list(windows)
    if not blocked.is_valid():
        return windows

    remaining = []
    for window in windows:
        if blocked.end <= window.start or blocked.start >= window.end:
            remaining.append(window)
            continue
        if blocked.start > window.start:
            remaining.append(TimeInterval(window.start, min(blocked.start, window.end)))
        if blocked.end < window.end:
            remaining.append(TimeInterval(max(blocked.end, window.start), window.end))

    return [w for w in remaining if w.is_valid()]


def free_windows(workday: TimeInterval, blocks: Iterable[TimeInterval]) -> List[TimeInterval]:
    """Fold every block out of the workday and return the free windows in ascending order."""
    windows = [workday] if workday.is_valid() else []
    for block in sorted(blocks):
        windows = subtract_interval(windows, block)
    windows.sort()
    return windows
