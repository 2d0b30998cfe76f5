"""
Workload pacing: how many minutes of work a given day may take.
"""

from typing import Optional
from ..core.constants import (
    LOAD_RATIOS, INTENSITY_MULTIPLIERS, MIN_EFFECTIVE_DAILY_MINUTES, MIN_EFFECTIVE_TASK_MINUTES
)


class DayBudget:
    """Result of pacing one working day."""
    __slots__ = ("minutes", "risk_ratio", "cram", "effective_daily_minutes", "ideal_minutes")

    def __init__(self, minutes: int, risk_ratio: float, cram: bool, effective_daily_minutes: int, ideal_minutes: float):
        self.minutes = minutes
        self.risk_ratio = risk_ratio
        self.cram = cram
        self.effective_daily_minutes = effective_daily_minutes
        self.ideal_minutes = ideal_minutes

    def __repr__(self):
        mode = "cram" if self.cram else "paced"
        return f"DayBudget({self.minutes}min, risk={self.risk_ratio:.2f}, {mode})"


def _mode_key(load_mode) -> str:
    return getattr(load_mode, "value", load_mode) or "medium"


def get_load_ratio(load_mode) -> float:
    """Capacity ratio: relaxed 0.6, medium 0.8, marathon 1.0."""
    return LOAD_RATIOS.get(_mode_key(load_mode), LOAD_RATIOS["medium"])


def get_intensity_multiplier(load_mode) -> float:
    """Pacing multiplier: relaxed 0.75, medium 1.0, marathon 1.4."""
    return INTENSITY_MULTIPLIERS.get(_mode_key(load_mode), INTENSITY_MULTIPLIERS["medium"])


def calculate_effective_daily_minutes(daily_max_hours: float, load_mode) -> int:
    return max(MIN_EFFECTIVE_DAILY_MINUTES, round(daily_max_hours * 60 * get_load_ratio(load_mode)))


def calculate_effective_task_minutes(max_task_hours_per_day: float, load_mode) -> int:
    return max(MIN_EFFECTIVE_TASK_MINUTES, round(max_task_hours_per_day * 60 * get_load_ratio(load_mode)))


def calculate_risk_ratio(remaining_minutes: int, remaining_days: int, effective_daily_minutes: int) -> float:
    """Required vs. available capacity until the end of the range. >= 1 means every day must be full."""
    capacity = remaining_days * effective_daily_minutes
    if capacity <= 0:
        return float("inf")
    return remaining_minutes / capacity


def calculate_daily_budget(remaining_minutes: int, remaining_days: int, daily_max_hours: float,
                           load_mode, block_minutes: int) -> Optional[DayBudget]:
    """
    Budget for today given the work left across all tasks and the working
    days left (today included). Returns None when there is nothing left to
    plan or no day left to plan it on.

    When the remaining work needs full capacity every day (risk >= 1) the
    budget is the full effective capacity. Otherwise the ideal share, scaled
    by the intensity mode, is kept between half and all of that capacity.
    The budget never drops below one block.
    """
    if remaining_minutes <= 0 or remaining_days <= 0:
        return None

    ideal = remaining_minutes / remaining_days
    base_target = ideal * get_intensity_multiplier(load_mode)
    effective_daily = calculate_effective_daily_minutes(daily_max_hours, load_mode)
    risk = calculate_risk_ratio(remaining_minutes, remaining_days, effective_daily)

    cram = risk >= 1
    if cram:
        budget = effective_daily
    else:
        budget = min(max(base_target, effective_daily * 0.5), effective_daily)

    budget = max(round(budget), block_minutes)
    return DayBudget(budget, risk, cram, effective_daily, ideal)
