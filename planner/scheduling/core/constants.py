"""
Constants shared across the scheduling engine.
"""

from datetime import time

# Allocation limits (minutes)
MIN_SLOT_MINUTES = 10
MIN_PHASE_MINUTES = 10
MIN_EFFECTIVE_DAILY_MINUTES = 30
MIN_EFFECTIVE_TASK_MINUTES = 15

# Deadline is the last minute of the deadline date
DEADLINE_TIME = time(23, 59)

# Workday fallbacks when the configured bounds don't parse
FALLBACK_WORKDAY_START = 8 * 60
FALLBACK_WORKDAY_END = 20 * 60

# Capacity ratio applied to the daily / per-task caps
LOAD_RATIOS = {
    "relaxed": 0.6,
    "medium": 0.8,
    "marathon": 1.0,
}

# Pacing multiplier applied to the ideal per-day share
INTENSITY_MULTIPLIERS = {
    "relaxed": 0.75,
    "medium": 1.0,
    "marathon": 1.4,
}

DEFAULT_OBLIGATION_LABEL = "Obligation"
OBLIGATION_NOTES = "Blocks time on the calendar"

# Fallback for unparsable event instants in the calendar export
EPOCH_FALLBACK = "1970-01-01T00:00:00"
