"""
Application configuration loaded from the environment (.env supported).
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


def _get_weekdays(name: str, default: tuple) -> tuple:
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(int(part) for part in raw.split(",") if part.strip())


class AppConfig:
    """Process-wide settings. Scheduling defaults can be overridden per request."""

    def __init__(self):
        # Service
        self.log_level = os.getenv("PLANNER_LOG_LEVEL", "INFO").upper()
        self.host = os.getenv("PLANNER_HOST", "0.0.0.0")
        self.port = _get_int("PLANNER_PORT", 8000)

        # Calendar export
        self.timezone = os.getenv("PLANNER_TIMEZONE", "Asia/Jerusalem")
        self.prodid = os.getenv("PLANNER_PRODID", "-//Deadline Planner//Planner//EN")
        self.uid_domain = os.getenv("PLANNER_UID_DOMAIN", "deadline-planner")

        # Scheduling defaults
        self.workday_start = os.getenv("PLANNER_WORKDAY_START", "08:30")
        self.workday_end = os.getenv("PLANNER_WORKDAY_END", "20:00")
        self.daily_max_hours = _get_float("PLANNER_DAILY_MAX_HOURS", 6.0)
        self.max_task_hours_per_day = _get_float("PLANNER_MAX_TASK_HOURS_PER_DAY", 3.0)
        self.block_minutes = _get_int("PLANNER_BLOCK_MINUTES", 50)
        self.break_minutes = _get_int("PLANNER_BREAK_MINUTES", 10)
        self.buffer_hours = _get_float("PLANNER_BUFFER_HOURS", 6.0)
        self.working_weekdays = _get_weekdays("PLANNER_WORKING_WEEKDAYS", (0, 1, 2, 3, 4))  # Sunday-Thursday
        self.load_mode = os.getenv("PLANNER_LOAD_MODE", "medium")

    def __repr__(self):
        return f"AppConfig(timezone={self.timezone!r}, log_level={self.log_level!r})"


config = AppConfig()
