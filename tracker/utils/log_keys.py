from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class LogKeys:
    day_key: str
    week_key: str
    month_key: str


def build_log_keys(timestamp: datetime) -> LogKeys:
    iso_year, iso_week, _ = timestamp.isocalendar()
    return LogKeys(
        day_key=timestamp.strftime("%Y-%m-%d"),
        week_key=f"{iso_year}-W{iso_week}",
        month_key=timestamp.strftime("%Y-%m"),
    )


def next_streak(current_streak: int, last_log_day: str | None, day_key: str) -> int:
    """
    Returns the streak after logging on `day_key`.

    A log on the day after `last_log_day` extends the streak, a log on the same day or an
    earlier day leaves it untouched, and anything else starts a new streak of one day.
    """
    if last_log_day is None:
        return 1

    last_day = date.fromisoformat(last_log_day)
    log_day = date.fromisoformat(day_key)

    if log_day <= last_day:
        return max(current_streak, 1)
    if log_day - last_day == timedelta(days=1):
        return current_streak + 1
    return 1
