from datetime import datetime, timedelta
from enum import Enum


__all__ = ["Interval"]


class Interval(str, Enum):
    """Bar size of a time series."""

    MINUTE_1 = "1m"
    MINUTE_5 = "5m"
    MINUTE_15 = "15m"
    MINUTE_30 = "30m"
    HOUR_1 = "1h"
    HOUR_4 = "4h"
    HOUR_12 = "12h"
    DAY_1 = "1d"
    DAY_5 = "5d"
    WEEK_1 = "1w"

    def to_timedelta(self) -> timedelta:
        return _DURATIONS[self]

    def max_gap(self) -> timedelta:
        """Clock skew tolerated between two candles that are still subsequent."""
        return _TOLERANCES[self]

    def is_subsequent(self, previous: datetime, current: datetime) -> bool:
        """True when ``current`` is the bar directly after ``previous``."""
        gap = current - previous - self.to_timedelta()
        return abs(gap) <= self.max_gap()

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_str(cls, value: str) -> "Interval":
        """Parse an interval code such as ``"1h"`` or ``"1D"``."""
        v = value.strip()
        for member in cls:
            if member.value == v or member.value == v.lower():
                return member
        raise ValueError(f"Unknown interval: {value!r}")


_DURATIONS = {
    Interval.MINUTE_1: timedelta(minutes=1),
    Interval.MINUTE_5: timedelta(minutes=5),
    Interval.MINUTE_15: timedelta(minutes=15),
    Interval.MINUTE_30: timedelta(minutes=30),
    Interval.HOUR_1: timedelta(hours=1),
    Interval.HOUR_4: timedelta(hours=4),
    Interval.HOUR_12: timedelta(hours=12),
    Interval.DAY_1: timedelta(days=1),
    Interval.DAY_5: timedelta(days=5),
    Interval.WEEK_1: timedelta(weeks=1),
}

_TOLERANCES = {
    Interval.MINUTE_1: timedelta(seconds=1),
    Interval.MINUTE_5: timedelta(seconds=5),
    Interval.MINUTE_15: timedelta(seconds=5),
    Interval.MINUTE_30: timedelta(seconds=5),
    Interval.HOUR_1: timedelta(minutes=1),
    Interval.HOUR_4: timedelta(minutes=1),
    Interval.HOUR_12: timedelta(minutes=1),
    Interval.DAY_1: timedelta(hours=1),
    Interval.DAY_5: timedelta(hours=1),
    Interval.WEEK_1: timedelta(hours=1),
}

_LABELS = {
    Interval.MINUTE_1: "1 Minute",
    Interval.MINUTE_5: "5 Minute",
    Interval.MINUTE_15: "15 Minute",
    Interval.MINUTE_30: "30 Minute",
    Interval.HOUR_1: "Hourly",
    Interval.HOUR_4: "4 Hour",
    Interval.HOUR_12: "12 Hour",
    Interval.DAY_1: "Daily",
    Interval.DAY_5: "5 Day",
    Interval.WEEK_1: "Weekly",
}
