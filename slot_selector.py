"""
Picks which (date, time) slots to try, in priority order.

Pure date arithmetic with no browser or I/O involved.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class BookingCandidate:
    """A single (date, time) pair to attempt to reserve."""
    date: date
    time: time
    duration_minutes: int = 90

    @property
    def date_str(self):
        return self.date.strftime("%Y-%m-%d")

    @property
    def time_str(self):
        return self.time.strftime("%H:%M")

    def __str__(self):
        return f"{self.date_str} {self.time_str} ({self.duration_minutes} min)"


def parse_time(value):
    """Parse 'HH:MM' (24h) into a time. Raises ValueError on bad input."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def parse_times(value):
    """Parse a comma-separated list like '19:00,20:00', keeping its order."""
    return tuple(parse_time(part) for part in value.split(",") if part.strip())


def compute_target_weekday(now, target_weekday, cutoff_hour):
    """
    Return the date to book on.

    Today counts only if it is the target weekday and we are still before
    the cutoff hour; otherwise the next occurrence strictly after today.
    """
    days_ahead = (target_weekday - now.weekday()) % DAYS_IN_WEEK
    if days_ahead == 0 and now.hour >= cutoff_hour:
        days_ahead = DAYS_IN_WEEK
    return now.date() + timedelta(days=days_ahead)


def enumerate_candidates(first_target_date, preferred_times, duration_minutes=90):
    """
    Every preferred time on the first target date, then the same times a
    week later.
    """
    times = list(preferred_times)
    candidates = []
    for week in range(2):
        day = first_target_date + timedelta(days=week * DAYS_IN_WEEK)
        for slot_time in times:
            candidates.append(BookingCandidate(day, slot_time, duration_minutes))
    return candidates
