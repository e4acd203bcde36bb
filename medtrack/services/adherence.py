# medtrack/services/adherence.py
"""
Adherence metrics over intake events.

Everything here is a pure function: callers pass the events (anything with a
``taken_at`` datetime), the number of medications the account owns and,
for determinism, the current day. Nothing is read from the database.
"""
import math
from collections import Counter
from datetime import date, timedelta

from medtrack.utils.timeutils import local_date, local_today

DEFAULT_WINDOW_DAYS = 30


def calculate_adherence(taken, total) -> float:
    if total == 0:
        return 0
    return round((taken / total) * 100, 2)


def _round_half_up(value) -> int:
    return int(math.floor(value + 0.5))


def _days_of(events, tz):
    return Counter(local_date(e.taken_at, tz) for e in events)


def adherence_rate(events, medication_count, window_days=DEFAULT_WINDOW_DAYS, today: date = None, tz=None) -> int:
    """Percentage of expected intakes (one per medication per day) logged in
    the trailing ``window_days`` days, today included."""
    events = list(events)
    if not events or not medication_count or window_days <= 0:
        return 0

    today = today or local_today(tz=tz)
    first_day = today - timedelta(days=window_days - 1)
    per_day = _days_of(events, tz)
    taken = sum(n for day, n in per_day.items() if first_day <= day <= today)

    return _round_half_up(taken / (medication_count * window_days) * 100)


def current_streak(events, medication_count, today: date = None, tz=None) -> int:
    """Consecutive days, counting back from today, on which every medication was logged."""
    if not medication_count:
        return 0

    today = today or local_today(tz=tz)
    per_day = _days_of(events, tz)

    streak = 0
    day = today
    while per_day.get(day, 0) >= medication_count:
        streak += 1
        day -= timedelta(days=1)
    return streak


def summarize(events, medication_count, window_days=DEFAULT_WINDOW_DAYS, today: date = None, tz=None):
    events = list(events)
    today = today or local_today(tz=tz)
    taken_today = sum(1 for e in events if local_date(e.taken_at, tz) == today)
    return {
        "adherence_rate": adherence_rate(events, medication_count, window_days, today, tz),
        "current_streak": current_streak(events, medication_count, today, tz),
        "medication_count": medication_count,
        "taken_today": taken_today,
        "all_taken_today": bool(medication_count) and taken_today >= medication_count,
        "window_days": window_days,
        "as_of": today.isoformat(),
    }
