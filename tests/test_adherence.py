"""Adherence engine: pure functions, no app or database needed."""
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from medtrack.services.adherence import adherence_rate, calculate_adherence, current_streak, summarize

TODAY = date(2026, 10, 19)


def taken(day, hour=9, tz=timezone.utc):
    return SimpleNamespace(taken_at=datetime(day.year, day.month, day.day, hour, tzinfo=tz))


def days_back(n):
    return TODAY - timedelta(days=n)


class TestCalculateAdherence:

    @pytest.mark.parametrize("taken_count", [0, 1, 7])
    def test_zero_total_is_zero(self, taken_count):
        assert calculate_adherence(taken_count, 0) == 0

    @pytest.mark.parametrize("n", [1, 5, 30])
    def test_full_adherence(self, n):
        assert calculate_adherence(n, n) == 100.00

    def test_half(self):
        assert calculate_adherence(2, 4) == 50.00

    def test_rounds_to_two_places(self):
        assert calculate_adherence(1, 3) == pytest.approx(33.33)
        assert calculate_adherence(2, 3) == pytest.approx(66.67)


class TestAdherenceRate:

    def test_no_events_or_no_medications(self):
        assert adherence_rate([], 2, today=TODAY) == 0
        assert adherence_rate([taken(TODAY)], 0, today=TODAY) == 0

    def test_every_dose_in_window(self):
        events = [taken(days_back(i)) for i in range(30) for _ in range(2)]
        assert adherence_rate(events, 2, today=TODAY) == 100

    def test_half_the_days(self):
        events = [taken(days_back(i)) for i in range(15)]
        assert adherence_rate(events, 1, today=TODAY) == 50

    def test_window_includes_today_and_excludes_older(self):
        inside = [taken(TODAY), taken(days_back(29))]
        outside = [taken(days_back(30)), taken(days_back(45))]
        assert adherence_rate(inside + outside, 1, today=TODAY) == 7  # 2 / 30

    def test_future_events_are_ignored(self):
        assert adherence_rate([taken(TODAY + timedelta(days=1))], 1, today=TODAY) == 0

    def test_rounds_half_up(self):
        # 1 / 8 = 12.5%
        assert adherence_rate([taken(TODAY)], 1, window_days=8, today=TODAY) == 13

    def test_small_rate_rounds_down(self):
        assert adherence_rate([taken(TODAY)], 1, today=TODAY) == 3


class TestCurrentStreak:

    def test_no_medications(self):
        assert current_streak([taken(TODAY)], 0, today=TODAY) == 0

    def test_nothing_today_means_no_streak(self):
        events = [taken(days_back(1)), taken(days_back(2))]
        assert current_streak(events, 1, today=TODAY) == 0

    def test_consecutive_days(self):
        events = [taken(days_back(i)) for i in range(4)]
        assert current_streak(events, 1, today=TODAY) == 4

    def test_gap_stops_the_streak(self):
        events = [taken(TODAY), taken(days_back(1)), taken(days_back(3))]
        assert current_streak(events, 1, today=TODAY) == 2

    def test_partial_day_is_not_counted(self):
        # two medications, only one of them logged yesterday
        events = [taken(TODAY), taken(TODAY, hour=20), taken(days_back(1)),
                  taken(days_back(2)), taken(days_back(2), hour=21)]
        assert current_streak(events, 2, today=TODAY) == 1

    def test_days_follow_the_given_zone(self):
        new_york = ZoneInfo("America/New_York")
        # 02:00 UTC on the 19th is still the evening of the 18th in New York
        late = SimpleNamespace(taken_at=datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc))
        assert current_streak([late], 1, today=date(2026, 10, 18), tz=new_york) == 1
        assert current_streak([late], 1, today=date(2026, 10, 19), tz=new_york) == 0

    def test_naive_timestamps_are_utc(self):
        naive = SimpleNamespace(taken_at=datetime(2026, 10, 19, 23, 30))
        assert current_streak([naive], 1, today=TODAY) == 1


def test_summarize():
    events = [taken(TODAY), taken(TODAY, hour=21), taken(days_back(1))]
    summary = summarize(events, 2, today=TODAY)

    assert summary["current_streak"] == 1
    assert summary["adherence_rate"] == 5  # 3 / 60
    assert summary["taken_today"] == 2
    assert summary["all_taken_today"] is True
    assert summary["as_of"] == "2026-10-19"
