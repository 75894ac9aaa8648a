"""
Unit tests for session statistics and the study streak.

Run: pytest tests/test_stats.py -v
"""

from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from examdrill.stats import build_category_stats, build_session_stats, current_streak, percentage

TODAY = date(2026, 3, 18)


def _at(days_ago, hour=10):
    return datetime.combine(TODAY - timedelta(days=days_ago), datetime.min.time()) + timedelta(hours=hour)


class TestCurrentStreak:

    def test_three_consecutive_days(self):
        assert current_streak([_at(0), _at(1), _at(2)], today=TODAY) == 3

    def test_gap_yesterday_stops_streak(self):
        assert current_streak([_at(0), _at(2)], today=TODAY) == 1

    def test_single_session_today(self):
        assert current_streak([_at(0)], today=TODAY) == 1

    def test_no_session_today_means_no_streak(self):
        assert current_streak([_at(1), _at(2), _at(3)], today=TODAY) == 0

    def test_no_sessions(self):
        assert current_streak([], today=TODAY) == 0

    def test_several_sessions_on_one_day_count_once(self):
        sessions = [_at(0, hour=20), _at(0, hour=8), _at(1, hour=21), _at(1, hour=7), _at(2)]
        assert current_streak(sessions, today=TODAY) == 3

    def test_late_night_session_belongs_to_its_calendar_day(self):
        # 23:59 yesterday and 00:01 today are two different study days
        sessions = [_at(0, hour=0) + timedelta(minutes=1), _at(1, hour=23) + timedelta(minutes=59)]
        assert current_streak(sessions, today=TODAY) == 2

    def test_accepts_generators(self):
        assert current_streak((moment for moment in [_at(0), _at(1)]), today=TODAY) == 2


class TestSessionStats:

    def test_empty_session_is_all_zero(self):
        session = SimpleNamespace(total_questions=0, correct_answers=0, total_time_spent_ms=0)

        stats = build_session_stats(session, {})

        assert stats.accuracy == 0
        assert stats.average_time_per_question_ms == 0
        assert stats.category_breakdown == {}

    def test_accuracy_and_average_time(self):
        session = SimpleNamespace(total_questions=4, correct_answers=3, total_time_spent_ms=40000)

        stats = build_session_stats(session, {"Neurology": (1, 0), "Adult Psychiatry": (3, 3)})

        assert stats.accuracy == pytest.approx(75.0)
        assert stats.average_time_per_question_ms == pytest.approx(10000)
        assert list(stats.category_breakdown) == ["Adult Psychiatry", "Neurology"]
        assert stats.category_breakdown["Adult Psychiatry"].correct == 3
        assert stats.category_breakdown["Neurology"].total == 1


class TestCategoryStats:

    def test_tallies_and_accuracy(self):
        result = build_category_stats([
            ("Neurology", True),
            ("Neurology", False),
            ("Child Psychiatry", True),
        ])

        assert result["Neurology"].total == 2
        assert result["Neurology"].correct == 1
        assert result["Neurology"].accuracy == pytest.approx(50.0)
        assert result["Child Psychiatry"].accuracy == pytest.approx(100.0)

    def test_percentage_guards_division(self):
        assert percentage(3, 0) == 0
