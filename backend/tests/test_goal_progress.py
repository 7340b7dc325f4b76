"""Tests for the Goal Progress Evaluator (stats/goal_progress.py)."""
from datetime import date, datetime

import pytest

from app.services.statistics_config import GoalConfig, StatisticsConfig
from app.stats.goal_progress import calculate_progress, progress_window, round_half_up
from app.stats.periods import DateRange


NOW = datetime(2024, 1, 20, 9, 0)


def goal(goal_type: str, target, created_at=datetime(2024, 1, 1), deadline=date(2024, 6, 30)) -> dict:
    return {"id": 1, "goal_type": goal_type, "target": target, "created_at": created_at, "deadline": deadline}


class TestRounding:
    """Half values round up."""

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.49, 1), (2.5, 3), (99.5, 100), (0.0, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestProgressWindow:
    """Tests for the goal evaluation window."""

    def test_window_from_creation_to_today(self):
        assert progress_window(goal("calories", 100), NOW) == DateRange(date(2024, 1, 1), date(2024, 1, 20))

    def test_window_ends_at_passed_deadline(self):
        g = goal("calories", 100, deadline=date(2024, 1, 10))
        assert progress_window(g, NOW).end == date(2024, 1, 10)

    def test_window_without_creation_time(self):
        g = goal("calories", 100, created_at=None)
        assert progress_window(g, NOW).start == date(2023, 12, 21)

    def test_default_window_from_config(self):
        config = StatisticsConfig(goals=GoalConfig(default_window_days=7))
        g = goal("calories", 100, created_at=None)
        assert progress_window(g, NOW, config).start == date(2024, 1, 13)


class TestWeightGoals:
    """Weight progress compares the first and latest weigh-in."""

    def test_halfway_to_target(self):
        records = [
            {"date": "2024-01-01", "weight_kg": 80},
            {"date": "2024-01-15", "weight_kg": 75},
        ]
        assert calculate_progress(goal("weight", 70), records, NOW) == 50

    def test_records_are_ordered_by_date(self):
        records = [
            {"date": "2024-01-15", "weight_kg": 75},
            {"date": "2024-01-01", "weight_kg": 80},
        ]
        assert calculate_progress(goal("weight", 70), records, NOW) == 50

    def test_weight_gain_goal(self):
        records = [
            {"date": "2024-01-02", "weight_kg": 60},
            {"date": "2024-01-10", "weight_kg": 61},
        ]
        assert calculate_progress(goal("weight", 64), records, NOW) == 25

    def test_overshoot_is_capped(self):
        records = [
            {"date": "2024-01-02", "weight_kg": 80},
            {"date": "2024-01-10", "weight_kg": 65},
        ]
        assert calculate_progress(goal("weight", 70), records, NOW) == 100

    def test_target_equal_to_first_weight(self):
        records = [{"date": "2024-01-02", "weight_kg": 70}]
        assert calculate_progress(goal("weight", 70), records, NOW) == 0

    def test_no_records(self):
        assert calculate_progress(goal("weight", 70), [], NOW) == 0


class TestSummedGoals:
    """Calories and exercise goals compare the window sum with the target."""

    def test_calories(self):
        records = [{"date": "2024-01-05", "calories": 300}, {"date": "2024-01-06", "calories": 200}]
        assert calculate_progress(goal("calories", 2000), records, NOW) == 25

    def test_calories_capped_at_100(self):
        records = [{"date": "2024-01-05", "calories": 1500}, {"date": "2024-01-06", "calories": 1000}]
        assert calculate_progress(goal("calories", 2000), records, NOW) == 100

    def test_exercise(self):
        records = [
            {"date": "2024-01-05", "duration_minutes": 45},
            {"date": "2024-01-07", "duration_minutes": 30},
        ]
        assert calculate_progress(goal("exercise", 300), records, NOW) == 25

    def test_records_outside_window_are_ignored(self):
        records = [
            {"date": "2023-12-31", "calories": 5000},
            {"date": "2024-01-05", "calories": 100},
            {"date": "2024-01-21", "calories": 5000},
        ]
        assert calculate_progress(goal("calories", 1000), records, NOW) == 10

    def test_records_after_passed_deadline_are_ignored(self):
        records = [{"date": "2024-01-05", "calories": 50}, {"date": "2024-01-15", "calories": 500}]
        g = goal("calories", 100, deadline=date(2024, 1, 10))
        assert calculate_progress(g, records, NOW) == 50

    def test_passed_deadline_with_target_reached(self):
        records = [{"date": "2024-01-05", "calories": 150}]
        g = goal("calories", 100, deadline=date(2024, 1, 10))
        assert calculate_progress(g, records, NOW) == 100

    def test_half_percent_rounds_up(self):
        records = [{"date": "2024-01-05", "calories": 1}]
        assert calculate_progress(goal("calories", 200), records, NOW) == 1

    def test_default_window_without_creation_time(self):
        records = [
            {"date": "2023-12-01", "calories": 500},
            {"date": "2024-01-10", "calories": 100},
        ]
        g = goal("calories", 1000, created_at=None)
        assert calculate_progress(g, records, NOW) == 10


class TestSleepGoals:
    """Sleep goals compare average nightly hours with the target."""

    def test_average_hours(self):
        records = [
            {"date": "2024-01-05", "bedtime": datetime(2024, 1, 5, 0), "waketime": datetime(2024, 1, 5, 6)},
            {"date": "2024-01-06", "bedtime": datetime(2024, 1, 6, 0), "waketime": datetime(2024, 1, 6, 7)},
        ]
        # mean 6.5h of 8h = 81.25%
        assert calculate_progress(goal("sleep", 8), records, NOW) == 81

    def test_no_records(self):
        assert calculate_progress(goal("sleep", 8), [], NOW) == 0


class TestFailSoft:
    """Malformed goals and records yield 0."""

    def test_unknown_goal_type(self):
        assert calculate_progress(goal("steps", 100), [], NOW) == 0

    def test_missing_deadline(self):
        records = [{"date": "2024-01-05", "calories": 100}]
        assert calculate_progress(goal("calories", 100, deadline=None), records, NOW) == 0

    def test_non_numeric_target(self):
        records = [{"date": "2024-01-05", "calories": 100}]
        assert calculate_progress(goal("calories", "abc"), records, NOW) == 0

    def test_non_positive_target(self):
        records = [{"date": "2024-01-05", "calories": 100}]
        assert calculate_progress(goal("calories", 0), records, NOW) == 0
        assert calculate_progress(goal("calories", -50), records, NOW) == 0

    def test_malformed_records_are_skipped(self):
        records = [{"date": None, "calories": 900}, {"date": "2024-01-05", "calories": 100}]
        assert calculate_progress(goal("calories", 1000), records, NOW) == 10
