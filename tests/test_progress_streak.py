"""Tests for level/progress arithmetic and the login streak."""

from datetime import datetime, timedelta, timezone

import pytest

from emerge_career.services.progress import apply_progress
from emerge_career.services.streak import next_streak


class TestApplyProgress:
    @pytest.mark.parametrize(
        ("level", "progress", "expected"),
        [
            (1, 0, (1, 10)),
            (1, 50, (1, 60)),
            (1, 89, (1, 99)),
            (1, 90, (2, 0)),
            (3, 95, (4, 5)),
        ],
    )
    def test_goal_completion(self, level, progress, expected):
        assert apply_progress(level, progress, 10) == expected

    def test_progress_stays_below_hundred(self):
        level, progress = 1, 0
        for _ in range(25):
            level, progress = apply_progress(level, progress, 10)
            assert 0 <= progress < 100
        assert (level, progress) == (3, 50)

    def test_missing_values_default(self):
        assert apply_progress(None, None, 10) == (1, 10)


class TestNextStreak:
    now = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)

    def test_first_login(self):
        assert next_streak(0, None, self.now) == 1

    def test_same_day_no_change(self):
        assert next_streak(4, self.now - timedelta(hours=2), self.now) is None

    def test_consecutive_day(self):
        yesterday_late = datetime(2026, 3, 9, 23, 59, tzinfo=timezone.utc)
        assert next_streak(4, yesterday_late, self.now) == 5

    def test_gap_resets(self):
        assert next_streak(12, self.now - timedelta(days=3), self.now) == 1

    def test_naive_stored_value_read_as_utc(self):
        # SQLite returns timestamps without an offset
        assert next_streak(4, datetime(2026, 3, 10, 1, 0), self.now) is None
        assert next_streak(4, datetime(2026, 3, 9, 1, 0), self.now) == 5

    def test_days_compared_in_utc(self):
        # 23:30 at UTC-5 on the 9th is already the 10th in UTC
        eastern = timezone(timedelta(hours=-5))
        late_evening = datetime(2026, 3, 9, 23, 30, tzinfo=eastern)
        assert next_streak(4, late_evening, self.now) is None
