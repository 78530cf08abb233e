"""Tests for the reset period evaluator."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from numbergen.core.modules.numbering.models import NumberFormatConfig, ResetPeriod
from numbergen.core.modules.numbering.reset import should_reset


def make_config(reset_period: ResetPeriod, last_reset: datetime) -> NumberFormatConfig:
    return NumberFormatConfig(format="{COUNTER}", counter=42, reset_period=reset_period, last_reset=last_reset)


class TestNever:
    def test_never_resets(self):
        """Test that 'never' ignores any amount of elapsed time."""
        config = make_config(ResetPeriod.NEVER, datetime(2000, 1, 1, tzinfo=UTC))
        assert should_reset(config, datetime(2025, 6, 1, tzinfo=UTC)) is False


class TestDaily:
    def test_same_day_does_not_reset(self):
        config = make_config(ResetPeriod.DAILY, datetime(2024, 5, 10, 0, 5, tzinfo=UTC))
        assert should_reset(config, datetime(2024, 5, 10, 23, 55, tzinfo=UTC)) is False

    def test_crossing_midnight_resets(self):
        """Test that minutes apart across midnight is a new day."""
        config = make_config(ResetPeriod.DAILY, datetime(2024, 5, 10, 23, 59, tzinfo=UTC))
        assert should_reset(config, datetime(2024, 5, 11, 0, 1, tzinfo=UTC)) is True

    def test_compares_calendar_date_not_elapsed_time(self):
        """Test that 23 hours apart within one date does not reset."""
        last_reset = datetime(2024, 5, 10, 0, 30, tzinfo=UTC)
        config = make_config(ResetPeriod.DAILY, last_reset)
        assert should_reset(config, last_reset + timedelta(hours=23)) is False

    def test_same_day_in_other_year_resets(self):
        config = make_config(ResetPeriod.DAILY, datetime(2023, 5, 10, 12, tzinfo=UTC))
        assert should_reset(config, datetime(2024, 5, 10, 12, tzinfo=UTC)) is True


class TestMonthly:
    def test_same_month_does_not_reset(self):
        config = make_config(ResetPeriod.MONTHLY, datetime(2024, 1, 15, tzinfo=UTC))
        assert should_reset(config, datetime(2024, 1, 20, tzinfo=UTC)) is False

    def test_next_month_resets(self):
        config = make_config(ResetPeriod.MONTHLY, datetime(2024, 1, 15, tzinfo=UTC))
        assert should_reset(config, datetime(2024, 2, 1, tzinfo=UTC)) is True

    def test_same_month_other_year_resets(self):
        config = make_config(ResetPeriod.MONTHLY, datetime(2023, 1, 15, tzinfo=UTC))
        assert should_reset(config, datetime(2024, 1, 15, tzinfo=UTC)) is True


class TestYearly:
    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            (datetime(2024, 12, 31, 23, 59, tzinfo=UTC), False),
            (datetime(2025, 1, 1, 0, 0, tzinfo=UTC), True),
        ],
    )
    def test_year_boundary(self, now, expected):
        config = make_config(ResetPeriod.YEARLY, datetime(2024, 1, 1, tzinfo=UTC))
        assert should_reset(config, now) is expected


class TestTimezones:
    def test_components_taken_in_timezone_of_now(self):
        """Test that last_reset is compared in the timezone of `now`.

        23:00 UTC on the 10th is already the 11th at UTC+2, the same local day as `now`.
        """
        plus_two = timezone(timedelta(hours=2))
        config = make_config(ResetPeriod.DAILY, datetime(2024, 5, 10, 23, 0, tzinfo=UTC))
        assert should_reset(config, datetime(2024, 5, 11, 8, 0, tzinfo=plus_two)) is False
        assert should_reset(config, datetime(2024, 5, 11, 8, 0, tzinfo=UTC)) is True

    def test_naive_last_reset_is_read_as_utc(self):
        config = make_config(ResetPeriod.MONTHLY, datetime(2024, 1, 31, 23, 0))  # noqa: DTZ001
        assert config.last_reset.tzinfo is UTC
        assert should_reset(config, datetime(2024, 2, 1, 0, 30, tzinfo=UTC)) is True


class TestPurity:
    def test_does_not_modify_config(self):
        config = make_config(ResetPeriod.MONTHLY, datetime(2024, 1, 15, tzinfo=UTC))
        should_reset(config, datetime(2024, 2, 1, tzinfo=UTC))
        assert config.counter == 42
        assert config.last_reset == datetime(2024, 1, 15, tzinfo=UTC)
