from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from rocketfist.config import config
from rocketfist.errors.base_errors import InvalidInputError
from rocketfist.schemas.class_template import WeeklySlot
from rocketfist.services.schedule_expansion import (
    capacity_for_template,
    expand_weekly_pattern,
    next_weekday_on_or_after,
)

# Wednesday
ANCHOR = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)

MON_WED_FRI_18 = [
    WeeklySlot(day_of_week=1, hour=18, minute=0),
    WeeklySlot(day_of_week=3, hour=18, minute=0),
    WeeklySlot(day_of_week=5, hour=18, minute=0),
]


class TestNextWeekday:
    def test_same_day_counts(self):
        assert next_weekday_on_or_after(date(2024, 1, 10), 3) == date(2024, 1, 10)

    def test_later_in_week(self):
        assert next_weekday_on_or_after(date(2024, 1, 10), 5) == date(2024, 1, 12)

    def test_passed_weekday_rolls_to_next_week(self):
        assert next_weekday_on_or_after(date(2024, 1, 10), 1) == date(2024, 1, 15)

    def test_sunday_is_zero(self):
        assert next_weekday_on_or_after(date(2024, 1, 10), 0) == date(2024, 1, 14)


class TestExpandWeeklyPattern:
    def test_three_slots_over_three_weeks(self):
        occurrences = expand_weekly_pattern(MON_WED_FRI_18, 60, ANCHOR, [-1, 0, 1])

        assert len(occurrences) == 9
        assert [o.start_time.date() for o in occurrences] == [
            date(2024, 1, 3),
            date(2024, 1, 5),
            date(2024, 1, 8),
            date(2024, 1, 10),
            date(2024, 1, 12),
            date(2024, 1, 15),
            date(2024, 1, 17),
            date(2024, 1, 19),
            date(2024, 1, 22),
        ]
        for occurrence in occurrences:
            assert occurrence.start_time.hour == 18
            assert occurrence.start_time.minute == 0
            assert occurrence.end_time - occurrence.start_time == timedelta(minutes=60)

    def test_results_are_utc(self):
        occurrences = expand_weekly_pattern(MON_WED_FRI_18, 60, ANCHOR, [0])
        assert all(o.start_time.utcoffset() == timedelta(0) for o in occurrences)

    def test_local_wall_clock_time_in_gym_timezone(self):
        slot = [WeeklySlot(day_of_week=1, hour=18, minute=0)]

        occurrences = expand_weekly_pattern(slot, 60, ANCHOR, [0], "America/New_York")

        # 18:00 EST is 23:00 UTC
        assert occurrences[0].start_time == datetime(2024, 1, 15, 23, 0, tzinfo=timezone.utc)

    def test_anchor_date_is_taken_in_gym_timezone(self):
        # 03:00 UTC on Thursday is still Wednesday evening in New York
        anchor = datetime(2024, 1, 11, 3, 0, tzinfo=timezone.utc)
        slot = [WeeklySlot(day_of_week=3, hour=18, minute=0)]

        occurrences = expand_weekly_pattern(slot, 60, anchor, [0], "America/New_York")

        assert occurrences[0].start_time == datetime(2024, 1, 10, 23, 0, tzinfo=timezone.utc)

    def test_duplicate_slots_produce_one_occurrence(self):
        slots = MON_WED_FRI_18 + [WeeklySlot(day_of_week=1, hour=18, minute=0)]
        assert len(expand_weekly_pattern(slots, 60, ANCHOR, [0])) == 3

    def test_empty_offsets_produce_nothing(self):
        assert expand_weekly_pattern(MON_WED_FRI_18, 60, ANCHOR, []) == []

    @pytest.mark.parametrize(
        "slot",
        [
            SimpleNamespace(day_of_week=7, hour=18, minute=0),
            SimpleNamespace(day_of_week=-1, hour=18, minute=0),
            SimpleNamespace(day_of_week=1, hour=24, minute=0),
            SimpleNamespace(day_of_week=1, hour=18, minute=60),
        ],
    )
    def test_out_of_range_slot_is_rejected(self, slot):
        with pytest.raises(InvalidInputError):
            expand_weekly_pattern([slot], 60, ANCHOR, [0])

    def test_non_positive_duration_is_rejected(self):
        with pytest.raises(InvalidInputError, match="Duration"):
            expand_weekly_pattern(MON_WED_FRI_18, 0, ANCHOR, [0])

    def test_week_offsets_beyond_calendar(self):
        with pytest.raises(InvalidInputError, match="out of the supported date range"):
            expand_weekly_pattern(MON_WED_FRI_18, 60, ANCHOR, [10 ** 9])

    def test_unknown_timezone_is_rejected(self):
        with pytest.raises(InvalidInputError, match="Unknown timezone"):
            expand_weekly_pattern(MON_WED_FRI_18, 60, ANCHOR, [0], "Mars/Olympus_Mons")


class TestCapacityForTemplate:
    def test_explicit_capacity_wins(self):
        template = SimpleNamespace(default_capacity=12, discipline="bjj")
        assert capacity_for_template(template) == 12

    def test_large_discipline(self):
        template = SimpleNamespace(default_capacity=None, discipline="bjj")
        assert capacity_for_template(template) == config.LARGE_CLASS_CAPACITY

    def test_other_discipline(self):
        template = SimpleNamespace(default_capacity=None, discipline="muay_thai")
        assert capacity_for_template(template) == config.DEFAULT_CLASS_CAPACITY
