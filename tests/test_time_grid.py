"""Tests for the daily slot grid."""

import pytest

from coach_calendar.scheduling.time_grid import (
    SLOT_STEP_MINUTES,
    Slot,
    format_time_label,
    generate_slots,
)


class TestGenerateSlots:
    def test_returns_28_slots(self):
        assert len(generate_slots()) == 28

    def test_first_slot_is_day_start(self):
        first = generate_slots()[0]
        assert first == Slot(time="10:30", display="10:30 AM")

    def test_last_slot_includes_day_end(self):
        last = generate_slots()[-1]
        assert last.time == "19:30"
        assert last.display == "7:30 PM"

    def test_slots_step_by_twenty_minutes(self):
        minutes = [slot.minutes for slot in generate_slots()]
        steps = {b - a for a, b in zip(minutes, minutes[1:])}
        assert steps == {SLOT_STEP_MINUTES}

    def test_known_slots_present(self):
        times = [slot.time for slot in generate_slots()]
        assert times[:4] == ["10:30", "10:50", "11:10", "11:30"]
        assert "12:10" in times
        assert "13:00" not in times

    def test_same_grid_every_call(self):
        assert generate_slots() == generate_slots()


class TestFormatTimeLabel:
    def test_morning(self):
        assert format_time_label("10:30") == "10:30 AM"

    def test_no_leading_zero_on_hour(self):
        assert format_time_label("09:05") == "9:05 AM"

    def test_noon_stays_twelve(self):
        assert format_time_label("12:10") == "12:10 PM"

    def test_afternoon_subtracts_twelve(self):
        assert format_time_label("19:30") == "7:30 PM"

    def test_midnight_shows_twelve(self):
        assert format_time_label("00:15") == "12:15 AM"

    def test_invalid_value_rejected(self):
        with pytest.raises(ValueError):
            format_time_label("7.30pm")
