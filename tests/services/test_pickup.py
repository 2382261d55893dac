"""Tests for pickup slot generation."""

import pytest
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from trylocal.core.errors import ValidationError
from trylocal.services.business import (
    DEFAULT_BUSINESS_HOURS,
    BusinessHours,
    SlotConfig,
    generate_slots,
)

PACIFIC = ZoneInfo("America/Los_Angeles")

MONDAY_ONLY = BusinessHours.from_dict({"monday": {"open": "09:00", "close": "17:00"}})


def _config(lead=15, interval=30, horizon=1):
    return SlotConfig(
        lead_time=timedelta(minutes=lead),
        granularity=timedelta(minutes=interval),
        horizon_days=horizon,
    )


def _slots(hours, now, config):
    return list(generate_slots(hours, now=now, config=config, tz=PACIFIC))


class TestFirstAndLastSlot:

    def test_lead_time_rounds_up_to_next_boundary(self):
        slots = _slots(MONDAY_ONLY, datetime(2024, 6, 3, 11, 50), _config())

        assert slots[0].date == date(2024, 6, 3)
        assert slots[0].time == time(12, 30)
        assert slots[-1].time == time(16, 30)
        assert len(slots) == 9

    def test_slot_exactly_at_lead_time_is_offered(self):
        slots = _slots(MONDAY_ONLY, datetime(2024, 6, 3, 11, 45), _config())

        assert slots[0].time == time(12, 0)

    def test_closing_time_itself_is_not_a_slot(self):
        slots = _slots(MONDAY_ONLY, datetime(2024, 6, 3, 6, 0), _config())

        assert slots[0].time == time(9, 0)
        assert time(17, 0) not in [s.time for s in slots]

    def test_aware_now_is_converted_to_business_time(self):
        # 18:50 UTC is 11:50 PDT
        now = datetime(2024, 6, 3, 18, 50, tzinfo=timezone.utc)
        slots = _slots(MONDAY_ONLY, now, _config())

        assert slots[0].time == time(12, 30)

    def test_first_slot_respects_lead_time_for_many_nows(self):
        config = _config(lead=30, interval=15, horizon=0)
        start = datetime(2024, 6, 3, 7, 0)
        for step in range(0, 9 * 60, 7):
            now = start + timedelta(minutes=step)
            slots = _slots(MONDAY_ONLY, now, config)
            if not slots:
                continue
            first = datetime.combine(slots[0].date, slots[0].time)
            assert first >= now + config.lead_time
            assert first - (now + config.lead_time) < config.granularity or first.time() == time(9, 0)
            assert (first.hour * 60 + first.minute - 9 * 60) % 15 == 0


class TestEmptyResults:

    def test_no_open_days_yields_nothing(self):
        assert _slots(BusinessHours(), datetime(2024, 6, 3, 8, 0), _config(horizon=7)) == []

    def test_all_days_closed_yields_nothing(self):
        hours = BusinessHours.from_dict({
            day: {"open": "09:00", "close": "17:00", "closed": True}
            for day in ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
        })
        assert _slots(hours, datetime(2024, 6, 3, 8, 0), _config(horizon=7)) == []

    def test_past_closing_on_last_day_yields_nothing(self):
        assert _slots(MONDAY_ONLY, datetime(2024, 6, 3, 16, 50), _config(horizon=0)) == []

    def test_close_not_after_open_yields_nothing(self):
        hours = BusinessHours.from_dict({"monday": {"open": "12:00", "close": "12:00"}})
        assert _slots(hours, datetime(2024, 6, 3, 8, 0), _config(horizon=0)) == []


class TestOrderingAndLabels:

    def test_slots_strictly_ordered_without_duplicates(self):
        now = datetime(2024, 6, 1, 13, 10)  # Saturday afternoon
        for interval in (10, 15, 30, 45, 60):
            slots = _slots(DEFAULT_BUSINESS_HOURS, now, _config(lead=20, interval=interval, horizon=7))
            keys = [(s.date, s.time) for s in slots]
            assert keys == sorted(set(keys))
            assert len(keys) > 0

    def test_labels_for_today_tomorrow_and_later(self):
        slots = _slots(DEFAULT_BUSINESS_HOURS, datetime(2024, 6, 3, 17, 0), _config(lead=30, horizon=2))

        assert slots[0].label == "Today at 5:30 PM"
        tomorrow = [s for s in slots if s.date == date(2024, 6, 4)]
        assert tomorrow[0].label == "Tomorrow at 9:00 AM"
        later = [s for s in slots if s.date == date(2024, 6, 5)]
        assert later[0].label == "Wed, Jun 5 at 9:00 AM"

    def test_sunday_closed_in_default_hours(self):
        slots = _slots(DEFAULT_BUSINESS_HOURS, datetime(2024, 6, 8, 20, 0), _config(horizon=1))

        assert slots == []

    def test_to_dict_shape(self):
        slot = _slots(MONDAY_ONLY, datetime(2024, 6, 3, 11, 50), _config())[0]

        assert slot.to_dict() == {"date": "2024-06-03", "time": "12:30", "label": "Today at 12:30 PM"}

    def test_wall_times_skipped_by_dst_are_not_offered(self):
        # 2024-03-10 is a Sunday; Pacific clocks jump from 02:00 to 03:00
        hours = BusinessHours.from_dict({"sunday": {"open": "01:00", "close": "04:00"}})
        slots = _slots(hours, datetime(2024, 3, 10, 0, 0), _config(lead=0, horizon=0))

        assert [s.time for s in slots] == [time(1, 0), time(1, 30), time(3, 0), time(3, 30)]


class TestSequenceBehaviour:

    def test_sequence_is_restartable(self):
        slots = generate_slots(MONDAY_ONLY, now=datetime(2024, 6, 3, 10, 0), config=_config(), tz=PACIFIC)

        assert list(slots) == list(slots)
        assert slots.first().time == time(10, 30)

    def test_same_inputs_same_output(self):
        now = datetime(2024, 6, 3, 10, 0)
        assert _slots(MONDAY_ONLY, now, _config()) == _slots(MONDAY_ONLY, now, _config())

    def test_defaults_come_from_settings(self, monkeypatch):
        from trylocal.core.config import settings

        monkeypatch.setattr(settings, "PICKUP_INTERVAL_MINUTES", 60)
        monkeypatch.setattr(settings, "PICKUP_LEAD_MINUTES", 0)
        monkeypatch.setattr(settings, "PICKUP_HORIZON_DAYS", 0)
        slots = list(generate_slots(MONDAY_ONLY, now=datetime(2024, 6, 3, 9, 0), tz=PACIFIC))

        assert [s.time.hour for s in slots] == [9, 10, 11, 12, 13, 14, 15, 16]


class TestSlotConfig:

    def test_rejects_zero_interval(self):
        with pytest.raises(ValidationError):
            SlotConfig(granularity=timedelta(0))

    def test_rejects_negative_lead_time(self):
        with pytest.raises(ValidationError):
            SlotConfig(lead_time=timedelta(minutes=-5))
