"""
Pickup time slot generation.

Slots are anchored at each day's opening time and spaced by the configured
interval. A slot is offered when its instant is at or after ``now + lead_time``,
so with 30 minute slots, 15 minutes lead and now at 11:50 the first slot is
12:30 (11:50 + 15 min = 12:05, the next boundary is 12:30).
"""
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterator, Optional
from dataclasses import dataclass

from trylocal.core.config import settings
from trylocal.core.errors import ValidationError
from trylocal.services.business.hours import BusinessHours, business_timezone, format_time_12h, to_local


@dataclass(frozen=True)
class SlotConfig:
    lead_time: timedelta = timedelta(minutes=30)
    granularity: timedelta = timedelta(minutes=30)
    horizon_days: int = 1  # today plus this many days

    def __post_init__(self):
        if self.granularity <= timedelta(0):
            raise ValidationError("Slot interval must be positive")
        if self.lead_time < timedelta(0):
            raise ValidationError("Lead time can't be negative")
        if self.horizon_days < 0:
            raise ValidationError("Horizon can't be negative")

    @classmethod
    def from_settings(
        cls,
        interval_minutes: Optional[int] = None,
        lead_minutes: Optional[int] = None,
        horizon_days: Optional[int] = None,
    ) -> "SlotConfig":
        """fill anything not given from app settings."""
        return cls(
            lead_time=timedelta(minutes=settings.PICKUP_LEAD_MINUTES if lead_minutes is None else lead_minutes),
            granularity=timedelta(minutes=settings.PICKUP_INTERVAL_MINUTES if interval_minutes is None else interval_minutes),
            horizon_days=settings.PICKUP_HORIZON_DAYS if horizon_days is None else horizon_days,
        )


@dataclass(frozen=True)
class TimeSlot:
    date: date
    time: time
    label: str

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "time": self.time.strftime("%H:%M"),
            "label": self.label,
        }


def slot_label(day_offset: int, slot_date: date, slot_time: time) -> str:
    if day_offset == 0:
        prefix = "Today"
    elif day_offset == 1:
        prefix = "Tomorrow"
    else:
        prefix = f"{slot_date.strftime('%a, %b')} {slot_date.day}"
    return f"{prefix} at {format_time_12h(slot_time)}"


class PickupSlots:
    """
    Lazy, restartable sequence of pickup slots.

    Nothing is computed until iteration; each ``iter()`` starts over from the
    first slot, so the same object can be rendered and counted.
    """

    def __init__(self, hours: BusinessHours, now: datetime, config: SlotConfig, tz: tzinfo):
        self.hours = hours
        self.config = config
        self.timezone = tz
        self.now = to_local(now, tz)
        self._earliest = self.now.astimezone(timezone.utc) + config.lead_time

    def __iter__(self) -> Iterator[TimeSlot]:
        today = self.now.date()
        for day_offset in range(self.config.horizon_days + 1):
            target_date = today + timedelta(days=day_offset)
            yield from self._slots_for_day(day_offset, target_date)

    def _slots_for_day(self, day_offset: int, target_date: date) -> Iterator[TimeSlot]:
        day_hours = self.hours.for_weekday(target_date.weekday())
        if day_hours is None:
            return

        current = datetime.combine(target_date, day_hours.open_time)
        close = datetime.combine(target_date, day_hours.close_time)
        while current < close:
            instant = current.replace(tzinfo=self.timezone).astimezone(timezone.utc)
            # wall times skipped by a DST jump (02:30 on spring-forward day) don't round-trip
            exists = instant.astimezone(self.timezone).replace(tzinfo=None) == current
            if exists and instant >= self._earliest:
                slot_time = current.time()
                yield TimeSlot(
                    date=target_date,
                    time=slot_time,
                    label=slot_label(day_offset, target_date, slot_time),
                )
            current += self.config.granularity

    def first(self) -> Optional[TimeSlot]:
        return next(iter(self), None)


def generate_slots(
    hours: BusinessHours,
    now: Optional[datetime] = None,
    config: Optional[SlotConfig] = None,
    tz: Optional[tzinfo] = None,
) -> PickupSlots:
    """pickup slots for today through the configured horizon; empty means no availability."""
    tz = tz or business_timezone()
    return PickupSlots(
        hours=hours,
        now=now if now is not None else datetime.now(tz),
        config=config or SlotConfig.from_settings(),
        tz=tz,
    )
