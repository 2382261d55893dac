"""
Business hours model and checks.
Handles open/closed logic for a business and validation of requested pickup times.
"""
from datetime import datetime, time, timedelta, timezone, tzinfo
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo

from trylocal.core.config import settings
from trylocal.core.errors import ValidationError

DAY_NAMES = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']


@dataclass(frozen=True)
class DayHours:
    """opening hours for a single weekday."""
    day: int  # 0=Monday, 6=Sunday
    open_time: Optional[time]
    close_time: Optional[time]
    is_closed: bool = False

    @property
    def is_open_day(self) -> bool:
        return not self.is_closed and self.open_time is not None and self.close_time is not None


@dataclass(frozen=True)
class BusinessHours:
    """weekly hours of a business; a missing weekday means closed that day."""
    days: Mapping[int, DayHours] = field(default_factory=dict)

    def __post_init__(self):
        # freeze the mapping so a shared instance can't be edited per request
        object.__setattr__(self, "days", MappingProxyType(dict(self.days)))

    def for_weekday(self, weekday: int) -> Optional[DayHours]:
        hours = self.days.get(weekday)
        if hours is None or not hours.is_open_day:
            return None
        return hours

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "BusinessHours":
        """
        Build from the stored JSON shape:
        {"monday": {"open": "09:00", "close": "18:00", "closed": false}, ...}
        """
        if not raw:
            return cls()
        days: Dict[int, DayHours] = {}
        for key, value in raw.items():
            day_name = str(key).lower()
            if day_name not in DAY_NAMES:
                raise ValidationError(f"Invalid day name: {key}")
            if not value:
                continue
            if not isinstance(value, Mapping):
                raise ValidationError(f"Hours for {day_name} must be an object with open/close")
            weekday = DAY_NAMES.index(day_name)
            days[weekday] = DayHours(
                day=weekday,
                open_time=parse_hhmm(value.get("open"), day_name),
                close_time=parse_hhmm(value.get("close"), day_name),
                is_closed=bool(value.get("closed", False)),
            )
        return cls(days)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        hours = {}
        for weekday, day in sorted(self.days.items()):
            hours[DAY_NAMES[weekday]] = {
                'open': day.open_time.strftime('%H:%M') if day.open_time else None,
                'close': day.close_time.strftime('%H:%M') if day.close_time else None,
                'closed': day.is_closed,
            }
        return hours


@dataclass
class HoursCheck:
    """result of an open/closed check."""
    is_open: bool
    reason: Optional[str] = None
    next_open_time: Optional[datetime] = None


@dataclass
class PickupCheck:
    """result of validating a requested pickup time."""
    valid: bool
    reason: Optional[str] = None


def parse_hhmm(value: Optional[str], day_name: str = "") -> Optional[time]:
    if value is None or value == "":
        return None
    try:
        hour, minute = map(int, str(value).split(':'))
        return time(hour, minute)
    except ValueError:
        raise ValidationError(f"Invalid time '{value}' for {day_name or 'day'}. Use HH:MM")


def format_time_12h(value: time) -> str:
    """09:30 -> '9:30 AM'"""
    period = "PM" if value.hour >= 12 else "AM"
    hour12 = value.hour % 12 or 12
    return f"{hour12}:{value.minute:02d} {period}"


def business_timezone() -> tzinfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


def to_local(moment: datetime, tz: tzinfo) -> datetime:
    """naive datetimes are taken as business-local time."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


class BusinessHoursService:
    """open/closed checks for a set of business hours in one timezone."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.timezone = tz or business_timezone()

    def get_current_time(self) -> datetime:
        """get current time in business timezone."""
        return datetime.now(self.timezone)

    def is_open_at(self, hours: BusinessHours, check_time: datetime) -> HoursCheck:
        """check if business is open at specific time."""
        check_time = to_local(check_time, self.timezone)
        current_time = check_time.time()

        day_hours = hours.for_weekday(check_time.weekday())
        if day_hours is None:
            return HoursCheck(
                is_open=False,
                reason="closed_today",
                next_open_time=self.next_open_time(hours, check_time),
            )

        if day_hours.open_time <= current_time <= day_hours.close_time:
            return HoursCheck(is_open=True)

        reason = "before_opening" if current_time < day_hours.open_time else "after_closing"
        return HoursCheck(
            is_open=False,
            reason=reason,
            next_open_time=self.next_open_time(hours, check_time),
        )

    def next_open_time(self, hours: BusinessHours, from_time: datetime) -> Optional[datetime]:
        """get the next time the business will be open."""
        from_time = to_local(from_time, self.timezone)
        check_date = from_time.date()

        # still before today's opening
        today_hours = hours.for_weekday(from_time.weekday())
        if today_hours and from_time.time() < today_hours.open_time:
            return datetime.combine(check_date, today_hours.open_time, self.timezone)

        # look for the next open day (up to 7 days ahead)
        for i in range(1, 8):
            next_date = check_date + timedelta(days=i)
            next_hours = hours.for_weekday(next_date.weekday())
            if next_hours:
                return datetime.combine(next_date, next_hours.open_time, self.timezone)

        return None

    def validate_pickup_time(
        self,
        hours: BusinessHours,
        pickup_at: datetime,
        now: datetime,
        lead_time: timedelta,
    ) -> PickupCheck:
        """check a customer-requested pickup instant against lead time and hours."""
        pickup_at = to_local(pickup_at, self.timezone)
        now = to_local(now, self.timezone)

        # compare in UTC so a DST switch between now and pickup is counted
        if pickup_at.astimezone(timezone.utc) < now.astimezone(timezone.utc) + lead_time:
            minutes = int(lead_time.total_seconds() // 60)
            return PickupCheck(valid=False, reason=f"Pickup time must be at least {minutes} minutes from now")

        day_hours = hours.for_weekday(pickup_at.weekday())
        if day_hours is None:
            return PickupCheck(valid=False, reason="Business is closed on this day")

        pickup_time = pickup_at.time().replace(second=0, microsecond=0)
        if pickup_time < day_hours.open_time or pickup_time > day_hours.close_time:
            return PickupCheck(
                valid=False,
                reason=f"Business hours are {format_time_12h(day_hours.open_time)} - {format_time_12h(day_hours.close_time)}",
            )

        return PickupCheck(valid=True)


# default hours for businesses that haven't set their own (closed Sunday)
DEFAULT_BUSINESS_HOURS = BusinessHours({
    0: DayHours(0, time(9, 0), time(18, 0)),   # Monday
    1: DayHours(1, time(9, 0), time(18, 0)),   # Tuesday
    2: DayHours(2, time(9, 0), time(18, 0)),   # Wednesday
    3: DayHours(3, time(9, 0), time(18, 0)),   # Thursday
    4: DayHours(4, time(9, 0), time(18, 0)),   # Friday
    5: DayHours(5, time(10, 0), time(16, 0)),  # Saturday
    6: DayHours(6, None, None, is_closed=True),  # Sunday
})
