"""
Business scheduling services.

This package contains:
- Business hours model and open/closed checks
- Pickup time validation
- Pickup time slot generation
"""

from .hours import (
    DayHours,
    BusinessHours,
    HoursCheck,
    PickupCheck,
    BusinessHoursService,
    DEFAULT_BUSINESS_HOURS,
)
from .pickup import (
    SlotConfig,
    TimeSlot,
    PickupSlots,
    generate_slots,
)

__all__ = [
    'DayHours',
    'BusinessHours',
    'HoursCheck',
    'PickupCheck',
    'BusinessHoursService',
    'DEFAULT_BUSINESS_HOURS',
    'SlotConfig',
    'TimeSlot',
    'PickupSlots',
    'generate_slots',
]
