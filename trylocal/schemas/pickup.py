from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from trylocal.schemas.base import CamelModel


class DayHoursIn(BaseModel):
    """one day of business hours, HH:MM strings as stored by the web app."""
    open: Optional[str] = Field(None, pattern="^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
    close: Optional[str] = Field(None, pattern="^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
    closed: bool = False


class PickupSlotsRequest(CamelModel):
    hours: Dict[str, Optional[DayHoursIn]]
    interval_minutes: Optional[int] = Field(None, alias="intervalMinutes", gt=0, le=24 * 60)
    lead_minutes: Optional[int] = Field(None, alias="leadMinutes", ge=0)
    horizon_days: Optional[int] = Field(None, alias="horizonDays", ge=0, le=14)
    now: Optional[datetime] = None


class TimeSlotOut(BaseModel):
    date: str
    time: str
    label: str


class PickupSlotsResponse(BaseModel):
    slots: List[TimeSlotOut]


class PickupValidateRequest(CamelModel):
    hours: Dict[str, Optional[DayHoursIn]]
    pickup_at: datetime = Field(..., alias="pickupAt")
    now: Optional[datetime] = None


class PickupValidateResponse(BaseModel):
    valid: bool
    reason: Optional[str] = None


class OpenStatusRequest(CamelModel):
    hours: Dict[str, Optional[DayHoursIn]]
    at: Optional[datetime] = None


class OpenStatusResponse(CamelModel):
    is_open: bool = Field(..., alias="isOpen")
    reason: Optional[str] = None
    next_open_time: Optional[datetime] = Field(None, alias="nextOpenTime")
