from datetime import timedelta
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query

from trylocal.api.deps import get_hours_service
from trylocal.core.config import settings
from trylocal.core.errors import NotFoundError
from trylocal.schemas.pickup import (
    DayHoursIn,
    OpenStatusRequest,
    OpenStatusResponse,
    PickupSlotsRequest,
    PickupSlotsResponse,
    PickupValidateRequest,
    PickupValidateResponse,
    TimeSlotOut,
)
from trylocal.services.business import (
    DEFAULT_BUSINESS_HOURS,
    BusinessHours,
    BusinessHoursService,
    SlotConfig,
    generate_slots,
)
from trylocal.services.store import BusinessRepository, get_business_repository

router = APIRouter(tags=["pickup"])


def _hours_from_payload(hours: Dict[str, Optional[DayHoursIn]]) -> BusinessHours:
    return BusinessHours.from_dict({day: value.model_dump() if value else None for day, value in hours.items()})


def _slots_response(hours: BusinessHours, config: SlotConfig, service: BusinessHoursService, now=None) -> PickupSlotsResponse:
    slots = generate_slots(hours, now=now, config=config, tz=service.timezone)
    return PickupSlotsResponse(slots=[TimeSlotOut(**slot.to_dict()) for slot in slots])


@router.post("/pickup/slots", response_model=PickupSlotsResponse)
def pickup_slots(
    payload: PickupSlotsRequest,
    service: BusinessHoursService = Depends(get_hours_service),
):
    """pickup slots for hours supplied by the caller."""
    config = SlotConfig.from_settings(
        interval_minutes=payload.interval_minutes,
        lead_minutes=payload.lead_minutes,
        horizon_days=payload.horizon_days,
    )
    return _slots_response(_hours_from_payload(payload.hours), config, service, now=payload.now)


@router.get("/businesses/{business_id}/pickup-slots", response_model=PickupSlotsResponse)
def business_pickup_slots(
    business_id: str,
    interval_minutes: Optional[int] = Query(None, alias="intervalMinutes", gt=0, le=24 * 60),
    businesses: BusinessRepository = Depends(get_business_repository),
    service: BusinessHoursService = Depends(get_hours_service),
):
    """pickup slots for a stored business, default hours if it never set any."""
    business = businesses.get(business_id)
    if business is None:
        raise NotFoundError("Business not found")
    hours = BusinessHours.from_dict(business.business_hours) if business.business_hours else DEFAULT_BUSINESS_HOURS
    return _slots_response(hours, SlotConfig.from_settings(interval_minutes=interval_minutes), service)


@router.post("/pickup/validate", response_model=PickupValidateResponse)
def validate_pickup(
    payload: PickupValidateRequest,
    service: BusinessHoursService = Depends(get_hours_service),
):
    now = payload.now or service.get_current_time()
    result = service.validate_pickup_time(
        _hours_from_payload(payload.hours),
        pickup_at=payload.pickup_at,
        now=now,
        lead_time=timedelta(minutes=settings.PICKUP_LEAD_MINUTES),
    )
    return PickupValidateResponse(valid=result.valid, reason=result.reason)


@router.post("/businesses/open-status", response_model=OpenStatusResponse)
def open_status(
    payload: OpenStatusRequest,
    service: BusinessHoursService = Depends(get_hours_service),
):
    result = service.is_open_at(_hours_from_payload(payload.hours), payload.at or service.get_current_time())
    return OpenStatusResponse(is_open=result.is_open, reason=result.reason, next_open_time=result.next_open_time)
