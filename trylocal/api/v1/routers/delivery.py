from fastapi import APIRouter

from trylocal.schemas.delivery import DeliveryInfoResponse
from trylocal.services.delivery import get_delivery_info

router = APIRouter(prefix="/delivery", tags=["delivery"])


@router.get("/{zip_code}", response_model=DeliveryInfoResponse)
def delivery_info(zip_code: str):
    info = get_delivery_info(zip_code)
    return DeliveryInfoResponse(
        zip_code=zip_code,
        available=info.available,
        fee=info.fee,
        estimated_minutes=info.estimated_minutes,
    )
