from pydantic import Field

from trylocal.schemas.base import CamelModel


class DeliveryInfoResponse(CamelModel):
    zip_code: str = Field(..., alias="zipCode")
    available: bool
    fee: float
    estimated_minutes: int = Field(..., alias="estimatedMinutes")
