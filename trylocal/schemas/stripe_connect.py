from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from trylocal.schemas.base import CamelModel


class CreateAccountRequest(CamelModel):
    business_id: Optional[str] = Field(None, alias="businessId")
    email: Optional[str] = None
    business_name: Optional[str] = Field(None, alias="businessName")


class CreateAccountResponse(CamelModel):
    account_id: str = Field(..., alias="accountId")
    message: str


class AccountRequest(CamelModel):
    account_id: Optional[str] = Field(None, alias="accountId")
    business_id: Optional[str] = Field(None, alias="businessId")


class AccountStatusResponse(CamelModel):
    account_id: str = Field(..., alias="accountId")
    charges_enabled: bool = Field(..., alias="chargesEnabled")
    payouts_enabled: bool = Field(..., alias="payoutsEnabled")
    details_submitted: bool = Field(..., alias="detailsSubmitted")
    account_status: str = Field(..., alias="accountStatus")
    requirements: Dict[str, Any] = Field(default_factory=dict)


class AccountLinkResponse(BaseModel):
    url: str
    message: str
