from fastapi import APIRouter, Depends

from trylocal.api.deps import get_account_service
from trylocal.schemas.stripe_connect import (
    AccountLinkResponse,
    AccountRequest,
    AccountStatusResponse,
    CreateAccountRequest,
    CreateAccountResponse,
)
from trylocal.services.payments import PaymentAccountService

router = APIRouter(prefix="/stripe/connect", tags=["stripe"])


@router.post("/create-account", response_model=CreateAccountResponse)
def create_account(
    payload: CreateAccountRequest,
    service: PaymentAccountService = Depends(get_account_service),
):
    result = service.create_account(
        business_id=payload.business_id,
        contact_email=payload.email,
        business_name=payload.business_name,
    )
    message = "Account already exists" if result.already_existed else "Stripe Connect account created successfully"
    return CreateAccountResponse(account_id=result.account_id, message=message)


@router.post("/account-status", response_model=AccountStatusResponse)
def account_status(
    payload: AccountRequest,
    service: PaymentAccountService = Depends(get_account_service),
):
    result = service.sync_account_status(payload.account_id, payload.business_id)
    account = result.account
    return AccountStatusResponse(
        account_id=account.account_id,
        charges_enabled=result.charges_enabled,
        payouts_enabled=account.payouts_enabled,
        details_submitted=account.details_submitted,
        account_status=account.status.value,
        requirements=result.requirements,
    )


@router.post("/account-link", response_model=AccountLinkResponse)
def account_link(
    payload: AccountRequest,
    service: PaymentAccountService = Depends(get_account_service),
):
    url = service.create_onboarding_link(payload.account_id, payload.business_id)
    return AccountLinkResponse(url=url, message="Account link created successfully")
