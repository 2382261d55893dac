"""
Stripe Connect account lifecycle for businesses.

A business starts with no account, gets a pending one on its first onboarding
request, and moves to verified or restricted as the provider reports progress.
Status is only ever derived from a fresh read of the provider's flags.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlencode

from trylocal.core.config import settings
from trylocal.core.errors import NotFoundError, ValidationError
from trylocal.models import (
    AccountStatus,
    BusinessRecord,
    PaymentAccount,
    derive_status,
    is_expected_transition,
)
from trylocal.services.store.base import BusinessRepository
from .base import PaymentsClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountCreation:
    account_id: str
    already_existed: bool = False


@dataclass(frozen=True)
class AccountStatusResult:
    account: PaymentAccount
    charges_enabled: bool
    requirements: Dict[str, Any] = field(default_factory=dict)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentAccountService:
    def __init__(
        self,
        payments: PaymentsClient,
        businesses: BusinessRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.payments = payments
        self.businesses = businesses
        self.clock = clock

    def _require_business(self, business_id: str) -> BusinessRecord:
        business = self.businesses.get(business_id)
        if business is None:
            raise NotFoundError("Business not found")
        return business

    def create_account(
        self,
        business_id: Optional[str],
        contact_email: Optional[str],
        business_name: Optional[str] = None,
    ) -> AccountCreation:
        """provision a connected account once per business; repeat calls return the existing id."""
        if not business_id or not contact_email:
            raise ValidationError("Business ID and email are required")

        business = self._require_business(business_id)
        if business.stripe_account_id:
            logger.info(f"Business {business_id} already has payment account {business.stripe_account_id}")
            return AccountCreation(account_id=business.stripe_account_id, already_existed=True)

        account = self.payments.create_account(
            email=contact_email,
            business_name=business_name or business.name,
            business_id=business_id,
            website=business.website,
        )
        self.businesses.update(business_id, {
            "stripeConnectedAccountId": account.id,
            "stripeAccountStatus": AccountStatus.PENDING.value,
            "payoutsEnabled": False,
            "updatedAt": self.clock(),
        })
        logger.info(f"Payment account {account.id} created for business {business_id}")
        return AccountCreation(account_id=account.id)

    def sync_account_status(self, account_id: Optional[str], business_id: Optional[str] = None) -> AccountStatusResult:
        """re-read the provider's flags and, given a business, store the derived status on it."""
        if not account_id:
            raise ValidationError("Account ID is required")

        business = self._require_business(business_id) if business_id else None
        if business is not None and business.stripe_account_id and business.stripe_account_id != account_id:
            raise ValidationError("Account does not belong to this business")
        external = self.payments.retrieve_account(account_id)
        status = derive_status(external)

        completed_at = None
        if business is not None and external.details_submitted:
            completed_at = business.onboarding_completed_at or self.clock()

        account = PaymentAccount(
            account_id=external.id,
            status=status,
            payouts_enabled=external.payouts_enabled,
            details_submitted=external.details_submitted,
            onboarding_completed_at=completed_at,
        )

        if business is not None:
            previous = business.stripe_account_status
            if previous != status:
                if is_expected_transition(previous, status):
                    logger.info(f"Payment account {account_id} for business {business_id}: {previous.value} -> {status.value}")
                else:
                    logger.warning(f"Unexpected payment account transition for business {business_id}: {previous.value} -> {status.value}")
            self.businesses.update(business_id, {
                "stripeAccountStatus": status.value,
                "payoutsEnabled": external.payouts_enabled,
                "stripeOnboardingCompletedAt": completed_at,
                "updatedAt": self.clock(),
            })

        return AccountStatusResult(
            account=account,
            charges_enabled=external.charges_enabled,
            requirements=dict(external.requirements),
        )

    def create_onboarding_link(self, account_id: Optional[str], business_id: Optional[str]) -> str:
        """short-lived URL where the owner finishes identity and bank verification."""
        if not account_id:
            raise ValidationError("Account ID is required")
        if not business_id:
            raise ValidationError("Business ID is required")

        base = settings.onboarding_base_url
        query = {"businessId": business_id}
        url = self.payments.create_account_link(
            account_id=account_id,
            refresh_url=f"{base}?{urlencode({**query, 'refresh': 'true'})}",
            return_url=f"{base}?{urlencode({**query, 'success': 'true'})}",
        )
        logger.info(f"Onboarding link created for payment account {account_id}")
        return url
