from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class AccountStatus(str, Enum):
    NONE = "none"
    PENDING = "pending"
    VERIFIED = "verified"
    RESTRICTED = "restricted"


# status changes the onboarding flow expects to see
ALLOWED_TRANSITIONS = {
    AccountStatus.NONE: {AccountStatus.PENDING},
    AccountStatus.PENDING: {AccountStatus.VERIFIED, AccountStatus.RESTRICTED},
    AccountStatus.RESTRICTED: {AccountStatus.PENDING},
    AccountStatus.VERIFIED: set(),
}


def is_expected_transition(old: AccountStatus, new: AccountStatus) -> bool:
    return old == new or new in ALLOWED_TRANSITIONS.get(old, set())


@dataclass(frozen=True)
class ExternalAccount:
    """capability flags of a connected account as the payments provider reports them."""
    id: str
    charges_enabled: bool = False
    payouts_enabled: bool = False
    details_submitted: bool = False
    disabled_reason: Optional[str] = None
    requirements: Dict[str, Any] = field(default_factory=dict)


def derive_status(account: ExternalAccount) -> AccountStatus:
    if account.charges_enabled and account.payouts_enabled and account.details_submitted:
        return AccountStatus.VERIFIED
    if account.disabled_reason:
        return AccountStatus.RESTRICTED
    return AccountStatus.PENDING


@dataclass(frozen=True)
class PaymentAccount:
    account_id: str
    status: AccountStatus
    payouts_enabled: bool = False
    details_submitted: bool = False
    onboarding_completed_at: Optional[datetime] = None


@dataclass
class BusinessRecord:
    """the part of a business document the onboarding and pickup flows use."""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    business_hours: Optional[Dict[str, Any]] = None
    stripe_account_id: Optional[str] = None
    stripe_account_status: AccountStatus = AccountStatus.NONE
    payouts_enabled: bool = False
    onboarding_completed_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, business_id: str, data: Dict[str, Any]) -> "BusinessRecord":
        raw_status = data.get("stripeAccountStatus")
        try:
            status = AccountStatus(raw_status) if raw_status else AccountStatus.NONE
        except ValueError:
            status = AccountStatus.NONE
        return cls(
            id=business_id,
            name=data.get("name"),
            email=data.get("email"),
            website=data.get("website"),
            business_hours=data.get("businessHours"),
            stripe_account_id=data.get("stripeConnectedAccountId"),
            stripe_account_status=status,
            payouts_enabled=bool(data.get("payoutsEnabled", False)),
            onboarding_completed_at=data.get("stripeOnboardingCompletedAt"),
        )
