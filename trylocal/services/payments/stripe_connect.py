import logging
from typing import Any, Dict, Optional

import stripe

from trylocal.core.config import settings
from trylocal.core.errors import (
    CATEGORY_AUTHENTICATION,
    CATEGORY_TRANSIENT,
    CATEGORY_VALIDATION,
    AccountNotFound,
    ExternalServiceError,
    InvalidAccount,
)
from trylocal.models import ExternalAccount
from .base import PaymentsClient

logger = logging.getLogger(__name__)

# stripe error codes meaning "no such account"
NOT_FOUND_CODES = {"resource_missing", "account_invalid"}

REQUIREMENT_FIELDS = (
    "currently_due",
    "eventually_due",
    "past_due",
    "pending_verification",
    "disabled_reason",
    "current_deadline",
)


def _requirements_dict(requirements: Any) -> Dict[str, Any]:
    if not requirements:
        return {}
    out: Dict[str, Any] = {}
    for name in REQUIREMENT_FIELDS:
        value = getattr(requirements, name, None)
        out[name] = list(value) if isinstance(value, (list, tuple)) else value
    return out


def to_external_account(account: Any) -> ExternalAccount:
    requirements = getattr(account, "requirements", None)
    return ExternalAccount(
        id=account.id,
        charges_enabled=bool(getattr(account, "charges_enabled", False)),
        payouts_enabled=bool(getattr(account, "payouts_enabled", False)),
        details_submitted=bool(getattr(account, "details_submitted", False)),
        disabled_reason=getattr(requirements, "disabled_reason", None) if requirements else None,
        requirements=_requirements_dict(requirements),
    )


def translate_stripe_error(error: stripe.StripeError, not_found: type = AccountNotFound) -> Exception:
    """map a stripe SDK error onto our error taxonomy."""
    code = getattr(error, "code", None)
    if isinstance(error, (stripe.InvalidRequestError, stripe.PermissionError)) and code in NOT_FOUND_CODES:
        return not_found()
    if isinstance(error, (stripe.InvalidRequestError, stripe.CardError)):
        category = CATEGORY_VALIDATION
    elif isinstance(error, (stripe.AuthenticationError, stripe.PermissionError)):
        category = CATEGORY_AUTHENTICATION
    else:
        # APIConnectionError, RateLimitError, APIError and anything new
        category = CATEGORY_TRANSIENT
    return ExternalServiceError(
        message=f"stripe {type(error).__name__}: {getattr(error, 'user_message', None) or error}",
        category=category,
        public_message="Payment provider request failed",
    )


class StripeConnectClient(PaymentsClient):
    """Stripe Connect Express accounts through the stripe SDK."""

    def __init__(self, api_key: Optional[str] = None, api_version: Optional[str] = None):
        self.api_key = api_key or settings.STRIPE_SECRET_KEY
        if not self.api_key:
            raise ExternalServiceError(
                message="STRIPE_SECRET_KEY is not set",
                category=CATEGORY_AUTHENTICATION,
                public_message="Payments are not configured",
            )
        self.api_version = api_version or settings.STRIPE_API_VERSION

    def _request_opts(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {"api_key": self.api_key}
        if self.api_version:
            opts["stripe_version"] = self.api_version
        return opts

    def create_account(
        self,
        email: str,
        business_name: Optional[str],
        business_id: str,
        website: Optional[str] = None,
    ) -> ExternalAccount:
        business_profile: Dict[str, Any] = {"name": business_name}
        if website:
            business_profile["url"] = website
        try:
            account = stripe.Account.create(
                type="express",
                email=email,
                business_type="individual",
                capabilities={
                    "card_payments": {"requested": True},
                    "transfers": {"requested": True},
                },
                business_profile=business_profile,
                metadata={"businessId": business_id},
                **self._request_opts(),
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe account creation failed for business {business_id}: {e}")
            raise translate_stripe_error(e) from e
        logger.info(f"Stripe Connect account {account.id} created for business {business_id}")
        return to_external_account(account)

    def retrieve_account(self, account_id: str) -> ExternalAccount:
        try:
            account = stripe.Account.retrieve(account_id, **self._request_opts())
        except stripe.StripeError as e:
            logger.error(f"Stripe account lookup failed for {account_id}: {e}")
            raise translate_stripe_error(e, not_found=AccountNotFound) from e
        return to_external_account(account)

    def create_account_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        try:
            link = stripe.AccountLink.create(
                account=account_id,
                refresh_url=refresh_url,
                return_url=return_url,
                type="account_onboarding",
                **self._request_opts(),
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe account link failed for {account_id}: {e}")
            raise translate_stripe_error(e, not_found=InvalidAccount) from e
        return link.url

    def health_check(self) -> Dict[str, Any]:
        mode = "live" if self.api_key.startswith(("sk_live", "rk_live")) else "test"
        return {"status": "configured", "provider": "stripe", "mode": mode}
