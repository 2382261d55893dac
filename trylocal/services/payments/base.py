from typing import Any, Dict, Optional

from trylocal.models import ExternalAccount


class PaymentsClient:
    """connected-account operations the onboarding flow needs from a payments provider."""

    def create_account(
        self,
        email: str,
        business_name: Optional[str],
        business_id: str,
        website: Optional[str] = None,
    ) -> ExternalAccount:  # pragma: no cover
        raise NotImplementedError

    def retrieve_account(self, account_id: str) -> ExternalAccount:  # pragma: no cover
        raise NotImplementedError

    def create_account_link(self, account_id: str, refresh_url: str, return_url: str) -> str:  # pragma: no cover
        raise NotImplementedError

    def health_check(self) -> Dict[str, Any]:  # pragma: no cover
        return {"status": "unknown"}
