import itertools
from dataclasses import replace
from typing import Any, Dict, List, Optional

from trylocal.core.errors import AccountNotFound, InvalidAccount
from trylocal.models import ExternalAccount
from .base import PaymentsClient


class MockPayments(PaymentsClient):
    """in-memory connected accounts for local development (PAYMENTS_PROVIDER=mock)."""

    def __init__(self):
        self.accounts: Dict[str, ExternalAccount] = {}
        self.created: List[Dict[str, Any]] = []
        self._ids = itertools.count(1)

    def create_account(
        self,
        email: str,
        business_name: Optional[str],
        business_id: str,
        website: Optional[str] = None,
    ) -> ExternalAccount:
        account = ExternalAccount(id=f"acct_mock{next(self._ids):06d}")
        self.accounts[account.id] = account
        self.created.append({
            "id": account.id,
            "email": email,
            "business_name": business_name,
            "business_id": business_id,
            "website": website,
        })
        return account

    def retrieve_account(self, account_id: str) -> ExternalAccount:
        try:
            return self.accounts[account_id]
        except KeyError:
            raise AccountNotFound()

    def create_account_link(self, account_id: str, refresh_url: str, return_url: str) -> str:
        if account_id not in self.accounts:
            raise InvalidAccount()
        return f"https://connect.example.test/setup/{account_id}"

    def set_flags(self, account_id: str, **flags: Any) -> ExternalAccount:
        """simulate the owner progressing (or stalling) in onboarding."""
        account = replace(self.retrieve_account(account_id), **flags)
        self.accounts[account_id] = account
        return account

    def health_check(self) -> Dict[str, Any]:
        return {"status": "configured", "provider": "mock", "accounts": len(self.accounts)}
