"""
Payment account services.

- PaymentsClient: provider interface (Stripe Connect in production, in-memory mock for dev)
- PaymentAccountService: create / sync / onboarding-link operations for a business
"""

from .base import PaymentsClient
from .factory import get_payments_client
from .accounts import AccountCreation, AccountStatusResult, PaymentAccountService

__all__ = [
    'PaymentsClient',
    'get_payments_client',
    'AccountCreation',
    'AccountStatusResult',
    'PaymentAccountService',
]
