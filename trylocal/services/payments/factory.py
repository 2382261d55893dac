from trylocal.core.config import settings
from .base import PaymentsClient
from .mock import MockPayments
from .stripe_connect import StripeConnectClient

# the mock keeps accounts in memory, so share one per process
_mock_payments = MockPayments()


def get_payments_client() -> PaymentsClient:
    provider = settings.PAYMENTS_PROVIDER.lower()
    if provider == "mock":
        return _mock_payments
    return StripeConnectClient()
