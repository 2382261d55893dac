from .business import (
    AccountStatus,
    ALLOWED_TRANSITIONS,
    ExternalAccount,
    PaymentAccount,
    BusinessRecord,
    derive_status,
    is_expected_transition,
)

__all__ = [
    'AccountStatus',
    'ALLOWED_TRANSITIONS',
    'ExternalAccount',
    'PaymentAccount',
    'BusinessRecord',
    'derive_status',
    'is_expected_transition',
]
