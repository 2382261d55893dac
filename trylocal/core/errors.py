"""
Error taxonomy shared by the payment-account flow and the HTTP layer.

Every error carries the HTTP status the API answers with. External failures
keep a category so callers can decide whether a retry makes sense; nothing in
this package retries on its own.
"""
from typing import Optional

CATEGORY_VALIDATION = "validation"
CATEGORY_AUTHENTICATION = "authentication"
CATEGORY_TRANSIENT = "transient"


class TryLocalError(Exception):
    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(TryLocalError):
    """missing or malformed input."""
    status_code = 400
    public_message = "Invalid request"


class NotFoundError(TryLocalError):
    """referenced business or account does not exist."""
    status_code = 404
    public_message = "Not found"


class AccountNotFound(NotFoundError):
    public_message = "Payment account not found"


class InvalidAccount(NotFoundError):
    public_message = "Payment account is not recognized"


class ExternalServiceError(TryLocalError):
    """payments API or document store failure, message is never shown to clients as-is."""
    status_code = 500

    def __init__(self, message: Optional[str] = None, category: str = CATEGORY_TRANSIENT,
                 public_message: Optional[str] = None):
        super().__init__(message or "External service failure")
        self.category = category
        if public_message:
            self.public_message = public_message

    @property
    def retryable(self) -> bool:
        return self.category == CATEGORY_TRANSIENT
