"""Error hierarchy for marketplace failures.

Every error carries a human-readable message, a stable code and the HTTP
status it maps to. Validation, not-found and business-rule failures share the
400 class; transient store conflicts use 409 so clients can tell "retry me"
apart from "this will always fail".
"""

from typing import Optional


class MarketplaceError(Exception):
    """Base exception for all marketplace errors."""

    http_status = 400
    default_code = "MARKETPLACE_ERROR"
    retryable = False

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_response(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.retryable:
            body["retryable"] = True
        return body


class ValidationError(MarketplaceError):
    """Malformed or out-of-range input, detected before any store access."""

    default_code = "VALIDATION_ERROR"


class AuthError(MarketplaceError):
    """Missing, malformed or rejected bearer credential."""

    http_status = 401
    default_code = "AUTH_ERROR"


class NotFoundError(MarketplaceError):
    """A referenced user, listing or code does not exist."""

    default_code = "NOT_FOUND"


class BusinessRuleError(MarketplaceError):
    """The request is well-formed but violates a marketplace rule."""

    default_code = "BUSINESS_RULE"


class TransientConflictError(MarketplaceError):
    """The store aborted the transaction because of a concurrent write."""

    http_status = 409
    default_code = "TRANSIENT_CONFLICT"
    retryable = True

    def __init__(self, message: str = "The request conflicted with another update. Please try again."):
        super().__init__(message)
