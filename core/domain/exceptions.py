"""
Domain error taxonomy.

Every business failure raised by the core is a DomainError subclass.
The API layer maps each kind to an HTTP status; nothing here knows about HTTP.
"""
from dataclasses import dataclass
from typing import List, Optional


class DomainError(Exception):
    """Base class for all business errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFound(DomainError):
    """Referenced entity does not exist or does not belong to the caller."""


class ProductNotFound(ResourceNotFound):
    """Catalog item lookup failed."""


class CouponNotFound(ResourceNotFound):
    """Coupon code does not exist."""


class OrderAlreadyProcessed(DomainError):
    """Transition or assignment attempted from an unexpected state."""


class ProductUnavailable(DomainError):
    """Catalog item is currently not sellable."""


class AccessDenied(DomainError):
    """Actor lacks the role or ownership required for the operation."""


class InvalidArgument(DomainError, ValueError):
    """Structurally valid input that violates a business rule."""


class CouponInactive(InvalidArgument):
    pass


class CouponExpired(InvalidArgument):
    pass


class CouponExhausted(InvalidArgument):
    pass


class CouponMinimumNotMet(InvalidArgument):
    pass


@dataclass(frozen=True)
class FieldError:
    """Single field-level validation failure."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class RequestValidationFailed(InvalidArgument):
    """Raised when explicit request validators report one or more field errors."""

    def __init__(self, errors: List[FieldError], message: Optional[str] = None):
        super().__init__(message or "Request validation failed")
        self.errors = list(errors)


class PaymentGatewayError(DomainError):
    """Payment collaborator signaled a hard failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
