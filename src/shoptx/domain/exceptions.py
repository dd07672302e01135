"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outcome boundary and the CLI can catch them uniformly.  Each class
carries a stable ``kind`` and a caller-facing ``status_code``.

``ValidationError`` and ``EntityNotFoundError`` are rejections: the caller
asked for something the rules forbid.  ``EngineFailure`` covers everything
that went wrong on our side.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "domain_error"
    status_code = 400

    @property
    def detail(self) -> str:
        return str(self)


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    kind = "validation_error"
    status_code = 400


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "not_found"
    status_code = 404


class InvalidRequest(ValidationError):
    """Malformed input.  Raised before the store is touched."""

    kind = "invalid_request"


class InsufficientStock(ValidationError):
    kind = "insufficient_stock"
    status_code = 409

    def __init__(self, product_id: int, product_name: str, available: int, requested: int) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough stock for product '{product_name}' (#{product_id}): "
            f"requested {requested}, available {available}"
        )


class CustomerNotFound(EntityNotFoundError):
    kind = "customer_not_found"

    def __init__(self, customer_id: int) -> None:
        self.customer_id = customer_id
        super().__init__(f"Customer #{customer_id} not found")


class ProductNotFound(EntityNotFoundError):
    kind = "product_not_found"

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product #{product_id} not found")


class OrderNotFound(EntityNotFoundError):
    kind = "order_not_found"

    def __init__(self, order_id: int | None, message: str | None = None) -> None:
        self.order_id = order_id
        super().__init__(message or f"Order #{order_id} not found")


class OrderAlreadyFinalized(OrderNotFound):
    """The order exists but its status no longer allows the transition.

    Kept under OrderNotFound: callers that only know "not found or already
    processed" keep working.
    """

    status_code = 409

    def __init__(self, order_id: int, status: str) -> None:
        self.status = status
        super().__init__(
            order_id, f"Order #{order_id} not found or already {status}"
        )


# ---------------------------------------------------------------------------
# Failures on our side
# ---------------------------------------------------------------------------


class EngineFailure(DomainException):
    """Base class for errors that are not the caller's fault."""

    kind = "engine_failure"
    status_code = 500
    retryable = False


class TransientStoreFailure(EngineFailure):
    """Connection or commit failure.  Nothing was committed; retry is safe."""

    kind = "transient_store_failure"
    status_code = 503
    retryable = True

    def __init__(self, message: str = "The order store is temporarily unavailable") -> None:
        super().__init__(message)


class InvariantViolation(EngineFailure):
    """A state that must never reach persistence was about to."""

    kind = "invariant_violation"
