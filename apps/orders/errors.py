"""Error taxonomy for the orders app.

Every failure that leaves ``PlaceOrderService.execute`` is one of the five
``OrderError`` subclasses below. Each carries a human-readable message, a
stable ``code`` for external mapping and the HTTP status that transport
adapters are expected to use for it.

    INVALID_ORDER          -> 400
    INVALID_STATE          -> 400
    DOMAIN_VIOLATION       -> 400
    INSUFFICIENT_STOCK     -> 409
    ORDER_PLACEMENT_FAILED -> 500
"""

from typing import List, Optional


class OrderError(Exception):
    """Base class for all order errors.

    Attributes:
        message: Human-readable description.
        code: Stable string code (class attribute).
        http_status: Suggested HTTP status for transport adapters.
        cause: Underlying exception, if any. Also chained as ``__cause__``.
    """

    code = "ORDER_ERROR"
    http_status = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def details(self) -> Optional[List[str]]:
        """Kind-specific details for error payloads."""
        return None

    def __str__(self) -> str:
        return self.message


class InvalidOrder(OrderError):
    """The order request itself is malformed (e.g. no items)."""

    code = "INVALID_ORDER"
    http_status = 400


class InvalidState(OrderError):
    """An illegal status transition was attempted."""

    code = "INVALID_STATE"
    http_status = 400

    def __init__(self, message: str, current_state: str, target_state: str):
        super().__init__(message)
        self.current_state = current_state
        self.target_state = target_state

    def details(self) -> List[str]:
        return [self.current_state, self.target_state]


class DomainViolation(OrderError):
    """A domain invariant failed while building the aggregate."""

    code = "DOMAIN_VIOLATION"
    http_status = 400


class InsufficientStock(OrderError):
    """One or more SKUs could not be reserved.

    ``unavailable_items`` keeps the SKUs in the order they appeared in the
    command.
    """

    code = "INSUFFICIENT_STOCK"
    http_status = 409

    def __init__(self, message: str = "One or more items are out of stock", unavailable_items: Optional[List[str]] = None):
        super().__init__(message)
        self.unavailable_items = list(unavailable_items or [])

    def details(self) -> List[str]:
        return list(self.unavailable_items)


class OrderPlacementFailed(OrderError):
    """Infrastructure failure while persisting or publishing."""

    code = "ORDER_PLACEMENT_FAILED"
    http_status = 500

    def __init__(self, message: str = "Failed to place order", cause: Optional[BaseException] = None):
        super().__init__(message, cause=cause)
