"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidQuantity(ValidationError):
    """A negative (or otherwise unusable) quantity was supplied."""


class DuplicateSize(ValidationError):
    """The size label is already registered on the product."""


class UnknownSize(ValidationError):
    """The size label is not one of the product's sizes."""


class DuplicateCategory(ValidationError):
    """The category name is already registered."""


class MissingCustomerInfo(ValidationError):
    """Checkout attempted without a customer name or phone."""


class InvalidTransition(ValidationError):
    """An order lifecycle operation is not allowed from the current status."""


class InsufficientStock(ValidationError):
    """Requested units exceed what the ledger holds for a product size."""

    def __init__(self, product_name: str, size: str, requested: int, available: int) -> None:
        self.product_name = product_name
        self.size = size
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name} size {size} "
            f"(need {requested}, have {available} available)"
        )


class StockMismatch(ValidationError):
    """Declared total stock does not match the per-size allocation."""

    def __init__(self, declared_total: int, allocated_total: int) -> None:
        self.declared_total = declared_total
        self.allocated_total = allocated_total
        super().__init__(
            f"Stock distribution does not match: total {declared_total}, "
            f"allocated {allocated_total}, remaining {declared_total - allocated_total}"
        )
