"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the CLI and
HTTP adapters can catch them uniformly and map them to exit codes or status
codes.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidProductError(ValidationError):
    """An order references a product that does not exist."""


class InsufficientStockError(ValidationError):
    """An order asks for more units than the product has in stock."""


class InvalidStatusTransitionError(ValidationError):
    """An order update tried to move to a status not reachable from the current one."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AlreadyExistsError(DomainException):
    """An entity with the same identifier is already stored."""


class StorageError(DomainException):
    """The underlying document store failed."""


class OrderPersistenceError(StorageError):
    """The order record could not be written; stock was not touched."""


class StockUpdateError(StorageError):
    """The order was written but the stock decrement failed."""
