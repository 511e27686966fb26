"""
Error taxonomy for the stock service.

``StockError`` and its subclasses are the errors callers see; each one maps to
an HTTP status and an ``AppStatusCode`` in the JSON envelope.
``StoreError`` and ``ConstraintViolation`` come from the storage layer and are
always reclassified by the engine before reaching a route.
"""
from shared.utils.app_status_code import AppStatusCode

GENERIC_INTERNAL_MESSAGE = "Internal server error. Contact support for more information."


class StockError(Exception):
    kind = "stock_error"
    http_status = 400
    status_code = AppStatusCode.OPERATION_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        return self.message

    def to_dict(self):
        return {
            "data": {"kind": self.kind},
            "status": "Failure",
            "status_code": self.status_code,
            "message": self.public_message,
        }


class NotFoundError(StockError):
    """Referenced product or stock position does not exist."""
    kind = "not_found"
    http_status = 404
    status_code = AppStatusCode.RESOURCE_NOT_FOUND


class SemanticError(StockError):
    """Input breaks a business rule; the message names the rule."""
    kind = "semantic_error"
    http_status = 422
    status_code = AppStatusCode.INVALID_INPUT


class InternalError(StockError):
    kind = "internal_error"
    http_status = 500
    status_code = AppStatusCode.OPERATION_FAILED

    @property
    def public_message(self) -> str:
        # storage details stay in the logs
        return GENERIC_INTERNAL_MESSAGE


class LedgerRollbackError(InternalError):
    """The compensating delete of a stock movement failed."""


class StorageCorruptionError(InternalError):
    """A stored value could not be decoded into its domain type."""
    kind = "storage_corruption"


class StoreError(Exception):
    """Low-level storage failure."""


class ConstraintViolation(StoreError):
    """Storage refused a write because a constraint was breached."""
