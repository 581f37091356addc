"""
Business-layer exceptions.

Every exception carries the HTTP status the presentation layer maps it to.
Raising one inside `Store.transaction()` rolls the whole operation back.
"""


class BackofficeError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class NotFoundError(BackofficeError):
    status_code = 404


class MaterialNotFoundError(NotFoundError):
    """A raw material named by a WIP batch is not in the catalog (a request error, not a missing resource)."""
    status_code = 400


class ConflictError(BackofficeError):
    status_code = 409


class ValidationError(BackofficeError):
    status_code = 400


class InsufficientStockError(BackofficeError):
    status_code = 400

    def __init__(self, product_code, available, requested):
        super().__init__(
            f"Insufficient stock for '{product_code}': requested {requested}, available {available}"
        )
        self.product_code = product_code
        self.available = available
        self.requested = requested

    def to_dict(self):
        return {
            "error": self.message,
            "product_code": self.product_code,
            "available": self.available,
            "requested": self.requested,
        }


class InvalidTransitionError(BackofficeError):
    status_code = 400


class AlreadyCompletedError(BackofficeError):
    status_code = 400


class UnrecognizedTypeError(BackofficeError):
    status_code = 400
