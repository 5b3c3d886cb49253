# backend/utils/errors.py


class StoreError(Exception):
    """Base class for store operation failures surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(StoreError):
    """Client-correctable precondition failure (empty cart, insufficient stock)."""

    status_code = 400


class NotFound(StoreError):
    status_code = 404


class Internal(StoreError):
    """Storage or transaction failure."""

    status_code = 500
