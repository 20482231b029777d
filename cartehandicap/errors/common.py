"""Common application errors, may be raised from several services"""

from cartehandicap.errors.base import ApplicationError


class ValidationError(ApplicationError):
    http_code = 400
    error_code = 1400
    error = "Invalid or missing input"


class NotFoundError(ApplicationError):
    http_code = 404
    error_code = 1404
    error = "Not found"


class ConflictError(ApplicationError):
    http_code = 409
    error_code = 1409
    error = "Conflict"


class StorageError(ApplicationError):
    http_code = 500
    error_code = 1500
    error = "Internal storage error"
