"""User registration and approval errors"""

from cartehandicap.errors.base import ApplicationError
from cartehandicap.errors.common import ConflictError, StorageError, ValidationError


class EmailAlreadyRegistered(ConflictError):
    error_code = 4001
    error = "Email is already registered"


class DocumentRequired(ValidationError):
    error_code = 4002
    error = "Proof document is required"


class DocumentRejected(ValidationError):
    error_code = 4003
    error = "Unsupported proof document"


class DecisionAlreadyMade(ConflictError):
    error_code = 4004
    error = "Approval decision is final"


class AccountNotApproved(ApplicationError):
    http_code = 403
    error_code = 4005
    error = "Account is not approved"


class AccountNumberUnavailable(StorageError):
    error_code = 4006
    error = "Could not allocate an account number"

