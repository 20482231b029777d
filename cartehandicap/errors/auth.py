"""Authentication and authorization errors"""

from cartehandicap.errors.base import ApplicationError


class AuthError(ApplicationError):
    http_code = 401
    error_code = 3001
    error = "Invalid email or password"


class PendingApprovalError(ApplicationError):
    http_code = 403
    error_code = 3002
    error = "Account is awaiting approval"

    def __init__(self, details=None):
        super().__init__(details, status="pending")


class RejectedError(ApplicationError):
    http_code = 403
    error_code = 3003
    error = "Application was rejected"

    def __init__(self, details=None):
        super().__init__(details, status="rejected")


class TokenInvalid(ApplicationError):
    http_code = 401
    error_code = 3004
    error = "Token is invalid or missing"


class AdminTokenInvalid(ApplicationError):
    http_code = 403
    error_code = 3005
    error = "Admin token is invalid or missing"
