"""DTO for login"""

from pydantic import field_validator

from cartehandicap.models.user import ApprovalStatus
from cartehandicap.schemas.base import BaseSchema


class LoginSchema(BaseSchema):
    email: str
    password: str

    @field_validator("email")
    def email_must_be_lowercase(cls, v):
        return v.strip().lower()


class LoginResultSchema(BaseSchema):
    message: str = "Login successful"
    user_id: int
    account_number: str
    status: ApprovalStatus
    token: str
