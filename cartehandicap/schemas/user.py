"""DTO for User"""

from datetime import datetime

from cartehandicap.models.user import ApprovalStatus
from cartehandicap.schemas.base import BaseSchema


class UserSchema(BaseSchema):
    id: int
    email: str
    first_name: str
    last_name: str
    address: str | None
    account_number: str
    status: ApprovalStatus
    created_at: datetime
    validated_at: datetime | None = None
    card_uid: str | None = None


class PendingUserSchema(BaseSchema):
    id: int
    first_name: str
    last_name: str
    email: str
    proof_document_ref: str
    created_at: datetime


class RegistrationResultSchema(BaseSchema):
    message: str
    account_number: str
    user_id: int


class AccountHolderSchema(BaseSchema):
    first_name: str
    last_name: str
    account_number: str
