"""DTO for Accommodation"""

from cartehandicap.schemas.base import BaseSchema
from cartehandicap.schemas.user import AccountHolderSchema


class AccommodationSchema(BaseSchema):
    accommodation_id: int
    service_name: str
    service_description: str | None
    province: str


class AccountVerificationSchema(BaseSchema):
    user: AccountHolderSchema
    services: list[AccommodationSchema]
