"""DTO for AccessCard"""

from datetime import datetime

from pydantic import field_validator

from cartehandicap.schemas.base import (
    BaseFilterSchema,
    BaseReadSchema,
    BaseUpdateSchema,
    to_naive_utc,
)


class AccessCardSchema(BaseReadSchema):
    uid: str
    user_id: int | None
    active: bool
    expires_at: datetime | None
    assigned_at: datetime | None
    last_scanned_at: datetime | None


class AccessCardCreateSchema(BaseUpdateSchema):
    uid: str
    active: bool = True
    expires_at: datetime | None = None

    @field_validator("uid")
    def uid_must_be_uppercase(cls, v):
        v = v.strip().upper()
        if not v:
            raise ValueError("uid must not be blank")
        return v

    @field_validator("expires_at")
    def expiry_must_be_naive_utc(cls, v):
        return to_naive_utc(v)


class AccessCardUpdateSchema(BaseUpdateSchema):
    active: bool | None = None
    expires_at: datetime | None = None

    @field_validator("expires_at")
    def expiry_must_be_naive_utc(cls, v):
        return to_naive_utc(v)

    def dump(self):
        # an explicit null clears the expiry
        return self.model_dump(exclude_unset=True)


class AccessCardFiltersSchema(BaseFilterSchema):
    assigned: bool | None = None
    active: bool | None = None
