"""Base DTOs for API endpoints"""

from datetime import datetime, timezone
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    # needed for ORM; camelCase on the wire, snake_case in python
    model_config = ConfigDict(
        from_attributes=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # default dump options to deserialize pydantic models
    def dump(self):
        return self.model_dump(exclude_none=True)


class BaseReadSchema(BaseSchema):
    id: int
    comment: Optional[str] = None
    created_at: datetime
    modified_at: datetime | None = None


class BaseUpdateSchema(BaseSchema):
    comment: Optional[str] = None


class BaseFilterSchema(BaseSchema):
    comment: str | None = None


M = TypeVar("M")


class PaginationSchema(BaseSchema, Generic[M]):
    items: list[M]
    total: int
    skip: int
    limit: int


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Timestamps are stored as naive UTC"""
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
