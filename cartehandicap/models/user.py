"""User model. An applicant for the disability card, approved or rejected by an administrator."""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

# tables referenced by the foreign keys below
import cartehandicap.models.accommodation  # noqa: F401
from cartehandicap.models.base import BaseModel

# disability categories declared at registration
user_disabilities = Table(
    "user_disabilities",
    BaseModel.metadata,
    Column("user_id", ForeignKey("users.id"), nullable=False, index=True),
    Column("disability_type_id", ForeignKey("disability_types.id"), nullable=False),
)

# accommodations derived from the declared categories on approval
user_accommodations = Table(
    "user_accommodations",
    BaseModel.metadata,
    Column("user_id", ForeignKey("users.id"), nullable=False, index=True),
    Column("accommodation_id", ForeignKey("accommodations.id"), nullable=False),
    UniqueConstraint("user_id", "accommodation_id"),
)


class ApprovalStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class User(BaseModel):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(unique=True, index=True)
    password_hash: Mapped[str]
    first_name: Mapped[str]
    last_name: Mapped[str]
    address: Mapped[Optional[str]]
    account_number: Mapped[str] = mapped_column(unique=True, index=True)
    status: Mapped[ApprovalStatus] = mapped_column(
        Enum(ApprovalStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ApprovalStatus.PENDING,
    )
    proof_document_ref: Mapped[str]
    validated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
