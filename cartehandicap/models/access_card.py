"""AccessCard model. Pre-provisioned physical card, bound to at most one user."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cartehandicap.models.base import BaseModel
from cartehandicap.models.user import User


class AccessCard(BaseModel):
    __tablename__ = "access_cards"

    uid: Mapped[str] = mapped_column(unique=True, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id"), nullable=True, index=True
    )
    user: Mapped[Optional[User]] = relationship(foreign_keys=[user_id])
    active: Mapped[bool] = mapped_column(default=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    last_scanned_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True
    )
