"""Accommodation catalog and the disability categories that imply them. Static reference data."""

from typing import List

from sqlalchemy import Column, ForeignKey, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cartehandicap.models.base import BaseModel

handicap_services = Table(
    "handicap_services",
    BaseModel.metadata,
    Column("disability_type_id", ForeignKey("disability_types.id"), primary_key=True),
    Column("accommodation_id", ForeignKey("accommodations.id"), primary_key=True),
)


class Accommodation(BaseModel):
    __tablename__ = "accommodations"

    service_name: Mapped[str]
    service_description: Mapped[str | None]
    province: Mapped[str]

    @property
    def accommodation_id(self) -> int:
        return self.id


class DisabilityType(BaseModel):
    __tablename__ = "disability_types"

    name: Mapped[str] = mapped_column(unique=True)
    accommodations: Mapped[List[Accommodation]] = relationship(
        secondary=handicap_services, order_by=Accommodation.id
    )
