"""Repository for User model"""

from typing import Iterable

from sqlalchemy import exists, select

from cartehandicap.models.accommodation import Accommodation, DisabilityType
from cartehandicap.models.user import (
    ApprovalStatus,
    User,
    user_accommodations,
    user_disabilities,
)
from cartehandicap.repository.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(self.model).filter(self.model.email == email).first()

    def find_by_account_number(self, account_number: str) -> User | None:
        return (
            self.db.query(self.model)
            .filter(self.model.account_number == account_number)
            .first()
        )

    def account_number_exists(self, account_number: str) -> bool:
        return bool(
            self.db.scalar(
                select(exists().where(self.model.account_number == account_number))
            )
        )

    def list_pending(self) -> list[User]:
        """Applicants waiting for a decision, newest first"""
        return (
            self.db.query(self.model)
            .filter(self.model.status == ApprovalStatus.PENDING)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def add_declarations(self, user: User, disability_type_ids: Iterable[int]) -> None:
        for disability_type_id in disability_type_ids:
            self.db.execute(
                user_disabilities.insert().values(
                    user_id=user.id, disability_type_id=disability_type_id
                )
            )
        self.db.flush()

    def get_declared_type_ids(self, user_id: int) -> list[int]:
        return list(
            self.db.scalars(
                select(user_disabilities.c.disability_type_id).where(
                    user_disabilities.c.user_id == user_id
                )
            )
        )

    def known_disability_type_ids(self, disability_type_ids: Iterable[int]) -> set[int]:
        return set(
            self.db.scalars(
                select(DisabilityType.id).where(
                    DisabilityType.id.in_(list(disability_type_ids))
                )
            )
        )

    def get_accommodations(self, user_id: int) -> list[Accommodation]:
        """Accommodations resolved for the user, without duplicates, by service name"""
        return list(
            self.db.scalars(
                select(Accommodation)
                .join(
                    user_accommodations,
                    user_accommodations.c.accommodation_id == Accommodation.id,
                )
                .where(user_accommodations.c.user_id == user_id)
                .distinct()
                .order_by(Accommodation.service_name, Accommodation.id)
            )
        )
