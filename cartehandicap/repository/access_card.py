"""Repository for AccessCard model"""

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.orm import Query, aliased, joinedload

from cartehandicap.models.access_card import AccessCard
from cartehandicap.repository.base import BaseRepository
from cartehandicap.schemas.access_card import AccessCardFiltersSchema


class AccessCardRepository(BaseRepository[AccessCard]):
    model = AccessCard

    def _apply_filters(
        self, query: Query[AccessCard], filters: AccessCardFiltersSchema
    ) -> Query[AccessCard]:
        if filters.assigned is True:
            query = query.filter(self.model.user_id.is_not(None))
        if filters.assigned is False:
            query = query.filter(self.model.user_id.is_(None))
        if filters.active is not None:
            query = query.filter(self.model.active == filters.active)
        return query

    def find_by_uid(self, uid: str) -> AccessCard | None:
        """Case-insensitive lookup, loads the bound user in the same query"""
        return (
            self.db.query(self.model)
            .options(joinedload(self.model.user))
            .filter(func.upper(self.model.uid) == uid.upper())
            .first()
        )

    def find_by_user(self, user_id: int) -> AccessCard | None:
        return (
            self.db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.id)
            .first()
        )

    def claim_free_card(self, user_id: int, when: datetime) -> AccessCard | None:
        """
        Bind the first free card (primary key order) to the user in one statement.

        The conditional update only matches a row that is still free, and only
        if the user owns no card yet, so two concurrent claims can never bind
        the same card or give one user two cards. Returns None when nothing
        was claimed.
        """
        free = aliased(AccessCard)
        owned = aliased(AccessCard)
        first_free_id = (
            select(free.id)
            .where(free.user_id.is_(None))
            .order_by(free.id)
            .limit(1)
            .scalar_subquery()
        )
        result = self.db.execute(
            update(AccessCard)
            .where(
                AccessCard.id == first_free_id,
                AccessCard.user_id.is_(None),
                ~select(owned.id).where(owned.user_id == user_id).exists(),
            )
            .values(user_id=user_id, assigned_at=when)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        self.db.expire_all()
        return self.find_by_user(user_id)

    def touch_scanned(self, card_id: int, when: datetime) -> None:
        self.db.execute(
            update(AccessCard)
            .where(AccessCard.id == card_id)
            .values(last_scanned_at=when)
            .execution_options(synchronize_session=False)
        )
