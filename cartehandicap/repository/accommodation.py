"""Repository for the accommodation catalog and the user accommodation projection"""

from typing import Iterable

from sqlalchemy import select

from cartehandicap.models.accommodation import Accommodation, handicap_services
from cartehandicap.models.user import user_accommodations
from cartehandicap.repository.base import BaseRepository


class AccommodationRepository(BaseRepository[Accommodation]):
    model = Accommodation

    def get_ids_for_disability_type(self, disability_type_id: int) -> list[int]:
        return list(
            self.db.scalars(
                select(handicap_services.c.accommodation_id)
                .where(handicap_services.c.disability_type_id == disability_type_id)
                .order_by(handicap_services.c.accommodation_id)
            )
        )

    def replace_user_accommodations(
        self, user_id: int, accommodation_ids: Iterable[int]
    ) -> None:
        """Recompute the projection: previous links are dropped, so repeating never duplicates"""
        self.db.execute(
            user_accommodations.delete().where(user_accommodations.c.user_id == user_id)
        )
        rows = [
            {"user_id": user_id, "accommodation_id": accommodation_id}
            for accommodation_id in sorted(set(accommodation_ids))
        ]
        if rows:
            self.db.execute(user_accommodations.insert(), rows)
        self.db.flush()
