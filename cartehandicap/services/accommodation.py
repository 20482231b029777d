"""Accommodation assignment. Derives a user's accommodations from their declared disability categories."""

import logging

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from cartehandicap.repository.accommodation import AccommodationRepository
from cartehandicap.repository.user import UserRepository

logger = logging.getLogger(__name__)


class AccommodationAssignmentService:
    def __init__(
        self,
        user_repository: UserRepository = Depends(),
        accommodation_repository: AccommodationRepository = Depends(),
    ):
        self.user_repository = user_repository
        self.accommodation_repository = accommodation_repository

    def resolve(self, user_id: int) -> list[int]:
        """
        Union of the accommodations implied by each declared disability type.

        Lookups are independent: each runs in its own savepoint, a failing one
        is logged and skipped, the others still contribute.
        """
        accommodation_ids: set[int] = set()
        for disability_type_id in self.user_repository.get_declared_type_ids(user_id):
            try:
                with self.accommodation_repository.db.begin_nested():
                    accommodation_ids.update(
                        self.accommodation_repository.get_ids_for_disability_type(
                            disability_type_id
                        )
                    )
            except SQLAlchemyError:
                logger.exception(
                    "Accommodation lookup failed for user id=%s disability type=%s",
                    user_id,
                    disability_type_id,
                )
        return sorted(accommodation_ids)

    def assign(self, user_id: int) -> list[int]:
        """Replace the user's accommodation links with the freshly resolved set"""
        accommodation_ids = self.resolve(user_id)
        self.accommodation_repository.replace_user_accommodations(
            user_id, accommodation_ids
        )
        logger.info(
            "Assigned accommodations %s to user id=%s", accommodation_ids, user_id
        )
        return accommodation_ids
