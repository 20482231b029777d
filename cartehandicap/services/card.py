"""Access card registry and card assignment"""

import datetime
import logging
from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.exc import IntegrityError

from cartehandicap.errors.card import CardAlreadyProvisioned
from cartehandicap.models.access_card import AccessCard
from cartehandicap.repository.access_card import AccessCardRepository
from cartehandicap.schemas.access_card import (
    AccessCardCreateSchema,
    AccessCardFiltersSchema,
    AccessCardUpdateSchema,
)
from cartehandicap.schemas.base import PaginationSchema

logger = logging.getLogger(__name__)


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True, slots=True)
class CardAssignmentResult:
    card_uid: str | None

    @property
    def assigned(self) -> bool:
        return self.card_uid is not None


class CardAssignmentService:
    def __init__(self, card_repository: AccessCardRepository = Depends()):
        self.card_repository = card_repository

    def assign(self, user_id: int) -> CardAssignmentResult:
        """
        Bind the first free card to the user, or return the card they already hold.
        An empty pool is a normal outcome, not an error.
        """
        existing = self.card_repository.find_by_user(user_id)
        if existing is not None:
            return CardAssignmentResult(card_uid=existing.uid)

        card = self.card_repository.claim_free_card(user_id, when=utcnow())
        if card is not None:
            logger.info("Card %s assigned to user id=%s", card.uid, user_id)
            return CardAssignmentResult(card_uid=card.uid)

        # the claim also refuses when a concurrent request already gave this user a card
        existing = self.card_repository.find_by_user(user_id)
        if existing is not None:
            return CardAssignmentResult(card_uid=existing.uid)

        logger.warning("No free access card left for user id=%s", user_id)
        return CardAssignmentResult(card_uid=None)

    # card registry administration

    def create(self, schema: AccessCardCreateSchema) -> AccessCard:
        if self.card_repository.find_by_uid(schema.uid) is not None:
            raise CardAlreadyProvisioned(schema.uid)
        try:
            return self.card_repository.create(AccessCard(**schema.dump()))
        except IntegrityError:
            raise CardAlreadyProvisioned(schema.uid)

    def get(self, card_id: int) -> AccessCard:
        return self.card_repository.get(card_id)

    def get_all(
        self, filters: AccessCardFiltersSchema | None = None, skip=0, limit=100
    ) -> PaginationSchema[AccessCard]:
        return self.card_repository.get_all(filters, skip, limit)

    def update(self, card_id: int, schema: AccessCardUpdateSchema) -> AccessCard:
        return self.card_repository.update(
            card_id, {**schema.dump(), "modified_at": utcnow()}
        )
