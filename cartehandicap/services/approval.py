"""Approval service. Administrator decisions on pending applicants and their follow-on assignments."""

import logging

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cartehandicap.errors.user import DecisionAlreadyMade
from cartehandicap.models.user import ApprovalStatus
from cartehandicap.repository.user import UserRepository
from cartehandicap.schemas.approval import ApprovalResultSchema
from cartehandicap.services.accommodation import AccommodationAssignmentService
from cartehandicap.services.card import CardAssignmentResult, CardAssignmentService, utcnow
from cartehandicap.uow import get_uow

logger = logging.getLogger(__name__)


class ApprovalService:
    def __init__(
        self,
        db: Session = Depends(get_uow),
        user_repository: UserRepository = Depends(),
        accommodation_service: AccommodationAssignmentService = Depends(),
        card_service: CardAssignmentService = Depends(),
    ):
        self.db = db
        self.user_repository = user_repository
        self.accommodation_service = accommodation_service
        self.card_service = card_service

    def decide(self, user_id: int, approve: bool) -> ApprovalResultSchema:
        """
        pending -> approved | rejected. Repeating the same decision is allowed,
        reversing one is not.

        The decision is committed before accommodations and the card are
        assigned. Each of those steps commits or rolls back on its own, so
        their failure leaves the user approved but unassigned.
        """
        user = self.user_repository.get(user_id)
        target = ApprovalStatus.APPROVED if approve else ApprovalStatus.REJECTED
        if user.status not in (ApprovalStatus.PENDING, target):
            raise DecisionAlreadyMade(f"user id={user_id} is {user.status.value}")

        if user.status != target:
            now = utcnow()
            self.user_repository.update(
                user_id, {"status": target, "validated_at": now, "modified_at": now}
            )
            self.db.commit()
            logger.info("User id=%s %s", user_id, target.value)

        if not approve:
            return ApprovalResultSchema(
                message="User rejected", user_id=user_id, status=target
            )

        accommodation_ids = self._assign_accommodations(user_id)
        card = self._assign_card(user_id)
        if card is None:
            message = "User approved, but card assignment failed"
        elif card.assigned:
            message = "User approved, card assigned"
        else:
            message = "User approved, but no card available"
        return ApprovalResultSchema(
            message=message,
            user_id=user_id,
            status=target,
            card_uid=card.card_uid if card else None,
            accommodation_ids=accommodation_ids,
        )

    def _assign_accommodations(self, user_id: int) -> list[int]:
        try:
            accommodation_ids = self.accommodation_service.assign(user_id)
            self.db.commit()
            return accommodation_ids
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Accommodation assignment failed for user id=%s", user_id)
            return []

    def _assign_card(self, user_id: int) -> CardAssignmentResult | None:
        try:
            result = self.card_service.assign(user_id)
            self.db.commit()
            return result
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Card assignment failed for user id=%s", user_id)
            return None
