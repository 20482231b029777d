"""Access verification service. Decides whether a scanned card opens the door."""

import logging

from fastapi import Depends

from cartehandicap.errors.card import ScanUidMissing
from cartehandicap.models.access_card import AccessCard
from cartehandicap.models.user import ApprovalStatus
from cartehandicap.repository.access_card import AccessCardRepository
from cartehandicap.schemas.scan import Access, ScanDecisionSchema
from cartehandicap.services.card import utcnow

logger = logging.getLogger(__name__)


class AccessVerificationService:
    def __init__(self, card_repository: AccessCardRepository = Depends()):
        self.card_repository = card_repository

    @staticmethod
    def normalize_uid(uid: str | int | None) -> str:
        return str(uid).strip().upper() if uid is not None else ""

    def find_card(self, uid: str | int | None) -> AccessCard | None:
        normalized = self.normalize_uid(uid)
        if not normalized:
            raise ScanUidMissing
        return self.card_repository.find_by_uid(normalized)

    def verify(self, uid: str | int | None) -> tuple[ScanDecisionSchema, AccessCard | None]:
        """
        Checks run in a fixed order and the first failing one is the reason:
        unknown_uid, inactive_card, expired, not_validated.
        Denials are ordinary results, never errors.
        """
        card = self.find_card(uid)
        if card is None:
            logger.info("Scan denied, unknown uid %s", self.normalize_uid(uid))
            return ScanDecisionSchema(access=Access.DENIED, reason="unknown_uid"), None

        user = card.user
        name = user.display_name if user is not None else ""
        reason = None
        if not card.active:
            reason = "inactive_card"
        elif card.expires_at is not None and card.expires_at <= utcnow():
            reason = "expired"
        elif user is None or user.status != ApprovalStatus.APPROVED:
            reason = "not_validated"

        if reason is not None:
            logger.info("Scan denied for card %s: %s", card.uid, reason)
            return ScanDecisionSchema(access=Access.DENIED, name=name, reason=reason), card

        logger.info("Scan granted for card %s (user id=%s)", card.uid, user.id)
        return ScanDecisionSchema(access=Access.GRANTED, name=name), card

    def record_scan(self, card_id: int) -> None:
        self.card_repository.touch_scanned(card_id, when=utcnow())
