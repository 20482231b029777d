"""DTO for administrator approval decisions"""

from cartehandicap.models.user import ApprovalStatus
from cartehandicap.schemas.base import BaseSchema


class ApprovalDecisionSchema(BaseSchema):
    approve: bool


class ApprovalResultSchema(BaseSchema):
    message: str
    user_id: int
    status: ApprovalStatus
    card_uid: str | None = None
    accommodation_ids: list[int] = []
