"""API routes for administrators: applicant review and the access card registry"""

from fastapi import APIRouter, Depends

from cartehandicap.dependencies.services import (
    get_approval_service,
    get_card_service,
    get_user_service,
)
from cartehandicap.middlewares.token import get_admin_token
from cartehandicap.schemas.access_card import (
    AccessCardCreateSchema,
    AccessCardFiltersSchema,
    AccessCardSchema,
    AccessCardUpdateSchema,
)
from cartehandicap.schemas.approval import ApprovalDecisionSchema, ApprovalResultSchema
from cartehandicap.schemas.base import PaginationSchema
from cartehandicap.schemas.user import PendingUserSchema
from cartehandicap.services.approval import ApprovalService
from cartehandicap.services.card import CardAssignmentService
from cartehandicap.services.user import UserService

admin_router = APIRouter(
    prefix="/admin", tags=["Admin"], dependencies=[Depends(get_admin_token)]
)


@admin_router.get("/pending-users", response_model=list[PendingUserSchema])
def read_pending_users(user_service: UserService = Depends(get_user_service)):
    return user_service.get_pending()


@admin_router.post("/validate/{user_id}", response_model=ApprovalResultSchema)
def validate_user(
    user_id: int,
    decision: ApprovalDecisionSchema,
    approval_service: ApprovalService = Depends(get_approval_service),
):
    return approval_service.decide(user_id, decision.approve)


@admin_router.post("/cards", response_model=AccessCardSchema)
def create_card(
    card: AccessCardCreateSchema,
    card_service: CardAssignmentService = Depends(get_card_service),
):
    return card_service.create(card)


@admin_router.get("/cards", response_model=PaginationSchema[AccessCardSchema])
def read_cards(
    filters: AccessCardFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    card_service: CardAssignmentService = Depends(get_card_service),
):
    return card_service.get_all(filters, skip, limit)


@admin_router.get("/cards/{card_id}", response_model=AccessCardSchema)
def read_card(
    card_id: int,
    card_service: CardAssignmentService = Depends(get_card_service),
):
    return card_service.get(card_id)


@admin_router.patch("/cards/{card_id}", response_model=AccessCardSchema)
def update_card(
    card_id: int,
    card_update: AccessCardUpdateSchema,
    card_service: CardAssignmentService = Depends(get_card_service),
):
    return card_service.update(card_id, card_update)
