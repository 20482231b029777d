"""API routes for card readers and front-desk verification"""

from fastapi import APIRouter, BackgroundTasks, Depends

from cartehandicap.config import Config, get_config
from cartehandicap.dependencies.services import (
    get_user_service,
    get_verification_service,
)
from cartehandicap.schemas.accommodation import AccountVerificationSchema
from cartehandicap.schemas.scan import ScanDecisionSchema, ScanRequestSchema
from cartehandicap.services.user import UserService
from cartehandicap.services.verification import AccessVerificationService
from cartehandicap.tasks.scan import record_scan

scan_router = APIRouter(tags=["Access"])


@scan_router.post(
    "/scan", response_model=ScanDecisionSchema, response_model_exclude_none=True
)
@scan_router.post(
    "/check",
    response_model=ScanDecisionSchema,
    response_model_exclude_none=True,
    include_in_schema=False,
)
def scan_card(
    scan: ScanRequestSchema,
    background_tasks: BackgroundTasks,
    verification_service: AccessVerificationService = Depends(get_verification_service),
    config: Config = Depends(get_config),
):
    """Unknown, inactive or expired cards are answered with DENIED and a reason, never an error status."""
    decision, card = verification_service.verify(scan.uid)
    if decision.granted and card is not None:
        background_tasks.add_task(record_scan, card.id, config)
    return decision


@scan_router.get("/verify/{account_number}", response_model=AccountVerificationSchema)
def verify_account(
    account_number: str,
    user_service: UserService = Depends(get_user_service),
):
    return user_service.verify_account(account_number)
