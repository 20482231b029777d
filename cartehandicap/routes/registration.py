"""API routes for applicant registration"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from cartehandicap.dependencies.services import get_registration_service
from cartehandicap.schemas.user import RegistrationResultSchema
from cartehandicap.services.registration import RegistrationService

registration_router = APIRouter(tags=["Registration"])


@registration_router.post(
    "/register",
    response_model=RegistrationResultSchema,
    status_code=status.HTTP_201_CREATED,
)
def register(
    first_name: str | None = Form(None, alias="firstName"),
    last_name: str | None = Form(None, alias="lastName"),
    email: str | None = Form(None),
    address: str | None = Form(None),
    password: str | None = Form(None),
    disability_types: list[str] | None = Form(None, alias="disabilityTypes"),
    proof_document: UploadFile | None = File(None, alias="proofDocument"),
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """
    Multipart registration. `disabilityTypes` may be repeated, a JSON array or
    a comma-separated list; `proofDocument` is a pdf, jpg or png of at most 5 MB.
    """
    return registration_service.register(
        first_name=first_name,
        last_name=last_name,
        email=email,
        address=address,
        password=password,
        disability_types=disability_types,
        document=proof_document,
    )
