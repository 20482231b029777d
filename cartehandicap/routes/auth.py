"""API routes for login"""

from fastapi import APIRouter, Depends

from cartehandicap.dependencies.services import get_auth_service
from cartehandicap.schemas.auth import LoginResultSchema, LoginSchema
from cartehandicap.services.auth import AuthService

auth_router = APIRouter(tags=["Auth"])


@auth_router.post("/login", response_model=LoginResultSchema)
def login(
    credentials: LoginSchema,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Only approved users get a token; pending and rejected ones get a 403 with their status."""
    return auth_service.login(credentials.email, credentials.password)
