"""API routes for user projections"""

from fastapi import APIRouter, Depends

from cartehandicap.dependencies.services import get_user_service
from cartehandicap.middlewares.token import get_admin_token, get_user_from_token
from cartehandicap.models.user import User
from cartehandicap.schemas.accommodation import AccommodationSchema
from cartehandicap.schemas.user import UserSchema
from cartehandicap.services.user import UserService

user_router = APIRouter(prefix="/user", tags=["Users"])


@user_router.get("/me", response_model=UserSchema)
def read_me(
    user: User = Depends(get_user_from_token),
    user_service: UserService = Depends(get_user_service),
):
    return user_service.get_profile(user.id)


@user_router.get("/me/services", response_model=list[AccommodationSchema])
def read_my_services(
    user: User = Depends(get_user_from_token),
    user_service: UserService = Depends(get_user_service),
):
    return user_service.get_services(user.id)


@user_router.get("/{user_id}", response_model=UserSchema)
def read_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
    admin_token: str = Depends(get_admin_token),
):
    return user_service.get_profile(user_id)


@user_router.get("/{user_id}/services", response_model=list[AccommodationSchema])
def read_user_services(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
    admin_token: str = Depends(get_admin_token),
):
    return user_service.get_services(user_id)
