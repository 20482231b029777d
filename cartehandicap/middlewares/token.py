"""Authentication dependencies: administrator API tokens and user session tokens"""

import secrets

from fastapi import Depends, Header

from cartehandicap.config import Config, get_config
from cartehandicap.dependencies.services import get_auth_service
from cartehandicap.errors.auth import AdminTokenInvalid, TokenInvalid
from cartehandicap.services.auth import AuthService


def get_admin_token(
    x_token: str | None = Header(
        default=None,
        description="API token required for administrator routes",
    ),
    config: Config = Depends(get_config),
) -> str:
    if x_token and any(
        secrets.compare_digest(x_token, token) for token in config.admin_tokens
    ):
        return x_token
    raise AdminTokenInvalid


def get_user_from_token(
    authorization: str | None = Header(
        default=None,
        description="Bearer token returned by /login",
    ),
    auth_service: AuthService = Depends(get_auth_service),
):
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise TokenInvalid
    return auth_service.get_user_from_token(token.strip())
