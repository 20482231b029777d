"""Authentication service. Verifies credentials, gates login on approval status, issues tokens."""

import logging
import time
from datetime import timedelta

import jwt
from fastapi import Depends

from cartehandicap.config import Config, get_config
from cartehandicap.errors.auth import (
    AuthError,
    PendingApprovalError,
    RejectedError,
    TokenInvalid,
)
from cartehandicap.errors.common import NotFoundError
from cartehandicap.models.user import ApprovalStatus, User
from cartehandicap.repository.user import UserRepository
from cartehandicap.schemas.auth import LoginResultSchema
from cartehandicap.services.registration import hash_password, verify_password

logger = logging.getLogger(__name__)

# compared against when the email is unknown, so both failures cost the same
_DUMMY_HASH = hash_password("cartehandicap-dummy-password")


class AuthService:
    ALGORITHM = "HS256"
    TOKEN_LIFETIME = timedelta(weeks=4)

    def __init__(
        self,
        user_repository: UserRepository = Depends(),
        config: Config = Depends(get_config),
    ):
        self.user_repository = user_repository
        self.config = config

    def _generate_new_token(self, user_id: int) -> str:
        """Generate a new signed token with user_id and current timestamp."""
        data = {
            "sub": str(user_id),
            "iat": int(time.time()),
            "exp": int(time.time() + self.TOKEN_LIFETIME.total_seconds()),
        }
        return jwt.encode(data, self.config.secret_key, algorithm=self.ALGORITHM)

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials only. Unknown email and wrong password are the same error."""
        user = self.user_repository.find_by_email(email.strip().lower())
        if user is None:
            verify_password(password, _DUMMY_HASH)
            raise AuthError
        if not verify_password(password, user.password_hash):
            raise AuthError
        return user

    def login(self, email: str, password: str) -> LoginResultSchema:
        user = self.authenticate(email, password)
        if user.status == ApprovalStatus.PENDING:
            logger.info("Login refused for pending user id=%s", user.id)
            raise PendingApprovalError
        if user.status == ApprovalStatus.REJECTED:
            logger.info("Login refused for rejected user id=%s", user.id)
            raise RejectedError
        return LoginResultSchema(
            user_id=user.id,
            account_number=user.account_number,
            status=user.status,
            token=self._generate_new_token(user.id),
        )

    def get_user_from_token(self, token: str) -> User:
        """Verify the token, decode the user id, then load the user."""
        try:
            payload = jwt.decode(
                token, self.config.secret_key, algorithms=[self.ALGORITHM]
            )
            user_id = int(payload.get("sub") or 0)
        except (jwt.InvalidTokenError, ValueError):
            raise TokenInvalid
        try:
            user = self.user_repository.get(user_id)
        except NotFoundError:
            raise TokenInvalid
        if user.status != ApprovalStatus.APPROVED:
            raise TokenInvalid("account is not approved")
        return user
