"""User projections: profile, resolved accommodations, pending applicants, account verification."""

from fastapi import Depends

from cartehandicap.errors.common import NotFoundError
from cartehandicap.errors.user import AccountNotApproved
from cartehandicap.models.accommodation import Accommodation
from cartehandicap.models.user import ApprovalStatus, User
from cartehandicap.repository.access_card import AccessCardRepository
from cartehandicap.repository.user import UserRepository
from cartehandicap.schemas.accommodation import (
    AccommodationSchema,
    AccountVerificationSchema,
)
from cartehandicap.schemas.user import AccountHolderSchema, UserSchema


class UserService:
    def __init__(
        self,
        user_repository: UserRepository = Depends(),
        card_repository: AccessCardRepository = Depends(),
    ):
        self.user_repository = user_repository
        self.card_repository = card_repository

    def get(self, user_id: int) -> User:
        return self.user_repository.get(user_id)

    def get_profile(self, user_id: int) -> UserSchema:
        profile = UserSchema.model_validate(self.get(user_id))
        card = self.card_repository.find_by_user(user_id)
        if card is not None:
            profile.card_uid = card.uid
        return profile

    def get_services(self, user_id: int) -> list[Accommodation]:
        # raise NotFoundError for unknown users instead of an empty list
        self.get(user_id)
        return self.user_repository.get_accommodations(user_id)

    def get_pending(self) -> list[User]:
        return self.user_repository.list_pending()

    def verify_account(self, account_number: str) -> AccountVerificationSchema:
        """Front-desk check of an account number: who holds it and what they are entitled to"""
        user = self.user_repository.find_by_account_number(account_number.strip())
        if user is None:
            raise NotFoundError(f"account {account_number}")
        if user.status != ApprovalStatus.APPROVED:
            raise AccountNotApproved(account_number)
        return AccountVerificationSchema(
            user=AccountHolderSchema.model_validate(user),
            services=[
                AccommodationSchema.model_validate(accommodation)
                for accommodation in self.user_repository.get_accommodations(user.id)
            ],
        )
