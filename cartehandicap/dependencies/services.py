"""Service dependency providers."""

from fastapi import Depends
from sqlalchemy.orm import Session

from cartehandicap.config import Config, get_config
from cartehandicap.uow import get_uow


class ServiceContainer:
    """Request-scoped service container."""

    def __init__(self, db: Session, config: Config):
        self.db = db
        self.config = config
        self._user_repository = None
        self._accommodation_repository = None
        self._card_repository = None
        self._document_storage = None
        self._registration_service = None
        self._auth_service = None
        self._accommodation_service = None
        self._card_service = None
        self._approval_service = None
        self._verification_service = None
        self._user_service = None

    @property
    def user_repository(self):
        if self._user_repository is None:
            from cartehandicap.repository.user import UserRepository

            self._user_repository = UserRepository(db=self.db)
        return self._user_repository

    @property
    def accommodation_repository(self):
        if self._accommodation_repository is None:
            from cartehandicap.repository.accommodation import AccommodationRepository

            self._accommodation_repository = AccommodationRepository(db=self.db)
        return self._accommodation_repository

    @property
    def card_repository(self):
        if self._card_repository is None:
            from cartehandicap.repository.access_card import AccessCardRepository

            self._card_repository = AccessCardRepository(db=self.db)
        return self._card_repository

    @property
    def document_storage(self):
        if self._document_storage is None:
            from cartehandicap.services.documents import DocumentStorage

            self._document_storage = DocumentStorage(config=self.config)
        return self._document_storage

    @property
    def registration_service(self):
        if self._registration_service is None:
            from cartehandicap.services.registration import RegistrationService

            self._registration_service = RegistrationService(
                user_repository=self.user_repository,
                document_storage=self.document_storage,
            )
        return self._registration_service

    @property
    def auth_service(self):
        if self._auth_service is None:
            from cartehandicap.services.auth import AuthService

            self._auth_service = AuthService(
                user_repository=self.user_repository, config=self.config
            )
        return self._auth_service

    @property
    def accommodation_service(self):
        if self._accommodation_service is None:
            from cartehandicap.services.accommodation import (
                AccommodationAssignmentService,
            )

            self._accommodation_service = AccommodationAssignmentService(
                user_repository=self.user_repository,
                accommodation_repository=self.accommodation_repository,
            )
        return self._accommodation_service

    @property
    def card_service(self):
        if self._card_service is None:
            from cartehandicap.services.card import CardAssignmentService

            self._card_service = CardAssignmentService(
                card_repository=self.card_repository
            )
        return self._card_service

    @property
    def approval_service(self):
        if self._approval_service is None:
            from cartehandicap.services.approval import ApprovalService

            self._approval_service = ApprovalService(
                db=self.db,
                user_repository=self.user_repository,
                accommodation_service=self.accommodation_service,
                card_service=self.card_service,
            )
        return self._approval_service

    @property
    def verification_service(self):
        if self._verification_service is None:
            from cartehandicap.services.verification import AccessVerificationService

            self._verification_service = AccessVerificationService(
                card_repository=self.card_repository
            )
        return self._verification_service

    @property
    def user_service(self):
        if self._user_service is None:
            from cartehandicap.services.user import UserService

            self._user_service = UserService(
                user_repository=self.user_repository,
                card_repository=self.card_repository,
            )
        return self._user_service


def get_container(
    db: Session = Depends(get_uow),
    config: Config = Depends(get_config),
) -> ServiceContainer:
    return ServiceContainer(db, config)


def get_registration_service(container: ServiceContainer = Depends(get_container)):
    return container.registration_service


def get_auth_service(container: ServiceContainer = Depends(get_container)):
    return container.auth_service


def get_card_service(container: ServiceContainer = Depends(get_container)):
    return container.card_service


def get_approval_service(container: ServiceContainer = Depends(get_container)):
    return container.approval_service


def get_verification_service(container: ServiceContainer = Depends(get_container)):
    return container.verification_service


def get_user_service(container: ServiceContainer = Depends(get_container)):
    return container.user_service
