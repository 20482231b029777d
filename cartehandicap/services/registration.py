"""Registration service. Creates pending applicants with their declared disability categories."""

import json
import logging
import secrets
import time
from dataclasses import dataclass, field
from typing import Any

import bcrypt
from fastapi import Depends, UploadFile
from sqlalchemy.exc import IntegrityError

from cartehandicap.errors.common import ValidationError
from cartehandicap.errors.user import AccountNumberUnavailable, EmailAlreadyRegistered
from cartehandicap.models.user import ApprovalStatus, User
from cartehandicap.repository.user import UserRepository
from cartehandicap.schemas.user import RegistrationResultSchema
from cartehandicap.services.documents import DocumentStorage

logger = logging.getLogger(__name__)

# bcrypt ignores (or, in recent releases, refuses) anything past this many bytes
MAX_PASSWORD_BYTES = 72


@dataclass
class DisabilityTypesParseResult:
    type_ids: list[int] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _flatten(raw: Any) -> list[Any]:
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        values: list[Any] = []
        for item in raw:
            values.extend(_flatten(item))
        return values
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return []
        try:
            decoded = json.loads(text)
        except ValueError:
            return [part.strip() for part in text.split(",") if part.strip()]
        if isinstance(decoded, (list, tuple)):
            return _flatten(list(decoded))
        return [decoded]
    return [raw]


def parse_disability_types(raw: Any) -> DisabilityTypesParseResult:
    """
    Parse disability type ids from a JSON array, a single value, a
    comma-separated string or repeated form fields.

    Values that are not integers are dropped and reported as warnings,
    duplicates keep their first position. Never raises.
    """
    result = DisabilityTypesParseResult()
    for value in _flatten(raw):
        if isinstance(value, bool):
            result.warnings.append(f"ignored non-integer disability type {value!r}")
            continue
        try:
            type_id = int(str(value).strip())
        except (TypeError, ValueError):
            result.warnings.append(f"ignored non-integer disability type {value!r}")
            continue
        if type_id not in result.type_ids:
            result.type_ids.append(type_id)
    return result


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class RegistrationService:
    ACCOUNT_NUMBER_ATTEMPTS = 10

    def __init__(
        self,
        user_repository: UserRepository = Depends(),
        document_storage: DocumentStorage = Depends(),
    ):
        self.user_repository = user_repository
        self.document_storage = document_storage

    def generate_account_number(self) -> str:
        """ACC + last 9 digits of the millisecond clock + 3 random digits, re-drawn on collision"""
        for _ in range(self.ACCOUNT_NUMBER_ATTEMPTS):
            timestamp = str(int(time.time() * 1000))[-9:]
            candidate = f"ACC{timestamp}{secrets.randbelow(1000):03d}"
            if not self.user_repository.account_number_exists(candidate):
                return candidate
        raise AccountNumberUnavailable

    def register(
        self,
        *,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        password: str | None,
        disability_types: Any,
        document: UploadFile | None,
        address: str | None = None,
    ) -> RegistrationResultSchema:
        required = {
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "password": password,
            "disabilityTypes": disability_types,
        }
        missing = [name for name, value in required.items() if not _present(value)]
        if missing:
            raise ValidationError(f"missing {', '.join(missing)}")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:  # type: ignore[union-attr]
            raise ValidationError(f"password longer than {MAX_PASSWORD_BYTES} bytes")

        email = email.strip().lower()  # type: ignore[union-attr]
        if self.user_repository.find_by_email(email) is not None:
            raise EmailAlreadyRegistered(email)

        parsed = parse_disability_types(disability_types)
        for warning in parsed.warnings:
            logger.warning("Registration %s: %s", email, warning)
        known = self.user_repository.known_disability_type_ids(parsed.type_ids)
        type_ids = [type_id for type_id in parsed.type_ids if type_id in known]
        for unknown in set(parsed.type_ids) - known:
            logger.warning("Registration %s: unknown disability type %s", email, unknown)
        if not type_ids:
            logger.warning("Registration %s: no valid disability type recovered", email)

        password_hash = hash_password(password)  # type: ignore[arg-type]
        document_ref = self.document_storage.save(document)
        try:
            user = self._create_user(
                email=email,
                password_hash=password_hash,
                first_name=first_name.strip(),  # type: ignore[union-attr]
                last_name=last_name.strip(),  # type: ignore[union-attr]
                address=address.strip() if address else None,
                document_ref=document_ref,
                type_ids=type_ids,
            )
        except Exception:
            self.document_storage.discard(document_ref)
            raise

        logger.info(
            "Registered user id=%s account=%s disability_types=%s",
            user.id,
            user.account_number,
            type_ids,
        )
        return RegistrationResultSchema(
            message="Registration received. Your document will be reviewed.",
            account_number=user.account_number,
            user_id=user.id,
        )

    def _create_user(
        self, *, email: str, document_ref: str, type_ids: list[int], **fields: Any
    ) -> User:
        """
        Insert the applicant and their declarations in a savepoint. A unique
        violation is either a concurrent registration with the same email or an
        account number drawn twice; the latter is retried with a new number.
        """
        for _ in range(self.ACCOUNT_NUMBER_ATTEMPTS):
            account_number = self.generate_account_number()
            try:
                with self.user_repository.db.begin_nested():
                    user = self.user_repository.create(
                        User(
                            email=email,
                            account_number=account_number,
                            status=ApprovalStatus.PENDING,
                            proof_document_ref=document_ref,
                            **fields,
                        )
                    )
                    self.user_repository.add_declarations(user, type_ids)
                return user
            except IntegrityError:
                if self.user_repository.find_by_email(email) is not None:
                    raise EmailAlreadyRegistered(email)
                logger.warning(
                    "Account number %s already taken, drawing again", account_number
                )
        raise AccountNumberUnavailable


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return any(_present(item) for item in value)
    return True
