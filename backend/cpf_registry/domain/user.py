"""User aggregate.

The aggregate holds validated user fields and orchestrates every domain
operation against an injected UserStore:

    validate field -> check existence / duplicates -> mutate store

Every field assignment goes through UserValidator, so an aggregate may be
incomplete but never holds an invalid value. Precondition checks always
complete before the corresponding store mutation starts.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import datetime

from ..core.constants import ErrorMessages
from ..core.exceptions import (
    DuplicateError,
    NotFoundError,
    TypeMismatchError,
    ValidationError,
)
from ..core.logging import get_logger
from ..utils import format_datetime, mask_document, sanitize_log_data, utc_now
from .eligibility import compute_credit_eligibility
from .ports import IdGenerator, UserStore
from .user_validator import UserValidator

logger = get_logger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class UserDetails:
    """Result of a single-record fetch.

    Carries the derived credit eligibility flag, which is never part of the
    persisted user and is never written back to a store.
    """
    id: str
    name: str
    email: str
    cpf: str
    date_creation: str
    date_edition: str | None
    is_credit_eligible: int


class User:
    """User aggregate bound to a UserStore."""

    REQUIRED_FIELDS = ("id", "name", "email", "cpf", "date_creation")

    def __init__(
        self,
        store: UserStore,
        id_generator: IdGenerator | None = None,
        validator: UserValidator | None = None,
        clock: Clock | None = None,
    ):
        self._store = store
        self._id_generator = id_generator
        self._validator = validator or UserValidator()
        self._clock = clock or utc_now

        self._id: str | None = None
        self._name: str | None = None
        self._email: str | None = None
        self._cpf: str | None = None
        self._date_creation: str | None = None
        self._date_edition: str | None = None

    @classmethod
    def build(
        cls,
        store: UserStore,
        *,
        name: str,
        email: str,
        cpf: str,
        id: str | None = None,
        date_creation: str | None = None,
        date_edition: str | None = None,
        id_generator: IdGenerator | None = None,
        validator: UserValidator | None = None,
        clock: Clock | None = None,
    ) -> User:
        """Build a complete aggregate, validating every field at once.

        Args:
            store: Store the aggregate is bound to
            name: User name
            email: User email
            cpf: User CPF (digits only, surrounding whitespace ignored)
            id: Existing id; generated through id_generator when omitted
            date_creation: Enrollment timestamp; stamped with "now" when omitted
            date_edition: Last edition timestamp, if any
            id_generator: Id source used when id is omitted

        Returns:
            A complete User

        Raises:
            ValidationError: If any field fails validation
            RuntimeError: If id is omitted and no id_generator is given
        """
        user = cls(store, id_generator=id_generator, validator=validator, clock=clock)

        if id is None:
            user.generate_id()
        else:
            user.id = id

        user.name = name
        user.email = email
        user.cpf = cpf
        if date_creation is None:
            date_creation = format_datetime(user._clock())
        user.date_creation = date_creation

        if date_edition is not None:
            user.date_edition = date_edition

        return user

    # ------------------------------------------------------------------
    # Validated fields
    # ------------------------------------------------------------------

    @property
    def store(self) -> UserStore:
        return self._store

    @property
    def id(self) -> str | None:
        return self._id

    @id.setter
    def id(self, value: str) -> None:
        self._validator.validate_id(value)
        self._id = value

    @property
    def name(self) -> str | None:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._validator.validate_name(value)
        self._name = value

    @property
    def email(self) -> str | None:
        return self._email

    @email.setter
    def email(self, value: str) -> None:
        self._validator.validate_email(value)
        self._email = value

    @property
    def cpf(self) -> str | None:
        return self._cpf

    @cpf.setter
    def cpf(self, value: str) -> None:
        self._validator.validate_cpf(value)
        self._cpf = value.strip()

    @property
    def date_creation(self) -> str | None:
        return self._date_creation

    @date_creation.setter
    def date_creation(self, value: str) -> None:
        self._validator.validate_date_creation(value)
        self._date_creation = value

    @property
    def date_edition(self) -> str | None:
        return self._date_edition

    @date_edition.setter
    def date_edition(self, value: str) -> None:
        self._validator.validate_date_edition(value)
        if self._date_creation is not None and value < self._date_creation:
            raise ValidationError(ErrorMessages.DATE_EDITION_BEFORE_CREATION)
        self._date_edition = value

    def generate_id(self) -> str:
        """Assign a fresh id from the IdGenerator.

        Generated ids are trusted and skip field validation.
        """
        if self._id_generator is None:
            raise RuntimeError("No IdGenerator is bound to this user")

        self._id = self._id_generator.generate()
        return self._id

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self) -> None:
        """Persist this user after uniqueness checks.

        Raises:
            ValidationError: If a required field is missing
            ValidationError: If date_creation is later than now
            DuplicateError: If the cpf or email is held by an active user
        """
        self._ensure_complete()
        self._check_not_future()
        self.check_already_created_cpf()
        self.check_already_created_email()

        self._store.create(self)

        logger.info(
            "User created",
            extra=sanitize_log_data({'user_id': self._id, 'cpf': self._cpf})
        )

    def create_from_batch(self, users: Iterable[User]) -> None:
        """Persist a batch of pre-validated users.

        Every element is type-checked and checked for completeness before
        the first write. Store failures midway propagate as-is; records
        already written are not rolled back.

        Raises:
            TypeMismatchError: If any element is not of this aggregate's class
            ValidationError: If any element is missing a required field or
                is dated in the future
        """
        users = list(users)

        for user in users:
            if type(user) is not type(self):
                raise TypeMismatchError(ErrorMessages.BATCH_TYPE_MISMATCH)

        for user in users:
            user._ensure_complete()
            user._check_not_future()

        for user in users:
            self._store.create(user)

        logger.info("User batch created", extra={'created_users': len(users)})

    def check_already_created_cpf(self) -> None:
        self._require('cpf')
        if self._store.is_cpf_already_created(self):
            logger.warning(
                "Duplicate cpf rejected",
                extra=sanitize_log_data({'user_id': self._id, 'cpf': self._cpf})
            )
            raise DuplicateError(ErrorMessages.CPF_ALREADY_CREATED, field='cpf')

    def check_already_created_email(self) -> None:
        self._require('email')
        if self._store.is_email_already_created(self):
            logger.warning(
                "Duplicate email rejected",
                extra=sanitize_log_data({'user_id': self._id, 'email': self._email})
            )
            raise DuplicateError(ErrorMessages.EMAIL_ALREADY_CREATED, field='email')

    def find_all(self) -> list[User]:
        return self._store.find_all()

    def find_by_id(self, id: str) -> UserDetails:
        """Load an active user and attach its credit eligibility.

        Eligibility is recomputed here against this aggregate's clock and
        is never persisted.

        Raises:
            ValidationError: If id is not a valid user id
            NotFoundError: If no active user has this id
        """
        self.id = id
        self._check_existent_id()

        details = self._store.find_by_id(id)
        if details is None:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

        is_credit_eligible = compute_credit_eligibility(details.date_creation, self._clock())

        return replace(details, is_credit_eligible=is_credit_eligible)

    def delete_user(self, id: str) -> None:
        """Soft delete the active user with this id.

        Raises:
            ValidationError: If id is not a valid user id
            NotFoundError: If no active user has this id
        """
        self.id = id
        self._check_existent_id()

        if not self._store.delete(id):
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

        logger.info("User soft deleted", extra={'user_id': id})

    def edit_name(self) -> None:
        self._require('id', 'name')
        self._check_existent_id()
        self._stamp_edition()

        self._apply_edit(self._store.edit_name, 'name')

    def edit_cpf(self) -> None:
        self._require('id', 'cpf')
        self._check_existent_id()
        self.check_already_created_cpf()
        self._stamp_edition()

        self._apply_edit(self._store.edit_cpf, 'cpf')

    def edit_email(self) -> None:
        self._require('id', 'email')
        self._check_existent_id()
        self.check_already_created_email()
        self._stamp_edition()

        self._apply_edit(self._store.edit_email, 'email')

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply_edit(self, store_edit: Callable[[User], bool], field: str) -> None:
        # The store reports False when the record vanished after the existence check
        if not store_edit(self):
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

        logger.info("User edited", extra={'user_id': self._id, 'field': field})

    def _check_existent_id(self) -> None:
        if not self._store.is_existent_id(self):
            logger.warning("User not found", extra={'user_id': self._id})
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)

    def _check_not_future(self) -> None:
        if self._date_creation > format_datetime(self._clock()):
            raise ValidationError(ErrorMessages.DATE_CREATION_IN_FUTURE)

    def _stamp_edition(self) -> None:
        self.date_edition = format_datetime(self._clock())

    def _require(self, *fields: str) -> None:
        for field in fields:
            if getattr(self, f"_{field}") is None:
                raise ValidationError(ErrorMessages.FIELD_REQUIRED.format(field=field))

    def _ensure_complete(self) -> None:
        self._require(*self.REQUIRED_FIELDS)

    def __repr__(self) -> str:
        return (
            f"User(id={self._id!r}, name={self._name!r}, "
            f"cpf={mask_document(self._cpf)!r})"
        )
