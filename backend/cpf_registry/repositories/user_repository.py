"""User Repository.

Durable UserStore backed by SQLAlchemy. Every operation runs in its own
short-lived session from the injected factory.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from ..core.constants import ErrorMessages
from ..core.exceptions import DuplicateError, ValidationError
from ..core.logging import get_logger
from ..domain.eligibility import compute_credit_eligibility
from ..domain.ports import UserStore
from ..domain.user import Clock, User, UserDetails
from ..models.user import UserModel
from ..utils import format_datetime, parse_datetime, utc_now

logger = get_logger(__name__)

DUPLICATE_ERROR_MESSAGES = {
    'id': ErrorMessages.ID_ALREADY_CREATED,
    'cpf': ErrorMessages.CPF_ALREADY_CREATED,
    'email': ErrorMessages.EMAIL_ALREADY_CREATED,
}

# Database constraint error patterns, per offending field
DUPLICATE_ERROR_PATTERNS = {
    'id': ('users.uuid', 'users_uuid_key'),
    'cpf': ('unique_active_cpf', 'users.cpf'),
    'email': ('unique_active_email', 'users.email'),
}


def duplicate_field_from_error(error: IntegrityError) -> str | None:
    """Identify which unique index an IntegrityError violated.

    This covers the race where the duplicate check passed but another
    writer committed the same cpf or email before us.

    Args:
        error: IntegrityError raised by the driver

    Returns:
        "id", "cpf" or "email", or None for any other constraint
    """
    error_str = str(error.orig).lower()
    for field, patterns in DUPLICATE_ERROR_PATTERNS.items():
        if any(pattern in error_str for pattern in patterns):
            return field
    return None


class SqlUserStore(UserStore):
    """SQLAlchemy implementation of UserStore."""

    def __init__(self, session_factory: sessionmaker, clock: Clock | None = None):
        self._session_factory = session_factory
        self._clock = clock or utc_now

    def create(self, user: User) -> None:
        record = UserModel(
            uuid=user.id,
            name=user.name,
            email=user.email,
            cpf=user.cpf,
            created_at=parse_datetime(user.date_creation),
        )
        with self._session_factory() as db, self._unique_violations(db):
            if self._uuid_taken(db, user.id):
                raise DuplicateError(ErrorMessages.ID_ALREADY_CREATED, field='id')
            db.add(record)
            db.commit()

    def is_cpf_already_created(self, user: User) -> bool:
        return self._exists_other_active(UserModel.cpf == user.cpf, user.id)

    def is_email_already_created(self, user: User) -> bool:
        return self._exists_other_active(UserModel.email == user.email, user.id)

    def find_all(self) -> list[User]:
        query = (
            select(UserModel)
            .where(UserModel.deleted_at.is_(None))
            .order_by(UserModel.id)
        )
        with self._session_factory() as db:
            records = db.execute(query).scalars().all()

        return [self._to_user(record) for record in records]

    def is_existent_id(self, user: User) -> bool:
        query = select(UserModel.id).where(
            UserModel.uuid == user.id,
            UserModel.deleted_at.is_(None)
        )
        with self._session_factory() as db:
            return db.execute(query.limit(1)).first() is not None

    def find_by_id(self, id: str) -> UserDetails | None:
        query = select(UserModel).where(
            UserModel.uuid == id,
            UserModel.deleted_at.is_(None)
        )
        with self._session_factory() as db:
            record = db.execute(query).scalar_one_or_none()

        if record is None:
            return None

        date_creation = format_datetime(record.created_at)
        return UserDetails(
            id=record.uuid,
            name=record.name,
            email=record.email,
            cpf=record.cpf,
            date_creation=date_creation,
            date_edition=format_datetime(record.updated_at) if record.updated_at else None,
            is_credit_eligible=compute_credit_eligibility(date_creation, self._clock()),
        )

    def edit_name(self, user: User) -> bool:
        return self._update_active(user, name=user.name)

    def edit_cpf(self, user: User) -> bool:
        return self._update_active(user, cpf=user.cpf)

    def edit_email(self, user: User) -> bool:
        return self._update_active(user, email=user.email)

    def delete(self, id: str) -> bool:
        statement = (
            update(UserModel)
            .where(UserModel.uuid == id, UserModel.deleted_at.is_(None))
            .values(deleted_at=self._clock())
        )
        with self._session_factory() as db, self._unique_violations(db):
            updated = db.execute(statement).rowcount > 0
            db.commit()
        return updated

    def _update_active(self, user: User, **values) -> bool:
        date_edition = parse_datetime(user.date_edition)
        created_at_query = select(UserModel.created_at).where(
            UserModel.uuid == user.id,
            UserModel.deleted_at.is_(None)
        )
        statement = (
            update(UserModel)
            .where(UserModel.uuid == user.id, UserModel.deleted_at.is_(None))
            .values(updated_at=date_edition, **values)
        )
        with self._session_factory() as db, self._unique_violations(db):
            created_at = db.execute(created_at_query).scalar_one_or_none()
            if created_at is None:
                return False
            if date_edition < created_at:
                raise ValidationError(ErrorMessages.DATE_EDITION_BEFORE_CREATION)

            updated = db.execute(statement).rowcount > 0
            db.commit()
        return updated

    def _uuid_taken(self, db: Session, id: str) -> bool:
        query = select(UserModel.id).where(UserModel.uuid == id)
        return db.execute(query.limit(1)).first() is not None

    def _exists_other_active(self, condition, exclude_id: str | None) -> bool:
        query = select(UserModel.id).where(condition, UserModel.deleted_at.is_(None))
        if exclude_id is not None:
            query = query.where(UserModel.uuid != exclude_id)

        with self._session_factory() as db:
            return db.execute(query.limit(1)).first() is not None

    @contextmanager
    def _unique_violations(self, db: Session) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            db.rollback()
            field = duplicate_field_from_error(e)
            if field is None:
                raise
            logger.warning(
                "Unique constraint rejected a concurrent duplicate",
                extra={'field': field}
            )
            raise DuplicateError(DUPLICATE_ERROR_MESSAGES[field], field=field) from e

    def _to_user(self, record: UserModel) -> User:
        return User.build(
            self,
            id=record.uuid,
            name=record.name,
            email=record.email,
            cpf=record.cpf,
            date_creation=format_datetime(record.created_at),
            date_edition=format_datetime(record.updated_at) if record.updated_at else None,
            clock=self._clock,
        )
