"""In-memory User Repository.

UserStore kept in a dict owned by one instance, keyed by user id. Intended
for tests and local runs; it is not synchronized and must not be shared
across concurrent requests without external locking.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..core.constants import ErrorMessages
from ..core.exceptions import DuplicateError, ValidationError
from ..core.logging import get_logger
from ..domain.eligibility import compute_credit_eligibility
from ..domain.ports import UserStore
from ..domain.user import Clock, User, UserDetails
from ..utils import format_datetime, utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class StoredUser:
    """Snapshot of a persisted user. deleted_at is None while active."""
    id: str
    name: str
    email: str
    cpf: str
    date_creation: str
    date_edition: str | None = None
    deleted_at: str | None = None

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None


class InMemoryUserStore(UserStore):
    """In-memory implementation of UserStore.

    Mirrors the durable backend, including the active-only uniqueness of
    cpf and email, so both backends are interchangeable in tests.
    """

    def __init__(self, clock: Clock | None = None):
        self._users: dict[str, StoredUser] = {}
        self._clock = clock or utc_now

    def create(self, user: User) -> None:
        if user.id in self._users:
            raise DuplicateError(ErrorMessages.ID_ALREADY_CREATED, field='id')

        self._ensure_unique('cpf', user.cpf, user.id)
        self._ensure_unique('email', user.email, user.id)

        self._users[user.id] = StoredUser(
            id=user.id,
            name=user.name,
            email=user.email,
            cpf=user.cpf,
            date_creation=user.date_creation,
        )

    def is_cpf_already_created(self, user: User) -> bool:
        return self._holder_of('cpf', user.cpf, user.id) is not None

    def is_email_already_created(self, user: User) -> bool:
        return self._holder_of('email', user.email, user.id) is not None

    def find_all(self) -> list[User]:
        return [
            User.build(
                self,
                id=stored.id,
                name=stored.name,
                email=stored.email,
                cpf=stored.cpf,
                date_creation=stored.date_creation,
                date_edition=stored.date_edition,
                clock=self._clock,
            )
            for stored in self._active()
        ]

    def is_existent_id(self, user: User) -> bool:
        return self._get_active(user.id) is not None

    def find_by_id(self, id: str) -> UserDetails | None:
        stored = self._get_active(id)
        if stored is None:
            return None

        return UserDetails(
            id=stored.id,
            name=stored.name,
            email=stored.email,
            cpf=stored.cpf,
            date_creation=stored.date_creation,
            date_edition=stored.date_edition,
            is_credit_eligible=compute_credit_eligibility(stored.date_creation, self._clock()),
        )

    def edit_name(self, user: User) -> bool:
        return self._update_active(user, name=user.name)

    def edit_cpf(self, user: User) -> bool:
        if self._get_active(user.id) is not None:
            self._ensure_unique('cpf', user.cpf, user.id)
        return self._update_active(user, cpf=user.cpf)

    def edit_email(self, user: User) -> bool:
        if self._get_active(user.id) is not None:
            self._ensure_unique('email', user.email, user.id)
        return self._update_active(user, email=user.email)

    def delete(self, id: str) -> bool:
        stored = self._get_active(id)
        if stored is None:
            return False

        self._users[id] = replace(stored, deleted_at=format_datetime(self._clock()))
        return True

    def get_stored(self, id: str) -> StoredUser | None:
        """Return the raw snapshot for an id, soft-deleted or not."""
        return self._users.get(id)

    def _active(self) -> list[StoredUser]:
        return [stored for stored in self._users.values() if stored.is_active]

    def _get_active(self, id: str | None) -> StoredUser | None:
        stored = self._users.get(id)
        if stored is None or not stored.is_active:
            return None
        return stored

    def _holder_of(self, field: str, value: str | None, exclude_id: str | None) -> StoredUser | None:
        for stored in self._active():
            if stored.id != exclude_id and getattr(stored, field) == value:
                return stored
        return None

    def _ensure_unique(self, field: str, value: str | None, exclude_id: str | None) -> None:
        if self._holder_of(field, value, exclude_id) is None:
            return

        logger.warning("Unique constraint rejected a duplicate", extra={'field': field})
        message = (
            ErrorMessages.CPF_ALREADY_CREATED if field == 'cpf'
            else ErrorMessages.EMAIL_ALREADY_CREATED
        )
        raise DuplicateError(message, field=field)

    def _update_active(self, user: User, **values) -> bool:
        stored = self._get_active(user.id)
        if stored is None:
            return False

        if user.date_edition < stored.date_creation:
            raise ValidationError(ErrorMessages.DATE_EDITION_BEFORE_CREATION)

        self._users[user.id] = replace(stored, date_edition=user.date_edition, **values)
        return True
