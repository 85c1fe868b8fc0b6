"""Ports consumed by the User aggregate.

This module defines the abstract interfaces the domain is driven against.
The composing layer (API dependencies, tests) selects the concrete
implementation, which keeps backends substitutable:
- UserStore: persistence contract (SQL database, in-memory)
- IdGenerator: unique identifier source for new users
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .user import User, UserDetails


class IdGenerator(ABC):
    """Produces globally-unique identifiers in UUID textual form."""

    @abstractmethod
    def generate(self) -> str:
        """Generate a new identifier."""


class UserStore(ABC):
    """Abstract persistence contract for User aggregates.

    All predicates and reads are scoped to active (non soft-deleted) records.
    Callers run validation and uniqueness checks before any mutating call.
    Writes still enforce active uniqueness of cpf and email and raise
    DuplicateError on a violation. An id is never stored twice, even after
    soft deletion. Edits raise ValidationError when the new updated_at is
    earlier than the stored creation date.
    """

    @abstractmethod
    def create(self, user: User) -> None:
        """Insert a new active record for a fully-populated user."""

    @abstractmethod
    def is_cpf_already_created(self, user: User) -> bool:
        """Check whether another active user already holds user.cpf.

        The user's own record (same id) never counts as a duplicate.
        """

    @abstractmethod
    def is_email_already_created(self, user: User) -> bool:
        """Check whether another active user already holds user.email."""

    @abstractmethod
    def find_all(self) -> list[User]:
        """Return every active user as a validated aggregate (any order)."""

    @abstractmethod
    def is_existent_id(self, user: User) -> bool:
        """Check whether an active record exists for user.id."""

    @abstractmethod
    def find_by_id(self, id: str) -> UserDetails | None:
        """Load an active record enriched with its credit eligibility flag.

        Returns:
            UserDetails, or None if no active record has this id
        """

    @abstractmethod
    def edit_name(self, user: User) -> bool:
        """Update name and updated_at for user.id.

        Returns:
            False if no active record matched (nothing was updated)
        """

    @abstractmethod
    def edit_cpf(self, user: User) -> bool:
        """Update cpf and updated_at for user.id."""

    @abstractmethod
    def edit_email(self, user: User) -> bool:
        """Update email and updated_at for user.id."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft delete the active record with this id.

        Returns:
            False if no active record matched
        """
