"""SQLAlchemy Model for registered users.

A row with deleted_at = NULL is an active user. Soft deletion only sets
deleted_at; rows are never physically removed by the application.
"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, Integer, String, text

from ..core.constants import DatabaseLimits
from ..db.database import Base

ACTIVE_ROWS = text("deleted_at IS NULL")


class UserModel(Base):
    """Registered user model."""

    __tablename__ = "users"

    __table_args__ = (
        # cpf and email are unique among active users only
        Index(
            'unique_active_cpf',
            'cpf',
            unique=True,
            postgresql_where=ACTIVE_ROWS,
            sqlite_where=ACTIVE_ROWS
        ),
        Index(
            'unique_active_email',
            'email',
            unique=True,
            postgresql_where=ACTIVE_ROWS,
            sqlite_where=ACTIVE_ROWS
        ),
        Index('idx_users_deleted_at', 'deleted_at'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(
        String(DatabaseLimits.UUID_LENGTH),
        nullable=False,
        unique=True,
        default=lambda: str(uuid4())
    )
    name = Column(String(DatabaseLimits.NAME_LENGTH), nullable=False)
    email = Column(String(DatabaseLimits.EMAIL_LENGTH), nullable=False)
    cpf = Column(String(DatabaseLimits.CPF_LENGTH), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<UserModel(uuid={self.uuid}, deleted={self.deleted_at is not None})>"
