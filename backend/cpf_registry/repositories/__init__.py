"""Repository Layer.

UserStore implementations following the Repository Pattern:
- SqlUserStore: durable backend (SQLAlchemy)
- InMemoryUserStore: in-memory backend for tests and local runs
"""

from .memory_user_repository import InMemoryUserStore, StoredUser
from .user_repository import SqlUserStore

__all__ = ['InMemoryUserStore', 'SqlUserStore', 'StoredUser']
