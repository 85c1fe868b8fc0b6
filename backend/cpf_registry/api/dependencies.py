"""FastAPI Dependencies for the user store and id generation.

Endpoints receive their UserStore and IdGenerator through these providers,
so tests can swap them with app.dependency_overrides.
"""

from functools import lru_cache

from ..core.config import settings
from ..core.constants import StoreBackends
from ..core.logging import get_logger
from ..db.database import SessionLocal
from ..domain.ports import IdGenerator, UserStore
from ..infrastructure.ids import UuidGenerator
from ..repositories import InMemoryUserStore, SqlUserStore

logger = get_logger(__name__)


@lru_cache
def _memory_store() -> InMemoryUserStore:
    logger.info("Using the in-memory user store")
    return InMemoryUserStore()


def get_user_store() -> UserStore:
    """Provide the UserStore selected by USER_STORE_BACKEND.

    The in-memory store is process-wide so records survive between requests.
    """
    if settings.USER_STORE_BACKEND == StoreBackends.MEMORY:
        return _memory_store()

    return SqlUserStore(SessionLocal)


def get_id_generator() -> IdGenerator:
    return UuidGenerator()
