"""Models package.

Export all models for easy importing
"""

from .user import UserModel

__all__ = [
    "UserModel",
]
