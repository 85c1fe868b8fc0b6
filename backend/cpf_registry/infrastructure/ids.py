"""Identifier generation for new users."""

import uuid

from ..domain.ports import IdGenerator


class UuidGenerator(IdGenerator):
    """IdGenerator producing random (version 4) UUIDs."""

    def generate(self) -> str:
        return str(uuid.uuid4())
