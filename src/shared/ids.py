"""Identifier generation port and its UUID adapter."""

from abc import ABC, abstractmethod
from uuid import uuid4


class IdGenerator(ABC):
    """Produces opaque, globally unique identifiers."""

    @abstractmethod
    def new_id(self) -> str: ...


class UuidIdGenerator(IdGenerator):
    def new_id(self) -> str:
        return str(uuid4())
