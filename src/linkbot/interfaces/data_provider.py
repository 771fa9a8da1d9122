"""Abstract interface for link storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LinkedEntity:
    """A named link record."""

    id: str
    name: str
    description: str
    url: str
    author_id: str = ""
    author_display_name: str = ""


class DataProvider(ABC):
    """Abstract interface for persisted link records."""

    @abstractmethod
    async def find_by_id(self, id: str) -> LinkedEntity | None:
        pass

    @abstractmethod
    async def list(self, offset: int, limit: int) -> list[LinkedEntity]:
        """List records in stable order, skipping offset and taking limit."""
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def create(self, entity: LinkedEntity) -> LinkedEntity:
        """Store a new record.

        Raises:
            DuplicateKeyError: If a record with the same id exists.
        """
        pass

    @abstractmethod
    async def delete(self, id: str) -> None:
        """Remove a record.

        Raises:
            NotFoundError: If no record has this id.
        """
        pass

    @abstractmethod
    async def search(self, query: str, limit: int) -> list[LinkedEntity]:
        """Find records whose name matches query, prefix matches first."""
        pass
