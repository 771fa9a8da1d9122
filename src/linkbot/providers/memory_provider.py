"""In-memory link storage."""

from __future__ import annotations

from ..errors import DuplicateKeyError, NotFoundError
from ..interfaces import DataProvider, LinkedEntity


class InMemoryLinkProvider(DataProvider):
    """Link provider that keeps records in a dict.

    Records are listed in insertion order.
    """

    def __init__(self, links: list[LinkedEntity] | None = None):
        self._links: dict[str, LinkedEntity] = {}
        for link in links or []:
            self._links[link.id] = link

    async def find_by_id(self, id: str) -> LinkedEntity | None:
        return self._links.get(id)

    async def list(self, offset: int, limit: int) -> list[LinkedEntity]:
        """
        List a slice of links.

        Args:
            offset: Number of links to skip.
            limit: Maximum number of links to return.

        Returns:
            The links in the slice (empty past the end).
        """
        if offset < 0 or limit < 0:
            raise ValueError("offset and limit must not be negative")
        return list(self._links.values())[offset:offset + limit]

    async def count(self) -> int:
        return len(self._links)

    async def create(self, entity: LinkedEntity) -> LinkedEntity:
        if entity.id in self._links:
            raise DuplicateKeyError(f"Link already exists: {entity.id}", details={"id": entity.id})
        self._links[entity.id] = entity
        return entity

    async def delete(self, id: str) -> None:
        if id not in self._links:
            raise NotFoundError(f"Link not found: {id}", details={"id": id})
        del self._links[id]

    async def search(self, query: str, limit: int) -> list[LinkedEntity]:
        """
        Find links whose name contains query (case-insensitive).

        Names starting with query come first. An empty query matches
        every link.
        """
        needle = query.strip().lower()
        matches = [link for link in self._links.values() if needle in link.name.lower()]
        matches.sort(key=lambda link: not link.name.lower().startswith(needle))
        return matches[:limit]

    def all(self) -> list[LinkedEntity]:
        """Get every link, in order."""
        return list(self._links.values())
