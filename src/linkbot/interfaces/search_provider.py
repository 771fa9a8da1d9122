"""Abstract interface for web search."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    title: str
    link: str


class SearchProvider(ABC):
    @abstractmethod
    async def query(self, text: str) -> list[SearchResult]:
        """Run a search.

        Raises:
            SearchError: If the search backend could not be queried.
        """
        pass
