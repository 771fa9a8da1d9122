"""Google Custom Search provider."""

import logging
from typing import Any

import aiohttp

from ..errors import SearchError
from ..interfaces import SearchProvider, SearchResult

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.googleapis.com/customsearch/v1"


class GoogleSearchProvider(SearchProvider):
    """Search provider backed by the Custom Search JSON API."""

    def __init__(self, api_key: str | None, engine_id: str | None, timeout: float = 10.0):
        self.api_key = api_key
        self.engine_id = engine_id
        self.timeout = timeout

    async def query(self, text: str) -> list[SearchResult]:
        """
        Search the web.

        Args:
            text: The search terms.

        Returns:
            Up to 10 results, in ranking order.

        Raises:
            SearchError: If credentials are missing or the request fails.
        """
        if not self.api_key or not self.engine_id:
            raise SearchError("Search is not configured")

        data = await self._fetch(text)
        return parse_results(data)

    async def _fetch(self, text: str) -> dict[str, Any]:
        params = {"key": self.api_key, "cx": self.engine_id, "q": text, "num": "10"}
        try:
            async with aiohttp.ClientSession() as http:
                async with http.get(
                    SEARCH_URL,
                    params=params,
                    headers={"Accept": "*/*"},
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as resp:
                    if resp.status != 200:
                        logger.info(f"Search returned HTTP {resp.status}")
                        raise SearchError(f"Search failed with HTTP {resp.status}")
                    return await resp.json()
        except aiohttp.ClientError as e:
            raise SearchError(f"Search request failed: {e}") from e


def parse_results(data: dict[str, Any]) -> list[SearchResult]:
    """Pull (title, link) pairs out of a Custom Search response."""
    return [
        SearchResult(title=item.get("title", ""), link=item.get("link", ""))
        for item in data.get("items", [])
        if item.get("link")
    ]
