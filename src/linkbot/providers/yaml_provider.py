"""YAML-file-backed link storage."""

import logging
from dataclasses import asdict
from pathlib import Path

import yaml

from ..interfaces import LinkedEntity
from .memory_provider import InMemoryLinkProvider

logger = logging.getLogger(__name__)


class YamlLinkProvider(InMemoryLinkProvider):
    """Link provider persisted to a YAML file.

    The whole file is rewritten after every create or delete.
    """

    def __init__(self, path: str | Path):
        """
        Initialize from a YAML file, which need not exist yet.

        Args:
            path: Location of the links file.

        Raises:
            ValueError: If the file exists but is not a links document.
        """
        self.path = Path(path).expanduser()
        super().__init__(self._load())
        logger.info(f"Loaded {len(self.all())} link(s) from {self.path}")

    def _load(self) -> list[LinkedEntity]:
        if not self.path.exists():
            return []

        with open(self.path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict) or not isinstance(data.get("links", []), list):
            raise ValueError(f"Not a links file: {self.path}")

        links = []
        for item in data.get("links", []):
            links.append(
                LinkedEntity(
                    id=item["id"],
                    name=item["name"],
                    description=item.get("description", ""),
                    url=item["url"],
                    author_id=str(item.get("author_id", "")),
                    author_display_name=item.get("author_display_name", ""),
                )
            )
        return links

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            yaml.safe_dump(
                {"links": [asdict(link) for link in self.all()]},
                f,
                sort_keys=False,
                allow_unicode=True,
            )

    async def create(self, entity: LinkedEntity) -> LinkedEntity:
        created = await super().create(entity)
        self._save()
        return created

    async def delete(self, id: str) -> None:
        await super().delete(id)
        self._save()
