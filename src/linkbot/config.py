"""Configuration handling for the link bot."""

from dataclasses import dataclass
from pathlib import Path
import yaml


@dataclass
class Config:
    """Configuration settings for the link bot.

    Attributes:
        bot_name: Name used in log output.
        store_path: YAML file holding the links.
        links_per_page: Links shown per page of /link list.
        autocomplete_limit: Maximum autocomplete suggestions.
        list_timeout_seconds: How long /link list stays interactive.
        delete_timeout_seconds: How long a deletion waits for confirmation.
        search_api_key: Custom Search API key (None disables /google).
        search_engine_id: Custom Search engine id.
    """

    bot_name: str = "linkbot"
    store_path: str = "~/.linkbot/links.yaml"
    links_per_page: int = 5
    autocomplete_limit: int = 25
    list_timeout_seconds: float = 120
    delete_timeout_seconds: float = 30
    search_api_key: str | None = None
    search_engine_id: str | None = None

    def get_store_path(self) -> Path:
        """Get store path as expanded Path object."""
        return Path(self.store_path).expanduser()

    def search_enabled(self) -> bool:
        return bool(self.search_api_key and self.search_engine_id)


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Extract sections
    bot = data.get("bot", {})
    links = data.get("links", {})
    session = data.get("session", {})
    search = data.get("search", {})

    return Config(
        bot_name=bot.get("name", Config.bot_name),
        store_path=links.get("store_path", Config.store_path),
        links_per_page=links.get("per_page", Config.links_per_page),
        autocomplete_limit=links.get("autocomplete_limit", Config.autocomplete_limit),
        list_timeout_seconds=session.get("list_timeout_seconds", Config.list_timeout_seconds),
        delete_timeout_seconds=session.get("delete_timeout_seconds", Config.delete_timeout_seconds),
        search_api_key=search.get("api_key", Config.search_api_key),
        search_engine_id=search.get("engine_id", Config.search_engine_id),
    )
