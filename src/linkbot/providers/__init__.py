"""Storage and search providers."""

from .google_search import GoogleSearchProvider
from .memory_provider import InMemoryLinkProvider
from .yaml_provider import YamlLinkProvider

__all__ = ["GoogleSearchProvider", "InMemoryLinkProvider", "YamlLinkProvider"]
