"""Abstract interfaces for the link bot."""

from .data_provider import DataProvider, LinkedEntity
from .gateway import AutocompleteEvent, Choice, CommandEvent, ControlEvent, Gateway
from .payload import Color, Control, ControlStyle, Field, Payload
from .search_provider import SearchProvider, SearchResult

__all__ = [
    "AutocompleteEvent",
    "Choice",
    "Color",
    "CommandEvent",
    "Control",
    "ControlEvent",
    "ControlStyle",
    "DataProvider",
    "Field",
    "Gateway",
    "LinkedEntity",
    "Payload",
    "SearchProvider",
    "SearchResult",
]
