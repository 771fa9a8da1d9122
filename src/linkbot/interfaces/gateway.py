"""Abstract interface for the chat gateway."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from .payload import Payload


@dataclass(frozen=True)
class CommandEvent:
    """A command invocation coming from the chat platform."""

    command_name: str
    invoker_id: str
    origin_ref: str
    subcommand_name: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    invoker_name: str = ""

    def option(self, name: str, default: Any = None) -> Any:
        """Get an option value, or default when it was not supplied."""
        value = self.options.get(name)
        return default if value is None else value


@dataclass(frozen=True)
class AutocompleteEvent:
    """A request for suggestions while the user types an option."""

    command_name: str
    invoker_id: str
    value: str = ""
    subcommand_name: str | None = None


@dataclass(frozen=True)
class ControlEvent:
    """A button press on a message carrying interactive controls."""

    origin_ref: str
    actor_id: str
    control_id: str


@dataclass(frozen=True)
class Choice:
    """An autocomplete suggestion."""

    name: str
    value: str


CommandCallback = Callable[[CommandEvent], Awaitable[None]]
AutocompleteCallback = Callable[[AutocompleteEvent], Awaitable[None]]
ControlCallback = Callable[[ControlEvent], Awaitable[None]]


class Gateway(ABC):
    """Abstract interface for receiving events and delivering payloads.

    Outbound methods raise TransientDeliveryError when delivery fails.
    """

    @abstractmethod
    async def reply(self, event: CommandEvent, payload: Payload, private: bool = False) -> str:
        """Reply to a command with a new message.

        Returns:
            The message ref that later control events will reference.
        """
        pass

    @abstractmethod
    async def edit(self, message_ref: str, payload: Payload) -> None:
        """Replace the contents of a previously sent message."""
        pass

    @abstractmethod
    async def notify(self, actor_id: str, origin_ref: str, text: str) -> None:
        """Send a notice only the given actor can see."""
        pass

    @abstractmethod
    async def suggest(self, event: AutocompleteEvent, choices: list[Choice]) -> None:
        """Answer an autocomplete request."""
        pass

    @abstractmethod
    def on_command(self, callback: CommandCallback) -> None:
        pass

    @abstractmethod
    def on_autocomplete(self, callback: AutocompleteCallback) -> None:
        pass

    @abstractmethod
    def on_control(self, callback: ControlCallback) -> None:
        pass

    @abstractmethod
    def connect(self) -> None:
        """Connect to the platform. Must be called from a running event loop."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        pass
