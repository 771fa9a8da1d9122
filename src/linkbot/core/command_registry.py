"""Command registration and dispatch."""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from ..errors import DuplicateCommandError, NotFoundError, ValidationError
from ..interfaces import AutocompleteEvent, Choice, CommandEvent

logger = logging.getLogger(__name__)

ExecuteHandler = Callable[[CommandEvent], Awaitable[Any]]
AutocompleteHandler = Callable[[AutocompleteEvent], Awaitable[list[Choice]]]


@dataclass(frozen=True)
class Command:
    """A registered command.

    Every command can execute. Autocomplete is a separate, optional
    capability and is only offered when a handler is given.
    """

    name: str
    execute: ExecuteHandler
    description: str = ""
    subcommands: tuple[str, ...] = field(default_factory=tuple)
    autocomplete: AutocompleteHandler | None = None
    default_permission: str | None = None

    def supports_autocomplete(self) -> bool:
        return self.autocomplete is not None


class CommandRegistry:
    """Maps command names to commands and dispatches events to them."""

    def __init__(self):
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """
        Register a command.

        Raises:
            DuplicateCommandError: If the name is already taken.
        """
        if command.name in self._commands:
            raise DuplicateCommandError(command.name)
        self._commands[command.name] = command
        logger.debug(f"Registered command /{command.name}")

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return list(self._commands.keys())

    async def dispatch(self, event: CommandEvent) -> Any:
        """
        Run the handler for a command event.

        Returns:
            Whatever the handler returns. Handler errors propagate.

        Raises:
            NotFoundError: If no command has this name.
            ValidationError: If the command has subcommands and the event
                names none of them.
        """
        command = self._commands.get(event.command_name)
        if command is None:
            raise NotFoundError(
                f"Unknown command: {event.command_name}",
                details={"command": event.command_name},
            )

        if command.subcommands and event.subcommand_name not in command.subcommands:
            raise ValidationError(
                f"Unknown subcommand for /{command.name}: {event.subcommand_name}"
            )

        logger.info(
            f"[{event.origin_ref}] Dispatching /{event.command_name}"
            + (f" {event.subcommand_name}" if event.subcommand_name else "")
            + f" for {event.invoker_id}"
        )
        return await command.execute(event)

    async def dispatch_autocomplete(self, event: AutocompleteEvent) -> list[Choice]:
        """
        Get suggestions for an autocomplete event.

        Returns an empty list when the command is unknown or has no
        autocomplete capability.
        """
        command = self._commands.get(event.command_name)
        if command is None or command.autocomplete is None:
            return []
        return await command.autocomplete(event)
