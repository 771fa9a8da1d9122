"""Tests for the CommandRegistry module."""

from unittest.mock import AsyncMock

import pytest
from linkbot.core.command_registry import Command, CommandRegistry
from linkbot.errors import DuplicateCommandError, NotFoundError, ValidationError
from linkbot.interfaces import AutocompleteEvent, Choice, CommandEvent


def make_event(name="ping", subcommand=None):
    return CommandEvent(
        command_name=name,
        subcommand_name=subcommand,
        invoker_id="u1",
        origin_ref="i-1",
    )


class TestRegister:
    """Tests for CommandRegistry.register."""

    def test_register(self):
        registry = CommandRegistry()
        command = Command(name="ping", execute=AsyncMock())
        registry.register(command)
        assert registry.get("ping") is command
        assert registry.names() == ["ping"]

    def test_duplicate_rejected(self):
        """Registering the same name twice fails."""
        registry = CommandRegistry()
        registry.register(Command(name="ping", execute=AsyncMock()))

        with pytest.raises(DuplicateCommandError):
            registry.register(Command(name="ping", execute=AsyncMock()))

    def test_autocomplete_capability(self):
        plain = Command(name="a", execute=AsyncMock())
        completing = Command(name="b", execute=AsyncMock(), autocomplete=AsyncMock())
        assert plain.supports_autocomplete() is False
        assert completing.supports_autocomplete() is True


class TestDispatch:
    """Tests for CommandRegistry.dispatch."""

    async def test_dispatch_calls_handler(self):
        """dispatch runs the handler and returns its result."""
        handler = AsyncMock(return_value="pong")
        registry = CommandRegistry()
        registry.register(Command(name="ping", execute=handler))

        event = make_event()
        assert await registry.dispatch(event) == "pong"
        handler.assert_awaited_once_with(event)

    async def test_unknown_command(self):
        registry = CommandRegistry()
        with pytest.raises(NotFoundError):
            await registry.dispatch(make_event("missing"))

    async def test_handler_error_propagates(self):
        registry = CommandRegistry()
        registry.register(Command(name="ping", execute=AsyncMock(side_effect=RuntimeError("boom"))))

        with pytest.raises(RuntimeError):
            await registry.dispatch(make_event())

    async def test_unknown_subcommand(self):
        """Commands with subcommands reject any other subcommand."""
        handler = AsyncMock()
        registry = CommandRegistry()
        registry.register(Command(name="link", execute=handler, subcommands=("get", "list")))

        with pytest.raises(ValidationError):
            await registry.dispatch(make_event("link", "drop"))
        handler.assert_not_awaited()

    async def test_known_subcommand(self):
        handler = AsyncMock()
        registry = CommandRegistry()
        registry.register(Command(name="link", execute=handler, subcommands=("get", "list")))

        await registry.dispatch(make_event("link", "list"))
        handler.assert_awaited_once()


class TestDispatchAutocomplete:
    """Tests for CommandRegistry.dispatch_autocomplete."""

    async def test_returns_choices(self):
        choices = [Choice(name="Docs", value="Docs")]
        registry = CommandRegistry()
        registry.register(
            Command(name="link", execute=AsyncMock(), autocomplete=AsyncMock(return_value=choices))
        )

        event = AutocompleteEvent(command_name="link", invoker_id="u1", value="do")
        assert await registry.dispatch_autocomplete(event) == choices

    async def test_unknown_command_is_empty(self):
        registry = CommandRegistry()
        event = AutocompleteEvent(command_name="missing", invoker_id="u1")
        assert await registry.dispatch_autocomplete(event) == []

    async def test_no_capability_is_empty(self):
        """Commands without autocomplete yield no suggestions."""
        registry = CommandRegistry()
        registry.register(Command(name="google", execute=AsyncMock()))
        event = AutocompleteEvent(command_name="google", invoker_id="u1")
        assert await registry.dispatch_autocomplete(event) == []
