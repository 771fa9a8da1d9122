"""Tests for the PubSubGateway module."""

import asyncio
import threading
from unittest.mock import AsyncMock

import pytest
from pubsub import pub

from linkbot.errors import TransientDeliveryError
from linkbot.interfaces import Choice, CommandEvent, ControlEvent, Payload, AutocompleteEvent
from linkbot.transport.pubsub_gateway import (
    TOPIC_COMMAND,
    TOPIC_CONTROL,
    TOPIC_EDIT,
    TOPIC_NOTIFY,
    TOPIC_REPLY,
    TOPIC_SUGGEST,
    PubSubGateway,
)


@pytest.fixture(autouse=True)
def clean_pubsub():
    yield
    pub.unsubAll()


@pytest.fixture
def command_event():
    return CommandEvent(command_name="link", subcommand_name="list", invoker_id="u1", origin_ref="i-1")


class TestConnection:
    """Tests for connect/disconnect."""

    def test_starts_disconnected(self):
        assert PubSubGateway().is_connected() is False

    async def test_connect(self):
        gateway = PubSubGateway()
        gateway.connect()
        assert gateway.is_connected() is True

    async def test_disconnect(self):
        gateway = PubSubGateway()
        gateway.connect()
        gateway.disconnect()
        assert gateway.is_connected() is False

    def test_disconnect_when_not_connected(self):
        PubSubGateway().disconnect()  # Should not raise

    def test_connect_needs_running_loop(self):
        with pytest.raises(RuntimeError):
            PubSubGateway().connect()


class TestInbound:
    """Tests for events published by the platform adapter."""

    async def test_command_reaches_callback(self, command_event):
        """A published command runs the registered coroutine on the loop."""
        gateway = PubSubGateway()
        callback = AsyncMock()
        gateway.on_command(callback)
        gateway.connect()

        pub.sendMessage(TOPIC_COMMAND, event=command_event)
        await asyncio.sleep(0.01)

        callback.assert_awaited_once_with(command_event)

    async def test_control_reaches_callback(self):
        gateway = PubSubGateway()
        callback = AsyncMock()
        gateway.on_control(callback)
        gateway.connect()

        event = ControlEvent(origin_ref="msg-1", actor_id="u1", control_id="forward")
        pub.sendMessage(TOPIC_CONTROL, event=event)
        await asyncio.sleep(0.01)

        callback.assert_awaited_once_with(event)

    async def test_event_from_other_thread(self, command_event):
        """Events published from a platform thread run on the bot loop."""
        gateway = PubSubGateway()
        loop = asyncio.get_running_loop()
        seen = []

        async def callback(event):
            seen.append((event, asyncio.get_running_loop()))

        gateway.on_command(callback)
        gateway.connect()

        thread = threading.Thread(target=lambda: pub.sendMessage(TOPIC_COMMAND, event=command_event))
        thread.start()
        await asyncio.to_thread(thread.join)
        await asyncio.sleep(0.01)

        assert seen == [(command_event, loop)]

    async def test_no_delivery_after_disconnect(self, command_event):
        gateway = PubSubGateway()
        callback = AsyncMock()
        gateway.on_command(callback)
        gateway.connect()
        gateway.disconnect()

        pub.sendMessage(TOPIC_COMMAND, event=command_event)
        await asyncio.sleep(0.01)

        callback.assert_not_awaited()


class TestOutbound:
    """Tests for payloads published to the platform adapter."""

    async def test_reply_allocates_ref(self, command_event):
        """reply publishes the payload and returns its message ref."""
        received = []

        def listener(event, payload, message_ref, private):
            received.append((event, payload, message_ref, private))

        pub.subscribe(listener, TOPIC_REPLY)
        payload = Payload(title="hello")

        message_ref = await PubSubGateway().reply(command_event, payload, private=True)

        assert received == [(command_event, payload, message_ref, True)]
        assert message_ref

    async def test_refs_are_unique(self, command_event):
        def listener(event, payload, message_ref, private):
            pass

        pub.subscribe(listener, TOPIC_REPLY)
        gateway = PubSubGateway()
        first = await gateway.reply(command_event, Payload())
        second = await gateway.reply(command_event, Payload())
        assert first != second

    async def test_edit(self):
        received = []

        def listener(message_ref, payload):
            received.append((message_ref, payload))

        pub.subscribe(listener, TOPIC_EDIT)
        payload = Payload(title="page 2")
        await PubSubGateway().edit("msg-1", payload)
        assert received == [("msg-1", payload)]

    async def test_notify(self):
        received = []

        def listener(actor_id, origin_ref, text):
            received.append((actor_id, origin_ref, text))

        pub.subscribe(listener, TOPIC_NOTIFY)
        await PubSubGateway().notify("u2", "msg-1", "nope")
        assert received == [("u2", "msg-1", "nope")]

    async def test_suggest(self):
        received = []

        def listener(event, choices):
            received.append(choices)

        pub.subscribe(listener, TOPIC_SUGGEST)
        event = AutocompleteEvent(command_name="link", invoker_id="u1", value="do")
        await PubSubGateway().suggest(event, [Choice("Docs", "Docs")])
        assert received == [[Choice("Docs", "Docs")]]

    async def test_listener_failure_is_delivery_error(self):
        """A failing adapter surfaces as TransientDeliveryError."""

        def listener(message_ref, payload):
            raise ConnectionError("platform unreachable")

        pub.subscribe(listener, TOPIC_EDIT)
        with pytest.raises(TransientDeliveryError):
            await PubSubGateway().edit("msg-1", Payload())
