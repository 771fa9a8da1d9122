"""Gateway that exchanges events with a platform adapter over pypubsub."""

import asyncio
import logging
import uuid
from typing import Coroutine

from pubsub import pub

from ..errors import TransientDeliveryError
from ..interfaces import (
    AutocompleteEvent,
    Choice,
    CommandEvent,
    ControlEvent,
    Gateway,
    Payload,
)
from ..interfaces.gateway import AutocompleteCallback, CommandCallback, ControlCallback

logger = logging.getLogger(__name__)

TOPIC_COMMAND = "linkbot.inbound.command"
TOPIC_AUTOCOMPLETE = "linkbot.inbound.autocomplete"
TOPIC_CONTROL = "linkbot.inbound.control"

TOPIC_REPLY = "linkbot.outbound.reply"
TOPIC_EDIT = "linkbot.outbound.edit"
TOPIC_NOTIFY = "linkbot.outbound.notify"
TOPIC_SUGGEST = "linkbot.outbound.suggest"


class PubSubGateway(Gateway):
    """Gateway bridging the bot to a chat platform adapter.

    The adapter publishes inbound events with ``pub.sendMessage(topic,
    event=...)`` from any thread; they are run on the bot's event loop.
    Outbound payloads are published on the ``linkbot.outbound.*`` topics
    for the adapter to deliver.
    """

    def __init__(self):
        self._loop: asyncio.AbstractEventLoop | None = None
        self._command_callbacks: list[CommandCallback] = []
        self._autocomplete_callbacks: list[AutocompleteCallback] = []
        self._control_callbacks: list[ControlCallback] = []
        self._tasks: set[asyncio.Task] = set()

    async def reply(self, event: CommandEvent, payload: Payload, private: bool = False) -> str:
        """
        Publish a reply and allocate its message ref.

        Raises:
            TransientDeliveryError: If a delivery listener failed.
        """
        message_ref = uuid.uuid4().hex
        self._publish(
            TOPIC_REPLY,
            event=event,
            payload=payload,
            message_ref=message_ref,
            private=private,
        )
        return message_ref

    async def edit(self, message_ref: str, payload: Payload) -> None:
        self._publish(TOPIC_EDIT, message_ref=message_ref, payload=payload)

    async def notify(self, actor_id: str, origin_ref: str, text: str) -> None:
        self._publish(TOPIC_NOTIFY, actor_id=actor_id, origin_ref=origin_ref, text=text)

    async def suggest(self, event: AutocompleteEvent, choices: list[Choice]) -> None:
        self._publish(TOPIC_SUGGEST, event=event, choices=choices)

    def on_command(self, callback: CommandCallback) -> None:
        self._command_callbacks.append(callback)

    def on_autocomplete(self, callback: AutocompleteCallback) -> None:
        self._autocomplete_callbacks.append(callback)

    def on_control(self, callback: ControlCallback) -> None:
        self._control_callbacks.append(callback)

    def connect(self) -> None:
        """
        Subscribe to inbound topics.

        Must be called from the event loop that will run the handlers.
        """
        self._loop = asyncio.get_running_loop()
        pub.subscribe(self._handle_command, TOPIC_COMMAND)
        pub.subscribe(self._handle_autocomplete, TOPIC_AUTOCOMPLETE)
        pub.subscribe(self._handle_control, TOPIC_CONTROL)
        logger.info("Gateway subscribed to inbound topics")

    def disconnect(self) -> None:
        if self._loop is None:
            return

        pub.unsubscribe(self._handle_command, TOPIC_COMMAND)
        pub.unsubscribe(self._handle_autocomplete, TOPIC_AUTOCOMPLETE)
        pub.unsubscribe(self._handle_control, TOPIC_CONTROL)
        self._loop = None
        logger.info("Gateway unsubscribed from inbound topics")

    def is_connected(self) -> bool:
        return self._loop is not None

    def _handle_command(self, event: CommandEvent) -> None:
        for callback in self._command_callbacks:
            self._schedule(callback(event))

    def _handle_autocomplete(self, event: AutocompleteEvent) -> None:
        for callback in self._autocomplete_callbacks:
            self._schedule(callback(event))

    def _handle_control(self, event: ControlEvent) -> None:
        for callback in self._control_callbacks:
            self._schedule(callback(event))

    def _schedule(self, coro: Coroutine) -> None:
        """Run a handler coroutine on the bot loop, from whichever thread published."""
        loop = self._loop
        if loop is None:
            coro.close()
            logger.warning("Dropping inbound event, gateway is not connected")
            return

        if _running_loop() is loop:
            task = loop.create_task(coro)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        else:
            asyncio.run_coroutine_threadsafe(coro, loop)

    def _publish(self, topic: str, **kwargs) -> None:
        try:
            pub.sendMessage(topic, **kwargs)
        except Exception as e:
            raise TransientDeliveryError(f"Delivery on {topic} failed: {e}") from e


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
