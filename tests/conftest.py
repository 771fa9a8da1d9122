"""Pytest configuration and fixtures."""

import pytest

from linkbot.errors import TransientDeliveryError
from linkbot.interfaces import Gateway, LinkedEntity
from linkbot.providers import InMemoryLinkProvider


class FakeGateway(Gateway):
    """Gateway that records everything sent through it."""

    def __init__(self):
        self.replies = []  # (event, payload, private, message_ref)
        self.edits = []  # (message_ref, payload)
        self.notices = []  # (actor_id, origin_ref, text)
        self.suggestions = []  # (event, choices)
        self.fail_edits = False
        self.fail_replies = False
        self.connected = False
        self._command_callbacks = []
        self._autocomplete_callbacks = []
        self._control_callbacks = []

    async def reply(self, event, payload, private=False):
        if self.fail_replies:
            raise TransientDeliveryError("reply failed")
        message_ref = f"msg-{len(self.replies) + 1}"
        self.replies.append((event, payload, private, message_ref))
        return message_ref

    async def edit(self, message_ref, payload):
        if self.fail_edits:
            raise TransientDeliveryError("edit failed")
        self.edits.append((message_ref, payload))

    async def notify(self, actor_id, origin_ref, text):
        self.notices.append((actor_id, origin_ref, text))

    async def suggest(self, event, choices):
        self.suggestions.append((event, choices))

    def on_command(self, callback):
        self._command_callbacks.append(callback)

    def on_autocomplete(self, callback):
        self._autocomplete_callbacks.append(callback)

    def on_control(self, callback):
        self._control_callbacks.append(callback)

    def connect(self):
        self.connected = True

    def disconnect(self):
        self.connected = False

    def last_reply(self):
        return self.replies[-1]

    def last_edit(self):
        return self.edits[-1]


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_link(n: int) -> LinkedEntity:
    return LinkedEntity(
        id=f"link-{n}",
        name=f"Link {n}",
        description=f"Description {n}",
        url=f"https://example.com/{n}",
        author_id="u-author",
        author_display_name="Author",
    )


@pytest.fixture
def sample_links():
    """Twelve links, numbered 1 to 12."""
    return [make_link(n) for n in range(1, 13)]


@pytest.fixture
def provider(sample_links):
    return InMemoryLinkProvider(sample_links)


@pytest.fixture
def empty_provider():
    return InMemoryLinkProvider()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def clock():
    return ManualClock()
