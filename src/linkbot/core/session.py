"""Interactive session state and the per-kind flows behind it."""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import InvalidStateError, SessionTimeoutError
from ..interfaces import DataProvider, LinkedEntity
from .confirmation import ConfirmationRequest, ConfirmationWorkflow, Decision
from .pagination import Direction, PageState, PaginationEngine
from .renderer import (
    BACK_ID,
    CANCEL_ID,
    CONFIRM_ID,
    FORWARD_ID,
    NO_LINKS_MESSAGE,
    ConfirmationView,
    LinkPageView,
    NoticeView,
)

logger = logging.getLogger(__name__)


class SessionKind(Enum):
    PAGINATION = "pagination"
    CONFIRMATION = "confirmation"


class SessionStatus(Enum):
    ACTIVE = "active"
    FINISHED = "finished"
    EXPIRED = "expired"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class Step:
    """Result of feeding one control press to a flow.

    terminal is True when the press ended the session; expired marks
    an ending caused by the deadline rather than a decision.
    """

    view: Any
    terminal: bool = False
    expired: bool = False


class SessionFlow(ABC):
    """The workflow a session drives. One flow per session."""

    kind: SessionKind

    @abstractmethod
    def initial_view(self) -> Any:
        pass

    @abstractmethod
    async def handle(self, control_id: str) -> Step | None:
        """Apply a control press.

        Returns:
            The new view, or None if the press had no effect.
        """
        pass

    @abstractmethod
    def expire(self) -> Any:
        """Mark the flow timed out and return the final view."""
        pass


class PaginationFlow(SessionFlow):
    """Browses links page by page, re-querying the provider on each move."""

    kind = SessionKind.PAGINATION

    DIRECTIONS = {BACK_ID: Direction.BACK, FORWARD_ID: Direction.FORWARD}

    def __init__(self, provider: DataProvider, state: PageState, links: list[LinkedEntity]):
        """
        Initialize with the first page already fetched.

        Args:
            provider: Where pages are fetched from.
            state: The page being shown.
            links: The links on that page.
        """
        self.provider = provider
        self.state = state
        self.links = tuple(links)

    def initial_view(self) -> LinkPageView:
        return LinkPageView(links=self.links, state=self.state)

    async def handle(self, control_id: str) -> Step | None:
        direction = self.DIRECTIONS.get(control_id)
        if direction is None:
            logger.debug(f"Ignoring unknown pagination control {control_id!r}")
            return None

        # The list may have changed since the last page was shown
        total = await self.provider.count()
        if total == 0:
            logger.debug("List emptied while browsing, closing session")
            return Step(view=NoticeView(message=NO_LINKS_MESSAGE), terminal=True)

        state = PaginationEngine.navigate(self.state.with_total(total), direction)
        offset, limit = PaginationEngine.window_for(state)
        links = await self.provider.list(offset, limit)

        self.state = state
        self.links = tuple(links)
        logger.debug(f"Showing page {state.page_index + 1}/{state.page_count()}")
        return Step(view=LinkPageView(links=self.links, state=self.state))

    def expire(self) -> LinkPageView:
        return LinkPageView(links=self.links, state=self.state, final=True)


class ConfirmationFlow(SessionFlow):
    """Gates a link deletion behind a Delete/Cancel decision."""

    kind = SessionKind.CONFIRMATION

    DECISIONS = {CONFIRM_ID: Decision.CONFIRM, CANCEL_ID: Decision.CANCEL}

    def __init__(
        self,
        workflow: ConfirmationWorkflow,
        request: ConfirmationRequest,
        link: LinkedEntity,
        timeout_seconds: float,
    ):
        self.workflow = workflow
        self.request = request
        self.link = link
        self.timeout_seconds = timeout_seconds

    def initial_view(self) -> ConfirmationView:
        return self._view()

    async def handle(self, control_id: str) -> Step | None:
        decision = self.DECISIONS.get(control_id)
        if decision is None:
            logger.debug(f"Ignoring unknown confirmation control {control_id!r}")
            return None

        try:
            await self.workflow.resolve(self.request.id, decision)
        except SessionTimeoutError:
            # The request expired before the session timer fired
            return Step(view=self._view(), terminal=True, expired=True)
        except InvalidStateError as e:
            logger.debug(f"Ignoring {decision.value}: {e}")
            return None

        return Step(view=self._view(), terminal=True)

    def expire(self) -> ConfirmationView:
        try:
            self.workflow.expire(self.request.id)
        except InvalidStateError:
            pass  # already decided; the render below reflects that
        return self._view()

    def _view(self) -> ConfirmationView:
        return ConfirmationView(
            link=self.link,
            status=self.request.status,
            timeout_seconds=self.timeout_seconds,
            action_failed=self.request.action_failed(),
        )


@dataclass(eq=False)
class Session:
    """A live interactive workflow bound to one message and one owner.

    Owned by SessionManager, which is the only writer of status and timer.
    """

    id: str
    owner_id: str
    origin_ref: str
    flow: SessionFlow
    created_at: float
    expires_at: float
    status: SessionStatus = SessionStatus.ACTIVE
    timer: asyncio.TimerHandle | None = field(default=None, repr=False)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def kind(self) -> SessionKind:
        return self.flow.kind

    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    def cancel_timer(self) -> None:
        """Clear the deadline timer, if any."""
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None
