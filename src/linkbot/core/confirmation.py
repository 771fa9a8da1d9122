"""Confirm/cancel gates in front of destructive actions."""

import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from ..errors import InvalidStateError, SessionTimeoutError

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[Any]]


class ConfirmationStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not ConfirmationStatus.PENDING


class Decision(Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass
class ConfirmationRequest:
    """A single pending yes/no decision.

    Status moves from PENDING to exactly one terminal status and never
    changes afterwards. Only ConfirmationWorkflow changes it.
    """

    id: str
    owner_id: str
    action: Action = field(repr=False)
    deadline: float
    status: ConfirmationStatus = ConfirmationStatus.PENDING
    error: BaseException | None = None  # set when a confirmed action failed

    def is_pending(self) -> bool:
        return self.status is ConfirmationStatus.PENDING

    def action_failed(self) -> bool:
        return self.error is not None


class ConfirmationWorkflow:
    """Tracks pending confirmation requests and resolves them.

    The deadline is enforced both by expire() (driven by the owning
    session's timer) and lazily by resolve(), so a late decision can
    never run the action.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._pending: dict[str, ConfirmationRequest] = {}

    def request(self, owner_id: str, action: Action, ttl: float) -> ConfirmationRequest:
        """
        Open a new pending request.

        Args:
            owner_id: The user allowed to decide.
            action: Coroutine function run once if the request is confirmed.
            ttl: Seconds until the request expires.

        Returns:
            The request, in PENDING status.
        """
        request = ConfirmationRequest(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            action=action,
            deadline=self._clock() + ttl,
        )
        self._pending[request.id] = request
        logger.debug(f"Confirmation {request.id} requested by {owner_id} (ttl={ttl}s)")
        return request

    def get(self, request_id: str) -> ConfirmationRequest | None:
        """Get a request that is still pending."""
        return self._pending.get(request_id)

    async def resolve(self, request_id: str, decision: Decision) -> ConfirmationRequest:
        """
        Apply the owner's decision to a pending request.

        The status is switched before the action is awaited. A failing
        action leaves the request CONFIRMED with the failure in `error`.

        Raises:
            InvalidStateError: If the request was already resolved or expired.
            SessionTimeoutError: If the deadline passed; the request is expired.
        """
        request = self._take_pending(request_id)

        if decision is Decision.CANCEL:
            request.status = ConfirmationStatus.CANCELLED
            logger.info(f"Confirmation {request_id} cancelled")
            return request

        request.status = ConfirmationStatus.CONFIRMED
        logger.info(f"Confirmation {request_id} confirmed, running action")
        try:
            await request.action()
        except Exception as e:
            request.error = e
            logger.error(f"Confirmed action for {request_id} failed: {e}")
        return request

    def expire(self, request_id: str) -> ConfirmationRequest:
        """
        Expire a pending request without running its action.

        Raises:
            InvalidStateError: If the request is no longer pending.
        """
        request = self._pending.pop(request_id, None)
        if request is None:
            raise InvalidStateError(f"Confirmation {request_id} is not pending")
        request.status = ConfirmationStatus.EXPIRED
        logger.info(f"Confirmation {request_id} expired")
        return request

    def expire_overdue(self) -> int:
        """
        Expire every request whose deadline has passed.

        Returns:
            Number of requests expired.
        """
        now = self._clock()
        overdue = [rid for rid, req in self._pending.items() if now >= req.deadline]
        for request_id in overdue:
            self.expire(request_id)
        return len(overdue)

    def pending_count(self) -> int:
        return len(self._pending)

    def _take_pending(self, request_id: str) -> ConfirmationRequest:
        request = self._pending.get(request_id)
        if request is None:
            raise InvalidStateError(f"Confirmation {request_id} is not pending")
        if self._clock() >= request.deadline:
            self.expire(request_id)
            raise SessionTimeoutError(f"Confirmation {request_id} passed its deadline")
        del self._pending[request_id]
        return request
