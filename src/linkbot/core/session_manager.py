"""Session manager for interactive, time-bounded messages."""

import asyncio
import logging
import time
import uuid
from enum import Enum
from typing import Callable

from ..errors import PermissionDeniedError, TransientDeliveryError
from ..interfaces import CommandEvent, Gateway, Payload
from .renderer import ResponseRenderer
from .session import Session, SessionFlow, SessionStatus

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """What routing a control event did."""

    IGNORED = "ignored"
    DENIED = "denied"
    UPDATED = "updated"
    FINISHED = "finished"


class SessionManager:
    """Manages interactive sessions keyed by the message they are attached to.

    At most one session exists per origin message. Every session has one
    deadline timer; whichever comes first of a terminal control press and
    the timer finalises the session, and the other becomes a no-op.
    """

    def __init__(
        self,
        gateway: Gateway,
        renderer: ResponseRenderer | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the session manager.

        Args:
            gateway: Where renders are delivered.
            renderer: Turns flow views into payloads.
            clock: Source of created_at/expires_at timestamps.
        """
        self.gateway = gateway
        self.renderer = renderer or ResponseRenderer()
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._tasks: set[asyncio.Task] = set()

    async def open(self, event: CommandEvent, flow: SessionFlow, ttl: float) -> Session:
        """
        Reply to a command with the flow's first render and start a session.

        Args:
            event: The command being answered; its invoker owns the session.
            flow: The workflow the session drives.
            ttl: Seconds until the session expires.

        Returns:
            The new session.

        Raises:
            TransientDeliveryError: If the initial reply could not be sent.
        """
        payload = self.renderer.render(flow.initial_view())
        message_ref = await self.gateway.reply(event, payload)
        return self.create_session(event.invoker_id, message_ref, flow, ttl)

    def create_session(self, owner_id: str, origin_ref: str, flow: SessionFlow, ttl: float) -> Session:
        """
        Register a session for an origin message and start its timer.

        An existing session on the same origin is superseded: its timer
        is cleared and it will ignore further events.

        Must be called from a running event loop.
        """
        loop = asyncio.get_running_loop()

        previous = self._sessions.pop(origin_ref, None)
        if previous is not None:
            previous.status = SessionStatus.SUPERSEDED
            previous.cancel_timer()
            logger.info(f"[{origin_ref}] Superseded session {previous.id}")

        now = self._clock()
        session = Session(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            origin_ref=origin_ref,
            flow=flow,
            created_at=now,
            expires_at=now + ttl,
        )
        session.timer = loop.call_later(ttl, self._on_deadline, session)
        self._sessions[origin_ref] = session

        logger.info(
            f"[{origin_ref}] Opened {session.kind.value} session {session.id} "
            f"for {owner_id} (ttl={ttl}s)"
        )
        return session

    async def route_event(self, origin_ref: str, actor_id: str, control_id: str) -> Outcome:
        """
        Route a control press to the session on its origin message.

        Presses by anyone but the owner are answered with a private notice
        and never reach the flow.

        Args:
            origin_ref: The message the control belongs to.
            actor_id: Who pressed it.
            control_id: Which control was pressed.

        Returns:
            What happened.
        """
        session = self._sessions.get(origin_ref)
        if session is None:
            logger.debug(f"[{origin_ref}] No active session, ignoring {control_id!r}")
            return Outcome.IGNORED

        if actor_id != session.owner_id:
            await self._deny(session, actor_id)
            return Outcome.DENIED

        async with session.lock:
            if not session.is_active():
                logger.debug(f"[{origin_ref}] Session {session.id} already {session.status.value}")
                return Outcome.IGNORED

            step = await session.flow.handle(control_id)
            if step is None:
                return Outcome.IGNORED

            # A timer that fired during the await is waiting on the lock
            # and will see the session already finished.
            if step.terminal:
                status = SessionStatus.EXPIRED if step.expired else SessionStatus.FINISHED
                self._finalize(session, status)

            await self._deliver(session, self.renderer.render(step.view))

        if step.terminal:
            logger.info(f"[{origin_ref}] Session {session.id} finished by {control_id!r}")
            return Outcome.FINISHED
        return Outcome.UPDATED

    def get_session(self, origin_ref: str) -> Session | None:
        """Get the active session on an origin message."""
        return self._sessions.get(origin_ref)

    def session_count(self) -> int:
        """Get the number of active sessions."""
        return len(self._sessions)

    def list_origins(self) -> list[str]:
        """Get origin refs of all active sessions."""
        return list(self._sessions.keys())

    async def shutdown(self) -> int:
        """
        Expire every active session with a final render.

        Returns:
            Number of sessions closed.
        """
        sessions = list(self._sessions.values())
        for session in sessions:
            await self._expire(session)

        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

        logger.info(f"Closed {len(sessions)} session(s) on shutdown")
        return len(sessions)

    def _on_deadline(self, session: Session) -> None:
        session.timer = None
        task = asyncio.ensure_future(self._expire(session))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _expire(self, session: Session) -> None:
        async with session.lock:
            if not session.is_active():
                return

            self._finalize(session, SessionStatus.EXPIRED)
            view = session.flow.expire()
            logger.info(f"[{session.origin_ref}] Session {session.id} expired")
            await self._deliver(session, self.renderer.render(view))

    def _finalize(self, session: Session, status: SessionStatus) -> None:
        session.status = status
        session.cancel_timer()
        if self._sessions.get(session.origin_ref) is session:
            del self._sessions[session.origin_ref]

    async def _deny(self, session: Session, actor_id: str) -> None:
        logger.info(f"[{session.origin_ref}] Denied {actor_id}, session belongs to {session.owner_id}")
        try:
            await self.gateway.notify(actor_id, session.origin_ref, PermissionDeniedError().message)
        except TransientDeliveryError as e:
            logger.warning(f"[{session.origin_ref}] Could not send denial to {actor_id}: {e}")

    async def _deliver(self, session: Session, payload: Payload) -> None:
        try:
            await self.gateway.edit(session.origin_ref, payload)
        except TransientDeliveryError as e:
            logger.warning(f"[{session.origin_ref}] Failed to update message: {e}")
