"""LinkBot - Main orchestrator for the link bot."""

import logging

from .commands import BotContext
from .commands import google, link, link_admin
from .config import Config
from .core import (
    CommandRegistry,
    ConfirmationWorkflow,
    NoticeView,
    Outcome,
    ResponseRenderer,
    SessionManager,
)
from .errors import (
    DuplicateKeyError,
    NotFoundError,
    SearchError,
    TransientDeliveryError,
    ValidationError,
)
from .interfaces import AutocompleteEvent, CommandEvent, ControlEvent, DataProvider, Gateway, SearchProvider

logger = logging.getLogger(__name__)

# Errors whose message is meant for the invoker
USER_FACING_ERRORS = (ValidationError, NotFoundError, DuplicateKeyError, SearchError)

GENERIC_ERROR = "Something went wrong, please try again."


class LinkBot:
    """Main bot orchestrating all components.

    Receives gateway events, dispatches commands, and routes control
    presses to interactive sessions. Uses dependency injection for the
    link store, search backend and gateway.
    """

    def __init__(
        self,
        provider: DataProvider,
        gateway: Gateway,
        search: SearchProvider | None = None,
        config: Config | None = None,
    ):
        """
        Initialize the bot.

        Args:
            provider: Storage for link records.
            gateway: Chat platform gateway.
            search: Web search backend (None disables /google).
            config: Bot configuration (uses defaults if None).
        """
        self.provider = provider
        self.gateway = gateway
        self.search = search
        self.config = config or Config()

        # Initialize components
        self.renderer = ResponseRenderer()
        self.sessions = SessionManager(gateway, self.renderer)
        self.confirmations = ConfirmationWorkflow()
        self.registry = CommandRegistry()

        self.context = BotContext(
            provider=provider,
            gateway=gateway,
            sessions=self.sessions,
            renderer=self.renderer,
            confirmations=self.confirmations,
            config=self.config,
            search=search,
        )
        self._register_commands()

        # Register event handlers
        self.gateway.on_command(self.handle_command)
        self.gateway.on_autocomplete(self.handle_autocomplete)
        self.gateway.on_control(self.handle_control)

    def _register_commands(self) -> None:
        self.registry.register(link.command(self.context))
        self.registry.register(link_admin.command(self.context))
        if self.search is not None:
            self.registry.register(google.command(self.context))
        logger.debug(f"Commands: {', '.join(self.registry.names())}")

    async def start(self) -> None:
        """Start the bot by connecting the gateway."""
        logger.info(f"Starting {self.config.bot_name}...")
        self.gateway.connect()
        logger.info(f"{self.config.bot_name} is online.")

    async def stop(self) -> None:
        """Close all sessions and disconnect the gateway."""
        logger.info(f"Stopping {self.config.bot_name}...")
        await self.sessions.shutdown()
        self.gateway.disconnect()
        logger.info("Bot stopped")

    async def handle_command(self, event: CommandEvent) -> None:
        """
        Handle a command invocation.

        User errors are answered privately. Delivery failures and
        unexpected errors are logged and never escape.
        """
        try:
            await self.registry.dispatch(event)

        except USER_FACING_ERRORS as e:
            logger.info(f"[{event.origin_ref}] /{event.command_name}: {e}")
            await self._send_notice(event, e.message)

        except TransientDeliveryError as e:
            logger.warning(f"[{event.origin_ref}] Could not deliver reply: {e}")

        except Exception as e:
            logger.error(f"[{event.origin_ref}] Link command failed: {e}", exc_info=True)
            await self._send_notice(event, GENERIC_ERROR)

    async def handle_autocomplete(self, event: AutocompleteEvent) -> None:
        """Answer an autocomplete request. Failures yield no suggestions."""
        try:
            choices = await self.registry.dispatch_autocomplete(event)
            await self.gateway.suggest(event, choices)
        except Exception as e:
            logger.error(f"Autocomplete for /{event.command_name} failed: {e}")

    async def handle_control(self, event: ControlEvent) -> Outcome:
        """Route a button press to its session."""
        try:
            return await self.sessions.route_event(event.origin_ref, event.actor_id, event.control_id)
        except Exception as e:
            logger.error(f"[{event.origin_ref}] Control {event.control_id!r} failed: {e}", exc_info=True)
            return Outcome.IGNORED

    async def _send_notice(self, event: CommandEvent, message: str) -> None:
        """Send a private notice, logging rather than raising on failure."""
        try:
            await self.context.reply(event, NoticeView(message=message), private=True)
        except TransientDeliveryError as e:
            logger.warning(f"[{event.origin_ref}] Could not deliver notice: {e}")
