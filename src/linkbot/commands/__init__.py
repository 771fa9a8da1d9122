"""Chat commands offered by the bot."""

from dataclasses import dataclass

from ..config import Config
from ..core import ConfirmationWorkflow, ResponseRenderer, SessionManager
from ..interfaces import Choice, CommandEvent, DataProvider, Gateway, LinkedEntity, SearchProvider


@dataclass
class BotContext:
    """Everything a command handler may use."""

    provider: DataProvider
    gateway: Gateway
    sessions: SessionManager
    renderer: ResponseRenderer
    confirmations: ConfirmationWorkflow
    config: Config
    search: SearchProvider | None = None

    async def reply(self, event: CommandEvent, view, private: bool = False) -> str:
        """Render a view and send it as the reply to event."""
        return await self.gateway.reply(event, self.renderer.render(view), private=private)


def link_choices(links: list[LinkedEntity]) -> list[Choice]:
    return [Choice(name=link.name, value=link.name) for link in links]


__all__ = ["BotContext", "link_choices"]
