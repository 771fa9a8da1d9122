"""The /link command: fetch a single link or browse them all."""

import logging
from functools import partial

from ..core import Command, LinkView, NoticeView, PageState, PaginationEngine, PaginationFlow
from ..core.renderer import NO_LINKS_MESSAGE, inline_code
from ..core.validation import standardize_link_name
from ..errors import NotFoundError, ValidationError
from ..interfaces import AutocompleteEvent, Choice, CommandEvent, LinkedEntity
from . import BotContext, link_choices

logger = logging.getLogger(__name__)


async def execute(ctx: BotContext, event: CommandEvent) -> None:
    if event.subcommand_name == "get":
        await get_link(ctx, event)
    elif event.subcommand_name == "list":
        await list_links(ctx, event)


async def get_link(ctx: BotContext, event: CommandEvent) -> None:
    """Reply with the URL of the named link."""
    choice = event.option("link", "")
    link = await find_link(ctx, choice)
    if link is None:
        raise NotFoundError(
            f"I couldn't find a link with the name {inline_code(choice)}. Please try again."
        )
    await ctx.reply(event, LinkView(link=link))


async def find_link(ctx: BotContext, choice: str) -> LinkedEntity | None:
    """
    Look a link up by name.

    Tries the normalised id first, then the best name match.
    """
    link = await ctx.provider.find_by_id(standardize_link_name(choice))
    if link:
        return link

    matches = await ctx.provider.search(choice.lower(), 1)
    return matches[0] if matches else None


async def list_links(ctx: BotContext, event: CommandEvent) -> None:
    """Show one page of links with Back/Forward controls."""
    total = await ctx.provider.count()
    if total == 0:
        await ctx.reply(event, NoticeView(message=NO_LINKS_MESSAGE), private=True)
        return

    page_size = ctx.config.links_per_page
    pages = PaginationEngine.compute_page_count(total, page_size)
    page = event.option("page", 1)

    if not isinstance(page, int) or page < 1 or page > pages:
        raise ValidationError(
            f"Invalid page number. Please enter a number between 1 and {pages}."
        )

    logger.debug(f"Listing page {page}/{pages} ({total} links)")
    state = PageState(page_index=page - 1, page_size=page_size, total_items=total)
    offset, limit = PaginationEngine.window_for(state)
    links = await ctx.provider.list(offset, limit)

    flow = PaginationFlow(ctx.provider, state, links)
    await ctx.sessions.open(event, flow, ctx.config.list_timeout_seconds)


async def autocomplete(ctx: BotContext, event: AutocompleteEvent) -> list[Choice]:
    links = await ctx.provider.search(event.value.lower(), ctx.config.autocomplete_limit)
    return link_choices(links)


def command(ctx: BotContext) -> Command:
    return Command(
        name="link",
        description="Get a link",
        subcommands=("get", "list"),
        execute=partial(execute, ctx),
        autocomplete=partial(autocomplete, ctx),
    )
