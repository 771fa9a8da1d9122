"""The /link-admin command: create and delete links."""

import logging
from functools import partial

from ..core import Command, ConfirmationFlow, NoticeView
from ..core.renderer import inline_code
from ..core.validation import (
    standardize_link_name,
    validate_description,
    validate_link_name,
    validate_url,
)
from ..errors import DuplicateKeyError, NotFoundError, TransientDeliveryError
from ..interfaces import AutocompleteEvent, Choice, Color, CommandEvent, LinkedEntity
from . import BotContext, link_choices

logger = logging.getLogger(__name__)


async def execute(ctx: BotContext, event: CommandEvent) -> None:
    if event.subcommand_name == "create":
        await create_link(ctx, event)
    elif event.subcommand_name == "delete":
        await delete_link(ctx, event)


async def create_link(ctx: BotContext, event: CommandEvent) -> None:
    """
    Store a new link.

    Raises:
        ValidationError: If the name, description or URL is malformed.
        DuplicateKeyError: If a link with the same normalised name exists.
    """
    name = event.option("name", "")
    description = event.option("description", "")
    url = event.option("url", "")

    validate_link_name(name)
    link_id = standardize_link_name(name)

    already_exists = DuplicateKeyError(
        f"{inline_code(name)} already exists, please try another name.",
        details={"id": link_id},
    )
    if await ctx.provider.find_by_id(link_id):
        raise already_exists

    validate_description(description)
    validate_url(url)

    try:
        await ctx.provider.create(
            LinkedEntity(
                id=link_id,
                name=name,
                description=description,
                url=url,
                author_id=event.invoker_id,
                author_display_name=event.invoker_name,
            )
        )
    except DuplicateKeyError:
        raise already_exists from None

    logger.info(f"Link {link_id!r} created by {event.invoker_id}")
    await ctx.reply(
        event,
        NoticeView(message=f"Link {inline_code(name)} created successfully.", color=Color.GREEN),
    )


async def delete_link(ctx: BotContext, event: CommandEvent) -> None:
    """Ask the invoker to confirm deleting a link."""
    choice = event.option("link", "")
    link_id = standardize_link_name(choice)

    link = await ctx.provider.find_by_id(link_id)
    if not link:
        raise NotFoundError("I couldn't find that link, please try another one.")

    async def remove():
        await ctx.provider.delete(link_id)
        logger.info(f"Link {link_id!r} deleted by {event.invoker_id}")

    ttl = ctx.config.delete_timeout_seconds
    request = ctx.confirmations.request(event.invoker_id, remove, ttl)
    flow = ConfirmationFlow(ctx.confirmations, request, link, timeout_seconds=ttl)
    try:
        await ctx.sessions.open(event, flow, ttl)
    except TransientDeliveryError:
        # No session will ever expire the request
        ctx.confirmations.expire(request.id)
        raise


async def autocomplete(ctx: BotContext, event: AutocompleteEvent) -> list[Choice]:
    if event.subcommand_name != "delete":
        return []
    links = await ctx.provider.search(event.value.lower(), ctx.config.autocomplete_limit)
    return link_choices(links)


def command(ctx: BotContext) -> Command:
    return Command(
        name="link-admin",
        description="Manage the links",
        subcommands=("create", "delete"),
        execute=partial(execute, ctx),
        autocomplete=partial(autocomplete, ctx),
        default_permission="manage_messages",
    )
