"""The /google command: top web results for a query."""

from functools import partial

from ..core import Command, SearchResultsView
from ..errors import SearchError, ValidationError
from ..interfaces import CommandEvent
from . import BotContext


async def execute(ctx: BotContext, event: CommandEvent) -> None:
    query = event.option("query", "").strip()
    if not query:
        raise ValidationError("Please tell me what to search for.")

    try:
        results = await ctx.search.query(query)
    except SearchError as e:
        raise SearchError("Unable to return any queries.") from e

    to = event.option("to")
    view = SearchResultsView(
        query=query,
        results=tuple(results),
        requested_by=event.invoker_name or event.invoker_id,
        mention=f"<@{to}>" if to else None,
    )
    await ctx.reply(event, view)


def command(ctx: BotContext) -> Command:
    return Command(
        name="google",
        description="Google something and return the top 10 results.",
        execute=partial(execute, ctx),
    )
