"""Renders view models into outbound payloads."""

from dataclasses import dataclass, field

from ..interfaces import Color, Control, ControlStyle, Field, LinkedEntity, Payload, SearchResult
from .confirmation import ConfirmationStatus
from .pagination import PageState, PaginationEngine

BACK_ID = "back"
FORWARD_ID = "forward"
CONFIRM_ID = "delete"
CANCEL_ID = "cancel"

NO_LINKS_MESSAGE = "There are no links yet."


def inline_code(text: str) -> str:
    return f"`{text}`"


@dataclass(frozen=True)
class NoticeView:
    """A short message, usually shown privately."""

    message: str
    title: str | None = None
    color: Color = Color.RED


@dataclass(frozen=True)
class LinkView:
    """A single link, shown as its bare URL so the platform unfurls it."""

    link: LinkedEntity


@dataclass(frozen=True)
class LinkPageView:
    """One page of the link list.

    final is set once the session is over and nothing may be pressed.
    """

    links: tuple[LinkedEntity, ...]
    state: PageState
    final: bool = False


@dataclass(frozen=True)
class ConfirmationView:
    link: LinkedEntity
    status: ConfirmationStatus
    timeout_seconds: float = 30
    action_failed: bool = False


@dataclass(frozen=True)
class SearchResultsView:
    query: str
    results: tuple[SearchResult, ...] = field(default_factory=tuple)
    requested_by: str = ""
    mention: str | None = None


class ResponseRenderer:
    """Maps view models to payloads. Pure and deterministic."""

    LIST_TITLE = ":link: Links List"
    MAX_SEARCH_RESULTS = 10

    def render(self, view) -> Payload:
        """
        Render a view model.

        Args:
            view: One of the view model types in this module.

        Returns:
            The payload to send or edit in.

        Raises:
            TypeError: If the view type is unknown.
        """
        if isinstance(view, NoticeView):
            return Payload(title=view.title, description=view.message, color=view.color)

        if isinstance(view, LinkView):
            return Payload(content=view.link.url)

        if isinstance(view, LinkPageView):
            return self._render_page(view)

        if isinstance(view, ConfirmationView):
            return self._render_confirmation(view)

        if isinstance(view, SearchResultsView):
            return self._render_search(view)

        raise TypeError(f"Cannot render {type(view).__name__}")

    def _render_page(self, view: LinkPageView) -> Payload:
        state = view.state
        offset, _ = PaginationEngine.window_for(state)
        controls = PaginationEngine.control_state(state)

        fields = tuple(
            Field(
                name=f"{offset + i}. {link.name}",
                value=f"► [Link]({link.url})\n**description**: {link.description}\n‎ ",
            )
            for i, link in enumerate(view.links, 1)
        )

        return Payload(
            title=self.LIST_TITLE,
            fields=fields,
            color=Color.BLUE,
            footer=f"Page {state.page_index + 1} of {state.page_count()}",
            controls=(
                Control(
                    id=BACK_ID,
                    label="Back",
                    emoji="⬅️",
                    disabled=view.final or not controls.back_enabled,
                ),
                Control(
                    id=FORWARD_ID,
                    label="Forward",
                    emoji="➡️",
                    disabled=view.final or not controls.forward_enabled,
                ),
            ),
        )

    def _render_confirmation(self, view: ConfirmationView) -> Payload:
        link = view.link
        status = view.status
        locked = status.is_terminal

        controls = (
            Control(id=CANCEL_ID, label="Cancel", style=ControlStyle.SECONDARY, disabled=locked),
            Control(id=CONFIRM_ID, label="Delete", style=ControlStyle.DANGER, disabled=locked),
        )

        if status is ConfirmationStatus.PENDING:
            return Payload(
                title=":bangbang: Confirm Deletion",
                description=(
                    "Are you sure you want to delete the following link?\n\n"
                    f"**name:** {link.name}\n\n"
                    f"**description:** {link.description}\n\n"
                    f"**url:** {inline_code(link.url)}\n"
                ),
                color=Color.RED,
                controls=controls,
            )

        if status is ConfirmationStatus.CONFIRMED and view.action_failed:
            return Payload(
                title=":x: Deletion Failed",
                description=f"Link **{link.name}** could not be deleted, please try again.",
                color=Color.RED,
                controls=controls,
            )

        if status is ConfirmationStatus.CONFIRMED:
            return Payload(
                title=":white_check_mark: Link Deleted",
                description=f"Link **{link.name}** was deleted successfully.",
                color=Color.GREEN,
                controls=controls,
            )

        if status is ConfirmationStatus.CANCELLED:
            return Payload(
                title="Deletion Cancelled",
                description=f"Link **{link.name}** was not deleted.",
                color=Color.GREY,
                controls=controls,
            )

        seconds = f"{view.timeout_seconds:g}"
        return Payload(
            title=":x: Deletion Cancelled",
            description=f"Confirmation not received within {seconds} seconds, cancelling.",
            color=Color.RED,
            controls=controls,
        )

    def _render_search(self, view: SearchResultsView) -> Payload:
        lines = [
            f"{i}. [{result.title}]({result.link})"
            for i, result in enumerate(view.results[: self.MAX_SEARCH_RESULTS], 1)
        ]
        description = "\n".join([f"**Query: {view.query}**", *lines])

        return Payload(
            description=description,
            color=Color.BLUE,
            author=f"Requested by {view.requested_by}" if view.requested_by else None,
            content=view.mention,
        )
