"""Core components for the link bot."""

from .command_registry import Command, CommandRegistry
from .confirmation import ConfirmationRequest, ConfirmationStatus, ConfirmationWorkflow, Decision
from .pagination import ControlState, Direction, PageState, PaginationEngine
from .renderer import (
    ConfirmationView,
    LinkPageView,
    LinkView,
    NoticeView,
    ResponseRenderer,
    SearchResultsView,
)
from .session import ConfirmationFlow, PaginationFlow, Session, SessionFlow, SessionKind, SessionStatus, Step
from .session_manager import Outcome, SessionManager

__all__ = [
    "Command",
    "CommandRegistry",
    "ConfirmationFlow",
    "ConfirmationRequest",
    "ConfirmationStatus",
    "ConfirmationView",
    "ConfirmationWorkflow",
    "ControlState",
    "Decision",
    "Direction",
    "LinkPageView",
    "LinkView",
    "NoticeView",
    "Outcome",
    "PageState",
    "PaginationEngine",
    "PaginationFlow",
    "ResponseRenderer",
    "SearchResultsView",
    "Session",
    "SessionFlow",
    "SessionKind",
    "SessionManager",
    "SessionStatus",
    "Step",
]
