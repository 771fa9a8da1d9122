"""Error types raised by the link bot core and its collaborators."""

from typing import Any, Optional


class LinkBotError(Exception):
    def __init__(self, message: str, code: str = "linkbot_error", details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(LinkBotError):
    """Malformed user input. Shown privately to the invoker."""

    def __init__(self, message: str):
        super().__init__(message, "validation_error")


class NotFoundError(LinkBotError):
    """Unknown link id or unknown command."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "not_found", details)


class DuplicateKeyError(LinkBotError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "duplicate_key", details)


class DuplicateCommandError(LinkBotError):
    def __init__(self, name: str):
        super().__init__(f"Command already registered: {name}", "duplicate_command", {"name": name})


class PermissionDeniedError(LinkBotError):
    """A non-owner tried to drive someone else's session."""

    def __init__(self, message: str = "You are not allowed to interact with this message!"):
        super().__init__(message, "permission_denied")


class InvalidStateError(LinkBotError):
    """Operation on a request or session that is no longer pending."""

    def __init__(self, message: str):
        super().__init__(message, "invalid_state")


class SessionTimeoutError(InvalidStateError):
    """A decision arrived after the deadline. The request is expired instead."""

    def __init__(self, message: str = "Session timed out"):
        LinkBotError.__init__(self, message, "timeout")


class TransientDeliveryError(LinkBotError):
    """Sending or editing a rendered payload failed."""

    def __init__(self, message: str):
        super().__init__(message, "delivery_error")


class SearchError(LinkBotError):
    def __init__(self, message: str):
        super().__init__(message, "search_error")
