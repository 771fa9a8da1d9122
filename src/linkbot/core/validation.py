"""Input checks and normalisation for link records."""

import re

from ..errors import ValidationError
from .renderer import inline_code

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 20
DESCRIPTION_MIN_LENGTH = 3
DESCRIPTION_MAX_LENGTH = 100

ASCII_PATTERN = re.compile(r"^[\x00-\x7F]*$")
URL_PATTERN = re.compile(
    r"^https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)
WHITESPACE_PATTERN = re.compile(r"\s+")


def standardize_link_name(name: str) -> str:
    """
    Normalise a link name into its storage key.

    Lowercases, trims, and joins words with single dashes, so
    "My  Link" and "my-link" refer to the same record.
    """
    return WHITESPACE_PATTERN.sub("-", name.strip().lower())


def is_ascii(text: str) -> bool:
    return ASCII_PATTERN.match(text) is not None


def is_valid_url(url: str) -> bool:
    """Check for an http(s) URL ending in a domain or path."""
    return URL_PATTERN.match(url) is not None


def validate_link_name(name: str) -> None:
    """
    Check a new link's name.

    Raises:
        ValidationError: If the name has the wrong length or non-ASCII text.
    """
    if not is_ascii(name):
        raise ValidationError(
            f"**{name}** is not a valid name, please use only ASCII characters."
        )
    if not NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"**{name}** must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
        )


def validate_description(description: str) -> None:
    if not DESCRIPTION_MIN_LENGTH <= len(description.strip()) <= DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"The description must be between {DESCRIPTION_MIN_LENGTH} "
            f"and {DESCRIPTION_MAX_LENGTH} characters."
        )


def validate_url(url: str) -> None:
    """
    Raises:
        ValidationError: If url is not an http(s) URL.
    """
    if not is_valid_url(url):
        raise ValidationError(
            f"{inline_code(url)} is not a valid URL, please make sure it starts "
            "with http:// or https:// and ends with a domain."
        )
