"""Parsing of ``[epoch:]upstream[-release]`` version strings."""

import re

from errors import MalformedVersion

from .models import Version

_NUMBER = re.compile(r"[0-9]+")
_WHITESPACE = re.compile(r"\s")


def _parse_number(value: str, part: str, text: str) -> int:
    if not _NUMBER.fullmatch(value):
        raise MalformedVersion(f"Bad {part} {value!r} in version {text!r}")
    return int(value)


def parse_version(text: str) -> Version:
    """Parse a version string.

    The epoch is everything before the first ``:``, the release everything
    after the first ``-`` of the remainder. Both are optional and default
    to 0.

    Raises:
        MalformedVersion: if the text does not follow the grammar.
    """
    if not isinstance(text, str):
        raise MalformedVersion(f"Version must be a string, got {type(text).__name__}")
    raw = text.strip()

    epoch = 0
    head, sep, rest = raw.partition(":")
    if sep:
        epoch = _parse_number(head, "epoch", text)
    else:
        rest = raw

    upstream, sep, tail = rest.partition("-")
    release = 0
    if sep:
        if not upstream:
            raise MalformedVersion(f"Release separator at start of version {text!r}")
        release = _parse_number(tail, "release", text)

    if not upstream:
        raise MalformedVersion(f"Empty version {text!r}")
    if ":" in upstream:
        raise MalformedVersion(f"Unexpected ':' in version {text!r}")
    if _WHITESPACE.search(upstream):
        raise MalformedVersion(f"Unexpected whitespace in version {text!r}")
    return Version(epoch=epoch, upstream=upstream, release=release)


def format_version(version: Version) -> str:
    """Canonical text of ``version``; inverse of ``parse_version``."""
    return str(version)


def is_null(version: Version) -> bool:
    """Return True if ``version`` is the null sentinel."""
    return version.is_null()
