"""Reader and writer for ini-style ``.PKGINFO`` metadata."""

from typing import Dict, Iterable, List, Optional, Tuple

_COMMENT_PREFIXES = (";", "#")
_QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_pkginfo(text: str) -> Dict[str, str]:
    """Parse ``key = value`` lines into a dict.

    Comment lines (``;`` or ``#``), blank lines, ``[section]`` headers and
    lines without ``=`` are skipped. The last occurrence of a key wins.
    """
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        if line.startswith("[") and line.endswith("]"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        values[key] = _unquote(value.strip())
    return values


def split_list(value: str) -> List[str]:
    """Split a comma separated value, stripping items and dropping empties."""
    return [item.strip() for item in value.split(",") if item.strip()]


def render_pkginfo(pairs: Iterable[Tuple[str, Optional[str]]]) -> str:
    """Render ``(key, value)`` pairs as PKGINFO text, skipping None values."""
    lines = [f"{key} = {value}" for key, value in pairs if value is not None]
    return "\n".join(lines) + "\n"
