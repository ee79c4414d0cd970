"""Version parsing and ordering."""

from .models import NULL_VERSION, Version
from .parser import format_version, is_null, parse_version
from .compare import compare_versions, newest, version_key

__all__ = [
    "NULL_VERSION",
    "Version",
    "format_version",
    "is_null",
    "parse_version",
    "compare_versions",
    "newest",
    "version_key",
]
