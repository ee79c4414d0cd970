"""Ordering of package versions.

Examples:
    1.1.2 < 1.1.3
    1.2.2-1 > 1.2.2
    1:0.1-1 > 1.2-5
    0.1.2b > 0.1.2a
    0.1.2b < 0.1.2rc3
    0.1-5 = 0.1-5
    0.1-5 < 0.1-6
    0.1-6 > 0.1-1
"""

import re
from functools import cmp_to_key
from typing import Iterable, Optional, Tuple, Union

from .models import Version
from .parser import parse_version

VersionLike = Union[Version, str]

_SEGMENT = re.compile(r"([0-9]*)(.*)", re.DOTALL)


def _cmp(left, right) -> int:
    return (left > right) - (left < right)


def _coerce(value: VersionLike) -> Version:
    if isinstance(value, Version):
        return value
    return parse_version(value)


def _split_segment(segment: str) -> Tuple[int, str]:
    """Split ``12rc3`` into ``(12, "rc3")``; a missing number counts as 0."""
    digits, suffix = _SEGMENT.fullmatch(segment).groups()
    return int(digits or 0), suffix


def _compare_segment(left: str, right: str) -> int:
    left_num, left_suffix = _split_segment(left)
    right_num, right_suffix = _split_segment(right)
    result = _cmp(left_num, right_num)
    if result:
        return result
    # A suffix marks a pre-release: 2rc3 < 2, but 2b > 2a.
    if left_suffix and not right_suffix:
        return -1
    if right_suffix and not left_suffix:
        return 1
    return _cmp(left_suffix, right_suffix)


def compare_versions(a: VersionLike, b: VersionLike) -> int:
    """Compare two versions and determine which one is newer.

    Returns 1 if ``a`` is newer than ``b``, 0 if they are the same version
    and -1 if ``b`` is newer. Different epochs override any further
    comparison. Strings are parsed first and may raise ``MalformedVersion``.
    """
    a = _coerce(a)
    b = _coerce(b)

    if a.is_null() and b.is_null():
        return 0
    if a.is_null():
        return -1
    if b.is_null():
        return 1
    if str(a) == str(b):
        return 0
    if a.epoch != b.epoch:
        return _cmp(a.epoch, b.epoch)

    parts_a = a.upstream.split(".")
    parts_b = b.upstream.split(".")
    for left, right in zip(parts_a, parts_b):
        result = _compare_segment(left, right)
        if result:
            return result
    if len(parts_a) != len(parts_b):
        return _cmp(len(parts_a), len(parts_b))

    # Absent release is 0, which sorts below any present one.
    return _cmp(a.release, b.release)


version_key = cmp_to_key(compare_versions)


def newest(versions: Iterable[VersionLike]) -> Optional[Version]:
    """Return the highest version in ``versions``, or None when empty."""
    parsed = [_coerce(v) for v in versions]
    if not parsed:
        return None
    return max(parsed, key=version_key)
