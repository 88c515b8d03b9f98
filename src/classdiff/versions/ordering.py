"""Total order and range filter over version and tag strings.

Strings are split on ``.`` and ``-``. Each position compares numerically
when both segments parse as signed 64-bit integers, otherwise as
case-insensitive strings. A missing trailing segment is the empty string,
so it never parses as a number and sorts before any non-empty segment:
``"1.2" < "1.2.0"``. Distinct strings may still compare equal
(``"1.0-a"`` and ``"1.0.A"``).
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable, Sequence
from enum import IntEnum

_SEPARATORS = re.compile(r"[.-]")
_INTEGER = re.compile(r"[+-]?[0-9]+")

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _split(version: str) -> list[str]:
    return _SEPARATORS.split(version)


def _parse_i64(segment: str) -> int | None:
    if not _INTEGER.fullmatch(segment):
        return None
    value = int(segment)
    if not _I64_MIN <= value <= _I64_MAX:
        return None
    return value


def _sign(a: object, b: object) -> Ordering:
    if a < b:  # type: ignore[operator]
        return Ordering.LESS
    if a > b:  # type: ignore[operator]
        return Ordering.GREATER
    return Ordering.EQUAL


def compare_versions(a: str, b: str) -> Ordering:
    """Compare two version strings segment by segment."""
    parts_a = _split(a)
    parts_b = _split(b)

    for i in range(max(len(parts_a), len(parts_b))):
        pa = parts_a[i] if i < len(parts_a) else ""
        pb = parts_b[i] if i < len(parts_b) else ""

        na = _parse_i64(pa)
        nb = _parse_i64(pb)
        if na is not None and nb is not None:
            result = _sign(na, nb)
        else:
            result = _sign(pa.lower(), pb.lower())
        if result is not Ordering.EQUAL:
            return result

    return Ordering.EQUAL


version_key = functools.cmp_to_key(compare_versions)
"""Sort key for ``sorted(..., key=version_key)``."""


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Stable ascending sort; equal-comparing strings keep their input order."""
    return sorted(versions, key=version_key)


def filter_versions(
    versions: Sequence[str],
    from_version: str | None = None,
    to_version: str | None = None,
) -> list[str]:
    """Keep versions inside the inclusive ``[from_version, to_version]`` range.

    The input is expected to be sorted already; order is preserved, never
    re-sorted.
    """
    result = []
    for v in versions:
        if from_version is not None and compare_versions(v, from_version) is Ordering.LESS:
            continue
        if to_version is not None and compare_versions(v, to_version) is Ordering.GREATER:
            continue
        result.append(v)
    return result
