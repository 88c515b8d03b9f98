"""Group changed identifiers by module prefix for scannable output.

Source-tree identifiers of multi-module repositories look like
``core.src.main.java.org.example.Foo``: everything before the first
namespace marker (``.org.`` or ``.com.`` by default) is the module, the rest
is the qualified name. Identifiers without a marker share the ``""`` group.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

DEFAULT_MARKERS = (".org.", ".com.")


@dataclass(frozen=True, slots=True)
class GroupedReport:
    """Groups in ascending key order, each with sorted suffixes.

    ``groups`` holds only what fits under the display cap; ``remaining`` is
    the number of identifiers left unshown.
    """

    groups: tuple[tuple[str, tuple[str, ...]], ...] = ()
    remaining: int = 0
    total: int = 0

    @property
    def shown(self) -> int:
        return sum(len(suffixes) for _, suffixes in self.groups)


def split_identifier(identifier: str, markers: Sequence[str] = DEFAULT_MARKERS) -> tuple[str, str]:
    """Split at the first marker that occurs, trying markers in order.

    The marker's leading dot is dropped; the rest of the marker starts the
    suffix.
    """
    for marker in markers:
        pos = identifier.find(marker)
        if pos != -1:
            return identifier[:pos], identifier[pos + 1 :]
    return "", identifier


def group_identifiers(
    identifiers: Iterable[str],
    limit: int | None = None,
    markers: Sequence[str] = DEFAULT_MARKERS,
) -> GroupedReport:
    """Group identifiers, showing at most ``limit`` of them across all groups.

    ``limit=None`` is unbounded.
    """
    unique = set(identifiers)
    groups: dict[str, list[str]] = {}
    for identifier in unique:
        key, suffix = split_identifier(identifier, markers)
        groups.setdefault(key, []).append(suffix)

    shown: list[tuple[str, tuple[str, ...]]] = []
    budget = len(unique) if limit is None else limit
    for key in sorted(groups):
        if budget <= 0:
            break
        suffixes = sorted(groups[key])[:budget]
        budget -= len(suffixes)
        shown.append((key, tuple(suffixes)))

    total = len(unique)
    remaining = max(total - limit, 0) if limit is not None else 0
    return GroupedReport(groups=tuple(shown), remaining=remaining, total=total)
