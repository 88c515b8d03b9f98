"""Data models for release indexes and their diffs.

All models are plain frozen dataclasses; nothing here touches the network,
the filesystem or git.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

UnitIdentifier = str
"""Fully-qualified, dot-separated name of one compilation unit."""

BinaryFingerprint = int
"""``(crc32 << 32) | (size & 0xFFFFFFFF)`` as an unsigned 64-bit value."""

SourceFingerprint = str
"""Hex digest of the raw source bytes."""

Fingerprint = BinaryFingerprint | SourceFingerprint


def binary_fingerprint(crc32: int, size: int) -> BinaryFingerprint:
    """Pack an archive entry's checksum and uncompressed size into one value."""
    return ((crc32 & 0xFFFFFFFF) << 32) | (size & 0xFFFFFFFF)


class ReleaseIndex(Mapping[UnitIdentifier, Fingerprint]):
    """Immutable unit -> fingerprint mapping for exactly one release."""

    __slots__ = ("_release", "_units")

    def __init__(self, release: str, units: Mapping[UnitIdentifier, Fingerprint]) -> None:
        self._release = release
        self._units: Mapping[UnitIdentifier, Fingerprint] = MappingProxyType(dict(units))

    @property
    def release(self) -> str:
        return self._release

    def __getitem__(self, key: UnitIdentifier) -> Fingerprint:
        return self._units[key]

    def __iter__(self) -> Iterator[UnitIdentifier]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return f"ReleaseIndex(release={self._release!r}, units={len(self._units)})"


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Added, removed and modified identifiers, each sorted ascending.

    The three tuples are disjoint. A unit present on both sides with an
    equal fingerprint is in none of them.
    """

    added: tuple[UnitIdentifier, ...] = ()
    removed: tuple[UnitIdentifier, ...] = ()
    modified: tuple[UnitIdentifier, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    def __bool__(self) -> bool:
        return not self.is_empty

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "added": list(self.added),
            "removed": list(self.removed),
            "modified": list(self.modified),
        }


@dataclass(frozen=True, slots=True)
class Transition:
    """One reported change: ``older`` is the baseline, ``newer`` the candidate."""

    older: str
    newer: str
    diff: DiffResult = field(default_factory=DiffResult)
