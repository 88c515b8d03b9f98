"""Content indexers: reduce one release to a ReleaseIndex.

Two strategies share the ``build(handle) -> ReleaseIndex`` contract:

- BinaryUnitIndexer: entries of a compiled archive (jar/zip), fingerprinted
  by stored checksum and uncompressed size.
- SourceUnitIndexer: source files of one tree snapshot, fingerprinted by a
  hash of their bytes.

A run picks one strategy up front and never mixes them.
"""

from __future__ import annotations

import hashlib
import zipfile
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Protocol, runtime_checkable

import structlog

from classdiff.core.errors import HashingError, IndexingError
from classdiff.index.models import (
    Fingerprint,
    ReleaseIndex,
    SourceFingerprint,
    UnitIdentifier,
    binary_fingerprint,
)

log = structlog.get_logger(__name__)

NAMESPACE_SEPARATOR = "."

# 64 bits of SHA-256; collisions are tolerated, this is change detection only
_SOURCE_DIGEST_CHARS = 16


@runtime_checkable
class SourceTree(Protocol):
    """Flat, read-only view of one source-tree snapshot."""

    @property
    def revision(self) -> str: ...

    def list_paths(self) -> list[str]:
        """All file paths in the snapshot, ``/``-separated."""
        ...

    def read(self, path: str) -> bytes:
        """Full content of one path. Raises HashingError when unreadable."""
        ...


class ContentIndexer(Protocol):
    def build(self, handle: object, *, release: str) -> ReleaseIndex: ...


# ============================================================================
# Binary archives
# ============================================================================


class BinaryUnitIndexer:
    """Index compiled units inside a zip-format archive."""

    def __init__(
        self,
        unit_suffix: str = ".class",
        descriptor_unit: str = "module-info.class",
    ) -> None:
        self._unit_suffix = unit_suffix
        self._descriptor_unit = descriptor_unit

    def unit_identifier(self, entry_name: str) -> UnitIdentifier | None:
        """Map an archive entry name to a unit identifier, or None to skip it."""
        if not entry_name.endswith(self._unit_suffix) or entry_name == self._descriptor_unit:
            return None
        stem = entry_name[: -len(self._unit_suffix)] if self._unit_suffix else entry_name
        return stem.replace("/", NAMESPACE_SEPARATOR)

    def build(self, handle: Path | str | IO[bytes], *, release: str = "") -> ReleaseIndex:
        """Read the archive's central directory and fingerprint every unit.

        Raises:
            IndexingError: The archive cannot be opened or has no zip signature.
        """
        source = str(handle) if isinstance(handle, (str, Path)) else (release or "<stream>")
        units: dict[UnitIdentifier, Fingerprint] = {}
        try:
            with zipfile.ZipFile(handle) as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    identifier = self.unit_identifier(info.filename)
                    if identifier is None:
                        continue
                    units[identifier] = binary_fingerprint(info.CRC, info.file_size)
        except zipfile.BadZipFile as e:
            raise IndexingError.not_an_archive(source) from e
        except OSError as e:
            raise IndexingError.unreadable(source, e.strerror or str(e)) from e

        log.debug("archive_indexed", release=release, source=source, units=len(units))
        return ReleaseIndex(release, units)


# ============================================================================
# Source trees
# ============================================================================


def source_fingerprint(content: bytes) -> SourceFingerprint:
    return hashlib.sha256(content).hexdigest()[:_SOURCE_DIGEST_CHARS]


class SourceUnitIndexer:
    """Index source files of one tree snapshot."""

    def __init__(
        self,
        source_roots: Sequence[str] = ("src/main/java/", "src/", ""),
        source_suffix: str = ".java",
        test_segment: str = "/test/",
    ) -> None:
        self._source_roots = tuple(source_roots)
        self._source_suffix = source_suffix
        self._test_segment = test_segment

    def is_indexed(self, path: str) -> bool:
        return path.endswith(self._source_suffix) and self._test_segment not in path

    def unit_identifier(self, path: str) -> UnitIdentifier:
        """Strip the first matching source root and the suffix, then dot-join."""
        for prefix in self._source_roots:
            if path.startswith(prefix):
                path = path[len(prefix) :]
                break
        if self._source_suffix and path.endswith(self._source_suffix):
            path = path[: -len(self._source_suffix)]
        return path.replace("/", NAMESPACE_SEPARATOR)

    def build(self, handle: SourceTree, *, release: str = "") -> ReleaseIndex:
        """Hash every indexed path of the snapshot.

        A path whose content cannot be read is left out of the index; it will
        show up as added or removed against releases where it was readable.
        """
        release = release or handle.revision
        units: dict[UnitIdentifier, Fingerprint] = {}
        omitted = 0
        for path in handle.list_paths():
            if not self.is_indexed(path):
                continue
            try:
                content = handle.read(path)
            except HashingError as e:
                omitted += 1
                log.warning("unit_omitted", release=release, path=path, reason=e.message)
                continue
            units[self.unit_identifier(path)] = source_fingerprint(content)

        log.debug("tree_indexed", release=release, units=len(units), omitted=omitted)
        return ReleaseIndex(release, units)
