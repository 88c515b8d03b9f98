"""Release source contract shared by the Maven and tag-based sources."""

from __future__ import annotations

from typing import Protocol

from classdiff.index.models import ReleaseIndex


class ReleaseSource(Protocol):
    """Lists the release history of one artifact and indexes single releases."""

    @property
    def noun(self) -> str:
        """What a release is called in messages ("version", "tag")."""
        ...

    def list_releases(self) -> list[str]:
        """All releases, sorted with the version ordering.

        Raises:
            FetchError: The release list itself is unavailable.
        """
        ...

    def load(self, release: str) -> ReleaseIndex:
        """Fetch and index one release.

        Raises:
            FetchError: Nothing could be fetched for this release.
            IndexingError: What was fetched cannot be indexed.
        """
        ...
