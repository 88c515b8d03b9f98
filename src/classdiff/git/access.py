"""Repository access layer - owns pygit2.Repository and exposes tag/tree facts."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pygit2

from classdiff.git.errors import (
    CloneError,
    NotARepositoryError,
    ObjectNotFoundError,
    RefNotFoundError,
)

TAG_PREFIX = "refs/tags/"


class RepoAccess:
    """Owns pygit2.Repository and provides normalized access to tags and trees."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo = pygit2.Repository(
                str(self._path), pygit2.enums.RepositoryOpenFlag.NO_SEARCH
            )
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @classmethod
    def clone_bare(cls, url: str, repo_path: Path | str) -> RepoAccess:
        """Clone ``url`` as a bare repository at ``repo_path``."""
        try:
            pygit2.clone_repository(url, str(repo_path), bare=True)
        except (pygit2.GitError, ValueError) as e:
            raise CloneError(url, str(e)) from e
        return cls(repo_path)

    @property
    def repo(self) -> pygit2.Repository:
        return self._repo

    @property
    def path(self) -> Path:
        return self._path

    # =========================================================================
    # Tags
    # =========================================================================

    def iter_tag_names(self) -> Iterator[str]:
        """Tag names without the ``refs/tags/`` prefix."""
        for refname in self._repo.references:
            if refname.startswith(TAG_PREFIX):
                yield refname[len(TAG_PREFIX) :]

    def tag_tree(self, tag: str) -> pygit2.Tree:
        """Root tree of the commit a tag (annotated or lightweight) points to."""
        ref = self._repo.references.get(TAG_PREFIX + tag)
        if ref is None:
            raise RefNotFoundError(tag)
        try:
            return ref.peel(pygit2.Tree)
        except (pygit2.GitError, ValueError, KeyError) as e:
            raise RefNotFoundError(tag) from e

    # =========================================================================
    # Trees and blobs
    # =========================================================================

    def iter_blob_paths(self, tree: pygit2.Tree, prefix: str = "") -> Iterator[str]:
        """Every blob path under ``tree``, ``/``-separated, depth first."""
        for entry in tree:
            path = f"{prefix}{entry.name}"
            if entry.type_str == "tree":
                subtree = self._repo.get(entry.id)
                if isinstance(subtree, pygit2.Tree):
                    yield from self.iter_blob_paths(subtree, path + "/")
            elif entry.type_str == "blob":
                yield path
            # "commit" entries are submodules; their content is not in this repo

    def read_blob(self, tree: pygit2.Tree, path: str) -> bytes:
        try:
            entry = tree[path]
            blob = self._repo.get(entry.id)
        except (KeyError, pygit2.GitError) as e:
            raise ObjectNotFoundError(path) from e
        if not isinstance(blob, pygit2.Blob):
            raise ObjectNotFoundError(path)
        return bytes(blob.data)
