"""Tag-based release history from a bare git mirror.

The mirror lives under the configured cache directory and is cloned once;
later runs reuse it as is.
"""

from __future__ import annotations

from pathlib import Path

import pygit2
import structlog

from classdiff.config.constants import GITHUB_URL
from classdiff.core.errors import FetchError, HashingError, IndexingError
from classdiff.core.progress import spinner, status
from classdiff.git.access import RepoAccess
from classdiff.git.errors import CloneError, GitError, ObjectNotFoundError, RefNotFoundError
from classdiff.index.indexers import SourceUnitIndexer
from classdiff.index.models import ReleaseIndex
from classdiff.sources.artifact import ArtifactRef
from classdiff.versions.ordering import sort_versions

log = structlog.get_logger(__name__)


class TreeSnapshot:
    """Source tree of one tag, read straight from the object database."""

    def __init__(self, access: RepoAccess, revision: str, tree: pygit2.Tree) -> None:
        self._access = access
        self._revision = revision
        self._tree = tree

    @property
    def revision(self) -> str:
        return self._revision

    def list_paths(self) -> list[str]:
        return list(self._access.iter_blob_paths(self._tree))

    def read(self, path: str) -> bytes:
        try:
            return self._access.read_blob(self._tree, path)
        except ObjectNotFoundError as e:
            raise HashingError.unreadable_unit(path, str(e)) from e


class GitMirror:
    """Bare mirror of one remote repository."""

    def __init__(self, url: str, repo_dir: Path, *, verbose: bool = False) -> None:
        self._url = url
        self._repo_dir = repo_dir
        self._verbose = verbose
        self._access: RepoAccess | None = None

    @classmethod
    def for_github(
        cls, artifact: ArtifactRef, cache_dir: Path, *, verbose: bool = False
    ) -> GitMirror:
        url = f"{GITHUB_URL}/{artifact.namespace}/{artifact.name}.git"
        repo_dir = cache_dir / f"{artifact.namespace}-{artifact.name}" / "repo"
        return cls(url, repo_dir, verbose=verbose)

    @property
    def repo_dir(self) -> Path:
        return self._repo_dir

    def open(self) -> RepoAccess:
        """Open the mirror, cloning it first if it does not exist yet.

        Raises:
            FetchError: Clone failed or the cached mirror is not a repository.
        """
        if self._access is not None:
            return self._access

        try:
            if self._repo_dir.exists():
                log.debug("mirror_cache_hit", path=str(self._repo_dir))
                if self._verbose:
                    status("Using cached repository")
                self._access = RepoAccess(self._repo_dir)
            else:
                self._repo_dir.parent.mkdir(parents=True, exist_ok=True)
                with spinner("Cloning repository"):
                    self._access = RepoAccess.clone_bare(self._url, self._repo_dir)
                if self._verbose:
                    status("Cloned repository", style="success")
                log.info("mirror_cloned", url=self._url, path=str(self._repo_dir))
        except CloneError as e:
            raise FetchError.transport(self._url, str(e)) from e
        except GitError as e:
            raise FetchError.invalid_payload(str(self._repo_dir), str(e)) from e
        return self._access

    def list_tags(self) -> list[str]:
        return list(self.open().iter_tag_names())

    def snapshot(self, tag: str) -> TreeSnapshot:
        """Tree snapshot of ``tag``.

        Raises:
            IndexingError: The tag does not resolve to a tree.
        """
        access = self.open()
        try:
            tree = access.tag_tree(tag)
        except RefNotFoundError as e:
            raise IndexingError.unknown_revision(tag) from e
        return TreeSnapshot(access, tag, tree)


class GitTagReleaseSource:
    """Tags of one repository, indexed as source trees."""

    noun = "tag"

    def __init__(self, mirror: GitMirror, indexer: SourceUnitIndexer | None = None) -> None:
        self._mirror = mirror
        self._indexer = indexer or SourceUnitIndexer()

    def list_releases(self) -> list[str]:
        return sort_versions(self._mirror.list_tags())

    def load(self, release: str) -> ReleaseIndex:
        return self._indexer.build(self._mirror.snapshot(release), release=release)
