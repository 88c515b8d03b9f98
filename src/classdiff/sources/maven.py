"""Maven repository access over HTTP.

Release archives are cached in a local directory with the standard Maven
layout (``<group path>/<artifact>/<version>/<artifact>-<version>.jar``). An
existing cache file is always reused; there is no locking against other
processes writing the same cache.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from types import TracebackType

import httpx
import structlog

from classdiff.config.constants import METADATA_FILENAME
from classdiff.core.errors import FetchError
from classdiff.core.progress import status
from classdiff.index.indexers import BinaryUnitIndexer
from classdiff.index.models import ReleaseIndex
from classdiff.sources.artifact import ArtifactRef
from classdiff.versions.ordering import sort_versions

log = structlog.get_logger(__name__)

_HREF = re.compile(r'href="([^"]*)"')


def group_path(group_id: str) -> str:
    return group_id.replace(".", "/")


def parse_metadata_versions(xml_text: bytes | str) -> list[str]:
    """Collect ``<version>`` texts from maven-metadata.xml, first occurrence wins.

    Raises:
        ET.ParseError: Not well-formed XML.
    """
    root = ET.fromstring(xml_text)
    seen: dict[str, None] = {}
    for element in root.iter("version"):
        text = (element.text or "").strip()
        if text:
            seen.setdefault(text, None)
    return list(seen)


def parse_submodule_links(html: str, artifact_id: str) -> list[str]:
    """Directory-listing links that name sibling artifacts of ``artifact_id``.

    Only the first link of each line is considered.
    """
    modules: set[str] = set()
    for line in html.splitlines():
        match = _HREF.search(line)
        if match is None:
            continue
        link = match.group(1).rstrip("/")
        if link.startswith(artifact_id) and link != artifact_id and ".." not in link:
            modules.add(link)
    return sorted(modules)


class MavenRepository:
    """Remote Maven repository plus its local archive cache."""

    def __init__(
        self,
        repository_url: str,
        local_repository: Path,
        *,
        timeout_sec: float = 30.0,
        client: httpx.Client | None = None,
        verbose: bool = False,
    ) -> None:
        self._url = repository_url.rstrip("/")
        self._local = local_repository
        self._verbose = verbose
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout_sec, follow_redirects=True)

    def __enter__(self) -> MavenRepository:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    # =========================================================================
    # URLs and cache paths
    # =========================================================================

    def metadata_url(self, group_id: str, artifact_id: str) -> str:
        return f"{self._url}/{group_path(group_id)}/{artifact_id}/{METADATA_FILENAME}"

    def archive_url(self, group_id: str, artifact_id: str, version: str) -> str:
        return (
            f"{self._url}/{group_path(group_id)}/{artifact_id}/{version}/"
            f"{artifact_id}-{version}.jar"
        )

    def archive_path(self, group_id: str, artifact_id: str, version: str) -> Path:
        return (
            self._local
            / group_path(group_id)
            / artifact_id
            / version
            / f"{artifact_id}-{version}.jar"
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def fetch_versions(self, group_id: str, artifact_id: str) -> list[str]:
        """Published versions, sorted with the version ordering.

        Raises:
            FetchError: Transport failure, non-success status or unreadable metadata.
        """
        url = self.metadata_url(group_id, artifact_id)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise FetchError.transport(url, str(e)) from e
        if response.status_code == 404:
            raise FetchError.not_found(url)
        if response.status_code != 200:
            raise FetchError.bad_status(url, response.status_code)
        try:
            versions = parse_metadata_versions(response.content)
        except ET.ParseError as e:
            raise FetchError.invalid_payload(url, str(e)) from e

        log.debug("versions_fetched", group=group_id, artifact=artifact_id, count=len(versions))
        return sort_versions(versions)

    def fetch_archive(self, group_id: str, artifact_id: str, version: str) -> Path | None:
        """Local path of the release archive, downloading it on a cache miss.

        Returns None when the archive does not exist remotely or cannot be
        downloaded. No retries.
        """
        path = self.archive_path(group_id, artifact_id, version)
        if path.exists():
            log.debug("archive_cache_hit", version=version, path=str(path))
            if self._verbose:
                status(f"Using cached: {version}")
            return path

        url = self.archive_url(group_id, artifact_id, version)
        if self._verbose:
            status(f"Downloading: {version}")
        partial = path.with_name(path.name + ".part")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with self._client.stream("GET", url) as response:
                if response.status_code != 200:
                    log.info("archive_unavailable", version=version, status=response.status_code)
                    return None
                with partial.open("wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
            partial.replace(path)
        except (httpx.HTTPError, OSError) as e:
            log.warning("archive_download_failed", version=version, url=url, error=str(e))
            partial.unlink(missing_ok=True)
            return None

        log.debug("archive_downloaded", version=version, path=str(path))
        return path

    def find_submodules(self, group_id: str, artifact_id: str) -> list[str]:
        """Sibling artifacts in the group directory whose names extend ``artifact_id``.

        Any failure yields an empty list.
        """
        url = f"{self._url}/{group_path(group_id)}/"
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            log.info("submodule_listing_failed", url=url, error=str(e))
            return []
        if response.status_code != 200:
            log.info("submodule_listing_failed", url=url, status=response.status_code)
            return []
        return parse_submodule_links(response.text, artifact_id)


class MavenReleaseSource:
    """Versions of one Maven artifact, indexed as compiled archives."""

    noun = "version"

    def __init__(
        self,
        repository: MavenRepository,
        artifact: ArtifactRef,
        indexer: BinaryUnitIndexer | None = None,
    ) -> None:
        self._repository = repository
        self._artifact = artifact
        self._indexer = indexer or BinaryUnitIndexer()

    @property
    def artifact(self) -> ArtifactRef:
        return self._artifact

    def list_releases(self) -> list[str]:
        return self._repository.fetch_versions(self._artifact.namespace, self._artifact.name)

    def load(self, release: str) -> ReleaseIndex:
        path = self._repository.fetch_archive(
            self._artifact.namespace, self._artifact.name, release
        )
        if path is None:
            raise FetchError.not_found(f"{self._artifact}:{release}")
        return self._indexer.build(path, release=release)

    def find_submodules(self) -> list[str]:
        return self._repository.find_submodules(self._artifact.namespace, self._artifact.name)
