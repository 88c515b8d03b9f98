"""Artifact reference parsing.

Accepted forms:
- ``group.id:artifact`` / ``group.id/artifact``
- ``https://central.sonatype.com/artifact/<group>/<artifact>``
- ``https://repo1.maven.org/maven2/<group path>/<artifact>/``
- ``owner/repo`` (no dots) or ``https://github.com/<owner>/<repo>[/...]``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ArtifactKind = Literal["maven", "github"]

_SONATYPE_PREFIX = "https://central.sonatype.com/artifact/"
_MAVEN_CENTRAL_PREFIXES = ("https://repo1.maven.org/maven2/", "http://repo1.maven.org/maven2/")
_GITHUB_PREFIXES = ("https://github.com/", "http://github.com/")


@dataclass(frozen=True, slots=True)
class ArtifactRef:
    """Maven ``groupId``/``artifactId`` or GitHub ``owner``/``repo``."""

    namespace: str
    name: str
    kind: ArtifactKind = "maven"

    @property
    def is_github(self) -> bool:
        return self.kind == "github"

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


def _strip_prefix(value: str, prefixes: tuple[str, ...]) -> str | None:
    for prefix in prefixes:
        if value.startswith(prefix):
            return value[len(prefix) :].rstrip("/")
    return None


def parse_artifact(artifact: str) -> ArtifactRef:
    """Parse a command-line artifact reference."""
    path = _strip_prefix(artifact, (_SONATYPE_PREFIX,))
    if path is not None:
        parts = path.split("/")
        if len(parts) >= 2:
            return ArtifactRef(parts[0], parts[1])

    path = _strip_prefix(artifact, _MAVEN_CENTRAL_PREFIXES)
    if path is not None:
        parts = path.split("/")
        if len(parts) >= 2:
            return ArtifactRef(".".join(parts[:-1]), parts[-1])

    path = _strip_prefix(artifact, _GITHUB_PREFIXES)
    if path is not None:
        parts = path.split("/")
        if len(parts) >= 2:
            return ArtifactRef(parts[0], parts[1].removesuffix(".git"), "github")

    if "/" in artifact and "." not in artifact:
        parts = artifact.split("/")
        if len(parts) == 2:
            return ArtifactRef(parts[0], parts[1], "github")

    sep = ":" if ":" in artifact else "/"
    parts = artifact.split(sep)
    if len(parts) >= 2:
        return ArtifactRef(parts[0], parts[1])

    return ArtifactRef(artifact, artifact)
