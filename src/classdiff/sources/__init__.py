"""Release sources: where release lists and release contents come from."""

from classdiff.sources.artifact import ArtifactRef, parse_artifact
from classdiff.sources.base import ReleaseSource
from classdiff.sources.github import GitMirror, GitTagReleaseSource, TreeSnapshot
from classdiff.sources.maven import MavenReleaseSource, MavenRepository

__all__ = [
    "ArtifactRef",
    "GitMirror",
    "GitTagReleaseSource",
    "MavenReleaseSource",
    "MavenRepository",
    "ReleaseSource",
    "TreeSnapshot",
    "parse_artifact",
]
