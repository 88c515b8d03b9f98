"""Git access for tag-based release histories."""

from classdiff.git.access import RepoAccess
from classdiff.git.errors import (
    CloneError,
    GitError,
    NotARepositoryError,
    ObjectNotFoundError,
    RefNotFoundError,
)

__all__ = [
    "RepoAccess",
    "CloneError",
    "GitError",
    "NotARepositoryError",
    "ObjectNotFoundError",
    "RefNotFoundError",
]
