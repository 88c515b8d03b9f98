"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """Reference (tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class CloneError(GitError):
    """Cloning a remote repository failed."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Clone of {url} failed: {message}")
        self.url = url


class ObjectNotFoundError(GitError):
    """Path does not name a readable blob in the tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No blob at path: {path}")
        self.path = path
