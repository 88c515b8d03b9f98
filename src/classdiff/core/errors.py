"""classdiff error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Fetch
- 4xxx: Indexing
- 5xxx: Scan
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_CACHE_UNUSABLE = 2003

    # Fetch (3xxx)
    FETCH_NOT_FOUND = 3001
    FETCH_TRANSPORT = 3002
    FETCH_BAD_STATUS = 3003
    FETCH_INVALID_PAYLOAD = 3004

    # Indexing (4xxx)
    INDEX_UNREADABLE = 4001
    INDEX_NOT_AN_ARCHIVE = 4002
    INDEX_UNKNOWN_REVISION = 4003
    INDEX_UNIT_UNREADABLE = 4004

    # Scan (5xxx)
    SCAN_ABORTED = 5001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ClassDiffError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'FETCH_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ClassDiffError):
    """Configuration-related errors. Fatal at startup."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def cache_unusable(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_CACHE_UNUSABLE,
            message=f"Local cache directory is not usable: {path} ({reason})",
            details={"path": path, "reason": reason},
        )


class FetchError(ClassDiffError):
    """A release archive, tree or listing could not be retrieved."""

    @classmethod
    def not_found(cls, what: str) -> "FetchError":
        return cls(
            code=ErrorCode.FETCH_NOT_FOUND,
            message=f"Not found: {what}",
            details={"what": what},
        )

    @classmethod
    def transport(cls, url: str, reason: str) -> "FetchError":
        return cls(
            code=ErrorCode.FETCH_TRANSPORT,
            message=f"Request to {url} failed: {reason}",
            retryable=True,
            details={"url": url, "reason": reason},
        )

    @classmethod
    def bad_status(cls, url: str, status_code: int) -> "FetchError":
        return cls(
            code=ErrorCode.FETCH_BAD_STATUS,
            message=f"Request to {url} returned HTTP {status_code}",
            details={"url": url, "status_code": status_code},
        )

    @classmethod
    def invalid_payload(cls, url: str, reason: str) -> "FetchError":
        return cls(
            code=ErrorCode.FETCH_INVALID_PAYLOAD,
            message=f"Unexpected response from {url}: {reason}",
            details={"url": url, "reason": reason},
        )


class IndexingError(ClassDiffError):
    """A release archive or tree is unreadable or structurally invalid."""

    @classmethod
    def unreadable(cls, source: str, reason: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_UNREADABLE,
            message=f"Cannot read {source}: {reason}",
            details={"source": source, "reason": reason},
        )

    @classmethod
    def not_an_archive(cls, source: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_NOT_AN_ARCHIVE,
            message=f"Not a recognizable archive: {source}",
            details={"source": source},
        )

    @classmethod
    def unknown_revision(cls, revision: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_UNKNOWN_REVISION,
            message=f"Unknown revision: {revision}",
            details={"revision": revision},
        )


class HashingError(ClassDiffError):
    """Content of one listed unit could not be read. Never fatal for a release."""

    @classmethod
    def unreadable_unit(cls, path: str, reason: str) -> "HashingError":
        return cls(
            code=ErrorCode.INDEX_UNIT_UNREADABLE,
            message=f"Cannot read unit {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ScanAbortedError(ClassDiffError):
    """The very first comparison of a scan could not be made."""

    @classmethod
    def first_comparison(cls, release: str, cause: ClassDiffError) -> "ScanAbortedError":
        return cls(
            code=ErrorCode.SCAN_ABORTED,
            message=f"Scan aborted: release {release} is unavailable ({cause.message})",
            details={"release": release, "cause": cause.to_dict()},
        )


class InternalError(ClassDiffError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
