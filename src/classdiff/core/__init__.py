"""Core module exports."""

from classdiff.core.errors import (
    ClassDiffError,
    ConfigError,
    ErrorCode,
    FetchError,
    HashingError,
    IndexingError,
    InternalError,
    ScanAbortedError,
)
from classdiff.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from classdiff.core.progress import pluralize, spinner, status

__all__ = [
    # Errors
    "ClassDiffError",
    "ConfigError",
    "ErrorCode",
    "FetchError",
    "HashingError",
    "IndexingError",
    "InternalError",
    "ScanAbortedError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
]
