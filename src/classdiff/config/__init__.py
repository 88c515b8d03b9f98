"""Config module exports."""

from classdiff.config.loader import ensure_cache_dirs, load_config
from classdiff.config.models import (
    ArchiveConfig,
    ClassDiffConfig,
    GitConfig,
    LoggingConfig,
    LogOutputConfig,
    MavenConfig,
    ReportConfig,
)

__all__ = [
    "load_config",
    "ensure_cache_dirs",
    "ClassDiffConfig",
    "ArchiveConfig",
    "GitConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "MavenConfig",
    "ReportConfig",
]
