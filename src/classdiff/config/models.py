"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CLASSDIFF__SECTION__KEY)
3. Global YAML (~/.config/classdiff/config.yaml)
4. Built-in defaults (this file)

Examples:
    CLASSDIFF__LOGGING__LEVEL=DEBUG
    CLASSDIFF__MAVEN__REPOSITORY_URL=https://maven.example.org/releases
    CLASSDIFF__REPORT__GROUPED_LIMIT=200
"""

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from classdiff.config.constants import (
    DEFAULT_MAVEN_REPOSITORY_URL,
    DEFAULT_TIMEOUT_SEC,
    GIT_CACHE_DIRNAME,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CLASSDIFF__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. The CLI switches to DEBUG with --verbose.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


def _default_git_cache_dir() -> str:
    return str(Path(tempfile.gettempdir()) / GIT_CACHE_DIRNAME)


class MavenConfig(BaseModel):
    """Maven repository access.

    Env vars:
        CLASSDIFF__MAVEN__REPOSITORY_URL: Remote repository root
        CLASSDIFF__MAVEN__LOCAL_REPOSITORY: Local archive cache (Maven layout)
        CLASSDIFF__MAVEN__TIMEOUT_SEC: Per-request timeout
    """

    repository_url: str = Field(
        default=DEFAULT_MAVEN_REPOSITORY_URL,
        description="Remote repository root, without trailing slash.",
    )
    local_repository: str = Field(
        default="~/.m2/repository",
        description="Local cache directory laid out like ~/.m2/repository.",
    )
    timeout_sec: float = Field(
        default=DEFAULT_TIMEOUT_SEC,
        description="Ceiling for each HTTP request.",
    )

    @field_validator("repository_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class GitConfig(BaseModel):
    """Source-control tag mode.

    Env vars:
        CLASSDIFF__GIT__CACHE_DIR: Where bare mirrors are kept
    """

    cache_dir: str = Field(
        default_factory=_default_git_cache_dir,
        description="Directory holding one bare mirror per repository.",
    )
    source_roots: list[str] = Field(
        default_factory=lambda: ["src/main/java/", "src/", ""],
        description="Prefixes stripped from source paths, first match wins.",
    )
    source_suffix: str = Field(default=".java", description="Source-file suffix.")
    test_segment: str = Field(
        default="/test/",
        description="Paths containing this segment are excluded.",
    )


class ArchiveConfig(BaseModel):
    """Binary archive indexing."""

    unit_suffix: str = Field(default=".class", description="Compiled-unit suffix.")
    descriptor_unit: str = Field(
        default="module-info.class",
        description="Module descriptor entry, never indexed.",
    )


class ReportConfig(BaseModel):
    """Report truncation and grouping.

    Env vars:
        CLASSDIFF__REPORT__FLAT_LIMIT: Items per section in archive mode
        CLASSDIFF__REPORT__GROUPED_LIMIT: Total grouped lines in tag mode
    """

    flat_limit: int = Field(default=10, description="Items shown per section (archive mode).")
    grouped_limit: int = Field(default=50, description="Grouped lines shown (tag mode).")
    namespace_markers: list[str] = Field(
        default_factory=lambda: [".org.", ".com."],
        description="Markers that split a module prefix from a qualified name.",
    )

    @field_validator("flat_limit", "grouped_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Limit must be non-negative, got {v}")
        return v


class ClassDiffConfig(BaseModel):
    """Root configuration for classdiff."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    maven: MavenConfig = Field(default_factory=MavenConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
