"""Configuration loading with pydantic-settings.

Sources, highest precedence first:
1. Direct kwargs
2. Environment variables (CLASSDIFF__SECTION__KEY)
3. Global config (~/.config/classdiff/config.yaml)
4. Built-in defaults
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from classdiff.config.models import (
    ArchiveConfig,
    ClassDiffConfig,
    GitConfig,
    LoggingConfig,
    MavenConfig,
    ReportConfig,
)
from classdiff.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/classdiff/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one YAML document."""

    class ClassDiffSettings(BaseSettings):
        """Root config. Env vars: CLASSDIFF__LOGGING__LEVEL, CLASSDIFF__MAVEN__TIMEOUT_SEC, etc."""

        model_config = SettingsConfigDict(
            env_prefix="CLASSDIFF__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        maven: MavenConfig = MavenConfig()
        git: GitConfig = GitConfig()
        archive: ArchiveConfig = ArchiveConfig()
        report: ReportConfig = ReportConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml file
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return ClassDiffSettings


def load_config(config_path: Path | None = None, **kwargs: Any) -> ClassDiffConfig:
    """Load config: defaults < YAML file < env vars < kwargs.

    Args:
        config_path: YAML file to read. Defaults to the global config path.
        **kwargs: Override values (highest precedence), keyed by section.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    yaml_config = _load_yaml(config_path or GLOBAL_CONFIG_PATH)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return ClassDiffConfig.model_validate(settings.model_dump())


def ensure_cache_dirs(config: ClassDiffConfig, *, git: bool = False) -> Path:
    """Create the cache directory for the selected mode and check it is writable.

    Returns the directory. An unusable directory is fatal: nothing can be
    fetched without it.
    """
    raw = config.git.cache_dir if git else config.maven.local_repository
    try:
        path = Path(raw).expanduser()
    except RuntimeError as e:
        # home directory cannot be determined
        raise ConfigError.cache_unusable(raw, str(e)) from e
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError.cache_unusable(str(path), e.strerror or str(e)) from e
    if not path.is_dir():
        raise ConfigError.cache_unusable(str(path), "not a directory")
    probe = path / ".classdiff-write-probe"
    try:
        probe.touch()
        probe.unlink()
    except OSError as e:
        raise ConfigError.cache_unusable(str(path), e.strerror or str(e)) from e
    return path
