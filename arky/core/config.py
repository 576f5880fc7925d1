"""
Configuration Management.

Resolves the CLI settings once per invocation. Every value follows the same
precedence: explicit CLI flag > ARKY_* environment variable > config file >
built-in default.

Config file:
    ~/.arky/config.json - base_url, business_id, token, format
    Written only by `arky config set`, `arky auth verify` and `arky auth session`.

Packaged settings (YAML):
    arky/settings/logging.yaml - Logging configuration
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from arky.core.exceptions import FileAccessError

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_FORMAT = "json"

SETTINGS_DIR = Path(__file__).resolve().parent.parent / "settings"


def config_dir() -> Path:
    """Directory holding the per-user config file."""
    return Path.home() / ".arky"


def config_path() -> Path:
    """Path of the per-user config file."""
    return config_dir() / "config.json"


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from the packaged settings directory."""
    path = SETTINGS_DIR / filename

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        return yaml.safe_load(f) or {}


class ConfigFile(BaseModel):
    """Persisted CLI configuration. Every key is optional."""

    base_url: str | None = None
    business_id: str | None = None
    token: str | None = None
    format: str | None = None

    model_config = ConfigDict(extra="ignore")


def load_config_file() -> ConfigFile:
    """
    Load the config file.

    A missing, unreadable or malformed file yields an empty ConfigFile.
    """
    path = config_path()
    if not path.exists():
        return ConfigFile()

    try:
        return ConfigFile.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError):
        return ConfigFile()


def save_config_file(cfg: ConfigFile) -> Path:
    """
    Write the config file, creating its directory when needed.

    Raises:
        FileAccessError: If the directory or file cannot be written.
    """
    path = config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(cfg.model_dump(), indent=2), encoding="utf-8")
    except OSError as e:
        raise FileAccessError(f"Cannot write {path}: {e}") from e
    return path


def save_token(token: str) -> Path:
    """Store an access token in the config file, keeping the other keys."""
    cfg = load_config_file()
    cfg.token = token
    return save_config_file(cfg)


class ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by ~/.arky/config.json. Null values are skipped."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._values = {
            key: value
            for key, value in load_config_file().model_dump().items()
            if value is not None
        }

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {
            name: self._values[name]
            for name in self.settings_cls.model_fields
            if name in self._values
        }


class Settings(BaseSettings):
    """Resolved settings for one CLI invocation. Immutable after construction."""

    base_url: str = DEFAULT_BASE_URL
    business_id: str | None = None
    token: str | None = None
    format: str = DEFAULT_FORMAT

    model_config = SettingsConfigDict(
        env_prefix="ARKY_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, ConfigFileSettingsSource(settings_cls))


def resolve_settings(
    base_url: str | None = None,
    business_id: str | None = None,
    token: str | None = None,
    format: str | None = None,
) -> Settings:
    """
    Resolve settings from CLI flags, environment and config file.

    Args:
        base_url: --base-url flag value, if given.
        business_id: --business-id flag value, if given.
        token: --token flag value, if given.
        format: --format flag value, if given.

    Returns:
        Settings instance with the highest-precedence value for every field.
    """
    flags = {
        "base_url": base_url,
        "business_id": business_id,
        "token": token,
        "format": format,
    }
    return Settings(**{key: value for key, value in flags.items() if value is not None})
