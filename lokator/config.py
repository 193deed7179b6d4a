"""Configuration using Pydantic Settings for automatic env var support."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .paths import (
    CONFIG_HOME,
    DEFAULT_ARCHIVE_EXTENSION,
    DEFAULT_ASSETS_DIRECTORY_NAME,
    DEFAULT_EXTRACTION_DIRECTORY,
)
from .strategies import (
    ARCHIVE_EXTENSION_KEY,
    ASSETS_DIRECTORY_KEY,
    EXTRACTION_DIRECTORY_KEY,
    GLOBAL_DIRECTORY_KEY,
)

CONFIG_ENV = "LOKATOR_CONFIG"
DEFAULT_CONFIG_NAME = "lokator.json"
DEFAULT_NAMING_CONVENTION = "assert-act-arrange"


class LokatorSettings(BaseSettings):
    """Process-wide settings for locating test data.

    Supports:
    - JSON config files
    - Environment variables (LOKATOR_*)
    - Automatic type validation
    """

    root_directory: Optional[Path] = Field(default=None)
    assets_directory_name: str = Field(default=DEFAULT_ASSETS_DIRECTORY_NAME, min_length=1)
    global_directory: Optional[Path] = Field(default=None)
    extraction_directory: Path = Field(default=DEFAULT_EXTRACTION_DIRECTORY)
    archive_extension: str = Field(default=DEFAULT_ARCHIVE_EXTENSION, min_length=1)
    default_file: str = Field(default="")
    naming_convention: str = Field(default=DEFAULT_NAMING_CONVENTION)

    model_config = SettingsConfigDict(
        env_prefix="LOKATOR_",
        extra="ignore",
    )

    @field_validator("root_directory", "global_directory", "extraction_directory", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Any:
        if isinstance(v, str):
            if not v.strip():
                return None
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    @classmethod
    def from_json_file(cls, path: Path) -> "LokatorSettings":
        """Load settings from a JSON file; environment variables still apply on top of defaults."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to read settings file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a JSON object")
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings in {path}: {exc}") from exc

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "LokatorSettings":
        """Load settings from the explicit path, LOKATOR_CONFIG, or the user config home."""
        env_path = os.environ.get(CONFIG_ENV)
        candidates = []
        if path is not None:
            candidates.append(Path(path).expanduser())
        if env_path:
            candidates.append(Path(env_path).expanduser())
        candidates.append(CONFIG_HOME / DEFAULT_CONFIG_NAME)

        for candidate in candidates:
            if candidate.exists():
                return cls.from_json_file(candidate)

        # Nothing on disk, env vars and defaults only
        return cls()

    def as_environment(self) -> Dict[str, object]:
        """Return the key/value settings consumed by a file management strategy."""
        environment: Dict[str, object] = {
            ASSETS_DIRECTORY_KEY: self.assets_directory_name,
            EXTRACTION_DIRECTORY_KEY: str(self.extraction_directory),
            ARCHIVE_EXTENSION_KEY: self.archive_extension,
        }
        if self.global_directory is not None:
            environment[GLOBAL_DIRECTORY_KEY] = str(self.global_directory)
        return environment


__all__ = ["LokatorSettings", "CONFIG_ENV", "DEFAULT_CONFIG_NAME", "DEFAULT_NAMING_CONVENTION"]
