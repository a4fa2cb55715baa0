"""Configuration management for record-dedupe using pydantic-settings.

This module provides the DedupeConfig class for managing application settings
from environment variables, .env files and the dedupe.yaml project file. All
configuration is type-safe and validated using Pydantic models.

Settings priority (highest to lowest):
1. CLI flags (applied after DedupeConfig creation)
2. Environment variables (DEDUPE_* prefix)
3. .env file
4. dedupe.yaml project config
5. Default values
"""

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

logger = logging.getLogger(__name__)

PROJECT_FILE = "dedupe.yaml"

# Map dedupe.yaml keys to DedupeConfig field names
_YAML_TO_FIELD = {
    "threshold": "threshold",
    "output": "output_dir",
    "auto_confirm": "auto_confirm_threshold",
    "entity_type": "default_entity_type",
}


class _ProjectYamlSource(PydanticBaseSettingsSource):
    """Read project config from dedupe.yaml (lower priority than env vars)."""

    def get_field_value(self, field, field_name):  # type: ignore[override]
        return None, field_name, False

    def __call__(self) -> dict:
        project_file = Path(PROJECT_FILE)
        if not project_file.exists():
            return {}

        raw = yaml.safe_load(project_file.read_text()) or {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring {PROJECT_FILE}: expected a mapping of settings")
            return {}

        result: dict = {}
        for yaml_key, field_name in _YAML_TO_FIELD.items():
            if yaml_key in raw:
                result[field_name] = raw[yaml_key]
        return result


class DedupeConfig(BaseSettings):
    """Configuration settings for record-dedupe.

    All environment variables are prefixed with DEDUPE_ (e.g.
    DEDUPE_THRESHOLD=80). Empty string values in environment variables are
    treated as unset.

    Example:
        >>> config = DedupeConfig()
        >>> print(config.threshold)
        70
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DEDUPE_",
        extra="ignore",
        env_ignore_empty=True,
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
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            _ProjectYamlSource(settings_cls),
            file_secret_settings,
        )

    threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Minimum similarity score (0-100, inclusive) for two records to be grouped",
    )

    auto_confirm_threshold: int = Field(
        default=101,
        ge=0,
        le=101,
        description="Groups scoring at or above this are confirmed without review (101 disables)",
    )

    default_entity_type: Literal["contact", "order", "product"] = Field(
        default="contact",
        description="Entity type used when --type is not given",
    )

    output_dir: Path = Field(
        default=Path("output"),
        description="Directory for duplicate_groups.yaml and merge_results.yaml",
    )

    @field_validator("output_dir", mode="before")
    @classmethod
    def resolve_output_dir(cls, v: Path | str) -> Path:
        """Convert output_dir to absolute path and create if missing.

        Args:
            v: Path string or Path object from config

        Returns:
            Resolved absolute Path with directory created
        """
        path = Path(v) if isinstance(v, str) else v
        path = path.resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path
