"""
Application configuration.

Values come from an optional YAML file; a few environment variables override
the file so secrets do not need to live in it:

    PACKAGE_ASSIGNMENT_DATA_URL   -> data_service_url
    PACKAGE_ASSIGNMENT_DATA_KEY   -> data_service_key
    PACKAGE_ASSIGNMENT_LOG_LEVEL  -> log_level
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from package_assignment.core.errors import CatalogError
from package_assignment.store.client import DEFAULT_TABLE

ENV_OVERRIDES = {
    "PACKAGE_ASSIGNMENT_DATA_URL": "data_service_url",
    "PACKAGE_ASSIGNMENT_DATA_KEY": "data_service_key",
    "PACKAGE_ASSIGNMENT_LOG_LEVEL": "log_level",
}


class AppConfig(BaseModel):
    """All tuneable settings for the CLI and the store."""

    model_config = ConfigDict(extra="ignore")

    data_service_url: Optional[str] = None
    data_service_key: str = ""
    table: str = DEFAULT_TABLE
    timeout_seconds: float = Field(default=10.0, gt=0)
    default_weight_per_item: float = Field(default=0.5, ge=0)  # pounds
    catalog_path: Optional[Path] = None
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def has_data_service(self) -> bool:
        return bool(self.data_service_url)

    @classmethod
    def load(cls, path: Path | str | None = None, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """
        Build a config from ``path`` (if given) plus environment overrides.

        Raises:
            CatalogError: If the file cannot be read or holds invalid values.
        """
        environ = os.environ if environ is None else environ
        data: dict[str, Any] = {}

        if path is not None:
            path = Path(path)
            try:
                with path.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as exc:
                raise CatalogError(f"Cannot read config {path}: {exc}") from exc
            if not isinstance(data, dict):
                raise CatalogError(f"Config {path} must be a mapping")

        for env_key, field_name in ENV_OVERRIDES.items():
            if environ.get(env_key):
                data[field_name] = environ[env_key]

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise CatalogError(f"Invalid configuration: {exc}") from exc
