"""Configuration models (Pydantic classes)."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from infrastructure.constants import JSON_SUFFIXES, TAXONOMY_FILE, YAML_SUFFIXES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from configs/app.yaml
    - Environment variables (optionally from .env) override file paths
    - Consumed by the CLI entrypoint and taxonomy loader
    """

    taxonomy_file: Path = Field(
        default_factory=lambda: TAXONOMY_FILE,
        description="Taxonomy source (.yaml, .yml or .json).",
    )
    use_builtin_taxonomy: bool = Field(
        default=True,
        description="If true, use the built-in taxonomy when taxonomy_file does not exist.",
    )

    log_file: Path | None = Field(default=None, description="Optional rotating log file.")
    console_level: str = "WARNING"
    file_level: str = "DEBUG"

    @model_validator(mode="after")
    def _validate(self) -> "AppConfig":
        self.console_level = str(self.console_level).strip().upper()
        self.file_level = str(self.file_level).strip().upper()

        for name in ("console_level", "file_level"):
            if getattr(self, name) not in LOG_LEVELS:
                raise ValueError(f"{name} must be one of {LOG_LEVELS}, got {getattr(self, name)!r}")

        if self.taxonomy_file.suffix.lower() not in (*YAML_SUFFIXES, *JSON_SUFFIXES):
            raise ValueError(f"Unsupported taxonomy file format: {self.taxonomy_file.suffix}")

        return self

    @property
    def console_log_level(self) -> int:
        return getattr(logging, self.console_level)

    @property
    def file_log_level(self) -> int:
        return getattr(logging, self.file_level)
