"""
Configuration management: models, loading, and validation.

Handles:
- AppConfig: taxonomy location, fallback and logging settings
- Taxonomy loading from YAML/JSON
- Environment variable overrides

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import (
    load_app_config,
    load_taxonomy,
    load_taxonomy_file,
)
from infrastructure.config.models import LOG_LEVELS, AppConfig

__all__ = [
    # Main config (most commonly used)
    "AppConfig",
    "load_app_config",
    "LOG_LEVELS",
    # Loaders
    "load_taxonomy",
    "load_taxonomy_file",
]
