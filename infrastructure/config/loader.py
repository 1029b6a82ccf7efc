"""Configuration and taxonomy loading from YAML/JSON files."""

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from domain.taxonomy import DEFAULT_TAXONOMY, Taxonomy, parse_taxonomy_tree
from infrastructure.config.models import AppConfig
from infrastructure.constants import ENV_LOG_FILE, ENV_TAXONOMY_FILE, JSON_SUFFIXES, YAML_SUFFIXES

logger = logging.getLogger(__name__)


def _load_mapping(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON file (chosen by suffix) and return it as a dict."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(f)
        elif suffix in JSON_SUFFIXES:
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .yaml, .yml, .json")

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data)}")

    return data


def load_taxonomy_file(path: Path) -> Taxonomy:
    """
    Load taxonomy from a YAML or JSON file.

    This function handles file I/O, then delegates parsing to domain layer.
    """
    data = _load_mapping(path)
    taxonomy = parse_taxonomy_tree(data)
    logger.info("Loaded taxonomy from %s (%d terms)", path, len(taxonomy))
    return taxonomy


def load_taxonomy(cfg: AppConfig) -> Taxonomy:
    """
    Load the configured taxonomy, falling back to the built-in one if allowed.

    Raises:
        FileNotFoundError: If the file is missing and use_builtin_taxonomy is False
    """
    if cfg.taxonomy_file.exists():
        return load_taxonomy_file(cfg.taxonomy_file)

    if not cfg.use_builtin_taxonomy:
        raise FileNotFoundError(f"Taxonomy file not found: {cfg.taxonomy_file}")

    logger.warning("Taxonomy file %s not found; using built-in taxonomy", cfg.taxonomy_file)
    return parse_taxonomy_tree(DEFAULT_TAXONOMY)


def load_app_config(config_path: Path | None = None) -> AppConfig:
    """
    Load app.yaml (if given) and apply environment overrides.

    Environment:
    - PROMPT_COMPOSER_TAXONOMY_FILE overrides taxonomy_file
    - PROMPT_COMPOSER_LOG_FILE overrides log_file
    """
    data: dict[str, Any] = _load_mapping(config_path) if config_path is not None else {}

    taxonomy_override = os.environ.get(ENV_TAXONOMY_FILE, "").strip()
    if taxonomy_override:
        data["taxonomy_file"] = taxonomy_override

    log_override = os.environ.get(ENV_LOG_FILE, "").strip()
    if log_override:
        data["log_file"] = log_override

    return AppConfig(**data)
