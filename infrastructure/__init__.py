"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Configuration loading (YAML, JSON, environment)
- Taxonomy file loading
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import (
    AppConfig,
    load_app_config,
    load_taxonomy,
)

__all__ = [
    # Configuration (most commonly used)
    "load_app_config",
    "load_taxonomy",
    "AppConfig",
]
