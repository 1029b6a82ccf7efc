from pathlib import Path

# Repo-root conventional directories/files (overrideable via app.yaml / environment)
CONFIG_DIR = Path("configs")
APP_CONFIG_FILE = CONFIG_DIR / "app.yaml"
TAXONOMY_FILE = CONFIG_DIR / "taxonomy.yaml"

ENV_FILE = Path(".env")
ENV_TAXONOMY_FILE = "PROMPT_COMPOSER_TAXONOMY_FILE"
ENV_LOG_FILE = "PROMPT_COMPOSER_LOG_FILE"

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)
