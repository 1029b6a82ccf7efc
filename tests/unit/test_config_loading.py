import json
from pathlib import Path

import pytest
import yaml

from infrastructure.config import AppConfig, load_app_config, load_taxonomy, load_taxonomy_file
from infrastructure.constants import ENV_LOG_FILE, ENV_TAXONOMY_FILE

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    monkeypatch.delenv(ENV_TAXONOMY_FILE, raising=False)
    monkeypatch.delenv(ENV_LOG_FILE, raising=False)


def test_load_app_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "app.yaml"
    path.write_text("taxonomy_file: data/tags.json\nconsole_level: debug\nuse_builtin_taxonomy: false\n")

    cfg = load_app_config(path)

    assert cfg.taxonomy_file == Path("data/tags.json")
    assert cfg.console_level == "DEBUG"
    assert cfg.use_builtin_taxonomy is False
    assert cfg.log_file is None


def test_environment_overrides_file(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "app.yaml"
    path.write_text("taxonomy_file: configs/taxonomy.yaml\n")
    monkeypatch.setenv(ENV_TAXONOMY_FILE, "other/taxonomy.yml")
    monkeypatch.setenv(ENV_LOG_FILE, "logs/session.log")

    cfg = load_app_config(path)

    assert cfg.taxonomy_file == Path("other/taxonomy.yml")
    assert cfg.log_file == Path("logs/session.log")


def test_defaults_without_file() -> None:
    cfg = load_app_config(None)
    assert cfg.taxonomy_file == Path("configs/taxonomy.yaml")
    assert cfg.use_builtin_taxonomy is True


@pytest.mark.parametrize("bad", [{"console_level": "LOUD"}, {"taxonomy_file": "tags.txt"}])
def test_invalid_config_is_rejected(bad) -> None:
    with pytest.raises(ValueError):
        AppConfig(**bad)


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(tmp_path / "nope.yaml")


def test_load_taxonomy_yaml_and_json(tmp_path: Path, sample_taxonomy_data) -> None:
    yaml_path = tmp_path / "taxonomy.yaml"
    yaml_path.write_text(yaml.safe_dump(sample_taxonomy_data, allow_unicode=True, sort_keys=False), encoding="utf-8")
    json_path = tmp_path / "taxonomy.json"
    json_path.write_text(json.dumps(sample_taxonomy_data, ensure_ascii=False), encoding="utf-8")

    from_yaml = load_taxonomy_file(yaml_path)
    from_json = load_taxonomy_file(json_path)

    assert [t.rank for t in from_yaml.all_terms()] == [t.rank for t in from_json.all_terms()]
    assert from_yaml.find_by_output_text("park").rank == (1, 1, 1)


def test_missing_taxonomy_falls_back_to_builtin(tmp_path: Path) -> None:
    cfg = AppConfig(taxonomy_file=tmp_path / "missing.yaml")
    taxonomy = load_taxonomy(cfg)
    assert taxonomy.find_by_output_text("castle") is not None


def test_missing_taxonomy_without_fallback_raises(tmp_path: Path) -> None:
    cfg = AppConfig(taxonomy_file=tmp_path / "missing.yaml", use_builtin_taxonomy=False)
    with pytest.raises(FileNotFoundError):
        load_taxonomy(cfg)


def test_non_mapping_taxonomy_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "taxonomy.yaml"
    path.write_text("- [a, b]\n")
    with pytest.raises(ValueError):
        load_taxonomy_file(path)


def test_shipped_configs_load() -> None:
    cfg = load_app_config(REPO_ROOT / "configs" / "app.yaml")
    taxonomy = load_taxonomy_file(REPO_ROOT / cfg.taxonomy_file)

    assert len(taxonomy) > 1000
    assert taxonomy.find_by_output_text("best quality").rank == (0, 0, 0)
    assert taxonomy.find_by_display_text("傑作").output_text == "masterpiece"
