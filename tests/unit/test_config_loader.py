from __future__ import annotations
import pytest
from pathlib import Path
from qis_grades.config.loader import (
    CONFIG_ENV_VAR,
    ConfigError,
    default_config,
    load_config,
    load_env_file,
    resolve_config,
)
from qis_grades.models.config_models import QIS_TABLE_SELECTOR
from qis_grades.models.schema import DEFAULT_SCHEMA


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.required_credits == 180.0
    assert cfg.source.header_rows == 1
    assert cfg.source.table_selector == QIS_TABLE_SELECTOR
    assert cfg.schema == DEFAULT_SCHEMA


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError):
        load_config(missing)


def test_load_config_empty_file_uses_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "grades.yml"
    cfg_path.write_text("", encoding="utf-8")
    assert load_config(cfg_path) == default_config()


def test_load_config_partial_schema_override(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "grades.yml"
    cfg_path.write_text(
        "schema:\n  columns:\n    grade: 5\n  group_header_ids: [100, 500]\nsource:\n  sheet: Noten\n",
        encoding="utf-8",
    )
    cfg = load_config(cfg_path)
    assert cfg.schema.grade == 5
    assert cfg.schema.credits == DEFAULT_SCHEMA.credits
    assert cfg.schema.group_header_ids == frozenset({100, 500})
    assert cfg.source.sheet == "Noten"
    assert cfg.required_credits is None


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "grades.yml"
    cfg_path.write_text("source: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(cfg_path)
    assert "invalid yaml" in str(e.value)


def test_load_config_wrong_type(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("module_cell_count: 12", "module_cell_count: twelve")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    # additionalProperties: false
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_non_mapping_root(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "grades.yml"
    cfg_path.write_text("- 100\n- 300\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_resolve_config_defaults_without_file(temp_workdir: Path):
    assert resolve_config() == default_config()


def test_resolve_config_uses_default_location(write_config: Path):
    assert resolve_config().required_credits == 180.0


def test_resolve_config_explicit_missing_path_raises(temp_workdir: Path):
    with pytest.raises(ConfigError):
        resolve_config(temp_workdir / "nope.yml")


def test_resolve_config_from_env_file(temp_workdir: Path, monkeypatch):
    other = temp_workdir / "other.yml"
    other.write_text("required_credits: 210\n", encoding="utf-8")
    (temp_workdir / ".env").write_text(f"{CONFIG_ENV_VAR}={other}\n", encoding="utf-8")
    # let monkeypatch restore the variable after load_dotenv sets it
    monkeypatch.setenv(CONFIG_ENV_VAR, "")
    monkeypatch.delenv(CONFIG_ENV_VAR)

    load_env_file(temp_workdir / ".env")

    assert resolve_config().required_credits == 210.0


def test_load_config_malformed_table_selector(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "grades.yml"
    cfg_path.write_text("source:\n  table_selector: 'table:::bad'\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(cfg_path)
    assert "invalid table_selector 'table:::bad'" in str(e.value)


def test_load_config_custom_table_selector(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "grades.yml"
    cfg_path.write_text("source:\n  table_selector: 'form > table.grades'\n", encoding="utf-8")
    assert load_config(cfg_path).source.table_selector == "form > table.grades"
