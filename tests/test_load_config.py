"""Tests for configuration loading and merging."""

from pathlib import Path

import pytest
import yaml

from monopack.compute_config_hash import compute_config_hash
from monopack.deep_merge import deep_merge
from monopack.errors import ConfigError
from monopack.load_config import DEFAULT_CONFIG, find_config_file, load_config


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    merged = deep_merge({"lock_file_names": ["yarn.lock"]}, {"lock_file_names": ["a"]})
    assert merged == {"lock_file_names": ["a"]}


def test_deep_merge_extra_modules_additive() -> None:
    """Verify that extra_modules are merged additively in first-seen order."""
    base = {"extra_modules": ["pg", "lodash"]}
    update = {"extra_modules": ["lodash", "axios"]}
    merged = deep_merge(base, update)
    assert merged["extra_modules"] == ["pg", "lodash", "axios"]


def test_compute_config_hash_stability() -> None:
    """Verify that config hash is stable regardless of key order."""
    config1 = {"b": 2, "a": 1, "nested": {"y": 2, "x": 1}}
    config2 = {"a": 1, "b": 2, "nested": {"x": 1, "y": 2}}
    assert compute_config_hash(config1) == compute_config_hash(config2)


def test_compute_config_hash_ignores_locations(tmp_path: Path) -> None:
    """Verify that moving the checkout or output does not change the hash."""
    here = {"monorepo_root": tmp_path / "a", "extra_modules": ["pg"]}
    there = {
        "monorepo_root": tmp_path / "b",
        "output_directory": "dist",
        "extra_modules": ["pg"],
    }
    assert compute_config_hash(here) == compute_config_hash(there)
    assert compute_config_hash(here) != compute_config_hash({"extra_modules": []})


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config == DEFAULT_CONFIG
    config["extra_modules"].append("mutated")
    assert DEFAULT_CONFIG["extra_modules"] == []


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config overrides defaults and resolves relative paths."""
    config_file = tmp_path / "app" / "monopack.config.yml"
    config_file.parent.mkdir()
    config_data = {
        "monorepo_root": "..",
        "output_directory": "dist",
        "extra_modules": ["pg"],
        "package_json": {"name": "my-app"},
    }
    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(config_file)

    assert loaded["monorepo_root"] == str(tmp_path.resolve())
    assert loaded["output_directory"] == str((tmp_path / "app" / "dist").resolve())
    assert loaded["extra_modules"] == ["pg"]
    assert loaded["lock_file_names"] == ["yarn.lock"]  # Default
    assert loaded["package_json"] == {"name": "my-app"}


def test_load_config_empty_file(tmp_path: Path) -> None:
    """Verify that an empty config file yields the defaults."""
    config_file = tmp_path / "monopack.config.yml"
    config_file.write_text("")
    assert load_config(config_file) == DEFAULT_CONFIG


def test_invalid_value_is_rejected(tmp_path: Path) -> None:
    """Verify that a wrongly typed value is reported with its key path."""
    config_file = tmp_path / "monopack.config.yml"
    config_file.write_text("monorepo_root: 1\n")

    with pytest.raises(ConfigError, match="Invalid value 1 supplied to /monorepo_root"):
        load_config(config_file)


def test_every_invalid_value_is_reported(tmp_path: Path) -> None:
    """Verify that all schema violations are listed together."""
    config_file = tmp_path / "monopack.config.yml"
    config_file.write_text(
        yaml.dump({"extra_modules": ["ok", 3], "lock_file_names": []})
    )

    with pytest.raises(ConfigError) as excinfo:
        load_config(config_file)

    message = str(excinfo.value)
    assert "/extra_modules/1" in message
    assert "/lock_file_names" in message


def test_unknown_key_is_rejected(tmp_path: Path) -> None:
    """Verify that unknown keys are not silently ignored."""
    config_file = tmp_path / "monopack.config.yml"
    config_file.write_text("webpackConfigModifier: foo\n")

    with pytest.raises(ConfigError, match="webpackConfigModifier"):
        load_config(config_file)


def test_unparsable_yaml_is_rejected(tmp_path: Path) -> None:
    """Verify that YAML syntax errors become ConfigError."""
    config_file = tmp_path / "monopack.config.yml"
    config_file.write_text("extra_modules: [unclosed\n")

    with pytest.raises(ConfigError, match="Cannot load config file"):
        load_config(config_file)


def test_find_config_file_walks_up(tmp_path: Path) -> None:
    """Verify that the nearest config file above the entry directory is found."""
    config_file = tmp_path / "monopack.config.yml"
    config_file.write_text("")
    nested = tmp_path / "packages" / "app" / "src"
    nested.mkdir(parents=True)

    assert find_config_file(nested) == config_file.resolve()


def test_find_config_file_missing(tmp_path: Path) -> None:
    """Verify that None is returned when no config file exists."""
    nested = tmp_path / "a"
    nested.mkdir()
    found = find_config_file(nested)
    assert found is None or not found.is_relative_to(tmp_path.resolve())
