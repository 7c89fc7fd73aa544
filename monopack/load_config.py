"""Logic for locating, validating and loading monopack configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from monopack.deep_merge import deep_merge
from monopack.errors import ConfigError

CONFIG_FILE_NAME = "monopack.config.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "monorepo_root": None,
    "output_directory": None,
    "extra_modules": [],
    "lock_file_names": ["yarn.lock"],
    "dependency_fields": ["dependencies"],
    "package_json": {},
}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "monorepo_root": {"type": ["string", "null"]},
        "output_directory": {"type": ["string", "null"]},
        "extra_modules": _STRING_LIST,
        "lock_file_names": {**_STRING_LIST, "minItems": 1},
        "dependency_fields": {**_STRING_LIST, "minItems": 1},
        "package_json": {"type": "object"},
    },
    "additionalProperties": False,
}

_RELATIVE_PATH_KEYS = ("monorepo_root", "output_directory")


def find_config_file(start_dir: Path) -> Path | None:
    """Return the nearest monopack.config.yml in ``start_dir`` or its parents."""
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def validate_config(user_config: Any, source: Path) -> None:
    """Raise ConfigError listing every invalid value in ``user_config``."""
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(user_config), key=lambda e: list(e.path))
    if not errors:
        return
    lines = [
        f"Invalid value {e.instance!r} supplied to "
        f"/{'/'.join(str(p) for p in e.absolute_path)}: {e.message}"
        for e in errors
    ]
    msg = f"Invalid file {source}\n" + "\n".join(lines)
    raise ConfigError(msg)


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    Relative ``monorepo_root`` and ``output_directory`` values are resolved
    against the directory containing the config file.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config

    p = Path(path)
    try:
        user_config = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot load config file {p}: {exc}"
        raise ConfigError(msg) from exc
    if user_config is None:
        user_config = {}
    validate_config(user_config, p)

    for key in _RELATIVE_PATH_KEYS:
        if user_config.get(key):
            user_config[key] = str((p.parent / user_config[key]).resolve())

    return deep_merge(config, user_config)
