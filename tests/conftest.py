"""Shared fixtures for building throwaway monorepos on disk."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

WriteManifest = Callable[..., Path]


@pytest.fixture
def write_manifest() -> WriteManifest:
    """Return a helper that writes a package.json into a directory."""

    def _write(
        directory: Path, dependencies: dict[str, str] | None = None, **fields: Any
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        content: dict[str, Any] = {"name": directory.name, "version": "1.0.0"}
        if dependencies is not None:
            content["dependencies"] = dependencies
        content.update(fields)
        path = directory / "package.json"
        path.write_text(json.dumps(content, indent=2), encoding="utf-8")
        return directory

    return _write


@pytest.fixture
def write_lock() -> Callable[[Path], Path]:
    """Return a helper that writes an (opaque) yarn.lock into a directory."""

    def _write(directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "yarn.lock"
        path.write_text("# yarn lockfile v1\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def workspace_root(tmp_path: Path, write_manifest: WriteManifest) -> Path:
    """A yarn workspaces monorepo root with a yarn.lock and no dependencies."""
    root = tmp_path / "root"
    write_manifest(root, private=True, workspaces=["packages/*"])
    (root / "yarn.lock").write_text("# yarn lockfile v1\n", encoding="utf-8")
    return root
