"""Tests for monorepo root discovery."""

from collections.abc import Callable
from pathlib import Path

import pytest

from monopack.errors import MonorepoRootNotFoundError
from monopack.find_monorepo_root import find_monorepo_root

WriteManifest = Callable[..., Path]


def test_lerna_json_wins(tmp_path: Path, write_manifest: WriteManifest) -> None:
    """Verify that the nearest lerna.json marks the root."""
    write_manifest(tmp_path, workspaces=["repo/packages/*"])
    root = write_manifest(tmp_path / "repo")
    (root / "lerna.json").write_text("{}", encoding="utf-8")
    app = write_manifest(root / "packages" / "app")

    assert find_monorepo_root(app) == root.resolve()


def test_workspaces_manifest(tmp_path: Path, write_manifest: WriteManifest) -> None:
    """Verify that a package.json declaring workspaces marks the root."""
    root = write_manifest(tmp_path / "repo", workspaces=["packages/*"])
    app = write_manifest(root / "packages" / "app")

    assert find_monorepo_root(app / "src") == root.resolve()


def test_workspaces_object_form(tmp_path: Path, write_manifest: WriteManifest) -> None:
    """Verify that the {"packages": [...]} workspaces form is recognized."""
    root = write_manifest(tmp_path / "repo", workspaces={"packages": ["packages/*"]})
    app = write_manifest(root / "packages" / "app")

    assert find_monorepo_root(app) == root.resolve()


def test_top_most_manifest(tmp_path: Path, write_manifest: WriteManifest) -> None:
    """Verify the fallback to the top-most package.json."""
    root = write_manifest(tmp_path / "repo")
    app = write_manifest(root / "packages" / "app")

    assert find_monorepo_root(app) == root.resolve()


def test_no_root_found(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify that a tree without manifests raises."""
    monkeypatch.setattr(Path, "is_file", lambda self: False)

    with pytest.raises(MonorepoRootNotFoundError, match="Cannot find any root"):
        find_monorepo_root(tmp_path)
