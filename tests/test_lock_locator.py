"""Tests for locating the lock file governing a directory."""

from collections.abc import Callable
from pathlib import Path

from monopack.lock_locator import LockArtifactLocator


def test_lock_in_directory_itself(
    tmp_path: Path, write_lock: Callable[[Path], Path]
) -> None:
    """Verify that a lock file in the starting directory is returned."""
    lock = write_lock(tmp_path)
    assert LockArtifactLocator(tmp_path).locate_lock_artifact(tmp_path) == lock


def test_nearest_ancestor_lock(
    tmp_path: Path, write_lock: Callable[[Path], Path]
) -> None:
    """Verify that the nearest ancestor lock file wins."""
    write_lock(tmp_path)
    sub_lock = write_lock(tmp_path / "packages" / "sub")
    locator = LockArtifactLocator(tmp_path)

    assert locator.locate_lock_artifact(tmp_path / "packages" / "sub") == sub_lock
    assert locator.locate_lock_artifact(tmp_path / "packages") == tmp_path / "yarn.lock"


def test_no_lock_file(tmp_path: Path) -> None:
    """Verify that None is returned when no lock file exists below the root."""
    (tmp_path / "sub").mkdir()
    assert LockArtifactLocator(tmp_path).locate_lock_artifact(tmp_path / "sub") is None


def test_lock_above_root_is_ignored(
    tmp_path: Path, write_lock: Callable[[Path], Path]
) -> None:
    """Verify that lock files above the monorepo root are not considered."""
    write_lock(tmp_path)
    root = tmp_path / "repo"
    root.mkdir()
    assert LockArtifactLocator(root).locate_lock_artifact(root) is None


def test_configured_lock_file_names(tmp_path: Path) -> None:
    """Verify that alternative lock file names are honored in order."""
    (tmp_path / "package-lock.json").write_text("{}", encoding="utf-8")
    locator = LockArtifactLocator(tmp_path, ("yarn.lock", "package-lock.json"))

    assert locator.locate_lock_artifact(tmp_path) == tmp_path / "package-lock.json"
    assert LockArtifactLocator(tmp_path).locate_lock_artifact(tmp_path) is None


def test_results_are_memoized(
    tmp_path: Path, write_lock: Callable[[Path], Path]
) -> None:
    """Verify that repeated lookups reuse the first answer."""
    lock = write_lock(tmp_path)
    sub = tmp_path / "a" / "b"
    sub.mkdir(parents=True)
    locator = LockArtifactLocator(tmp_path)

    assert locator.locate_lock_artifact(sub) == lock
    lock.unlink()
    assert locator.locate_lock_artifact(tmp_path / "a") == lock
