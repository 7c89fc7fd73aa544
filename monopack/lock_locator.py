"""Logic for finding the lock file that governs a directory."""

import logging
from collections.abc import Sequence
from pathlib import Path

from monopack.walk_up import walk_up

logger = logging.getLogger(__name__)

DEFAULT_LOCK_FILE_NAMES = ("yarn.lock",)


class LockArtifactLocator:
    """Finds the nearest ancestor lock file, bounded by the monorepo root."""

    def __init__(
        self,
        monorepo_root: Path,
        lock_file_names: Sequence[str] = DEFAULT_LOCK_FILE_NAMES,
    ) -> None:
        """Initialize the locator with its search bound and lock file names."""
        self.monorepo_root = Path(monorepo_root)
        self.lock_file_names = tuple(lock_file_names)
        self._cache: dict[Path, Path | None] = {}

    def locate_lock_artifact(self, directory: Path) -> Path | None:
        """Return the first lock file in ``directory`` or its ancestors."""
        visited: list[Path] = []
        found: Path | None = None
        for current in walk_up(directory, self.monorepo_root):
            if current in self._cache:
                found = self._cache[current]
                break
            visited.append(current)
            found = self._lock_file_in(current)
            if found is not None:
                break

        # Every directory walked through shares the answer of the one that ended it.
        for current in visited:
            self._cache[current] = found

        logger.debug("Lock file for %s: %s", directory, found)
        return found

    def _lock_file_in(self, directory: Path) -> Path | None:
        for name in self.lock_file_names:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        return None
