"""Logic for determining the monorepo root of an entry file."""

import logging
from pathlib import Path

from monopack.errors import MonorepoRootNotFoundError
from monopack.manifest_locator import MANIFEST_FILE_NAME, read_manifest

logger = logging.getLogger(__name__)

LERNA_FILE_NAME = "lerna.json"


def _declares_workspaces(manifest: dict) -> bool:
    workspaces = manifest.get("workspaces")
    if isinstance(workspaces, list):
        return True
    return isinstance(workspaces, dict) and isinstance(workspaces.get("packages"), list)


def find_monorepo_root(start_dir: Path) -> Path:
    """Return the monorepo root for sources in ``start_dir``.

    Rules, in order:
    1. nearest directory containing lerna.json,
    2. nearest package.json declaring yarn workspaces,
    3. top-most package.json.
    """
    start = start_dir.resolve()
    ancestors = [start, *start.parents]

    for directory in ancestors:
        if (directory / LERNA_FILE_NAME).is_file():
            logger.debug("Monorepo root from lerna.json: %s", directory)
            return directory

    manifest_dirs = [d for d in ancestors if (d / MANIFEST_FILE_NAME).is_file()]
    for directory in manifest_dirs:
        if _declares_workspaces(read_manifest(directory / MANIFEST_FILE_NAME)):
            logger.debug("Monorepo root from workspaces: %s", directory)
            return directory

    if manifest_dirs:
        logger.debug("Monorepo root from top-most package.json: %s", manifest_dirs[-1])
        return manifest_dirs[-1]

    msg = (
        "Cannot find any root package.json or lerna.json to determine monorepo "
        f"root from {start}"
    )
    raise MonorepoRootNotFoundError(msg)
