"""Logic for finding the manifest that declares a package."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from monopack.errors import ManifestReadError
from monopack.models import Declaration
from monopack.walk_up import walk_up

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "package.json"
DEFAULT_DEPENDENCY_FIELDS = ("dependencies",)


def read_manifest(path: Path) -> dict[str, Any]:
    """Load a package.json file, raising ManifestReadError if it is unusable."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Cannot read manifest {path}: {exc}"
        raise ManifestReadError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Manifest {path} does not contain a JSON object"
        raise ManifestReadError(msg)
    return data


class ManifestLocator:
    """Finds the nearest ancestor manifest that lists a given package."""

    def __init__(
        self,
        monorepo_root: Path,
        dependency_fields: Sequence[str] = DEFAULT_DEPENDENCY_FIELDS,
    ) -> None:
        """Initialize the locator with its search bound and dependency sections."""
        self.monorepo_root = Path(monorepo_root)
        self.dependency_fields = tuple(dependency_fields)
        self._manifests: dict[Path, dict[str, Any] | None] = {}

    def locate_declaration(
        self, package_name: str, context: Path
    ) -> Declaration | None:
        """Return the declaration of ``package_name`` nearest to ``context``.

        A manifest that does not list the package does not end the search.
        """
        for directory in walk_up(context, self.monorepo_root):
            manifest = self._manifest_in(directory)
            if manifest is None:
                continue
            specifier = self._declared_specifier(manifest, package_name, directory)
            if specifier is not None:
                logger.debug(
                    "%s resolved from %s to %s@%s",
                    package_name,
                    context,
                    directory,
                    specifier,
                )
                return Declaration(
                    package_name=package_name,
                    version_specifier=specifier,
                    manifest_dir=directory,
                    context=Path(context),
                )
        logger.debug("%s is not declared above %s", package_name, context)
        return None

    def _manifest_in(self, directory: Path) -> dict[str, Any] | None:
        if directory not in self._manifests:
            path = directory / MANIFEST_FILE_NAME
            self._manifests[directory] = read_manifest(path) if path.is_file() else None
        return self._manifests[directory]

    def _declared_specifier(
        self, manifest: dict[str, Any], package_name: str, directory: Path
    ) -> str | None:
        for section_name in self.dependency_fields:
            section = manifest.get(section_name)
            if not isinstance(section, dict) or package_name not in section:
                continue
            specifier = section[package_name]
            if not isinstance(specifier, str):
                msg = (
                    f"Manifest {directory / MANIFEST_FILE_NAME} declares "
                    f"{package_name} with a non-string version: {specifier!r}"
                )
                raise ManifestReadError(msg)
            return specifier
        return None
