"""Logic for building the manifest shipped with a bundle."""

from collections.abc import Iterable, Mapping
from typing import Any

from monopack.deep_merge import deep_merge
from monopack.models import ResolvedDependency


def build_package_json(
    dependencies: Iterable[ResolvedDependency],
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the package.json content for a bundle.

    Dependencies are sorted by package name. ``overrides`` is deep-merged on
    top of the generated content.
    """
    pinned = {d.package_name: d.version for d in dependencies}
    content: dict[str, Any] = {
        "name": "app",
        "version": "1.0.0",
        "main": "main.js",
        "private": True,
        "dependencies": dict(sorted(pinned.items())),
        "devDependencies": {},
    }
    if overrides:
        content = deep_merge(content, dict(overrides))
    return content
