"""Collection and resolution of the third-party packages a bundle needs."""

import logging
from collections.abc import Sequence
from pathlib import Path

from monopack.classify import classify
from monopack.lock_locator import DEFAULT_LOCK_FILE_NAMES, LockArtifactLocator
from monopack.manifest_locator import DEFAULT_DEPENDENCY_FIELDS, ManifestLocator
from monopack.models import (
    ConflictEntry,
    Declaration,
    Observation,
    ResolvedDependency,
    UndeclaredDependency,
)
from monopack.reconcile import reconcile
from monopack.resolution_result import ResolutionResult

logger = logging.getLogger(__name__)


class DependencyCollector:
    """Accumulates package references during a build, then resolves them.

    References are recorded with :meth:`collect_dependency` while the bundler
    walks the source graph. Once bundling is complete,
    :meth:`resolve_dependencies` reads manifests and lock files below
    ``monorepo_root`` and returns a single result. Collection order decides
    every tie.
    """

    def __init__(
        self,
        monorepo_root: Path,
        *,
        lock_file_names: Sequence[str] = DEFAULT_LOCK_FILE_NAMES,
        dependency_fields: Sequence[str] = DEFAULT_DEPENDENCY_FIELDS,
    ) -> None:
        """Initialize an empty collector bounded by the monorepo root."""
        self.monorepo_root = Path(monorepo_root)
        self.manifest_locator = ManifestLocator(self.monorepo_root, dependency_fields)
        self.lock_locator = LockArtifactLocator(self.monorepo_root, lock_file_names)

        self.observations: list[Observation] = []
        self.package_order: list[str] = []  # first-collected order
        self.indices_by_package: dict[str, list[int]] = {}

    def collect_dependency(self, package_name: str, context: Path | str) -> None:
        """Record that ``package_name`` is required from directory ``context``."""
        index = len(self.observations)
        self.observations.append(Observation(package_name, Path(context)))
        if package_name not in self.indices_by_package:
            self.package_order.append(package_name)
            self.indices_by_package[package_name] = []
        self.indices_by_package[package_name].append(index)

    def resolve_dependencies(self) -> ResolutionResult:
        """Resolve every collected package and classify the outcome."""
        undeclared: list[tuple[int, UndeclaredDependency]] = []
        conflicts: dict[str, tuple[ConflictEntry, ...]] = {}
        dependencies: list[ResolvedDependency] = []
        lock_files: list[Path | None] = []
        winner_lock_files: list[Path | None] = []

        logger.debug(
            "Resolving %d packages from %d observations under %s",
            len(self.package_order),
            len(self.observations),
            self.monorepo_root,
        )

        for package_name in self.package_order:
            declarations: list[Declaration] = []
            for index in self.indices_by_package[package_name]:
                observation = self.observations[index]
                declaration = self.manifest_locator.locate_declaration(
                    package_name, observation.context
                )
                if declaration is None:
                    undeclared.append(
                        (index, UndeclaredDependency(package_name, observation.context))
                    )
                else:
                    declarations.append(declaration)

            if len(declarations) < len(self.indices_by_package[package_name]):
                continue

            reconciliation = reconcile(declarations)
            if reconciliation.conflict:
                conflicts[package_name] = reconciliation.evidence
                continue

            dependencies.append(
                ResolvedDependency(package_name, reconciliation.version)
            )
            manifest_dirs = dict.fromkeys(d.manifest_dir for d in declarations)
            lock_files.extend(
                self.lock_locator.locate_lock_artifact(directory)
                for directory in manifest_dirs
            )
            winner_lock_files.append(
                self.lock_locator.locate_lock_artifact(
                    reconciliation.winner.manifest_dir
                )
            )

        undeclared.sort(key=lambda pair: pair[0])
        return classify(
            dependencies,
            [entry for _, entry in undeclared],
            conflicts,
            lock_files,
            winner_lock_files,
        )
