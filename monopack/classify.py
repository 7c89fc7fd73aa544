"""Logic for classifying a resolution by how reproducible its install is."""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from monopack.models import ConflictEntry, ResolvedDependency, UndeclaredDependency
from monopack.resolution_result import (
    ConflictResolutionNeeded,
    FullyDeterministic,
    MultipleLockFiles,
    NoLockFiles,
    ResolutionResult,
    UndeclaredDependencies,
)

logger = logging.getLogger(__name__)


def classify(
    dependencies: Sequence[ResolvedDependency],
    undeclared: Sequence[UndeclaredDependency],
    conflicts: Mapping[str, Sequence[ConflictEntry]],
    lock_files: Sequence[Path | None],
    winner_lock_files: Sequence[Path | None] = (),
) -> ResolutionResult:
    """Build the final resolution result.

    Undeclared dependencies take priority over conflicts, which take priority
    over lock file classification. ``lock_files`` holds the lock file of every
    declaration of the resolved packages, ``winner_lock_files`` those of the
    winning declarations; both are in collection order.
    """
    if undeclared:
        return UndeclaredDependencies(undeclared_dependencies=tuple(undeclared))
    if conflicts:
        return ConflictResolutionNeeded(
            conflicts={name: tuple(entries) for name, entries in conflicts.items()}
        )

    resolved = tuple(dependencies)
    distinct_locks = list(dict.fromkeys(p for p in lock_files if p is not None))
    if not distinct_locks:
        logger.warning("No lock file found; the install will not be deterministic")
        return NoLockFiles(dependencies=resolved)
    if len(distinct_locks) == 1:
        return FullyDeterministic(
            dependencies=resolved, lock_file_to_copy=distinct_locks[0]
        )

    chosen = next((p for p in winner_lock_files if p is not None), distinct_locks[0])
    logger.warning(
        "Dependencies are declared under %d lock files; using %s",
        len(distinct_locks),
        chosen,
    )
    return MultipleLockFiles(dependencies=resolved, lock_file_to_copy=chosen)
