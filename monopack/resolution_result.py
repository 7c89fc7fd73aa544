"""Result variants produced by dependency resolution.

A resolution always ends in exactly one of five variants. The two ``FAILURE_*``
variants carry everything a user needs to fix their manifests; the three
``SUCCESS_*`` variants differ only in how reproducible the install will be.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from monopack.models import ConflictEntry, ResolvedDependency, UndeclaredDependency

SUCCESS_FULLY_DETERMINISTIC = "SUCCESS_FULLY_DETERMINISTIC"
SUCCESS_NOT_DETERMINISTIC_NO_YARN_LOCKS = "SUCCESS_NOT_DETERMINISTIC_NO_YARN_LOCKS"
SUCCESS_NOT_DETERMINISTIC_MULTIPLE_YARN_LOCKS = (
    "SUCCESS_NOT_DETERMINISTIC_MULTIPLE_YARN_LOCKS"
)
FAILURE_UNDECLARED_DEPENDENCIES = "FAILURE_UNDECLARED_DEPENDENCIES"
FAILURE_NEEDS_DEPENDENCY_CONFLICT_RESOLUTION = (
    "FAILURE_NEEDS_DEPENDENCY_CONFLICT_RESOLUTION"
)


def _dependencies_to_list(
    dependencies: tuple[ResolvedDependency, ...],
) -> list[dict[str, str]]:
    return [{"packageName": d.package_name, "version": d.version} for d in dependencies]


@dataclass(frozen=True)
class FullyDeterministic:
    """All winning declarations share a single lock file."""

    dependencies: tuple[ResolvedDependency, ...]
    lock_file_to_copy: Path
    type: str = field(default=SUCCESS_FULLY_DETERMINISTIC, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the result in its JSON shape."""
        return {
            "type": self.type,
            "yarnLockFileToCopy": str(self.lock_file_to_copy),
            "dependencies": _dependencies_to_list(self.dependencies),
        }


@dataclass(frozen=True)
class NoLockFiles:
    """Resolution succeeded but no lock file backs any winning declaration."""

    dependencies: tuple[ResolvedDependency, ...]
    type: str = field(default=SUCCESS_NOT_DETERMINISTIC_NO_YARN_LOCKS, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the result in its JSON shape."""
        return {
            "type": self.type,
            "dependencies": _dependencies_to_list(self.dependencies),
        }


@dataclass(frozen=True)
class MultipleLockFiles:
    """Winning declarations are spread over several lock files."""

    dependencies: tuple[ResolvedDependency, ...]
    lock_file_to_copy: Path  # lock of the earliest-collected winner
    type: str = field(default=SUCCESS_NOT_DETERMINISTIC_MULTIPLE_YARN_LOCKS, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the result in its JSON shape."""
        return {
            "type": self.type,
            "yarnLockFileToCopy": str(self.lock_file_to_copy),
            "dependencies": _dependencies_to_list(self.dependencies),
        }


@dataclass(frozen=True)
class UndeclaredDependencies:
    """At least one referenced package is not declared by any ancestor manifest."""

    undeclared_dependencies: tuple[UndeclaredDependency, ...]
    type: str = field(default=FAILURE_UNDECLARED_DEPENDENCIES, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the result in its JSON shape."""
        return {
            "type": self.type,
            "undeclaredDependencies": [
                {"dependency": u.dependency, "context": str(u.context)}
                for u in self.undeclared_dependencies
            ],
        }


@dataclass(frozen=True)
class ConflictResolutionNeeded:
    """At least one package is declared with mutually incompatible ranges."""

    conflicts: dict[str, tuple[ConflictEntry, ...]]
    type: str = field(default=FAILURE_NEEDS_DEPENDENCY_CONFLICT_RESOLUTION, init=False)

    def to_dict(self) -> dict[str, Any]:
        """Render the result in its JSON shape."""
        return {
            "type": self.type,
            "conflicts": {
                name: [
                    {"packageVersion": e.package_version, "context": str(e.context)}
                    for e in entries
                ]
                for name, entries in self.conflicts.items()
            },
        }


ResolutionResult = (
    FullyDeterministic
    | NoLockFiles
    | MultipleLockFiles
    | UndeclaredDependencies
    | ConflictResolutionNeeded
)

SUCCESS_TYPES = frozenset(
    {
        SUCCESS_FULLY_DETERMINISTIC,
        SUCCESS_NOT_DETERMINISTIC_NO_YARN_LOCKS,
        SUCCESS_NOT_DETERMINISTIC_MULTIPLE_YARN_LOCKS,
    }
)
