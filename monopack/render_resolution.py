"""Rendering of resolution results into user-facing diagnostics."""

from dataclasses import dataclass
from pathlib import Path

from monopack.models import ResolvedDependency
from monopack.resolution_result import (
    ConflictResolutionNeeded,
    FullyDeterministic,
    MultipleLockFiles,
    NoLockFiles,
    ResolutionResult,
    UndeclaredDependencies,
)


@dataclass(frozen=True)
class RenderedResolution:
    """Printable summary of a resolution and what to package from it."""

    output: str
    exit_code: int
    dependencies: tuple[ResolvedDependency, ...] = ()
    lock_file_to_copy: Path | None = None


def _dependency_lines(dependencies: tuple[ResolvedDependency, ...]) -> list[str]:
    if not dependencies:
        return ["=>> monopack found no third-party dependencies"]
    lines = ["=>> monopack collected the following dependencies:"]
    lines.extend(f"    {d.package_name}@{d.version}" for d in dependencies)
    return lines


def render_resolution(result: ResolutionResult) -> RenderedResolution:
    """Describe a resolution result, listing every contributing context."""
    if isinstance(result, UndeclaredDependencies):
        lines = [
            "=>> monopack failed: the following dependencies are used but not "
            "declared in any package.json:"
        ]
        lines.extend(
            f"    {u.dependency} (required from {u.context})"
            for u in result.undeclared_dependencies
        )
        return RenderedResolution("\n".join(lines) + "\n", 1)

    if isinstance(result, ConflictResolutionNeeded):
        lines = [
            "=>> monopack failed: the following dependencies are declared with "
            "incompatible versions:"
        ]
        for name, entries in result.conflicts.items():
            lines.append(f"    {name}:")
            lines.extend(
                f"        {e.package_version} (declared for {e.context})"
                for e in entries
            )
        lines.append("=>> Align these versions, then build again.")
        return RenderedResolution("\n".join(lines) + "\n", 1)

    lines = _dependency_lines(result.dependencies)
    lock_file: Path | None = None
    if isinstance(result, FullyDeterministic):
        lock_file = result.lock_file_to_copy
        lines.append(f"=>> Installation will be deterministic using {lock_file}")
    elif isinstance(result, MultipleLockFiles):
        lock_file = result.lock_file_to_copy
        lines.append(
            "=>> WARNING: dependencies are declared under several yarn.lock files; "
            f"installation may not be deterministic (using {lock_file})"
        )
    elif isinstance(result, NoLockFiles):
        lines.append(
            "=>> WARNING: no yarn.lock found; installation will not be deterministic"
        )
    return RenderedResolution(
        "\n".join(lines) + "\n", 0, result.dependencies, lock_file
    )
