"""Data models for collected and resolved dependencies."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Observation:
    """A package referenced from a source directory during bundling."""

    package_name: str
    context: Path  # directory of the referencing file


@dataclass(frozen=True)
class Declaration:
    """An observation resolved to the nearest manifest that lists the package."""

    package_name: str
    version_specifier: str  # verbatim from the manifest
    manifest_dir: Path
    context: Path


@dataclass(frozen=True)
class ResolvedDependency:
    """A package and the specifier that will be shipped for it."""

    package_name: str
    version: str


@dataclass(frozen=True)
class UndeclaredDependency:
    """An observation for which no ancestor manifest declares the package."""

    dependency: str
    context: Path


@dataclass(frozen=True)
class ConflictEntry:
    """One declaration site of a package whose declarations disagree."""

    package_version: str
    context: Path
