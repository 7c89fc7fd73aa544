"""Logic for reconciling the declarations of one package."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from monopack.models import ConflictEntry, Declaration
from monopack.version_range import ranges_compatible


@dataclass(frozen=True)
class Reconciliation:
    """Outcome of reconciling one package's declarations."""

    version: str
    conflict: bool
    winner: Declaration
    evidence: tuple[ConflictEntry, ...] = field(default_factory=tuple)


def reconcile(declarations: Sequence[Declaration]) -> Reconciliation:
    """Pick the shipped specifier for a package, or report a conflict.

    Declarations must be in collection order. The earliest one wins when all
    specifiers can be satisfied together. Otherwise every declaration site is
    returned as evidence, in collection order.
    """
    if not declarations:
        msg = "reconcile() needs at least one declaration"
        raise ValueError(msg)

    # One context always resolves to the same manifest.
    by_context: dict[Path, Declaration] = {}
    for declaration in declarations:
        by_context.setdefault(declaration.context, declaration)
    distinct = list(by_context.values())

    winner = distinct[0]
    specifiers = list(dict.fromkeys(d.version_specifier for d in distinct))
    # A single distinct specifier wins as written.
    if len(specifiers) == 1 or ranges_compatible(specifiers):
        return Reconciliation(
            version=winner.version_specifier, conflict=False, winner=winner
        )

    evidence = tuple(
        ConflictEntry(package_version=d.version_specifier, context=d.context)
        for d in distinct
    )
    return Reconciliation(
        version=winner.version_specifier,
        conflict=True,
        winner=winner,
        evidence=evidence,
    )
