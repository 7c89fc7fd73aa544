"""npm-style version range parsing and intersection.

A range is parsed into a list of alternative intervals over semver versions.
Specifiers are compatible when some version lies in one interval of each,
i.e. a single version satisfies all of them.

Supported grammar: ``||`` alternatives, whitespace-separated comparator sets,
the ``=``, ``<``, ``<=``, ``>``, ``>=`` operators, bare and partial versions,
``x``/``X``/``*`` wildcards, ``^`` and ``~`` (and ``~>``) shorthands, hyphen
ranges and an optional leading ``v``. Anything else (git URLs, ``file:``
paths, dist-tags) is not a range and only matches identical text.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

_PARTIAL_RE = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*]))?"
    r"(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_OPERATOR_RE = re.compile(r"^(?P<op><=|>=|<|>|=|\^|~>|~)?(?P<version>.*)$")
_OPERATOR_SPACE_RE = re.compile(r"(<=|>=|<|>|=|\^|~>|~)\s+")
_HYPHEN_RE = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")
_WILDCARDS = {"x", "X", "*"}


class NotARangeError(ValueError):
    """Raised internally when a specifier does not follow the range grammar."""


@dataclass(frozen=True, order=True)
class SemVer:
    """A semver version ordered by semver precedence.

    ``released`` is False for pre-releases so they sort below the release.
    Pre-release identifiers are ``(0, number)`` or ``(1, text)``: numeric
    identifiers compare as numbers and sort below alphanumeric ones.
    """

    major: int
    minor: int = 0
    patch: int = 0
    released: bool = True
    pre: tuple[tuple[int, int | str], ...] = ()


class _Partial(NamedTuple):
    major: int | None
    minor: int | None
    patch: int | None
    pre: str | None


@dataclass(frozen=True)
class Interval:
    """A contiguous set of versions; ``None`` bounds are unbounded."""

    lower: SemVer | None = None
    lower_inclusive: bool = True
    upper: SemVer | None = None
    upper_inclusive: bool = False

    def is_empty(self) -> bool:
        """Check whether no version lies inside the interval."""
        if self.lower is None or self.upper is None:
            return False
        if self.lower < self.upper:
            return False
        return not (
            self.lower == self.upper and self.lower_inclusive and self.upper_inclusive
        )

    def intersect(self, other: "Interval") -> "Interval":
        """Return the overlap of two intervals (possibly empty)."""
        lower, lower_inclusive = self.lower, self.lower_inclusive
        if other.lower is not None and (
            lower is None
            or other.lower > lower
            or (other.lower == lower and not other.lower_inclusive)
        ):
            lower, lower_inclusive = other.lower, other.lower_inclusive

        upper, upper_inclusive = self.upper, self.upper_inclusive
        if other.upper is not None and (
            upper is None
            or other.upper < upper
            or (other.upper == upper and not other.upper_inclusive)
        ):
            upper, upper_inclusive = other.upper, other.upper_inclusive

        return Interval(lower, lower_inclusive, upper, upper_inclusive)


ANY = Interval()
NOTHING = Interval(SemVer(0), False, SemVer(0), False)


def _version(
    major: int, minor: int = 0, patch: int = 0, pre: str | None = None
) -> SemVer:
    if pre is None:
        return SemVer(major, minor, patch)
    identifiers: list[tuple[int, int | str]] = []
    for identifier in pre.split("."):
        if not identifier:
            raise NotARangeError(f"{major}.{minor}.{patch}-{pre}")
        if identifier.isdigit():
            identifiers.append((0, int(identifier)))
        else:
            identifiers.append((1, identifier))
    return SemVer(major, minor, patch, released=False, pre=tuple(identifiers))


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL_RE.match(text)
    if not match:
        raise NotARangeError(text)

    parts: list[int | None] = []
    wildcard_seen = False
    for key in ("major", "minor", "patch"):
        raw = match.group(key)
        # Anything after a wildcard is a wildcard too (1.x.3 == 1.x).
        if raw is None or raw in _WILDCARDS or wildcard_seen:
            wildcard_seen = True
            parts.append(None)
        else:
            parts.append(int(raw))

    pre = match.group("pre") if parts[2] is not None else None
    return _Partial(parts[0], parts[1], parts[2], pre)


def _exact_or_span(p: _Partial) -> Interval:
    """Versions matched by a bare (operator-less) partial version."""
    if p.major is None:
        return ANY
    if p.minor is None:
        return Interval(_version(p.major), True, _version(p.major + 1), False)
    if p.patch is None:
        return Interval(
            _version(p.major, p.minor), True, _version(p.major, p.minor + 1), False
        )
    exact = _version(p.major, p.minor, p.patch, p.pre)
    return Interval(exact, True, exact, True)


def _caret(p: _Partial) -> Interval:
    if p.major is None:
        return ANY
    lower = _version(p.major, p.minor or 0, p.patch or 0, p.pre)
    if p.major > 0 or p.minor is None:
        upper = _version(p.major + 1)
    elif p.minor > 0 or p.patch is None:
        upper = _version(0, p.minor + 1)
    else:
        upper = _version(0, 0, p.patch + 1)
    return Interval(lower, True, upper, False)


def _tilde(p: _Partial) -> Interval:
    if p.major is None:
        return ANY
    lower = _version(p.major, p.minor or 0, p.patch or 0, p.pre)
    if p.minor is None:
        upper = _version(p.major + 1)
    else:
        upper = _version(p.major, p.minor + 1)
    return Interval(lower, True, upper, False)


def _greater(p: _Partial, inclusive: bool) -> Interval:
    if p.major is None:
        return ANY if inclusive else NOTHING
    if p.minor is None:
        if inclusive:
            return Interval(lower=_version(p.major))
        return Interval(lower=_version(p.major + 1))
    if p.patch is None:
        if inclusive:
            return Interval(lower=_version(p.major, p.minor))
        return Interval(lower=_version(p.major, p.minor + 1))
    return Interval(
        lower=_version(p.major, p.minor, p.patch, p.pre), lower_inclusive=inclusive
    )


def _less(p: _Partial, inclusive: bool) -> Interval:
    if p.major is None:
        return ANY if inclusive else NOTHING
    if p.minor is None:
        if inclusive:
            return Interval(upper=_version(p.major + 1))
        return Interval(upper=_version(p.major))
    if p.patch is None:
        if inclusive:
            return Interval(upper=_version(p.major, p.minor + 1))
        return Interval(upper=_version(p.major, p.minor))
    return Interval(
        upper=_version(p.major, p.minor, p.patch, p.pre), upper_inclusive=inclusive
    )


def _comparator(token: str) -> Interval:
    match = _OPERATOR_RE.match(token)
    if match is None:
        raise NotARangeError(token)
    op = match.group("op") or "="
    partial = _parse_partial(match.group("version"))

    if op == "=":
        return _exact_or_span(partial)
    if op == "^":
        return _caret(partial)
    if op in {"~", "~>"}:
        return _tilde(partial)
    if op in {">", ">="}:
        return _greater(partial, inclusive=op == ">=")
    return _less(partial, inclusive=op == "<=")


def _hyphen(low: str, high: str) -> Interval:
    lower = _greater(_parse_partial(low), inclusive=True)
    upper = _less(_parse_partial(high), inclusive=True)
    return lower.intersect(upper)


def _comparator_set(text: str) -> Interval:
    text = text.strip()
    hyphen = _HYPHEN_RE.match(text)
    if hyphen:
        return _hyphen(hyphen.group("low"), hyphen.group("high"))

    interval = ANY
    for token in _OPERATOR_SPACE_RE.sub(r"\1", text).split():
        interval = interval.intersect(_comparator(token))
    return interval


def parse_range(specifier: str) -> list[Interval] | None:
    """Parse an npm range into its non-empty alternative intervals.

    Returns ``None`` when the specifier is not a version range at all.
    """
    try:
        alternatives = [_comparator_set(part) for part in specifier.split("||")]
    except NotARangeError:
        return None
    return [interval for interval in alternatives if not interval.is_empty()]


def ranges_compatible(specifiers: Sequence[str]) -> bool:
    """Check whether a single version satisfies every specifier at once.

    The alternatives are folded into one running intersection, so
    ``1.x || 2.x``, ``2.x || 3.x`` and ``1.x || 3.x`` are incompatible even
    though each pair overlaps. A specifier that is not a range is only
    compatible with identical text.
    """
    texts = [specifier.strip() for specifier in specifiers]
    parsed = [parse_range(text) for text in texts]
    if any(intervals is None for intervals in parsed):
        return len(set(texts)) <= 1

    common = [ANY]
    for intervals in parsed:
        narrowed = []
        for current in common:
            for interval in intervals:
                overlap = current.intersect(interval)
                if not overlap.is_empty():
                    narrowed.append(overlap)
        if not narrowed:
            return False
        common = narrowed
    return True


def ranges_intersect(first: str, second: str) -> bool:
    """Check whether some version satisfies both specifiers."""
    return ranges_compatible([first, second])
