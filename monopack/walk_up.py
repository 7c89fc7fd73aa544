"""Bounded upward directory iteration."""

import os
from collections.abc import Iterator
from pathlib import Path


def walk_up(start: Path, root: Path) -> Iterator[Path]:
    """Yield ``start`` and each of its parents up to and including ``root``.

    Nothing is yielded when ``start`` lies outside ``root``. Paths are made
    absolute lexically; the filesystem is not touched.
    """
    current = Path(os.path.abspath(start))
    boundary = Path(os.path.abspath(root))
    if current != boundary and boundary not in current.parents:
        return
    while True:
        yield current
        if current == boundary:
            return
        current = current.parent
