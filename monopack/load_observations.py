"""Logic for loading the package references recorded by a bundler."""

import json
from pathlib import Path

from monopack.errors import ObservationsFileError
from monopack.models import Observation


def load_observations(path: Path, base_dir: Path) -> list[Observation]:
    """Load observations from a JSON list of {"packageName", "context"} objects.

    Relative contexts are resolved against ``base_dir``. File order is kept.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Cannot read observations file {path}: {exc}"
        raise ObservationsFileError(msg) from exc

    if not isinstance(data, list):
        msg = f"Observations file {path} must contain a JSON list"
        raise ObservationsFileError(msg)

    observations: list[Observation] = []
    for position, entry in enumerate(data):
        if (
            not isinstance(entry, dict)
            or not isinstance(entry.get("packageName"), str)
            or not isinstance(entry.get("context"), str)
        ):
            msg = (
                f"Entry {position} of {path} must be an object with string "
                f"'packageName' and 'context': {entry!r}"
            )
            raise ObservationsFileError(msg)
        observations.append(
            Observation(entry["packageName"], base_dir / entry["context"])
        )
    return observations
