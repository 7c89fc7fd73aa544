"""Logic for writing the generated manifest and lock file into a bundle."""

import json
import logging
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def write_output(
    out_dir: Path, package_json: dict[str, Any], lock_file: Path | None = None
) -> list[Path]:
    """Write package.json and copy the lock file, returning the written paths."""
    out_dir.mkdir(parents=True, exist_ok=True)

    manifest_path = out_dir / "package.json"
    manifest_path.write_text(
        json.dumps(package_json, indent=2) + "\n", encoding="utf-8"
    )
    written = [manifest_path]

    if lock_file is not None:
        lock_path = out_dir / lock_file.name
        shutil.copyfile(lock_file, lock_path)
        logger.info("Copied %s to %s", lock_file, lock_path)
        written.append(lock_path)

    return written
