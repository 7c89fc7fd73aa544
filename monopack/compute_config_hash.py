"""Fingerprint of the settings that shape a bundle's package.json."""

import hashlib
import json
from typing import Any

# Where the repo lives or the bundle lands does not change what gets installed.
LOCATION_KEYS = frozenset({"monorepo_root", "output_directory"})


def compute_config_hash(config: dict[str, Any]) -> str:
    """Return a sha256 over the config minus its location keys.

    Two checkouts of the same repo in different directories hash alike.
    """
    relevant = {k: v for k, v in config.items() if k not in LOCATION_KEYS}
    payload = json.dumps(relevant, sort_keys=True, ensure_ascii=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
