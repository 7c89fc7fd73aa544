"""Logic for writing a JSON report of a dependency resolution."""

import json
import time
from pathlib import Path
from typing import Any

from monopack.resolution_result import ResolutionResult


class ResolutionReport:
    """Records a resolution result with the context it was produced in."""

    def __init__(self, config_hash: str, monorepo_root: Path) -> None:
        """Initialize the report with metadata."""
        self.config_hash = config_hash
        self.monorepo_root = monorepo_root
        self.observation_count = 0
        self.result: ResolutionResult | None = None
        self.start_time = time.time()

    def set_result(self, result: ResolutionResult, observation_count: int) -> None:
        """Attach the final result and the number of observations behind it."""
        self.result = result
        self.observation_count = observation_count

    def generate_report(self, path: str | Path) -> None:
        """Write the report to a JSON file."""
        report: dict[str, Any] = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "monorepo_root": str(self.monorepo_root),
                "observation_count": self.observation_count,
            },
            "result": self.result.to_dict() if self.result is not None else None,
        }

        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")
