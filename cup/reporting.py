"""Operator-facing output for an update run."""

import json
import logging
import time
from pathlib import Path
from typing import Any

from cup.models import BatchResult

logger = logging.getLogger(__name__)


class UpdateReport:
    """Collects batch results as they complete and logs them."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run
        self.results: list[BatchResult] = []
        self.start_time = time.time()

    def add_result(self, result: BatchResult) -> None:
        self.results.append(result)

        for outcome in result.outcomes:
            if outcome.ok:
                logger.info("%s → %s", outcome.target.name, outcome.new_version)
            else:
                logger.warning("%s: %s", outcome.target.name, outcome.error)

        if result.error:
            logger.error("%s: %s", result.path, result.error)
        elif result.written:
            logger.info("Updated %d target(s) in %s", result.mutations, result.path)
        elif self.dry_run and result.mutations:
            logger.info(
                "Would update %d target(s) in %s", result.mutations, result.path
            )
        elif result.mutations:
            logger.info("%s already up to date", result.path)

    @property
    def succeeded(self) -> int:
        return sum(r.mutations for r in self.results if not r.error)

    @property
    def failed(self) -> int:
        total = sum(len(r.outcomes) for r in self.results)
        return total - self.succeeded

    @property
    def files_written(self) -> int:
        return sum(1 for r in self.results if r.written)

    def summary(self) -> str:
        return (
            f"{self.succeeded} target(s) updated, {self.failed} failed, "
            f"{self.files_written} file(s) written"
        )

    def generate_report(self, path: str | Path) -> None:
        """Write a JSON report of every target to ``path``."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "dry_run": self.dry_run,
                "succeeded": self.succeeded,
                "failed": self.failed,
                "files_written": self.files_written,
            },
            "files": [
                self._file_entry(r)
                for r in sorted(self.results, key=lambda r: str(r.path))
            ],
        }

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)

    def _file_entry(self, result: BatchResult) -> dict[str, Any]:
        return {
            "path": str(result.path),
            "written": result.written,
            "error": result.error,
            "targets": [
                {
                    "name": o.target.name,
                    "remote_type": o.target.identity.type.value,
                    "identifier": o.target.identity.identifier,
                    "old_version": o.old_version,
                    "new_version": o.new_version,
                    "error": o.error,
                }
                for o in result.outcomes
            ],
        }
