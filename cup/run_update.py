"""Orchestration logic for scanning files and updating annotated versions."""

import logging
import os
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from cup.find_files import find_files
from cup.group_targets import group_targets
from cup.models import BatchResult, FileInfo, RemoteIdentity
from cup.parse_annotation import find_targets
from cup.reporting import UpdateReport
from cup.tag_resolver import build_resolvers, make_resolve
from cup.update_file_batch import update_file_batch

logger = logging.getLogger(__name__)


def _pool_size(config: dict[str, Any]) -> int:
    workers = config.get("workers")
    if workers:
        return int(workers)
    return os.cpu_count() or 1


def update_files(
    files: Iterable[FileInfo],
    config: dict[str, Any],
    resolve: Callable[[RemoteIdentity], str],
    *,
    dry_run: bool = False,
) -> UpdateReport:
    """Scan ``files`` for annotations and update each file as one batch.

    Files are processed concurrently; the targets of one file run in order.
    """
    targets = find_targets(files, config)
    batches = group_targets(targets)
    report = UpdateReport(dry_run=dry_run)

    logger.info("Found %d target(s) in %d file(s)", len(targets), len(batches))
    if not batches:
        return report

    with ThreadPoolExecutor(max_workers=_pool_size(config)) as pool:
        futures = {
            pool.submit(update_file_batch, path, batch, resolve, dry_run=dry_run): path
            for path, batch in batches.items()
        }
        for future in as_completed(futures):
            path = futures[future]
            try:
                result = future.result()
            except Exception as e:
                logger.exception("Unexpected error while updating %s", path)
                result = BatchResult(path=path, error=f"unexpected error: {e}")
            report.add_result(result)

    return report


def run_update(
    config: dict[str, Any],
    root: str | Path = ".",
    *,
    dry_run: bool = False,
    report_path: str | Path | None = None,
) -> int:
    """Execute the full update pipeline over the tree at ``root``."""
    files = find_files(root)
    resolve = make_resolve(build_resolvers(config))
    report = update_files(files, config, resolve, dry_run=dry_run)

    logger.info("Done: %s", report.summary())
    if report_path:
        report.generate_report(report_path)
        logger.info("Report written to %s", report_path)
    return 0
