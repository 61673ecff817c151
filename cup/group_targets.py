"""Logic for partitioning targets into per-file batches."""

from pathlib import Path

from cup.models import Target


def group_targets(targets: list[Target]) -> dict[Path, list[Target]]:
    """Group targets by file path, keeping scan order within each file."""
    batches: dict[Path, list[Target]] = {}
    for target in targets:
        batches.setdefault(target.path, []).append(target)
    return batches
