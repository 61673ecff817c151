"""Logic for applying all targets of one file in a single read/write cycle."""

import logging
from collections.abc import Callable
from pathlib import Path

from cup.clean_tag import clean_tag
from cup.models import BatchResult, RemoteIdentity, Target, TargetOutcome
from cup.parse_annotation import split_lines
from cup.replace_version import find_version_in_line, replace_version_in_line
from cup.tag_resolver import TagResolutionError

logger = logging.getLogger(__name__)

ROW_OUT_OF_BOUNDS = "row out of bounds"
NO_PATTERN_MATCHED = "no pattern matched"


def _read(path: Path) -> str:
    # newline="" keeps CRLF endings intact
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _write(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _apply_target(
    target: Target, lines: list[str], resolve: Callable[[RemoteIdentity], str]
) -> TargetOutcome:
    """Resolve one target and rewrite its line in ``lines`` on success."""
    try:
        tag = resolve(target.identity)
    except TagResolutionError as e:
        return TargetOutcome(target=target, error=str(e))
    except Exception as e:
        logger.exception("Resolver failed for %s", target.name)
        return TargetOutcome(target=target, error=f"resolver error: {e}")

    version = clean_tag(tag)

    if not 0 <= target.row < len(lines):
        return TargetOutcome(target=target, error=ROW_OUT_OF_BOUNDS)

    line = lines[target.row]
    updated = replace_version_in_line(line, version)
    if updated is None:
        return TargetOutcome(target=target, error=NO_PATTERN_MATCHED)

    lines[target.row] = updated
    return TargetOutcome(
        target=target, new_version=version, old_version=find_version_in_line(line)
    )


def update_file_batch(
    path: Path,
    targets: list[Target],
    resolve: Callable[[RemoteIdentity], str],
    *,
    dry_run: bool = False,
) -> BatchResult:
    """Apply every target of ``path`` and write the file back at most once.

    Targets are processed in order against one in-memory copy of the file.
    A failing target is recorded and skipped; its siblings still apply. The
    file is only rewritten if at least one line changed.
    """
    result = BatchResult(path=path)
    try:
        content = _read(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", path, e)
        result.error = f"read failed: {e}"
        result.outcomes = [
            TargetOutcome(target=t, error=result.error) for t in targets
        ]
        return result

    lines = split_lines(content)
    for target in targets:
        result.outcomes.append(_apply_target(target, lines, resolve))

    new_content = "\n".join(lines)
    if result.mutations == 0 or dry_run or new_content == content:
        return result

    try:
        _write(path, new_content)
    except OSError as e:
        logger.error("Could not write %s: %s", path, e)
        result.error = f"write failed: {e}"
        return result

    result.written = True
    return result
