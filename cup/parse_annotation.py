"""Logic for finding annotation comments and turning them into targets."""

from collections.abc import Iterable
from typing import Any

from cup.models import FileInfo, RemoteIdentity, RemoteType, Target

DEFAULT_MARKER = "[cup]"


def split_lines(content: str) -> list[str]:
    """Split file content into lines, keeping any carriage returns in place."""
    return content.split("\n")


def parse_annotation(
    file_info: FileInfo, line: str, row: int, config: dict[str, Any]
) -> Target | None:
    """Parse one line and return its target, or None if it carries no annotation.

    The text after the first marker is ``[GitHub] <identifier> [anything]``.
    Without the keyword the configured ``remote_default`` decides the remote type.
    """
    marker = config.get("marker", DEFAULT_MARKER)
    pos = line.find(marker)
    if pos < 0:
        return None

    after = line[pos + len(marker) :].strip()
    if not after:
        return None

    keyword = RemoteType.GITHUB.value
    if after.startswith(keyword):
        remote_type = RemoteType.GITHUB
        tokens = after[len(keyword) :].strip().split()
    else:
        remote_type = RemoteType.from_name(config.get("remote_default", keyword))
        tokens = after.split()

    if not tokens:
        # "[cup] GitHub" with nothing after the keyword
        return None

    return Target(
        path=file_info.path,
        row=row,
        identity=RemoteIdentity(type=remote_type, identifier=tokens[0]),
    )


def find_targets(files: Iterable[FileInfo], config: dict[str, Any]) -> list[Target]:
    """Scan every line of every file and collect all targets."""
    targets: list[Target] = []
    for file_info in files:
        for row, line in enumerate(split_lines(file_info.content)):
            target = parse_annotation(file_info, line, row, config)
            if target is not None:
                targets.append(target)
    return targets
