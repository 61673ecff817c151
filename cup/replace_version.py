"""Logic for locating and rewriting the version literal on an annotated line."""

from cup.version_patterns import VERSION_PATTERNS, VersionPattern


def match_pattern(line: str) -> VersionPattern | None:
    """Return the first catalog entry that matches the line."""
    for pattern in VERSION_PATTERNS:
        if pattern.matches(line):
            return pattern
    return None


def find_version_in_line(line: str) -> str | None:
    """Return the literal currently on the line, if any syntax matches."""
    pattern = match_pattern(line)
    return pattern.find(line) if pattern else None


def replace_version_in_line(line: str, new_version: str) -> str | None:
    """Rewrite the version literal on ``line`` to ``new_version``.

    Returns None if no known syntax matches. All matches of the winning
    pattern on the line receive the same value.
    """
    pattern = match_pattern(line)
    if pattern is None:
        return None
    return pattern.render(line, new_version)
