"""Ordered catalog of the textual syntaxes a version literal can appear in.

Every pattern captures a ``prefix`` up to and including the opening delimiter,
the ``version`` literal, an optional closing delimiter ``close`` and the
trailing line ``comment``. Rendering a match keeps everything but the literal.

Order matters: the first pattern that matches a line wins, so the quoted and
prefixed forms have to stay ahead of the generic ones that would shadow them.
"""

import re
from dataclasses import dataclass

VERSION = r"(?P<version>\d+(?:\.\d+)*)"
# Lead-in such as "rc-" or "release_" before the numeric run.
PREFIXED_VERSION = r"(?P<version>[^\d\s\"']*\d+(?:\.\d+)*)"
COMMENT = r"(?P<comment>\s*(?://|#).*)"


@dataclass(frozen=True)
class VersionPattern:
    """One syntax: a compiled matcher plus how to render a replacement."""

    name: str
    regex: re.Pattern[str]

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None

    def find(self, line: str) -> str | None:
        """Return the first literal this pattern sees on the line."""
        m = self.regex.search(line)
        return m.group("version") if m else None

    def render(self, line: str, new_version: str) -> str:
        """Replace every literal this pattern matches on the line."""

        def _sub(m: re.Match[str]) -> str:
            close = m.group("close") or ""
            return m.group("prefix") + new_version + close + m.group("comment")

        return self.regex.sub(_sub, line)


def _pattern(
    name: str, prefix: str, close: str = "", version: str = VERSION
) -> VersionPattern:
    close_group = f"(?P<close>{close})" if close else "(?P<close>)"
    regex = re.compile(f"(?P<prefix>{prefix}){version}{close_group}{COMMENT}")
    return VersionPattern(name=name, regex=regex)


VERSION_PATTERNS: list[VersionPattern] = [
    # name = 1.2.3 // comment
    _pattern("assign", r"\w+\s*=\s*"),
    # name := 1.2.3 // comment
    _pattern("walrus", r"\w+\s*:=\s*"),
    # name: 1.2.3 // comment
    _pattern("colon", r"\w+:\s*"),
    # "name:1.2.3" // comment
    _pattern("image-ref", r'"\w+:', '"'),
    # "name": "1.2.3" // comment
    _pattern("json", r'"\w+":\s*"', '"'),
    # name = '1.2.3' // comment
    _pattern("assign-single", r"\w+\s*=\s*'", "'"),
    # name := '1.2.3' // comment
    _pattern("walrus-single", r"\w+\s*:=\s*'", "'"),
    # name: '1.2.3' // comment
    _pattern("colon-single", r"\w+:\s*'", "'"),
    # 'name:1.2.3' // comment
    _pattern("image-ref-single", r"'\w+:", "'"),
    # 'name': '1.2.3' // comment
    _pattern("json-single", r"'\w+':\s*'", "'"),
    # name = "1.2.3" // comment
    _pattern("assign-double", r'\w+\s*=\s*"', '"'),
    # name := "1.2.3" // comment
    _pattern("walrus-double", r'\w+\s*:=\s*"', '"'),
    # name: "1.2.3" // comment
    _pattern("colon-double", r'\w+:\s*"', '"'),
    # "name-with-dashes" = "1.2.3" // comment
    _pattern("dashed-key", r'"[\w-]+"\s*=\s*"', '"'),
    # name = "rc-1.2.3" // comment
    _pattern("assign-prefixed", r'\w+\s*=\s*"', '"', PREFIXED_VERSION),
    # name := "rc-1.2.3" // comment
    _pattern("walrus-prefixed", r'\w+\s*:=\s*"', '"', PREFIXED_VERSION),
    # name: "rc-1.2.3" // comment
    _pattern("colon-prefixed", r'\w+:\s*"', '"', PREFIXED_VERSION),
]
