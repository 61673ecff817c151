"""Data models shared by the scanner, the resolvers and the updater."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RemoteType(Enum):
    """Kinds of release registry an annotation can point at."""

    GITHUB = "GitHub"

    @classmethod
    def from_name(cls, name: str) -> "RemoteType":
        """Map a configured name to a remote type, defaulting to GitHub."""
        for member in cls:
            if member.value == name:
                return member
        return cls.GITHUB


@dataclass(frozen=True)
class RemoteIdentity:
    """Names one entry in a release registry, e.g. GitHub ``owner/repo``."""

    type: RemoteType
    identifier: str


@dataclass
class FileInfo:
    """A scanned file and its full text."""

    path: Path
    content: str


@dataclass(frozen=True)
class Target:
    """One annotation bound to a single line of a single file."""

    path: Path
    row: int  # 0-based line index at scan time
    identity: RemoteIdentity

    @property
    def name(self) -> str:
        return f"{self.path}:{self.row + 1}"


@dataclass
class TargetOutcome:
    """Result of applying one target."""

    target: Target
    new_version: str | None = None
    old_version: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Result of processing every target of one file."""

    path: Path
    outcomes: list[TargetOutcome] = field(default_factory=list)
    written: bool = False
    error: str | None = None

    @property
    def mutations(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)
