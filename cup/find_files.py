"""Logic for enumerating the text files of a working tree."""

import logging
import subprocess
from pathlib import Path

from cup.models import FileInfo

logger = logging.getLogger(__name__)


def _git_listed_paths(root: Path) -> list[Path] | None:
    """List tracked and untracked-but-not-ignored files, or None outside git."""
    try:
        proc = subprocess.run(
            ["git", "ls-files", "--cached", "--others", "--exclude-standard", "-z"],
            cwd=root,
            capture_output=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("git ls-files unavailable in %s: %s", root, e)
        return None

    names = proc.stdout.decode("utf-8", errors="surrogateescape").split("\0")
    return [root / name for name in names if name]


def _walked_paths(root: Path) -> list[Path]:
    return sorted(
        p
        for p in root.rglob("*")
        if p.is_file() and ".git" not in p.relative_to(root).parts
    )


def find_files(root: str | Path = ".") -> list[FileInfo]:
    """Read every candidate file under ``root``, honoring git ignore rules."""
    root_path = Path(root)
    paths = _git_listed_paths(root_path)
    if paths is None:
        paths = _walked_paths(root_path)

    files: list[FileInfo] = []
    for path in paths:
        if not path.is_file():
            # Deleted from the work tree but still in the index.
            continue
        try:
            with open(path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping %s: %s", path, e)
            continue
        files.append(FileInfo(path=path, content=content))

    logger.debug("Found %d readable files under %s", len(files), root_path)
    return files
