"""Logic for asking a release registry for the latest tag of a project."""

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

from cup.models import RemoteIdentity, RemoteType

logger = logging.getLogger(__name__)

LOOKUP_ERRORS = (
    OSError,
    subprocess.CalledProcessError,
    ValueError,
    KeyError,
    TypeError,
)


class TagResolutionError(Exception):
    """Raised when no tag could be found for a remote identity."""


class TagResolver(ABC):
    """Looks up the newest tag for identifiers of one remote type."""

    @abstractmethod
    def latest_tag(self, identifier: str) -> str:
        """Return the latest tag or raise TagResolutionError."""


class GitHubResolver(TagResolver):
    """Resolves ``owner/repo`` through the GitHub CLI.

    The latest release is preferred; repositories that publish tags without
    releases fall back to their most recent tag.
    """

    def __init__(self, command: str = "gh") -> None:
        self.command = command

    def _run_json(self, args: list[str]) -> Any:
        proc = subprocess.run(
            [self.command, *args],
            capture_output=True,
            text=True,
            check=True,
        )
        return json.loads(proc.stdout)

    def latest_release(self, identifier: str) -> str:
        data = self._run_json(
            ["release", "view", "--repo", identifier, "--json", "tagName"]
        )
        return data["tagName"]

    def most_recent_tag(self, identifier: str) -> str:
        data = self._run_json(["api", f"repos/{identifier}/tags?per_page=1"])
        if not data:
            msg = f"{identifier} has no tags"
            raise TagResolutionError(msg)
        return data[0]["name"]

    def latest_tag(self, identifier: str) -> str:
        try:
            return self.latest_release(identifier)
        except LOOKUP_ERRORS as e:
            logger.debug("No release for %s (%s), falling back to tags", identifier, e)

        try:
            return self.most_recent_tag(identifier)
        except LOOKUP_ERRORS as e:
            msg = f"could not resolve a release or tag for {identifier}: {e}"
            raise TagResolutionError(msg) from e


def build_resolvers(config: dict[str, Any]) -> dict[RemoteType, TagResolver]:
    """Create one resolver per supported remote type."""
    github = config.get("github") or {}
    return {
        RemoteType.GITHUB: GitHubResolver(command=github.get("command", "gh")),
    }


def resolve_latest_tag(
    identity: RemoteIdentity, resolvers: Mapping[RemoteType, TagResolver]
) -> str:
    """Dispatch to the resolver registered for the identity's remote type."""
    resolver = resolvers.get(identity.type)
    if resolver is None:
        msg = f"no resolver for remote type {identity.type.value}"
        raise TagResolutionError(msg)
    return resolver.latest_tag(identity.identifier)


def make_resolve(
    resolvers: Mapping[RemoteType, TagResolver],
) -> Callable[[RemoteIdentity], str]:
    """Bind a resolver registry into a single ``resolve(identity)`` callable."""

    def resolve(identity: RemoteIdentity) -> str:
        return resolve_latest_tag(identity, resolvers)

    return resolve
