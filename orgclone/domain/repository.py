"""Domain entities for organization repositories and their local identity."""

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

CLONE_NAMESPACE = "ghq"


def default_clone_root() -> str:
    """Return the directory all clones live under (``~/ghq``)."""
    return os.path.join(os.path.expanduser("~"), CLONE_NAMESPACE)


def derive_host(url: str) -> str:
    """
    Derive the host portion of a repository web URL.

    Malformed URLs are not rejected; they simply produce a degraded host.

    Args:
        url: Repository web URL, e.g. "https://github.com/acme/widgets"

    Returns:
        The host, e.g. "github.com"
    """
    _, separator, rest = url.partition("://")
    if not separator:
        rest = url
    return rest.split("/", 1)[0]


def clone_path(host: str, organization: str, name: str, root: Optional[str] = None) -> str:
    """Compose the local path a repository is cloned to."""
    if root is None:
        root = default_clone_root()
    return os.path.join(root, host, organization, name)


def remote_identifier(host: str, organization: str, name: str) -> str:
    """Compose the identifier handed to the clone tool."""
    return f"{host}:{organization}/{name}"


@dataclass(frozen=True)
class Organization:
    """Organization the authenticated user belongs to."""

    login: str


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""

    name: str
    organization: str
    host: str
    url: str
    description: Optional[str] = None
    language: Optional[str] = None
    stars: int = 0
    cloned: bool = False

    @classmethod
    def from_api(cls, payload: Dict[str, Any], organization: str) -> "Repository":
        """
        Build a repository from a REST API payload, stamped with its organization.

        Args:
            payload: One item of the "list organization repositories" response
            organization: Login of the organization the payload was listed under
        """
        url = payload.get("html_url") or ""
        return cls(
            name=payload["name"],
            organization=organization,
            host=derive_host(url),
            url=url,
            description=payload.get("description"),
            language=payload.get("language"),
            stars=payload.get("stargazers_count") or 0,
        )

    @property
    def full_name(self) -> str:
        return f"{self.host}/{self.organization}/{self.name}"

    @property
    def remote_identifier(self) -> str:
        return remote_identifier(self.host, self.organization, self.name)

    def clone_path(self, root: Optional[str] = None) -> str:
        return clone_path(self.host, self.organization, self.name, root)

    def with_clone_state(self, cloned: bool) -> "Repository":
        """Return a copy of this repository with the given clone state."""
        return replace(self, cloned=cloned)
