"""Application service for picking an organization repository and cloning it."""

import enum
import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from orgclone.domain.repository import Organization, Repository, default_clone_root
from orgclone.domain.selection import format_lines, match_selection
from orgclone.infrastructure.cloner import GhqCloner
from orgclone.infrastructure.github_client import GitHubAPIError, GitHubRESTClient
from orgclone.infrastructure.selector import PecoSelector

logger = logging.getLogger(__name__)


class PickStatus(enum.Enum):
    NO_SELECTION = "no_selection"
    NO_MATCH = "no_match"
    ALREADY_CLONED = "already_cloned"
    CLONED = "cloned"


@dataclass(frozen=True)
class PickResult:
    """Outcome of one pick run."""

    status: PickStatus
    repository: Optional[Repository] = None
    path: Optional[str] = None


class RepositoryPickerService:
    """Service for choosing one of the user's organization repositories and cloning it."""

    def __init__(
        self,
        github_client: GitHubRESTClient,
        selector: PecoSelector,
        cloner: GhqCloner,
        clone_root: Optional[str] = None
    ):
        """
        Initialize picker service.

        Args:
            github_client: GitHub API client
            selector: Selection UI used to pick a repository line
            cloner: Clone tool used for repositories not yet on disk
            clone_root: Directory clones live under. Defaults to ~/ghq.
        """
        self.github_client = github_client
        self.selector = selector
        self.cloner = cloner
        self.clone_root = clone_root or default_clone_root()

    def fetch_repositories(self, organizations: List[Organization]) -> List[Repository]:
        """
        Fetch and flatten the repositories of each organization, in order.

        An organization whose repositories cannot be fetched is logged and skipped.

        Args:
            organizations: Organizations to fetch repositories for

        Returns:
            Repositories stamped with their organization and host
        """
        repositories: List[Repository] = []

        for org in organizations:
            try:
                payloads = self.github_client.list_organization_repositories(org.login)
            except GitHubAPIError as e:
                logger.error(f"Failed to fetch repositories ({org.login}): {e}")
                continue

            repositories.extend(Repository.from_api(payload, org.login) for payload in payloads)

        logger.info(f"Fetched {len(repositories)} repositories from {len(organizations)} organizations")
        return repositories

    def check_clone_status(self, repositories: List[Repository]) -> List[Repository]:
        """Return the repositories annotated with whether their clone path exists."""
        return [
            repo.with_clone_state(os.path.isdir(repo.clone_path(self.clone_root)))
            for repo in repositories
        ]

    def ensure_cloned(self, repo: Repository) -> PickResult:
        """
        Make sure ``repo`` is cloned and report where.

        Raises:
            CloneError: If the clone tool fails
        """
        path = repo.clone_path(self.clone_root)
        if repo.cloned:
            return PickResult(PickStatus.ALREADY_CLONED, repo, path)

        logger.info(f"Cloning {repo.remote_identifier}")
        output = self.cloner.clone(repo.remote_identifier)
        logger.debug(f"Clone output for {repo.remote_identifier}: {output}")
        logger.info(f"Cloned {repo.full_name} to {path}")
        return PickResult(PickStatus.CLONED, repo.with_clone_state(True), path)

    def resolve(self, selected: Optional[str], repositories: List[Repository]) -> PickResult:
        """Match the selected line and clone the matching repository if needed."""
        if not selected:
            return PickResult(PickStatus.NO_SELECTION)

        repo = match_selection(selected, repositories)
        if repo is None:
            logger.info(f"No repository matches selection {selected!r}")
            return PickResult(PickStatus.NO_MATCH)

        return self.ensure_cloned(repo)

    def pick(self) -> PickResult:
        """
        Run the whole pick: aggregate, annotate, select, match, clone.

        Raises:
            GitHubAPIError: If the organization list cannot be fetched
            SelectorError: If the selection UI cannot be run
            CloneError: If cloning the picked repository fails
        """
        organizations = self.github_client.list_organizations()
        repositories = self.check_clone_status(self.fetch_repositories(organizations))

        selected = self.selector.select(format_lines(repositories))
        return self.resolve(selected, repositories)
