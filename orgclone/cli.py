"""Command-line entry point: pick an organization repository and print its local path."""

import logging
import os
import sys

from orgclone.application.picker_service import PickStatus, RepositoryPickerService
from orgclone.infrastructure.cloner import CloneError, GhqCloner
from orgclone.infrastructure.github_client import (
    ClientInitializationError,
    GitHubAPIError,
    GitHubRESTClient,
)
from orgclone.infrastructure.selector import PecoSelector, SelectorError

logger = logging.getLogger(__name__)

NOTHING_SELECTED_MESSAGE = "No repository selected"


def configure_logging():
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "WARNING").upper())
    if not isinstance(level, int):
        # getLevelName returns "Level <name>" for unknown names
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


def main():
    """Pick a repository, clone it if needed and print its path."""
    configure_logging()

    try:
        github_client = GitHubRESTClient()
    except ClientInitializationError as e:
        logger.error(f"Failed to initialize GitHub API client: {e}")
        return 1

    picker = RepositoryPickerService(github_client, PecoSelector(), GhqCloner())

    try:
        result = picker.pick()
    except GitHubAPIError as e:
        logger.error(f"Failed to fetch organizations: {e}")
        return 1
    except SelectorError as e:
        logger.error(f"Failed to run selection UI: {e}")
        return 1
    except CloneError as e:
        logger.error(f"Failed to clone repository: {e}")
        return 1

    if result.status is PickStatus.NO_SELECTION:
        print(NOTHING_SELECTED_MESSAGE)
    elif result.path:
        print(result.path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
