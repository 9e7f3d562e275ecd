"""Display lines offered to the selection UI and matching the chosen line back."""

from typing import Iterable, List, Optional

from orgclone.domain.repository import Repository

CLONED_MARKER = "✓"
NOT_CLONED_MARKER = " "


def format_line(repo: Repository) -> str:
    """Render a repository as "<marker> host/organization/name"."""
    marker = CLONED_MARKER if repo.cloned else NOT_CLONED_MARKER
    return f"{marker} {repo.full_name}"


def format_lines(repos: Iterable[Repository]) -> List[str]:
    return [format_line(repo) for repo in repos]


def normalize_line(line: str) -> str:
    """Strip surrounding whitespace and a leading clone marker."""
    line = line.strip()
    if line.startswith(CLONED_MARKER):
        line = line[len(CLONED_MARKER):]
    return line.strip()


def match_selection(selected: str, repos: Iterable[Repository]) -> Optional[Repository]:
    """
    Resolve a line returned by the selection UI to the repository it was rendered from.

    The clone marker may or may not survive the round trip through the selection UI,
    so both sides are normalized before comparing.

    Args:
        selected: Raw line as returned by the selection UI
        repos: Candidates, in the order they were offered

    Returns:
        The first matching repository, or None if nothing matches
    """
    wanted = normalize_line(selected)
    for repo in repos:
        if normalize_line(format_line(repo)) == wanted:
            return repo
    return None
