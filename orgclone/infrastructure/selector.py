"""Interactive line selection through an external fuzzy finder."""

import logging
import subprocess
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


class SelectorError(Exception):
    """Raised when the selection UI cannot be run."""
    pass


class PecoSelector:
    """Runs peco over a list of lines and returns the one the user picked."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command: List[str] = list(command) if command else ["peco"]

    def select(self, lines: Sequence[str]) -> Optional[str]:
        """
        Let the user pick one of ``lines``.

        Args:
            lines: Candidate lines, offered in order

        Returns:
            The chosen line stripped of surrounding whitespace, or None if the user
            picked nothing (empty output or non-zero exit)

        Raises:
            SelectorError: If the selection UI could not be started
        """
        try:
            result = subprocess.run(
                self.command,
                input="\n".join(lines),
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise SelectorError(f"Failed to run {self.command[0]}: {e}") from e

        if result.returncode != 0:
            logger.info(f"{self.command[0]} exited with status {result.returncode}")
            return None

        selected = result.stdout.strip()
        return selected or None
