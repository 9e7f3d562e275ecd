"""Cloning repositories with ghq."""

import logging
import subprocess
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


class CloneError(Exception):
    """Raised when the clone tool fails."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output

    def __str__(self) -> str:
        message = super().__str__()
        if self.output:
            return f"{message}\nOutput: {self.output}"
        return message


class GhqCloner:
    """Clones repositories by running ``ghq get <identifier>``."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command: List[str] = list(command) if command else ["ghq", "get"]

    def clone(self, identifier: str) -> str:
        """
        Clone a repository.

        Args:
            identifier: Remote identifier, e.g. "github.com:acme/widgets"

        Returns:
            Combined stdout and stderr of the clone tool

        Raises:
            CloneError: If the tool cannot be started or exits non-zero
        """
        cmd = [*self.command, identifier]
        logger.info(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise CloneError(f"Failed to run {cmd[0]}: {e}") from e

        if result.returncode != 0:
            raise CloneError(
                f"Failed to clone {identifier}: {cmd[0]} exited with status {result.returncode}",
                output=result.stdout or "",
            )
        return result.stdout or ""
