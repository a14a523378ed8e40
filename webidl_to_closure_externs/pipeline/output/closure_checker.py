"""
Closure Compiler check.

Runs the Closure Compiler over a generated externs file with every
diagnostic promoted to an error.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ..config import ClosureCheckConfig
from ..errors import ClosureCheckError

logger = logging.getLogger(__name__)


class ClosureChecker:
    """Checks generated externs with the Closure Compiler."""

    def __init__(self, config: ClosureCheckConfig):
        self.config = config

    def build_command(self, path: Path) -> list[str]:
        """Build the compiler command line for an externs file."""
        return [
            *self.config.command,
            f"--warning_level={self.config.warning_level}",
            "--jscomp_error=*",
            f"--js={path}",
            "--js_output_file=/dev/null",
        ]

    def check(self, path: Path) -> None:
        """
        Run the compiler; compiler output goes straight to the terminal.

        Raises:
            ClosureCheckError: If the compiler cannot be started or exits non-zero
        """
        command = self.build_command(path)
        logger.info("Running Closure compiler: %s", " ".join(command))
        try:
            result = subprocess.run(command, check=False)
        except OSError as e:
            raise ClosureCheckError(f"Could not run Closure compiler ({command[0]}): {e}") from e

        if result.returncode != 0:
            raise ClosureCheckError(f"Closure failed with exit code {result.returncode}")
