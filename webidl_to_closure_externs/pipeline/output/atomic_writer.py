"""
Atomic file writer for generated externs.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written externs file behind.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..config import OutputConfig, OutputMode

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes.

    Uses a two-phase approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file
    """

    def __init__(self, config: OutputConfig | None = None):
        """Initialize the atomic writer.

        Args:
            config: Output configuration (mode and atomicity)
        """
        self.config = config or OutputConfig()

    def write(self, path: Path, content: str) -> None:
        """Write content to file, honouring the configured output mode.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            FileExistsError: If the file exists and the mode forbids overwriting
            OSError: If file operations fail
        """
        if self.config.mode is OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        if not self.config.atomic_write:
            path.write_text(content, encoding="utf-8")
            logger.info("Wrote %s", path)
            return

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

        logger.info("Wrote %s", path)
