"""
Configuration for the externs generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_GENERATION_COMMENT = "// Generated using https://github.com/kainino0x/webidl-to-closure-externs"


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    FORCE = "force"  # Default: overwrite the existing file
    ERROR_IF_EXISTS = "error"  # Raise an error if the file exists


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    atomic_write: bool = True


@dataclass
class ClosureCheckConfig:
    """Configuration for checking the output with the Closure Compiler."""

    # Whether to run the compiler after writing
    enabled: bool = False

    # Command used to launch the compiler
    command: list[str] = field(default_factory=lambda: ["npx", "google-closure-compiler"])

    # Value passed as --warning_level
    warning_level: str = "VERBOSE"


@dataclass
class ExternsConfig:
    """Configuration options for externs generation."""

    # Add provenance comment at top of file
    add_generation_comment: bool = True

    # The provenance comment line
    generation_comment: str = DEFAULT_GENERATION_COMMENT

    # Objects that mixins may be included into without a declared interface
    external_targets: list[str] = field(default_factory=lambda: ["Navigator", "WorkerNavigator"])

    output: OutputConfig = field(default_factory=OutputConfig)

    closure: ClosureCheckConfig = field(default_factory=ClosureCheckConfig)

    @staticmethod
    def from_dict(d: dict) -> ExternsConfig:
        """Create a config from a dictionary."""
        config = ExternsConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "closure" and isinstance(v, dict):
                config.closure = ClosureCheckConfig(**v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "generation_comment": self.generation_comment,
            "external_targets": self.external_targets,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
            "closure": {
                "enabled": self.closure.enabled,
                "command": self.closure.command,
                "warning_level": self.closure.warning_level,
            },
        }
