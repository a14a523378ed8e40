"""WebIDL to Closure Externs Generator

A Python package for generating Closure Compiler externs from WebIDL
declarations parsed by webidl2. Merges partial declarations and mixins,
resolves WebIDL types to Closure annotations, and renders the externs.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    ClosureCheckConfig,
    ClosureChecker,
    ExternsConfig,
    ExternsError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "ExternsConfig",
    "ClosureCheckConfig",
    "OutputConfig",
    "OutputMode",
    "ExternsError",
    "AtomicWriter",
    "ClosureChecker",
]
