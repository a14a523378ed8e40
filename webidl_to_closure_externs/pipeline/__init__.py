"""
Pipeline - webidl2 AST to Closure externs generator.

This module provides a multi-phase architecture for generating Closure
Compiler externs from WebIDL declarations:

1. Phase 1 (Parser): Parse the webidl2 JSON AST into declaration nodes
2. Phase 2 (Index): Index canonical declarations by kind and name
3. Phase 3 (Merge): Fold includes statements and partials into a merged graph
4. Phase 4 (Backend): Resolve types and render externs with Jinja2 templates
5. Phase 5 (Output): Atomic write and optional Closure Compiler check
"""

from __future__ import annotations

from .config import ClosureCheckConfig, ExternsConfig, OutputConfig, OutputMode
from .errors import ExternsError
from .generator import PipelineGenerator
from .output import AtomicWriter, ClosureChecker

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
