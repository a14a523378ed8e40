"""
Pipeline generator.

Runs the phases in order:

1. Parser: webidl2 JSON AST -> declaration nodes
2. Index: canonical declarations by kind and by name
3. Merge: fold includes and partials into a merged graph
4. Backend: resolve types and render externs text
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .analyzer import DeclarationIndex, MergedGraph, MergeEngine
from .backends import ClosureBackend
from .config import ExternsConfig
from .errors import MalformedDeclarationError
from .idl_ast import Declaration, IdlParser


class PipelineGenerator:
    """Generates Closure externs from a webidl2 AST."""

    def __init__(self, items: list[dict[str, Any]], config: ExternsConfig | None = None):
        """
        Initialize the generator.

        Args:
            items: The webidl2 JSON AST (list of top-level items)
            config: Generation configuration
        """
        if not isinstance(items, list):
            raise MalformedDeclarationError(f"Expected a list of declarations, got {type(items).__name__}")
        self.items = items
        self.config = config or ExternsConfig()

    @staticmethod
    def from_file(path: str | Path, config: ExternsConfig | None = None) -> PipelineGenerator:
        """Create a generator from a JSON AST file."""
        with open(path, encoding="utf-8") as f:
            items = json.load(f)
        return PipelineGenerator(items, config)

    def parse(self) -> list[Declaration]:
        return IdlParser().parse(self.items)

    def merge(self) -> MergedGraph:
        """Run the parse, index and merge phases."""
        declarations = self.parse()
        index = DeclarationIndex.build(declarations)
        return MergeEngine(self.config.external_targets).merge(declarations, index)

    def generate(self) -> str:
        """
        Generate the externs document.

        Returns:
            The externs text

        Raises:
            ExternsError: If any phase fails; no partial output is returned
        """
        graph = self.merge()
        return ClosureBackend(self.config).generate(graph)
