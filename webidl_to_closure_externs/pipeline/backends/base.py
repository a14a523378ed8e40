"""
Base class for externs generation backends.

Defines the interface that all output backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.merge_engine import MergedGraph
from ..config import ExternsConfig
from ..idl_ast.nodes import TypeExpr


@dataclass
class ExternDeclaration:
    """One annotated declaration statement.

    Rendered as a JSDoc comment (``/** @<tag> {<annotation>} */``) followed
    by the statement itself. Without an annotation only the tag is written.
    """

    tag: str = "type"
    annotation: str | None = None
    statement: str = ""


@dataclass
class ExternBlock:
    """A group of declarations emitted together, preceded by a blank line."""

    name: str = ""

    # Raw lines written before the declarations
    header: list[str] = field(default_factory=list)

    declarations: list[ExternDeclaration] = field(default_factory=list)


class CodeBackend(ABC):
    """Abstract base class for externs generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: ExternsConfig):
        """
        Initialize the backend.

        Args:
            config: Externs generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        # Add custom filters
        self.jinja_env.filters["braced"] = self._braced

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.block_template = self.jinja_env.get_template(f"block.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(self, graph: MergedGraph) -> str:
        """
        Generate externs from a merged graph.

        Args:
            graph: The merged declaration graph

        Returns:
            Generated externs as a string
        """

    @abstractmethod
    def translate_type(self, type_expr: TypeExpr) -> str:
        """
        Translate a type expression to a language-specific annotation.

        Args:
            type_expr: The type expression

        Returns:
            Language-specific type annotation
        """

    def _braced(self, text: str) -> str:
        """Wrap an annotation in JSDoc type braces."""
        return "{" + text + "}"

    def _prepare_block_context(self, block: ExternBlock) -> dict[str, Any]:
        """
        Prepare the template context for a block.

        Args:
            block: The block to render

        Returns:
            Dictionary of template variables
        """
        return {
            "NAME": block.name,
            "HEADER": block.header,
            "DECLARATIONS": block.declarations,
        }

    def render_block(self, block: ExternBlock) -> str:
        """Render a block without its trailing newline."""
        return self.block_template.render(self._prepare_block_context(block)).rstrip("\n")
