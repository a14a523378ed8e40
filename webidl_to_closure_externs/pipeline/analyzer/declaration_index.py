"""
Declaration index.

Builds name-keyed lookup tables over the canonical (non-partial,
non-includes) declarations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import DuplicateNameError, UnsupportedKindError
from ..idl_ast.nodes import Declaration, DeclarationKind

logger = logging.getLogger(__name__)

SUPPORTED_KINDS = (
    DeclarationKind.INTERFACE,
    DeclarationKind.DICTIONARY,
    DeclarationKind.NAMESPACE,
    DeclarationKind.INTERFACE_MIXIN,
    DeclarationKind.ENUM,
    DeclarationKind.TYPEDEF,
)


@dataclass
class DeclarationIndex:
    """Lookup tables over canonical declarations."""

    # kind -> name -> declaration, in source order
    by_kind: dict[DeclarationKind, dict[str, Declaration]] = field(default_factory=dict)

    # name -> declaration across all kinds (used for type references)
    by_name: dict[str, Declaration] = field(default_factory=dict)

    @staticmethod
    def build(declarations: list[Declaration]) -> DeclarationIndex:
        """
        Index the canonical declarations of a source list.

        Args:
            declarations: Parsed declarations in source order

        Returns:
            The populated index

        Raises:
            DuplicateNameError: If a name is declared twice within one kind
            UnsupportedKindError: If a kind outside SUPPORTED_KINDS is declared
        """
        index = DeclarationIndex()
        for kind in SUPPORTED_KINDS:
            index.by_kind[kind] = {}

        for declaration in declarations:
            if declaration.partial or declaration.kind is DeclarationKind.INCLUDES:
                continue

            if declaration.kind not in SUPPORTED_KINDS:
                raise UnsupportedKindError(f"Unimplemented top-level item type: {declaration.kind.value} ({declaration.name})")

            of_kind = index.by_kind[declaration.kind]
            if declaration.name in of_kind:
                raise DuplicateNameError(declaration.kind.value, declaration.name)
            of_kind[declaration.name] = declaration
            index.by_name[declaration.name] = declaration

        logger.debug(
            "Indexed %s",
            ", ".join(f"{len(v)} {k.value}" for k, v in index.by_kind.items() if v) or "nothing",
        )
        return index

    def get(self, kind: DeclarationKind, name: str) -> Declaration | None:
        """Get a canonical declaration by kind and name."""
        return self.by_kind.get(kind, {}).get(name)

    def of_kind(self, kind: DeclarationKind) -> list[Declaration]:
        """All canonical declarations of a kind, in source order."""
        return list(self.by_kind.get(kind, {}).values())
