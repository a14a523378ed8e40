"""
AST node definitions for WebIDL declarations.

These nodes mirror the structure produced by the webidl2 parser before
any indexing, merging or type resolution takes place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeclarationKind(str, Enum):
    """Kind of a top-level WebIDL declaration (webidl2 ``type`` field)."""

    INTERFACE = "interface"
    INTERFACE_MIXIN = "interface mixin"
    NAMESPACE = "namespace"
    DICTIONARY = "dictionary"
    ENUM = "enum"
    TYPEDEF = "typedef"
    INCLUDES = "includes"
    # Recognised so they can be rejected with a clear error
    CALLBACK = "callback"
    CALLBACK_INTERFACE = "callback interface"


class MemberKind(str, Enum):
    """Kind of a member inside an interface, mixin or namespace."""

    ATTRIBUTE = "attribute"
    OPERATION = "operation"
    CONSTRUCTOR = "constructor"
    CONST = "const"
    SETLIKE = "setlike"
    FIELD = "field"  # dictionary members
    MAPLIKE = "maplike"
    ITERABLE = "iterable"
    ASYNC_ITERABLE = "async_iterable"


@dataclass
class TypeExpr:
    """A WebIDL type expression.

    ``idl_type`` is either a bare name (for a plain reference) or a list of
    nested type expressions (for unions and generics).
    """

    nullable: bool = False
    union: bool = False
    generic: str = ""  # "", "FrozenArray", "sequence", "Promise", ...
    idl_type: str | list[TypeExpr] = ""

    # Position the type appears in (e.g. "attribute-type"), for error messages
    role: str | None = None

    def describe(self) -> str:
        """Render the expression back in WebIDL-like syntax."""
        if isinstance(self.idl_type, str):
            inner = self.idl_type
        else:
            inner = ", ".join(t.describe() for t in self.idl_type)
        if self.union:
            text = f"({' or '.join(t.describe() for t in self.idl_type)})"
        elif self.generic:
            text = f"{self.generic}<{inner}>"
        else:
            text = inner
        return text + ("?" if self.nullable else "")


@dataclass
class ExtAttr:
    """An extended attribute such as ``[Exposed=Window]``."""

    name: str = ""
    rhs: Any = None


@dataclass
class Member:
    """A member of an interface, interface mixin or namespace."""

    kind: MemberKind = MemberKind.ATTRIBUTE
    name: str = ""
    idl_type: TypeExpr | None = None

    # For setlike: the element types (always exactly one for setlike)
    type_args: list[TypeExpr] = field(default_factory=list)

    readonly: bool = False
    ext_attrs: list[ExtAttr] = field(default_factory=list)


@dataclass
class Declaration:
    """A top-level WebIDL declaration."""

    kind: DeclarationKind = DeclarationKind.INTERFACE
    name: str = ""
    partial: bool = False

    members: list[Member] = field(default_factory=list)
    ext_attrs: list[ExtAttr] = field(default_factory=list)

    # For typedefs
    idl_type: TypeExpr | None = None

    # For enums
    values: list[str] = field(default_factory=list)

    # For includes edges: "<target> includes <includes>;"
    target: str = ""
    includes: str = ""

    # Position in the source declaration list
    position: int = 0

    def describe(self) -> str:
        """Short human readable label used in error messages."""
        if self.kind is DeclarationKind.INCLUDES:
            return f"{self.target} includes {self.includes}"
        prefix = "partial " if self.partial else ""
        return f"{prefix}{self.kind.value} {self.name}"
