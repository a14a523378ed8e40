"""
IDL AST module.

Contains the declaration node definitions and the webidl2 AST parser.
"""

from __future__ import annotations

from .nodes import Declaration, DeclarationKind, ExtAttr, Member, MemberKind, TypeExpr
from .parser import IdlParser

__all__ = [
    "Declaration",
    "DeclarationKind",
    "ExtAttr",
    "Member",
    "MemberKind",
    "TypeExpr",
    "IdlParser",
]
