"""
webidl2 AST parser.

Phase 1 of the pipeline: turn the JSON AST produced by the webidl2 parser
into declaration nodes without indexing, merging or resolving anything.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import MalformedDeclarationError, UnsupportedKindError, UnsupportedMemberKindError
from .nodes import Declaration, DeclarationKind, ExtAttr, Member, MemberKind, TypeExpr

logger = logging.getLogger(__name__)


class IdlParser:
    """Parses the webidl2 JSON AST into declaration nodes."""

    def parse(self, items: list[dict[str, Any]]) -> list[Declaration]:
        """
        Parse a list of webidl2 top-level items.

        Args:
            items: The decoded JSON AST (``webidl2.parse(text)``)

        Returns:
            Declarations in source order
        """
        declarations = []
        for position, item in enumerate(items):
            # webidl2 emits a trailing "eof" token in some versions
            if item.get("type") == "eof":
                continue
            declarations.append(self._parse_declaration(item, position))

        logger.debug("Parsed %d declarations", len(declarations))
        return declarations

    def _parse_declaration(self, item: dict[str, Any], position: int) -> Declaration:
        raw_kind = item.get("type")
        try:
            kind = DeclarationKind(raw_kind)
        except ValueError:
            raise UnsupportedKindError(f"Unsupported top-level declaration type: {raw_kind}") from None

        if kind is DeclarationKind.INCLUDES:
            if not item.get("target") or not item.get("includes"):
                raise MalformedDeclarationError(f"includes statement at position {position} needs a target and a mixin")
            return Declaration(
                kind=kind,
                target=item["target"],
                includes=item["includes"],
                ext_attrs=self._parse_ext_attrs(item),
                position=position,
            )

        if not item.get("name"):
            raise MalformedDeclarationError(f"Expected name for item of type: {kind.value}")

        declaration = Declaration(
            kind=kind,
            name=item["name"],
            partial=bool(item.get("partial", False)),
            ext_attrs=self._parse_ext_attrs(item),
            position=position,
        )

        match kind:
            case DeclarationKind.TYPEDEF:
                declaration.idl_type = self.parse_type(item.get("idlType"), f"typedef {declaration.name}")
            case DeclarationKind.ENUM:
                declaration.values = [self._enum_value(v) for v in item.get("values", [])]
            case _:
                declaration.members = [self._parse_member(m, declaration.name) for m in item.get("members", [])]

        return declaration

    def _parse_member(self, item: dict[str, Any], owner: str) -> Member:
        raw_kind = item.get("type")
        if raw_kind == "iterable" and item.get("async"):
            raw_kind = MemberKind.ASYNC_ITERABLE.value
        try:
            kind = MemberKind(raw_kind)
        except ValueError:
            raise UnsupportedMemberKindError(f"Unsupported member type in {owner}: {raw_kind}") from None

        member = Member(
            kind=kind,
            name=item.get("name") or "",
            readonly=bool(item.get("readonly", False)),
            ext_attrs=self._parse_ext_attrs(item),
        )

        context = f"{owner}.{member.name or kind.value}"
        raw_type = item.get("idlType")
        if kind in (MemberKind.SETLIKE, MemberKind.MAPLIKE, MemberKind.ITERABLE, MemberKind.ASYNC_ITERABLE):
            # Collection declarations carry their type arguments as a list
            member.type_args = [self.parse_type(t, context) for t in raw_type or []]
        elif raw_type is not None:
            member.idl_type = self.parse_type(raw_type, context)

        return member

    def parse_type(self, raw: Any, context: str = "") -> TypeExpr:
        """
        Parse a webidl2 type node.

        Args:
            raw: A type node dict, or a bare type name
            context: Where the type appears (for error messages)

        Returns:
            The parsed TypeExpr
        """
        if isinstance(raw, str):
            return TypeExpr(idl_type=raw)
        if not isinstance(raw, dict):
            raise MalformedDeclarationError(f"Expected a type for {context}, got {raw!r}")

        inner = raw.get("idlType")
        if isinstance(inner, list):
            idl_type: str | list[TypeExpr] = [self.parse_type(t, context) for t in inner]
        elif isinstance(inner, str):
            idl_type = inner
        elif isinstance(inner, dict):
            # A single nested node, e.g. a typedef'd generic
            idl_type = [self.parse_type(inner, context)]
        else:
            raise MalformedDeclarationError(f"Missing idlType for {context}")

        return TypeExpr(
            nullable=bool(raw.get("nullable", False)),
            union=bool(raw.get("union", False)),
            generic=raw.get("generic") or "",
            idl_type=idl_type,
            role=raw.get("type"),
        )

    def _parse_ext_attrs(self, item: dict[str, Any]) -> list[ExtAttr]:
        ext_attrs = item.get("extAttrs") or []
        # Older webidl2 releases wrap the list in {"items": [...]}
        if isinstance(ext_attrs, dict):
            ext_attrs = ext_attrs.get("items", [])
        return [ExtAttr(name=a.get("name", ""), rhs=a.get("rhs")) for a in ext_attrs]

    def _enum_value(self, value: Any) -> str:
        if isinstance(value, dict):
            return value.get("value", "")
        return str(value)
