"""
Closure Compiler externs backend.

Walks the merged graph and emits one block per external target, namespace
and interface, in declaration and member encounter order.
"""

from __future__ import annotations

import logging

from ..analyzer.merge_engine import MergedGraph, MergedInterface
from ..analyzer.type_resolver import TypeResolver
from ..config import ExternsConfig
from ..errors import MalformedDeclarationError, UnimplementedGenericError, UnsupportedMemberKindError
from ..idl_ast.nodes import Declaration, Member, MemberKind, TypeExpr
from .base import CodeBackend, ExternBlock, ExternDeclaration

logger = logging.getLogger(__name__)


class ClosureBackend(CodeBackend):
    """Closure Compiler externs backend."""

    TEMPLATE_LANG = "closure"
    FILE_EXTENSION = "js"

    # navigator.gpu can be missing on browsers that don't have support.
    FORCED_NULLABLE = {"!GPU": "?GPU"}

    def __init__(self, config: ExternsConfig):
        super().__init__(config)
        self.resolver: TypeResolver | None = None

    def generate(self, graph: MergedGraph) -> str:
        """Generate the externs document for a merged graph."""
        self.resolver = TypeResolver(graph)

        blocks = []
        for target, mixins in graph.external_includes.items():
            blocks.append(self._external_block(target, mixins))
        for namespace in graph.namespaces:
            blocks.append(self._namespace_block(namespace))
        for interface in graph.interfaces.values():
            blocks.append(self._interface_block(interface))

        lines = []
        if self.config.add_generation_comment:
            lines.append(self.prefix_template.render(GENERATION_COMMENT=self.config.generation_comment).rstrip("\n"))
        for block in blocks:
            logger.debug("Emitting %s (%d declarations)", block.name, len(block.declarations))
            lines.append("")
            body = self.render_block(block)
            if body:
                lines.append(body)
        return "\n".join(lines) + "\n"

    def translate_type(self, type_expr: TypeExpr) -> str:
        if self.resolver is None:
            raise RuntimeError("translate_type() called before generate()")
        if type_expr is None:
            raise MalformedDeclarationError("Member is missing its type")
        return self.resolver.resolve(type_expr)

    def _external_block(self, target: str, mixins: list[Declaration]) -> ExternBlock:
        block = ExternBlock(name=target)
        for mixin in mixins:
            for member in mixin.members:
                if member.kind is not MemberKind.ATTRIBUTE:
                    raise UnsupportedMemberKindError(
                        f"Unimplemented {target} mixin member type: {member.kind.value} (in {mixin.name})"
                    )
                annotation = self.translate_type(member.idl_type)
                annotation = self.FORCED_NULLABLE.get(annotation, annotation)
                block.declarations.append(
                    ExternDeclaration(tag="type", annotation=annotation, statement=f"{target}.prototype.{member.name};")
                )
        return block

    def _namespace_block(self, namespace: Declaration) -> ExternBlock:
        block = ExternBlock(name=namespace.name, header=[f"const {namespace.name} = {{}};"])
        for member in namespace.members:
            if member.kind is not MemberKind.CONST:
                raise UnsupportedMemberKindError(
                    f"Unimplemented namespace member type: {member.kind.value} (in {namespace.name})"
                )
            block.declarations.append(
                ExternDeclaration(
                    tag="type",
                    annotation=self.translate_type(member.idl_type),
                    statement=f"{namespace.name}.{member.name};",
                )
            )
        return block

    def _interface_block(self, interface: MergedInterface) -> ExternBlock:
        name = interface.name
        # Define constructor without args for simplicity
        block = ExternBlock(name=name)
        block.declarations.append(ExternDeclaration(tag="constructor", statement=f"function {name}() {{}}"))

        for member in interface.all_members():
            match member.kind:
                case MemberKind.CONSTRUCTOR:
                    # Constructor details are not modelled
                    continue
                case MemberKind.ATTRIBUTE:
                    block.declarations.append(
                        ExternDeclaration(
                            tag="type",
                            annotation=self.translate_type(member.idl_type),
                            statement=f"{name}.prototype.{member.name};",
                        )
                    )
                case MemberKind.OPERATION:
                    # Define operation without args for simplicity
                    block.declarations.append(
                        ExternDeclaration(
                            tag="return",
                            annotation=self.translate_type(member.idl_type),
                            statement=f"{name}.prototype.{member.name} = function() {{}};",
                        )
                    )
                case MemberKind.SETLIKE:
                    block.declarations.extend(self._setlike_declarations(name, member))
                case _:
                    raise UnsupportedMemberKindError(f"Unimplemented interface member type: {member.kind.value} (in {name})")
        return block

    def _setlike_declarations(self, name: str, member: Member) -> list[ExternDeclaration]:
        """Expand a setlike declaration (https://webidl.spec.whatwg.org/#js-setlike)."""
        if not member.readonly:
            raise UnsupportedMemberKindError(f"Unimplemented non-readonly setlike (in {name})")
        if len(member.type_args) != 1:
            raise UnimplementedGenericError(f"setlike in {name} must have exactly one type argument")

        iterable = f"!Iterable<{self.translate_type(member.type_args[0])}>"
        prototype = f"{name}.prototype"
        return [
            ExternDeclaration(tag="type", annotation="number", statement=f"{prototype}.size;"),
            ExternDeclaration(tag="return", annotation=iterable, statement=f"{prototype}.entries = function() {{}};"),
            ExternDeclaration(tag="return", annotation=iterable, statement=f"{prototype}.keys = function() {{}};"),
            ExternDeclaration(tag="return", annotation=iterable, statement=f"{prototype}.values = function() {{}};"),
            ExternDeclaration(tag="return", annotation="undefined", statement=f"{prototype}.forEach = function() {{}};"),
            ExternDeclaration(tag="return", annotation="boolean", statement=f"{prototype}.has = function() {{}};"),
        ]
