"""
Type resolver.

Maps WebIDL type expressions to Closure type annotations. Resolution is a
pure function of the merged graph and its inputs: nothing is cached and
nothing in the graph is modified.
"""

from __future__ import annotations

from ..errors import CyclicTypeError, UnimplementedGenericError, UnimplementedTypeRoleError, UnknownBuiltinError
from ..idl_ast.nodes import Declaration, DeclarationKind, TypeExpr
from .merge_engine import MergedGraph

# Builtin WebIDL types and types defined by other specs
BUILTIN_TYPES = {
    # Primitives
    "undefined": "undefined",
    "boolean": "boolean",
    "unsigned long": "number",
    "unsigned long long": "number",
    "DOMString": "string",
    "USVString": "string",
    # Definitions from other specs
    "HTMLCanvasElement": "!HTMLCanvasElement",
    "OffscreenCanvas": "!OffscreenCanvas",
    "ArrayBuffer": "!ArrayBuffer",
    "EventHandler": "!Function",
}

# Generic containers -> Closure template type
GENERIC_TYPES = {
    "FrozenArray": "Array",
    "sequence": "Array",
    "Promise": "Promise",
}


class TypeResolver:
    """Resolves type expressions against a merged graph."""

    def __init__(self, graph: MergedGraph):
        self.graph = graph

    def resolve(self, type_ref: TypeExpr | Declaration | str, outer_nullable: bool = False) -> str:
        """
        Resolve a type to a Closure annotation.

        Args:
            type_ref: A type expression, a declaration, or a bare type name
            outer_nullable: Whether an enclosing expression made the type nullable

        Returns:
            The annotation, without surrounding braces (e.g. "?GPUBuffer")
        """
        return self._resolve(type_ref, outer_nullable, ())

    def _resolve(self, type_ref: TypeExpr | Declaration | str, outer_nullable: bool, typedefs: tuple[str, ...]) -> str:
        if isinstance(type_ref, str):
            declaration = self.graph.lookup(type_ref)
            if declaration is None:
                return self._resolve_builtin(type_ref, outer_nullable)
            return self._resolve_declaration(declaration, outer_nullable, typedefs)
        if isinstance(type_ref, Declaration):
            return self._resolve_declaration(type_ref, outer_nullable, typedefs)
        return self._resolve_expr(type_ref, outer_nullable, typedefs)

    def _resolve_builtin(self, name: str, outer_nullable: bool) -> str:
        if outer_nullable:
            raise UnimplementedTypeRoleError(f"Nullable builtin type is not supported: {name}?")
        if name not in BUILTIN_TYPES:
            raise UnknownBuiltinError(f"Unknown builtin name: {name}")
        return BUILTIN_TYPES[name]

    def _resolve_declaration(self, declaration: Declaration, outer_nullable: bool, typedefs: tuple[str, ...]) -> str:
        match declaration.kind:
            case DeclarationKind.TYPEDEF:
                if outer_nullable:
                    raise UnimplementedTypeRoleError(f"Nullable typedef is not supported: {declaration.name}?")
                if declaration.name in typedefs:
                    raise CyclicTypeError([*typedefs, declaration.name])
                if declaration.idl_type is None:
                    raise UnimplementedTypeRoleError(f"typedef {declaration.name} has no type")
                return self._resolve(declaration.idl_type, False, (*typedefs, declaration.name))
            case DeclarationKind.INTERFACE:
                return ("?" if outer_nullable else "!") + declaration.name
            case DeclarationKind.ENUM:
                # Enums are string-valued
                return "string"
            case _:
                raise UnimplementedTypeRoleError(f"Unimplemented type role: {declaration.kind.value} {declaration.name}")

    def _resolve_expr(self, expr: TypeExpr, outer_nullable: bool, typedefs: tuple[str, ...]) -> str:
        if expr.union:
            if expr.nullable or outer_nullable:
                raise UnimplementedTypeRoleError(f"Nullable union is not supported: {expr.describe()}")
            return "|".join(self._resolve(t, outer_nullable, typedefs) for t in expr.idl_type)

        nullable = expr.nullable or outer_nullable
        prefix = "?" if nullable else "!"

        if not expr.generic:
            inner = expr.idl_type
            if isinstance(inner, list):
                inner = self._single_argument(expr)
            return self._resolve(inner, nullable, typedefs)

        container = GENERIC_TYPES.get(expr.generic)
        if container is None:
            raise UnimplementedGenericError(f"Unimplemented generic: {expr.generic} ({expr.describe()})")
        element = self._resolve(self._single_argument(expr), False, typedefs)
        return f"{prefix}{container}<{element}>"

    def _single_argument(self, expr: TypeExpr) -> TypeExpr | str:
        """The one type argument of a generic; anything else is unsupported."""
        if isinstance(expr.idl_type, str):
            if expr.generic:
                raise UnimplementedGenericError(f"Generic {expr.generic} is missing its type argument")
            return expr.idl_type
        if len(expr.idl_type) != 1:
            raise UnimplementedGenericError(f"Expected exactly one type argument, got {len(expr.idl_type)}: {expr.describe()}")
        return expr.idl_type[0]
