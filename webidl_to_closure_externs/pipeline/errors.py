"""
Errors raised while indexing, merging, resolving and emitting externs.

Every error is fatal: the pipeline has no recovery policy, and any output
produced before the failure must be discarded.
"""

from __future__ import annotations


class ExternsError(Exception):
    """Base class for all externs generation failures."""

    pass


class MalformedDeclarationError(ExternsError):
    """An AST object is missing a field the pipeline requires."""

    pass


class DuplicateNameError(ExternsError):
    """Two non-partial declarations of the same kind share a name."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"Duplicate {kind} name: {name}")
        self.kind = kind
        self.name = name


class UnsupportedKindError(ExternsError):
    """A declaration kind outside the supported set appears at top level."""

    pass


class UnsupportedPartialKindError(ExternsError):
    """A partial declaration of a kind that cannot be folded."""

    pass


class UnknownMixinError(ExternsError):
    """An includes statement names an interface mixin that does not exist."""

    pass


class UnknownIncludeTargetError(ExternsError):
    """An includes statement targets an interface that does not exist."""

    pass


class UnknownPartialTargetError(ExternsError):
    """A partial declaration extends a declaration that does not exist."""

    pass


class UnknownBuiltinError(ExternsError):
    """A type name is neither declared nor a recognised builtin."""

    pass


class UnimplementedGenericError(ExternsError):
    """A generic container outside the supported subset."""

    pass


class UnimplementedTypeRoleError(ExternsError):
    """A type expression shape or declaration kind that cannot be annotated.

    Raised for nullable builtins, nullable unions, nullable typedefs and
    declarations such as dictionaries reached in type position.
    """

    pass


class UnsupportedMemberKindError(UnimplementedTypeRoleError):
    """A member kind that is not supported where it appears."""

    pass


class CyclicTypeError(ExternsError):
    """A typedef chain refers back to itself."""

    def __init__(self, chain: list[str]):
        super().__init__(f"Cyclic typedef chain: {' -> '.join(chain)}")
        self.chain = chain


class ClosureCheckError(ExternsError):
    """The Closure Compiler rejected the generated externs."""

    pass
