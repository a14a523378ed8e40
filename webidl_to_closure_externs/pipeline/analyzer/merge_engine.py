"""
Merge engine.

Folds includes statements and partial declarations into their canonical
targets. The input declarations are never mutated: merged records are
built by copy-and-append into a new MergedGraph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ..errors import UnknownIncludeTargetError, UnknownMixinError, UnknownPartialTargetError, UnsupportedPartialKindError
from ..idl_ast.nodes import Declaration, DeclarationKind, Member
from .declaration_index import DeclarationIndex

logger = logging.getLogger(__name__)

DEFAULT_EXTERNAL_TARGETS = ("Navigator", "WorkerNavigator")

# Partials of these kinds contribute members, not just extended attributes
_MEMBER_PARTIAL_KINDS = (DeclarationKind.INTERFACE, DeclarationKind.INTERFACE_MIXIN)


@dataclass
class MergedInterface:
    """An interface with its owned mixins attached in includes order."""

    declaration: Declaration
    mixins: list[Declaration] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.declaration.name

    def all_members(self) -> list[Member]:
        """Members of every owned mixin, then the interface's own members."""
        members = []
        for mixin in self.mixins:
            members.extend(mixin.members)
        members.extend(self.declaration.members)
        return members


@dataclass
class MergedGraph:
    """Read-only result of merging, shared by the resolver and the emitter."""

    index: DeclarationIndex
    interfaces: dict[str, MergedInterface] = field(default_factory=dict)

    # External pseudo-target -> mixins injected onto it, in includes order
    external_includes: dict[str, list[Declaration]] = field(default_factory=dict)

    def lookup(self, name: str) -> Declaration | None:
        """Find a declaration of any kind by name."""
        return self.index.by_name.get(name)

    @property
    def namespaces(self) -> list[Declaration]:
        return self.index.of_kind(DeclarationKind.NAMESPACE)


class MergeEngine:
    """Builds a MergedGraph from the source declarations and their index."""

    def __init__(self, external_targets: list[str] | tuple[str, ...] = DEFAULT_EXTERNAL_TARGETS):
        """
        Initialize the engine.

        Args:
            external_targets: Names that includes statements may target without
                a declared interface (objects not modelled as interfaces)
        """
        self.external_targets = list(external_targets)

    def merge(self, declarations: list[Declaration], index: DeclarationIndex) -> MergedGraph:
        """
        Fold includes and partials into a new merged graph.

        Args:
            declarations: Parsed declarations in source order
            index: Index over the canonical declarations

        Returns:
            The merged graph

        Raises:
            UnknownMixinError: If an includes statement names a missing mixin
            UnknownIncludeTargetError: If an includes statement targets a missing interface
            UnknownPartialTargetError: If a partial extends a missing declaration
            UnsupportedPartialKindError: If a partial has a kind that cannot be folded
        """
        edges = self._collect_includes(declarations, index)
        merged_index = self._fold_partials(declarations, index)

        graph = MergedGraph(index=merged_index)
        for target in self.external_targets:
            graph.external_includes[target] = []
        for declaration in merged_index.of_kind(DeclarationKind.INTERFACE):
            graph.interfaces[declaration.name] = MergedInterface(declaration=declaration)

        for target, mixin_name in edges:
            mixin = merged_index.by_kind[DeclarationKind.INTERFACE_MIXIN][mixin_name]
            if target in graph.external_includes:
                graph.external_includes[target].append(mixin)
            else:
                graph.interfaces[target].mixins.append(mixin)

        return graph

    def _collect_includes(self, declarations: list[Declaration], index: DeclarationIndex) -> list[tuple[str, str]]:
        """Validate includes statements and return (target, mixin) pairs in source order."""
        edges = []
        for include in declarations:
            if include.kind is not DeclarationKind.INCLUDES:
                continue

            if index.get(DeclarationKind.INTERFACE_MIXIN, include.includes) is None:
                raise UnknownMixinError(f"Unknown include mixin '{include.includes}' in '{include.describe()}'")

            if include.target not in self.external_targets and index.get(DeclarationKind.INTERFACE, include.target) is None:
                raise UnknownIncludeTargetError(f"Unknown include target interface '{include.target}' in '{include.describe()}'")

            logger.debug("Folding %s", include.describe())
            edges.append((include.target, include.includes))
        return edges

    def _fold_partials(self, declarations: list[Declaration], index: DeclarationIndex) -> DeclarationIndex:
        """Return a new index whose declarations carry their partials' content."""
        merged = DeclarationIndex(
            by_kind={kind: dict(of_kind) for kind, of_kind in index.by_kind.items()},
        )

        for partial in declarations:
            if not partial.partial:
                continue

            if partial.kind not in _MEMBER_PARTIAL_KINDS:
                raise UnsupportedPartialKindError(f"Unimplemented partial type: {partial.kind.value} ({partial.name})")

            canonical = merged.get(partial.kind, partial.name)
            if canonical is None:
                raise UnknownPartialTargetError(f"No {partial.kind.value} named '{partial.name}' for {partial.describe()}")

            logger.debug("Folding %s", partial.describe())
            merged.by_kind[partial.kind][partial.name] = replace(
                canonical,
                ext_attrs=[*canonical.ext_attrs, *partial.ext_attrs],
                members=[*canonical.members, *partial.members],
            )

        # Rebuild the global table in original order so it points at merged records
        for declaration in index.by_name.values():
            merged.by_name[declaration.name] = merged.by_kind[declaration.kind][declaration.name]

        return merged
