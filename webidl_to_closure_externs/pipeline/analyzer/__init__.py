"""
Analyzer module.

Contains declaration indexing, partial/includes merging and type resolution.
"""

from __future__ import annotations

from .declaration_index import SUPPORTED_KINDS, DeclarationIndex
from .merge_engine import DEFAULT_EXTERNAL_TARGETS, MergedGraph, MergedInterface, MergeEngine
from .type_resolver import BUILTIN_TYPES, GENERIC_TYPES, TypeResolver

__all__ = [
    "BUILTIN_TYPES",
    "DEFAULT_EXTERNAL_TARGETS",
    "GENERIC_TYPES",
    "SUPPORTED_KINDS",
    "DeclarationIndex",
    "MergeEngine",
    "MergedGraph",
    "MergedInterface",
    "TypeResolver",
]
