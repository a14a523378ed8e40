"""
Output module.

Writes generated externs to disk and checks them with the Closure Compiler.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .closure_checker import ClosureChecker

__all__ = [
    "AtomicWriter",
    "ClosureChecker",
]
