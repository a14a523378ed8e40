"""
Output backends.

Render a merged declaration graph as externs text.
"""

from __future__ import annotations

from .base import CodeBackend, ExternBlock, ExternDeclaration
from .closure_backend import ClosureBackend

__all__ = [
    "CodeBackend",
    "ClosureBackend",
    "ExternBlock",
    "ExternDeclaration",
]
