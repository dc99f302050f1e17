"""
Data model exports for semresolver.

Example:
    >>> from semresolver.models import ROOT, DependencyEdge, LibraryNode
"""

from __future__ import annotations

from semresolver.models.node import ROOT, DependencyEdge, LibraryNode, NodeKey

__all__ = [
    "ROOT",
    "DependencyEdge",
    "LibraryNode",
    "NodeKey",
]
