"""
Hierarchy module.

Rebuilds document structure from the flat node sequence and provides
tree traversal and outline rendering.
"""

from lattice.hierarchy.builder import HierarchyBuilder, build_hierarchy
from lattice.hierarchy.tree import DocumentTree

__all__ = [
    "DocumentTree",
    "HierarchyBuilder",
    "build_hierarchy",
]
