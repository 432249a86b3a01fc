"""Core data models for Lattice."""

from lattice.core.document import (
    ContentNode,
    DocumentStatistics,
    NodeKind,
    ParseResult,
)

__all__ = [
    "ContentNode",
    "DocumentStatistics",
    "NodeKind",
    "ParseResult",
]
