"""
Lattice: structure parser for Office Open XML word-processing documents.

Extracts headings, paragraphs and list items, synthesizes heading numbers
and list markers, and rebuilds the document outline as a tree.
"""

from lattice.core.document import ContentNode, DocumentStatistics, NodeKind, ParseResult
from lattice.pipeline import DocumentPipeline, parse_document

__version__ = "0.1.0"

__all__ = [
    "ContentNode",
    "DocumentPipeline",
    "DocumentStatistics",
    "NodeKind",
    "ParseResult",
    "parse_document",
]
