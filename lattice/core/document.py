"""
Document model for Lattice.

This module defines the data structures that flow through the parsing
pipeline: content nodes, document statistics and the final parse result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeKind(Enum):
    """Kinds of content nodes extracted from a document."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list-item"


@dataclass(eq=False)
class ContentNode:
    """
    A unit of structured content.

    Nodes are created flat and childless by the extractor and are then
    re-parented into a forest by the hierarchy builder.
    """

    id: str
    kind: NodeKind
    level: int
    text: str
    numbering: str | None = None
    children: list[ContentNode] = field(default_factory=list)

    @staticmethod
    def make_id(index: int) -> str:
        return f"node-{index}"

    def add_child(self, child: ContentNode) -> None:
        """Append a child node in document order."""
        self.children.append(child)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def _fields(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "level": self.level,
            "content": self.text,
            "numbering": self.numbering,
        }

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """
        Convert to a dictionary, optionally with nested children.

        Children are filled in from an explicit stack, so arbitrarily deep
        subtrees do not hit the recursion limit.
        """
        result = self._fields()
        if not include_children:
            return result

        result["children"] = []
        stack: list[tuple[ContentNode, dict[str, Any]]] = [(self, result)]
        while stack:
            node, data = stack.pop()
            for child in node.children:
                child_data = child._fields()
                child_data["children"] = []
                data["children"].append(child_data)
                stack.append((child, child_data))
        return result

    def __repr__(self) -> str:
        preview = self.text[:40]
        return (
            f"<ContentNode {self.id} {self.kind.value} level={self.level} "
            f"'{preview}' children={len(self.children)}>"
        )


@dataclass
class DocumentStatistics:
    """
    Summary counts for a parsed document.

    Counts are taken from the flat node sequence, before hierarchy
    building, so nesting never changes them.
    """

    headings: int = 0
    paragraphs: int = 0
    list_items: int = 0
    processing_time_ms: int = 0

    @classmethod
    def from_nodes(
        cls, nodes: list[ContentNode], processing_time_ms: int = 0
    ) -> DocumentStatistics:
        """Count headings, paragraphs and list items in a flat sequence."""
        stats = cls(processing_time_ms=processing_time_ms)
        for node in nodes:
            if node.kind == NodeKind.HEADING:
                stats.headings += 1
            elif node.kind == NodeKind.LIST_ITEM:
                stats.list_items += 1
            else:
                stats.paragraphs += 1
        return stats

    @property
    def total(self) -> int:
        return self.headings + self.paragraphs + self.list_items

    def summary(self) -> str:
        """One-sentence structure overview for display."""
        return (
            f"This document contains {self.headings} headings forming the "
            f"document structure, {self.paragraphs} paragraphs of content, "
            f"and {self.list_items} numbered or bulleted list items."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "headings": self.headings,
            "paragraphs": self.paragraphs,
            "list_items": self.list_items,
            "processing_time_ms": self.processing_time_ms,
        }


@dataclass
class ParseResult:
    """The forest and statistics produced by one pipeline run."""

    nodes: list[ContentNode]
    statistics: DocumentStatistics
    source_name: str = "document"
    element_count: int = 0
    warnings: list[str] = field(default_factory=list)

    def flat_nodes(self) -> list[dict[str, Any]]:
        """
        Flatten the forest into document-order records.

        Each record carries its parent id and the ids of its children in
        place of nested child dictionaries, so encoding stays shallow
        however deep the forest is.
        """
        records: list[dict[str, Any]] = []
        stack: list[tuple[ContentNode, str | None]] = [
            (node, None) for node in reversed(self.nodes)
        ]
        while stack:
            node, parent_id = stack.pop()
            record = node.to_dict(include_children=False)
            record["parent_id"] = parent_id
            record["children"] = [child.id for child in node.children]
            records.append(record)
            stack.extend((child, node.id) for child in reversed(node.children))
        return records

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_name": self.source_name,
            "element_count": self.element_count,
            "statistics": self.statistics.to_dict(),
            "warnings": list(self.warnings),
            "roots": [node.id for node in self.nodes],
            "nodes": self.flat_nodes(),
        }
