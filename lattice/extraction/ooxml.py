"""
Paragraph extraction from word-processing markup.

Walks the paragraphs of a document body and turns each non-empty one
into a flat, leveled ContentNode. Heading numbers and list markers are
synthesized here from the inline style and numbering hints, so the
output already carries everything the hierarchy builder and the
renderers need.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from docx.oxml.ns import qn
from lxml import etree

from lattice.core.document import ContentNode, NodeKind
from lattice.loaders.base import StructureError

logger = logging.getLogger(__name__)

# Digits right after the style prefix: "Heading1", "Heading 2", "Heading3Char"
_LEVEL_SUFFIX_RE = re.compile(r"^\s*(\d+)")

# Deepest heading or list level kept; deeper style or ilvl values are clamped
MAX_LEVEL = 4096


# ---------------------------------------------------------------------------
# Tag matching
# ---------------------------------------------------------------------------


# WordprocessingML namespaces besides the transitional one python-docx knows
STRICT_W_NS = "http://purl.oclc.org/ooxml/wordprocessingml/main"
WORD2003_W_NS = "http://schemas.microsoft.com/office/word/2003/wordml"
_EXTRA_W_NAMESPACES = (STRICT_W_NS, WORD2003_W_NS)


def _qualified_names(name: str) -> tuple[str, ...]:
    """Every WordprocessingML-namespaced form of ``name``, then the bare one."""
    return (
        qn(f"w:{name}"),
        *(f"{{{ns}}}{name}" for ns in _EXTRA_W_NAMESPACES),
        name,
    )


def find_first(element: etree._Element, name: str) -> etree._Element | None:
    """Find the first element named ``w:<name>`` or ``<name>``, self included."""
    return next(element.iter(*_qualified_names(name)), None)


def find_descendant(element: etree._Element, name: str) -> etree._Element | None:
    """Find the first descendant named ``w:<name>`` or ``<name>``."""
    return next(element.iterdescendants(*_qualified_names(name)), None)


def iter_descendants(element: etree._Element, name: str) -> Iterator[etree._Element]:
    """Iterate descendants named ``w:<name>`` or ``<name>`` in document order."""
    return element.iterdescendants(*_qualified_names(name))


def get_val(element: etree._Element) -> str | None:
    """Read the ``w:val`` attribute in any WordprocessingML namespace, or a bare ``val``."""
    for attr in _qualified_names("val"):
        value = element.get(attr)
        if value is not None:
            return value
    return None


def locate_body(root: etree._Element) -> etree._Element:
    """
    Find the document body.

    Raises:
        StructureError: If the tree has no body element
    """
    body = find_first(root, "body")
    if body is None:
        raise StructureError(
            "Document body not found in XML",
            details=f"Root element: {etree.QName(root).localname}",
        )
    return body


# ---------------------------------------------------------------------------
# Configuration and numbering state
# ---------------------------------------------------------------------------


@dataclass
class ExtractorConfig:
    """Configuration for paragraph extraction."""

    heading_style_prefix: str = "Heading"
    bullet_glyph: str = "•"
    heading_depth: int = 10  # Initial counter slots; grows up to MAX_LEVEL

    # When True a numbered heading becomes a list item after its heading
    # counters have already advanced, leaving a gap in heading numbers.
    list_overrides_heading: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "heading_style_prefix": self.heading_style_prefix,
            "bullet_glyph": self.bullet_glyph,
            "heading_depth": self.heading_depth,
            "list_overrides_heading": self.list_overrides_heading,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExtractorConfig:
        return cls(
            heading_style_prefix=data.get("heading_style_prefix", "Heading"),
            bullet_glyph=data.get("bullet_glyph", "•"),
            heading_depth=data.get("heading_depth", 10),
            list_overrides_heading=data.get("list_overrides_heading", False),
        )


class HeadingCounters:
    """
    Per-level heading counters for one extraction run.

    Advancing level L zeroes every counter at or below L and bumps the
    counter for L. Skipped levels stay at zero and are left out of the
    rendered number, so levels [1, 3] give "1" then "1.1".
    """

    def __init__(self, depth: int = 10) -> None:
        self._counts: list[int] = [0] * min(max(depth, 1), MAX_LEVEL)

    def advance(self, level: int) -> str:
        """Record a heading at ``level`` (1-based) and return its number."""
        if not 1 <= level <= MAX_LEVEL:
            raise ValueError(f"Heading level must be between 1 and {MAX_LEVEL}, got {level}")
        if level > len(self._counts):
            self._counts.extend([0] * (level - len(self._counts)))

        for i in range(level, len(self._counts)):
            self._counts[i] = 0
        self._counts[level - 1] += 1

        return ".".join(str(count) for count in self._counts[:level] if count > 0)

    @property
    def counts(self) -> list[int]:
        return list(self._counts)


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


class OOXMLExtractor:
    """
    Extract flat content nodes from a word-processing element tree.

    Each call to extract() gets its own HeadingCounters, so one extractor
    instance can be reused across documents.
    """

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or ExtractorConfig()
        self._warnings: list[str] = []

    @property
    def warnings(self) -> list[str]:
        """Warnings recorded by the most recent extract() call."""
        return self._warnings

    def extract(self, root: etree._Element, strict: bool = False) -> list[ContentNode]:
        """
        Extract content nodes in document order.

        Args:
            root: Parsed tree containing a ``w:body`` (or ``body``) element
            strict: Raise StructureError instead of returning an empty list
                when the body is missing

        Returns:
            Flat list of childless ContentNodes
        """
        self._warnings = []

        try:
            body = locate_body(root)
        except StructureError as e:
            if strict:
                raise
            logger.warning("%s; treating as empty document", e)
            self._warnings.append(str(e))
            return []

        counters = HeadingCounters(self.config.heading_depth)
        nodes: list[ContentNode] = []

        for index, paragraph in enumerate(iter_descendants(body, "p")):
            node = self._process_paragraph(paragraph, index, counters)
            if node is not None:
                nodes.append(node)

        logger.debug("Extracted %d nodes from body", len(nodes))
        return nodes

    def _process_paragraph(
        self, paragraph: etree._Element, index: int, counters: HeadingCounters
    ) -> ContentNode | None:
        """Turn one paragraph element into a node, or None if it is empty."""
        text = self._paragraph_text(paragraph).strip()
        if not text:
            return None

        kind = NodeKind.PARAGRAPH
        level = 0
        numbering: str | None = None

        heading_level = self._heading_level(paragraph)
        if heading_level is not None:
            kind = NodeKind.HEADING
            level = heading_level
            numbering = counters.advance(level)

        if kind != NodeKind.HEADING or self.config.list_overrides_heading:
            num_pr = self._numbering_properties(paragraph)
            if num_pr is not None:
                kind = NodeKind.LIST_ITEM
                level = self._indent_level(num_pr) + 1
                numbering = self.config.bullet_glyph * level

        return ContentNode(
            id=ContentNode.make_id(index),
            kind=kind,
            level=level,
            text=text,
            numbering=numbering,
        )

    def _paragraph_text(self, paragraph: etree._Element) -> str:
        """Concatenate run text with no separator."""
        return "".join(t.text or "" for t in iter_descendants(paragraph, "t"))

    def _heading_level(self, paragraph: etree._Element) -> int | None:
        """Heading level from the style name, or None if not a heading."""
        style = find_descendant(paragraph, "pStyle")
        style_name = (get_val(style) if style is not None else None) or ""

        prefix = self.config.heading_style_prefix
        if not style_name.startswith(prefix):
            return None

        match = _LEVEL_SUFFIX_RE.match(style_name[len(prefix):])
        if not match:
            return 1
        digits = match.group(1)
        if len(digits) > len(str(MAX_LEVEL)):
            return MAX_LEVEL
        return min(int(digits), MAX_LEVEL) or 1

    def _numbering_properties(self, paragraph: etree._Element) -> etree._Element | None:
        # Word 2003 XML spells numbering properties "listPr"
        num_pr = find_descendant(paragraph, "numPr")
        if num_pr is None:
            num_pr = find_descendant(paragraph, "listPr")
        return num_pr

    def _indent_level(self, num_pr: etree._Element) -> int:
        ilvl = find_descendant(num_pr, "ilvl")
        raw = get_val(ilvl) if ilvl is not None else None
        try:
            indent = int(raw or 0)
        except ValueError:
            return 0
        return min(max(indent, 0), MAX_LEVEL - 1)


def extract_nodes(
    root: etree._Element, config: ExtractorConfig | None = None
) -> list[ContentNode]:
    """Convenience wrapper: extract with a fresh extractor."""
    return OOXMLExtractor(config).extract(root)
