"""Paragraph extraction from word-processing markup."""

from lattice.extraction.ooxml import (
    MAX_LEVEL,
    ExtractorConfig,
    HeadingCounters,
    OOXMLExtractor,
    extract_nodes,
    locate_body,
)

__all__ = [
    "MAX_LEVEL",
    "ExtractorConfig",
    "HeadingCounters",
    "OOXMLExtractor",
    "extract_nodes",
    "locate_body",
]
