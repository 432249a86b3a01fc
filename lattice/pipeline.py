"""
Document parsing pipeline.

read -> parse -> extract -> count -> build hierarchy, timed end to end.
Read and parse failures propagate to the caller; a missing document body
is recovered as an empty result with a warning.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from lxml import etree

from lattice.core.document import ContentNode, DocumentStatistics, ParseResult
from lattice.extraction.ooxml import ExtractorConfig, OOXMLExtractor
from lattice.hierarchy.builder import HierarchyBuilder
from lattice.loaders import LoaderRegistry

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Turns a word-processing file into a ParseResult."""

    def __init__(self, config: ExtractorConfig | None = None) -> None:
        self.config = config or ExtractorConfig()

    def parse_document(self, path: Path) -> ParseResult:
        """
        Parse a file from disk.

        Raises:
            LoaderError: If the extension is not supported
            ReadError: If the file cannot be read
            MarkupParseError: If the content is not well-formed
        """
        path = Path(path)
        loader = LoaderRegistry.require_loader(path)

        start = time.perf_counter()
        root = loader.load(path)
        return self._process(root, start, path.name)

    def parse_bytes(
        self, data: bytes, filename: str, started_at: float | None = None
    ) -> ParseResult:
        """
        Parse content that was already read, e.g. an HTTP upload.

        The loader is chosen from the extension of ``filename``.

        Args:
            data: The file content
            filename: Name of the uploaded file
            started_at: ``time.perf_counter()`` value taken before the content
                was read, so the reported time covers the read as well.
                Defaults to now.
        """
        source = Path(filename)
        loader = LoaderRegistry.require_loader(source)

        start = time.perf_counter() if started_at is None else started_at
        root = loader.load_bytes(data, source_path=source)
        return self._process(root, start, source.name)

    def _process(self, root: etree._Element, start: float, source_name: str) -> ParseResult:
        extractor = OOXMLExtractor(self.config)
        nodes: list[ContentNode] = extractor.extract(root)

        # Counts come from the flat sequence, before nesting
        statistics = DocumentStatistics.from_nodes(nodes)
        forest = HierarchyBuilder.build(nodes)
        statistics.processing_time_ms = round((time.perf_counter() - start) * 1000)

        logger.info(
            "Processed %d elements from %s in %d ms",
            len(nodes),
            source_name,
            statistics.processing_time_ms,
        )

        return ParseResult(
            nodes=forest,
            statistics=statistics,
            source_name=source_name,
            element_count=len(nodes),
            warnings=list(extractor.warnings),
        )


def parse_document(path: Path, config: ExtractorConfig | None = None) -> ParseResult:
    """Parse a file with a one-off pipeline."""
    return DocumentPipeline(config).parse_document(path)
