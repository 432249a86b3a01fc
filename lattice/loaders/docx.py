"""
DOCX loader using python-docx.

Only the main document part is read. Styles, numbering definitions and
the other package parts are never consulted; the extractor works from
the inline hints on each paragraph.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import ClassVar

from docx import Document
from lxml import etree

from lattice.loaders.base import BaseLoader, LoaderRegistry, MarkupParseError


@LoaderRegistry.register
class DocxLoader(BaseLoader):
    """Open a Word package and hand back its document part element."""

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".docx"]
    LOADER_NAME: ClassVar[str] = "docx"

    def parse(self, data: bytes, source_path: Path | None = None) -> etree._Element:
        try:
            doc = Document(io.BytesIO(data))
        except Exception as e:
            raise MarkupParseError(
                f"Failed to open DOCX package: {e}",
                source_path=source_path,
                details=str(e),
            ) from e

        # CT_Document is an lxml element subclass rooted at w:document
        return doc.element
