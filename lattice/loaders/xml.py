"""
Office Open XML loader using lxml.

Handles single-file word-processing XML: a bare document part or the
flat package Word writes with "Save As > Word XML Document".
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import ClassVar

from lxml import etree

from lattice.loaders.base import BaseLoader, LoaderRegistry, MarkupParseError

# A str has already been decoded, so its declared encoding no longer applies
_XML_DECLARATION_RE = re.compile(r"^\ufeff?\s*<\?xml[^>]*\?>")


def _make_parser() -> etree.XMLParser:
    # No DTD entity expansion, no network access
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


@LoaderRegistry.register
class XmlLoader(BaseLoader):
    """Parse word-processing XML text into an lxml element tree."""

    SUPPORTED_EXTENSIONS: ClassVar[list[str]] = [".xml"]
    LOADER_NAME: ClassVar[str] = "xml"

    def parse(self, data: bytes | str, source_path: Path | None = None) -> etree._Element:
        if isinstance(data, str):
            data = _XML_DECLARATION_RE.sub("", data, count=1).encode("utf-8")
        if not data.strip():
            raise MarkupParseError(
                "XML parsing error: document is empty",
                source_path=source_path,
            )

        try:
            return etree.fromstring(data, _make_parser())
        except etree.XMLSyntaxError as e:
            raise MarkupParseError(
                f"XML parsing error: {e}",
                source_path=source_path,
                details=str(e),
            ) from e
