"""Document loaders for Lattice."""

from lattice.loaders.base import (
    BaseLoader,
    LoaderError,
    LoaderRegistry,
    MarkupParseError,
    ReadError,
    StructureError,
)
from lattice.loaders.docx import DocxLoader
from lattice.loaders.xml import XmlLoader

__all__ = [
    "BaseLoader",
    "LoaderError",
    "LoaderRegistry",
    "MarkupParseError",
    "ReadError",
    "StructureError",
    "DocxLoader",
    "XmlLoader",
]
