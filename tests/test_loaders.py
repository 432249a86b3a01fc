"""
Tests for Lattice document loaders.
"""

from pathlib import Path

import pytest

from lattice.loaders import LoaderRegistry
from lattice.loaders.base import LoaderError, MarkupParseError, ReadError
from lattice.loaders.docx import DocxLoader
from lattice.loaders.xml import XmlLoader


class TestLoaderRegistry:
    """Tests for LoaderRegistry."""

    def test_supported_extensions(self):
        assert LoaderRegistry.supported_extensions() == [".docx", ".xml"]

    def test_get_loader_for_xml(self):
        assert isinstance(LoaderRegistry.get_loader(Path("doc.XML")), XmlLoader)

    def test_get_loader_for_docx(self):
        assert isinstance(LoaderRegistry.get_loader(Path("doc.docx")), DocxLoader)

    def test_get_loader_for_unknown(self):
        assert LoaderRegistry.get_loader(Path("doc.pdf")) is None

    def test_require_loader_unknown_raises(self):
        with pytest.raises(LoaderError, match="No loader available"):
            LoaderRegistry.require_loader(Path("notes.txt"))

    def test_loader_names(self):
        assert LoaderRegistry.loader_names() == {".docx": "docx", ".xml": "xml"}

    def test_later_registration_replaces_extension(self):
        class OtherXmlLoader(XmlLoader):
            LOADER_NAME = "other-xml"

        try:
            LoaderRegistry.register(OtherXmlLoader)
            assert isinstance(LoaderRegistry.get_loader(Path("doc.xml")), OtherXmlLoader)
        finally:
            LoaderRegistry.register(XmlLoader)
        assert type(LoaderRegistry.get_loader(Path("doc.xml"))) is XmlLoader


class TestXmlLoader:
    """Tests for XmlLoader."""

    def test_parse_bytes(self, sample_xml):
        root = XmlLoader().load_bytes(sample_xml.encode("utf-8"))
        assert root.tag.endswith("document")

    def test_parse_str(self, unprefixed_xml):
        assert XmlLoader().parse(unprefixed_xml).tag == "document"

    def test_parse_str_ignores_declared_encoding(self):
        text = '<?xml version="1.0" encoding="UTF-16"?>\n<document><body/></document>'
        root = XmlLoader().parse(text)
        assert root.tag == "document"
        assert root[0].tag == "body"

    def test_parse_str_keeps_non_ascii_text(self):
        text = '<?xml version="1.0" encoding="ISO-8859-1"?><t>caf\u00e9</t>'
        assert XmlLoader().parse(text).text == "caf\u00e9"

    def test_load_file(self, sample_xml_file):
        root = XmlLoader().load(sample_xml_file)
        assert root is not None

    def test_malformed_xml(self):
        with pytest.raises(MarkupParseError) as exc_info:
            XmlLoader().parse(b"<document><body></document>")
        assert str(exc_info.value).startswith("XML parsing error:")
        assert exc_info.value.details

    def test_empty_content(self):
        with pytest.raises(MarkupParseError, match="empty"):
            XmlLoader().parse(b"   ")

    def test_missing_file(self, temp_dir):
        with pytest.raises(ReadError) as exc_info:
            XmlLoader().load(temp_dir / "absent.xml")
        assert exc_info.value.source_path == temp_dir / "absent.xml"

    def test_wrong_extension(self, temp_dir):
        path = temp_dir / "doc.txt"
        path.write_text("<body/>")
        with pytest.raises(LoaderError, match="Unsupported file type"):
            XmlLoader().load(path)

    def test_entities_not_expanded(self):
        xml = (
            b'<?xml version="1.0"?><!DOCTYPE d [<!ENTITY e "expanded">]>'
            b"<body><p><r><t>&e;</t></r></p></body>"
        )
        root = XmlLoader().parse(xml)
        t = next(root.iter("t"))
        assert t.text != "expanded"

    def test_error_to_dict(self):
        error = MarkupParseError("XML parsing error: bad", source_path=Path("a.xml"), details="bad")
        data = error.to_dict()
        assert data["type"] == "MarkupParseError"
        assert data["source_path"] == "a.xml"


class TestDocxLoader:
    """Tests for DocxLoader."""

    def test_load_docx(self, sample_docx_file):
        root = DocxLoader().load(sample_docx_file)
        assert root.tag.endswith("}document")

    def test_not_a_package(self):
        with pytest.raises(MarkupParseError, match="Failed to open DOCX"):
            DocxLoader().parse(b"plain text, not a zip")
