"""
Pytest configuration and fixtures for Lattice tests.
"""

import tempfile
from pathlib import Path

import pytest

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def w_paragraph(text: str = "", style: str | None = None, ilvl: int | None = None, runs: list[str] | None = None) -> str:
    """Build one ``w:p`` element as a string."""
    props = ""
    if style is not None:
        props += f'<w:pStyle w:val="{style}"/>'
    if ilvl is not None:
        props += f'<w:numPr><w:ilvl w:val="{ilvl}"/><w:numId w:val="1"/></w:numPr>'
    ppr = f"<w:pPr>{props}</w:pPr>" if props else ""

    run_texts = runs if runs is not None else [text]
    body = "".join(f"<w:r><w:t xml:space=\"preserve\">{t}</w:t></w:r>" for t in run_texts)
    return f"<w:p>{ppr}{body}</w:p>"


def w_document(*paragraphs: str) -> str:
    """Wrap paragraph strings in a namespaced w:document/w:body."""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>'
        + "".join(paragraphs)
        + "</w:body></w:document>"
    )


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for file operations."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_xml() -> str:
    """A small report with headings, body text and a nested list."""
    return w_document(
        w_paragraph("Introduction", style="Heading1"),
        w_paragraph("This report covers the first quarter."),
        w_paragraph("Scope", style="Heading2"),
        w_paragraph("Hardware", ilvl=0),
        w_paragraph("Servers", ilvl=1),
        w_paragraph("   "),
        w_paragraph("Software", ilvl=0),
        w_paragraph("Results", style="Heading1"),
        w_paragraph("All targets were met."),
    )


@pytest.fixture
def unprefixed_xml() -> str:
    """The same kind of markup with no namespace prefixes at all."""
    return (
        "<document><body>"
        '<p><pPr><pStyle val="Heading1"/></pPr><r><t>Overview</t></r></p>'
        '<p><pPr><numPr><ilvl val="1"/></numPr></pPr><r><t>Point</t></r></p>'
        "<p><r><t>Plain</t></r></p>"
        "</body></document>"
    )


@pytest.fixture
def sample_xml_file(temp_dir: Path, sample_xml: str) -> Path:
    path = temp_dir / "report.xml"
    path.write_text(sample_xml, encoding="utf-8")
    return path


@pytest.fixture
def sample_docx_file(temp_dir: Path) -> Path:
    """A real .docx built with python-docx."""
    from docx import Document

    doc = Document()
    doc.add_heading("Overview", level=1)
    doc.add_paragraph("Opening paragraph.")
    doc.add_heading("Details", level=2)
    doc.add_paragraph("Closing paragraph.")

    path = temp_dir / "sample.docx"
    doc.save(str(path))
    return path
