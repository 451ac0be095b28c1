"""
Document extraction tests — PDF and plain-text intake, limits and quality grading.
"""

import io

import pytest

from estimator.document_extractor import DocumentExtractor
from estimator.exceptions import DocumentTooLargeError, UnsupportedDocumentError


def _make_test_pdf(text: str = "Test PDF content", pages: int = 1) -> bytes:
    """Create a minimal valid PDF in memory for testing."""
    from fpdf import FPDF
    pdf = FPDF()
    for _ in range(pages):
        pdf.add_page()
        pdf.set_font("Helvetica", "", 10)
        for line in text.split("\n"):
            safe_line = line.encode("latin-1", errors="replace").decode("latin-1")
            pdf.cell(0, 5, safe_line, new_x="LMARGIN", new_y="NEXT")
    return bytes(pdf.output())


REQUIREMENTS = "\n".join([
    "Project: Field Service Scheduler",
    "Users log in with SSO and see a dashboard of today's jobs.",
    "Dispatchers assign technicians on a drag-and-drop calendar.",
    "Technicians complete checklists on tablets, including photo capture.",
    "Integrations: Salesforce, Google Maps, Twilio SMS.",
])


def test_pdf_extraction():
    result = DocumentExtractor().extract_text_from_bytes(_make_test_pdf(REQUIREMENTS), "scope.pdf")

    assert "Field Service Scheduler" in result["text"]
    assert result["page_count"] == 1
    assert result["filename"] == "scope.pdf"
    assert result["extraction_quality"] == "good"


def test_multi_page_pdf():
    result = DocumentExtractor().extract_text_from_bytes(_make_test_pdf(REQUIREMENTS, pages=3), "scope.PDF")
    assert result["page_count"] == 3
    assert result["text"].count("Field Service Scheduler") == 3


def test_text_formats():
    extractor = DocumentExtractor()
    for filename in ("notes.txt", "README.md", "features.csv"):
        result = extractor.extract_text_from_bytes(REQUIREMENTS.encode("utf-8"), filename)
        assert result["text"] == REQUIREMENTS
        assert result["page_count"] == 1


def test_unsupported_extension_rejected_before_reading():
    class Unreadable(bytes):
        def __len__(self):
            raise AssertionError("size checked before extension")

    with pytest.raises(UnsupportedDocumentError, match="Unsupported file type"):
        DocumentExtractor().extract_text_from_bytes(Unreadable(b"data"), "design.docx")


def test_unsupported_is_value_error():
    with pytest.raises(ValueError):
        DocumentExtractor().check_extension("archive.zip")


def test_size_limit():
    extractor = DocumentExtractor(max_file_size_mb=1)
    with pytest.raises(DocumentTooLargeError, match="too large"):
        extractor.extract_text_from_bytes(b"x" * (2 * 1024 * 1024), "big.txt")


def test_read_upload_stops_past_limit():
    """An oversized stream is rejected after reading at most limit + 1 bytes."""
    extractor = DocumentExtractor(max_file_size_mb=1)
    stream = io.BytesIO(b"x" * (3 * 1024 * 1024))

    with pytest.raises(DocumentTooLargeError):
        extractor.read_upload(stream)
    assert stream.tell() == extractor.max_bytes + 1


def test_read_upload_within_limit():
    extractor = DocumentExtractor(max_file_size_mb=1)
    assert extractor.read_upload(io.BytesIO(b"scope text")) == b"scope text"
    exact = b"x" * extractor.max_bytes
    assert extractor.read_upload(io.BytesIO(exact)) == exact


def test_corrupt_pdf():
    with pytest.raises(ValueError):
        DocumentExtractor().extract_text_from_bytes(b"not really a pdf", "broken.pdf")


@pytest.mark.parametrize("chars,pages,expected", [
    (500, 1, "good"), (60, 1, "fair"), (10, 1, "poor"), (150, 3, "fair"), (0, 0, "poor"),
])
def test_quality_grading(chars, pages, expected):
    assert DocumentExtractor()._assess_quality("a" * chars, pages) == expected
