"""
Document Extractor — text from uploaded requirements documents.

PDFs go through pdfplumber, which keeps tables and multi-column layouts
readable. Plain-text formats (.txt, .md, .csv) are decoded as UTF-8.

Does NOT implement OCR — a scanned PDF comes back with extraction_quality
"poor" so the caller can warn the user.
"""

import io
import logging
import os

import pdfplumber

from .config import settings
from .exceptions import DocumentTooLargeError, UnsupportedDocumentError

logger = logging.getLogger(__name__)

MAX_PAGES = 500
PDF_EXTENSIONS = (".pdf",)
TEXT_EXTENSIONS = (".txt", ".md", ".csv")
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS + TEXT_EXTENSIONS


class DocumentExtractor:
    """
    Extracts text from requirement documents.

    The extension is checked before any bytes are read, then the size,
    then the content itself.
    """

    def __init__(self, max_file_size_mb: float = None):
        self.max_file_size_mb = max_file_size_mb or settings.MAX_UPLOAD_MB

    def check_extension(self, filename: str) -> str:
        ext = os.path.splitext(filename or "")[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedDocumentError(
                f"Unsupported file type '{ext or filename}'. "
                f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
            )
        return ext

    @property
    def max_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)

    def read_upload(self, stream) -> bytes:
        """Read an upload stream, never more than one byte past the size limit."""
        file_bytes = stream.read(self.max_bytes + 1)
        if len(file_bytes) > self.max_bytes:
            raise DocumentTooLargeError(f"File too large (max {self.max_file_size_mb:g} MB)")
        return file_bytes

    def check_size(self, size_bytes: int) -> float:
        file_size_mb = round(size_bytes / (1024 * 1024), 2)
        if file_size_mb > self.max_file_size_mb:
            raise DocumentTooLargeError(
                f"File too large: {file_size_mb} MB (max {self.max_file_size_mb:g} MB)"
            )
        return file_size_mb

    def extract_text_from_bytes(self, file_bytes: bytes, filename: str) -> dict:
        """
        Extract text from an in-memory upload.

        Returns: {
            "filename": str,
            "text": str,
            "page_count": int,
            "file_size_mb": float,
            "extraction_quality": str,  # "good" | "fair" | "poor"
        }
        """
        ext = self.check_extension(filename)
        file_size_mb = self.check_size(len(file_bytes))

        if ext in PDF_EXTENSIONS:
            text, page_count = self._extract_pdf(file_bytes)
        else:
            text = file_bytes.decode("utf-8", errors="replace")
            page_count = 1

        return {
            "filename": filename,
            "text": text,
            "page_count": page_count,
            "file_size_mb": file_size_mb,
            "extraction_quality": self._assess_quality(text, page_count),
        }

    def _extract_pdf(self, file_bytes: bytes):
        pages_text = []
        try:
            with pdfplumber.open(io.BytesIO(file_bytes)) as pdf:
                page_count = len(pdf.pages)
                if page_count > MAX_PAGES:
                    raise ValueError(f"PDF has {page_count} pages (max {MAX_PAGES})")
                for page in pdf.pages:
                    text = page.extract_text()
                    if text:
                        pages_text.append(text)
        except ValueError:
            raise
        except Exception as e:
            logger.warning("PDF extraction error: %s", e)
            raise ValueError(f"Failed to read PDF: {e}")

        return "\n\n".join(pages_text), page_count

    def _assess_quality(self, text: str, page_count: int) -> str:
        """
        Grade extraction by text density.

        "good": > 100 chars per page average
        "fair": 20-100 chars per page
        "poor": < 20 chars per page (likely scanned/image PDF)
        """
        if page_count == 0:
            return "poor"

        chars_per_page = len(text.strip()) / page_count
        if chars_per_page > 100:
            return "good"
        elif chars_per_page > 20:
            return "fair"
        return "poor"
