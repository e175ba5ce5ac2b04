"""PDF parsing module using pypdf.

Extracts per-page text from an uploaded PDF and turns it into the
context block that rides along with chat requests.
"""

import io
import logging
import os
import re

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from pdf_chat.models.schemas import DocumentContext

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
MAX_CONTEXT_CHARS = int(os.getenv("MAX_CONTEXT_CHARS", "60000"))
PAGE_SEPARATOR = "\n\n"

_INLINE_WHITESPACE = re.compile(r"[ \t\r\f\v]+")
_BLANK_LINES = re.compile(r"\n{3,}")


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Page texts joined with a blank line.
        pages: Total number of pages in the document.
        page_texts: Text of each page, in order (empty for pages without text).
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    page_texts: list[str] = Field(default_factory=list)
    metadata: dict[str, str | None]


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""

    pass


def _validate_pdf_bytes(file_content: bytes) -> None:
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise PDFParseError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str | None]:
    """Read the document info dictionary, skipping absent fields."""
    fields = {
        "title": "/Title",
        "author": "/Author",
        "subject": "/Subject",
    }
    metadata: dict[str, str | None] = {}

    try:
        info = reader.metadata
        if info:
            for name, key in fields.items():
                value = info.get(key)
                metadata[name] = str(value) if value is not None else None
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: v for k, v in metadata.items() if v is not None}


def parse_pdf(file_content: bytes) -> PDFContent:
    """Parse a PDF file and extract its text content.

    Args:
        file_content: Raw bytes of the PDF file.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    page_texts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_texts.append(page.extract_text() or "")
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            page_texts.append("")

    text = PAGE_SEPARATOR.join(t for t in page_texts if t.strip())

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        text=text,
        pages=pages,
        page_texts=page_texts,
        metadata=_extract_metadata(reader),
    )


def normalize_text(text: str) -> str:
    """Collapse whitespace runs while keeping paragraph breaks."""
    lines = [_INLINE_WHITESPACE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()


def to_document_context(
    filename: str,
    content: PDFContent,
    max_chars: int = MAX_CONTEXT_CHARS,
) -> tuple[DocumentContext, bool]:
    """Build the conversation context for a parsed PDF.

    Args:
        filename: Name of the uploaded file.
        content: Parsed PDF content.
        max_chars: Upper bound on the context text length.

    Returns:
        The document context and whether its text was truncated.
    """
    text = normalize_text(content.text)
    truncated = len(text) > max_chars
    if truncated:
        logger.info(f"Truncating context for {filename}: {len(text)} -> {max_chars} chars")
        text = text[:max_chars].rstrip()

    return DocumentContext(filename=filename, text=text, pages=content.pages), truncated
