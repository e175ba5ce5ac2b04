"""PDF parsing utilities for document context.

Turns an uploaded PDF into plain text that can be injected into a
conversation.

Responsibilities:
    - PDF text extraction with pypdf, page by page
    - Upload validation (size, header, structure)
    - Whitespace normalization and truncation to the context limit
    - Metadata extraction (title, author, subject)
"""

from pdf_chat.parsing.pdf_parser import (
    PDFContent,
    PDFParseError,
    parse_pdf,
    to_document_context,
)

__all__ = ["PDFContent", "PDFParseError", "parse_pdf", "to_document_context"]
