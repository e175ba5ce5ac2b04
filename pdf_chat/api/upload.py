"""PDF upload endpoint for document context.

Handles file upload, validation and text extraction. The extracted
text is returned to the client, which attaches it to later chat
requests; nothing is stored server-side.
"""

import logging

from fastapi import APIRouter, HTTPException, UploadFile, status

from pdf_chat.models.schemas import PDFUploadResponse
from pdf_chat.parsing.pdf_parser import (
    MAX_CONTEXT_CHARS,
    MAX_FILE_SIZE,
    PDFParseError,
    parse_pdf,
    to_document_context,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])

# 10MB limit matches pdf_parser constant
MAX_UPLOAD_SIZE = MAX_FILE_SIZE


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has .pdf extension.

    Raises:
        HTTPException: 400 if the filename is missing or not a PDF.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    return filename


async def _read_and_validate_size(file: UploadFile) -> bytes:
    """Read file content and validate size.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > MAX_UPLOAD_SIZE:
        size_mb = len(content) / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)",
        )

    return content


@router.post("/pdf", response_model=PDFUploadResponse)
async def upload_pdf(file: UploadFile) -> PDFUploadResponse:
    """Upload a PDF and return its text as conversation context.

    Args:
        file: The uploaded PDF file (multipart/form-data).

    Returns:
        PDFUploadResponse with filename, page count and extracted text.

    Raises:
        400: Invalid file (not PDF, empty, corrupt).
        413: File exceeds 10MB limit.
    """
    filename = _validate_file_extension(file.filename)
    content = await _read_and_validate_size(file)

    try:
        pdf_content = parse_pdf(content)
    except PDFParseError as e:
        logger.warning(f"PDF parse error for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    document, truncated = to_document_context(filename, pdf_content, MAX_CONTEXT_CHARS)
    logger.info(
        f"Extracted PDF: {filename} ({document.pages} pages, "
        f"{len(document.text)} chars{', truncated' if truncated else ''})"
    )

    return PDFUploadResponse(
        filename=filename,
        pages=document.pages,
        characters=len(document.text),
        truncated=truncated,
        text=document.text,
        success=True,
        error=None if document.text else "No extractable text found in PDF",
    )
