"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual turn in the conversation
    - DocumentContext: Extracted PDF text attached to a conversation
    - ChatRequest: Incoming chat request payload (message, history, document)
    - ChatResponse: Complete reply for the non-streaming endpoint
    - StreamChunk: One Server-Sent Events payload
    - PDFUploadResponse: Result of a PDF upload
"""

from pdf_chat.models.schemas import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatRole,
    DocumentContext,
    PDFUploadResponse,
    StreamChunk,
    StreamStatus,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatRole",
    "DocumentContext",
    "PDFUploadResponse",
    "StreamChunk",
    "StreamStatus",
]
