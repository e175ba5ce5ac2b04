"""FastAPI endpoints for PDF Chat.

HTTP and streaming routes with async request handling.
Supports Server-Sent Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - POST /chat: Complete reply for a message
    - POST /chat/stream: Reply streamed as Server-Sent Events
    - POST /upload/pdf: Extract PDF text for use as conversation context
"""

from pdf_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
