"""HTTP client used by the chat page to reach the API."""

import json
import logging
import os
from collections.abc import Callable

import httpx

from pdf_chat.models.schemas import (
    ChatMessage,
    DocumentContext,
    PDFUploadResponse,
)

logger = logging.getLogger(__name__)


def default_api_base_url() -> str:
    """API_BASE_URL, else the local server on PORT (integrated mode)."""
    return os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', '8000')}"


API_BASE_URL = default_api_base_url()
CHAT_TIMEOUT = 120.0
UPLOAD_TIMEOUT = 60.0


class UploadError(Exception):
    """Raised when the API rejects an uploaded document."""

    pass


def _chat_payload(
    message: str,
    session_id: str,
    history: list[ChatMessage],
    document: DocumentContext | None,
) -> dict:
    return {
        "message": message,
        "session_id": session_id,
        "history": [turn.model_dump(mode="json") for turn in history],
        "document": document.model_dump(mode="json") if document else None,
    }


async def stream_chat_response(
    message: str,
    session_id: str,
    history: list[ChatMessage],
    document: DocumentContext | None,
    on_chunk: Callable[[str], None],
    on_status: Callable[[str], None],
    on_complete: Callable[[], None],
    on_error: Callable[[str], None],
    client: httpx.AsyncClient | None = None,
) -> None:
    """Consume SSE stream from /chat/stream endpoint.

    Exactly one of ``on_complete`` / ``on_error`` is called.
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(base_url=API_BASE_URL, timeout=CHAT_TIMEOUT)

    try:
        async with client.stream(
            "POST",
            "/chat/stream",
            json=_chat_payload(message, session_id, history, document),
            headers={"Accept": "text/event-stream"},
        ) as response:
            response.raise_for_status()
            async for line in response.aiter_lines():
                if not line.startswith("data: "):
                    continue
                data = json.loads(line[6:])
                if not isinstance(data, dict):
                    raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
                if data.get("error"):
                    on_error(data["error"])
                    return
                if data.get("done"):
                    on_complete()
                    return
                if status := data.get("status"):
                    on_status(status)
                if content := data.get("content"):
                    on_chunk(content)
        on_error("Stream ended unexpectedly")
    except httpx.HTTPStatusError as e:
        on_error(f"HTTP {e.response.status_code}")
    except httpx.RequestError as e:
        logger.warning(f"Chat request failed: {e}")
        on_error(f"Connection failed: {e}")
    except httpx.StreamError as e:
        logger.warning(f"Chat stream broke off: {e}")
        on_error(f"Stream failed: {e}")
    except ValueError as e:
        logger.warning(f"Malformed stream frame: {e}")
        on_error("Malformed response from server")
    finally:
        if owns_client:
            await client.aclose()


async def upload_document(
    filename: str,
    content: bytes,
    client: httpx.AsyncClient | None = None,
) -> PDFUploadResponse:
    """Send a PDF to /upload/pdf and return the extracted text.

    Raises:
        UploadError: If the API rejects the file or cannot be reached.
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(base_url=API_BASE_URL, timeout=UPLOAD_TIMEOUT)

    try:
        response = await client.post(
            "/upload/pdf",
            files={"file": (filename, content, "application/pdf")},
        )
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise UploadError(str(detail) or f"HTTP {response.status_code}")
        return PDFUploadResponse.model_validate(response.json())
    except httpx.RequestError as e:
        raise UploadError(f"Connection failed: {e}") from e
    finally:
        if owns_client:
            await client.aclose()
