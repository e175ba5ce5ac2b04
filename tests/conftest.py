"""Pytest fixtures and shared test configuration.

Fixtures:
    - pdf_factory: Builds small, valid PDFs from page texts
    - sample_pdf: Three-page PDF with a title
    - echo_service: Agent service in echo mode (no network)
    - async_client: HTTPX client wired to the app with the echo service
    - mock_session_id: Consistent session ID for tests
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from pdf_chat.agent.chat_agent import AgentService
from pdf_chat.agent.config import AgentConfig
from pdf_chat.api import app
from pdf_chat.api.deps import get_chat_service

SAMPLE_PAGES = [
    "Information security protects data from unauthorized access.",
    "Access control limits who can read each record.",
    "Encryption keeps stored backups confidential.",
]


def build_pdf(pages: list[str], title: str | None = None) -> bytes:
    """Write a minimal PDF with one line of Helvetica text per page.

    Page text must not contain parentheses or backslashes.
    """
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"",  # page tree, filled in below
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    kids: list[str] = []
    for text in pages:
        page_id = len(objects) + 1
        kids.append(f"{page_id} 0 R")
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )
    objects[1] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(pages)} >>".encode()

    info_ref = b""
    if title is not None:
        objects.append(f"<< /Title ({title}) >>".encode())
        info_ref = b" /Info %d 0 R" % len(objects)

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R%s >>\n" % (len(objects) + 1, info_ref)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture
def pdf_factory() -> Callable[..., bytes]:
    """Return the PDF builder."""
    return build_pdf


@pytest.fixture
def sample_pdf() -> bytes:
    """Three-page PDF with extractable text and a title."""
    return build_pdf(SAMPLE_PAGES, title="Security Basics")


@pytest.fixture
def mock_session_id() -> str:
    """Predictable session ID for test assertions."""
    return "test-session-12345"


@pytest.fixture
def echo_service() -> AgentService:
    """Agent service that echoes without delay or network access."""
    return AgentService(config=AgentConfig(api_key="", echo_mode=True, echo_delay=0.0))


@pytest.fixture
async def async_client(echo_service: AgentService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    The chat dependency is replaced by the echo service for the duration
    of the test.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_chat_service] = lambda: echo_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_chat_service, None)
