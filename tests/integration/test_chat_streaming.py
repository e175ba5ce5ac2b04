"""Integration tests for the chat endpoints.

Runs the real FastAPI app through httpx ASGITransport with the agent
dependency replaced by an echo-mode service (no network access).
"""

import json

import pytest
from httpx import AsyncClient

from pdf_chat.agent.chat_agent import AgentServiceError
from pdf_chat.api import app
from pdf_chat.api.deps import get_chat_service
from pdf_chat.models.schemas import ChatRequest, StreamChunk, StreamStatus


async def _collect(client: AsyncClient, payload: dict) -> list[StreamChunk]:
    chunks: list[StreamChunk] = []
    async with client.stream("POST", "/chat/stream", json=payload) as response:
        assert response.status_code == 200
        async for line in response.aiter_lines():
            if line.startswith("data: "):
                chunks.append(StreamChunk.model_validate_json(line.removeprefix("data: ")))
    return chunks


class FailingService:
    """Stand-in service whose model call always fails."""

    async def stream_reply(self, request: ChatRequest):
        yield "partial "
        raise AgentServiceError("model unavailable")

    async def get_reply(self, request: ChatRequest) -> str:
        raise AgentServiceError("model unavailable")


class TestHealth:
    async def test_health_reports_service(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "pdf-chat"}


class TestStreamingEndpoint:
    """Integration tests for POST /chat/stream SSE endpoint."""

    async def test_stream_returns_sse_content_type(self, async_client: AsyncClient) -> None:
        """Streaming endpoint returns text/event-stream media type."""
        async with async_client.stream(
            "POST", "/chat/stream", json={"message": "Say hello"}
        ) as response:
            assert response.status_code == 200
            assert "text/event-stream" in response.headers["content-type"]

    async def test_chunks_are_valid_json(self, async_client: AsyncClient) -> None:
        """Each SSE data line holds a StreamChunk."""
        async with async_client.stream(
            "POST", "/chat/stream", json={"message": "Hi"}
        ) as response:
            async for line in response.aiter_lines():
                if line.startswith("data: "):
                    data = json.loads(line.removeprefix("data: ").strip())
                    chunk = StreamChunk.model_validate(data)
                    assert isinstance(chunk.content, str)
                    assert isinstance(chunk.done, bool)

    async def test_reply_is_spliced_from_chunks(self, async_client: AsyncClient) -> None:
        """Content chunks concatenate to the echo reply."""
        chunks = await _collect(async_client, {"message": "Hello there"})

        content = "".join(c.content for c in chunks if not c.done)
        assert content == 'AI says: "Hello there"'

    async def test_status_sequence_and_single_done(self, async_client: AsyncClient) -> None:
        """Stream opens with received and ends with exactly one done chunk."""
        chunks = await _collect(async_client, {"message": "Say yes"})

        assert chunks[0].status == StreamStatus.RECEIVED
        assert chunks[-1].done is True
        assert chunks[-1].status == StreamStatus.COMPLETE
        assert all(c.done is False for c in chunks[:-1])

    async def test_document_adds_reading_status(self, async_client: AsyncClient) -> None:
        """An attached document is announced before generation."""
        chunks = await _collect(
            async_client,
            {
                "message": "What is it about?",
                "document": {"filename": "a.pdf", "text": "Body", "pages": 1},
            },
        )

        statuses = [c.status for c in chunks]
        assert statuses[:2] == [StreamStatus.RECEIVED, StreamStatus.READING]

    async def test_history_and_session_are_accepted(
        self, async_client: AsyncClient, mock_session_id: str
    ) -> None:
        """Requests carrying history and a session id are accepted."""
        chunks = await _collect(
            async_client,
            {
                "message": "And then?",
                "session_id": mock_session_id,
                "history": [
                    {"role": "user", "content": "Hi"},
                    {"role": "assistant", "content": "Hello"},
                ],
            },
        )

        assert chunks[-1].status == StreamStatus.COMPLETE

    @pytest.mark.parametrize(
        "payload",
        [
            {"message": ""},
            {"message": "   "},
            {},
            {"message": "hi", "history": [{"role": "system", "content": "x"}]},
        ],
    )
    async def test_invalid_payload_returns_422(
        self, async_client: AsyncClient, payload: dict
    ) -> None:
        """Empty input, missing fields and unknown roles are rejected."""
        response = await async_client.post("/chat/stream", json=payload)

        assert response.status_code == 422
        assert "detail" in response.json()

    async def test_invalid_json_returns_422(self, async_client: AsyncClient) -> None:
        """Malformed JSON body returns 422 status."""
        response = await async_client.post(
            "/chat/stream",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/chat/stream")

        assert response.status_code == 405

    async def test_cors_headers_present(self, async_client: AsyncClient) -> None:
        async with async_client.stream(
            "POST",
            "/chat/stream",
            json={"message": "test"},
            headers={"Origin": "http://localhost:3000"},
        ) as response:
            assert "access-control-allow-origin" in response.headers


class TestCompleteReplyEndpoint:
    """Integration tests for POST /chat."""

    async def test_returns_reply_and_session(
        self, async_client: AsyncClient, mock_session_id: str
    ) -> None:
        response = await async_client.post(
            "/chat", json={"message": "ping", "session_id": mock_session_id}
        )

        assert response.status_code == 200
        assert response.json() == {"reply": 'AI says: "ping"', "session_id": mock_session_id}

    async def test_empty_message_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/chat", json={"message": " "})

        assert response.status_code == 422


class TestChatErrors:
    """Failures of the model call and of configuration."""

    @pytest.fixture
    def failing(self, async_client: AsyncClient) -> AsyncClient:
        app.dependency_overrides[get_chat_service] = lambda: FailingService()
        return async_client

    async def test_stream_ends_with_error_chunk(self, failing: AsyncClient) -> None:
        chunks = await _collect(failing, {"message": "hi"})

        assert chunks[-1].done is True
        assert chunks[-1].status == StreamStatus.ERROR
        assert chunks[-1].error == "model unavailable"
        assert sum(1 for c in chunks if c.done) == 1

    async def test_complete_reply_maps_to_502(self, failing: AsyncClient) -> None:
        response = await failing.post("/chat", json={"message": "hi"})

        assert response.status_code == 502
        assert "model unavailable" in response.json()["detail"]

    async def test_missing_configuration_maps_to_503(
        self, async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import pdf_chat.api.deps as deps

        def not_configured():
            raise ValueError("API key required")

        monkeypatch.setattr(deps, "get_agent_service", not_configured)
        app.dependency_overrides.pop(get_chat_service, None)

        response = await async_client.post("/chat", json={"message": "hi"})

        assert response.status_code == 503
        assert response.json()["detail"] == "LLM backend is not configured"
