"""Agno agent service with streaming support and document context.

Core module for the chatbot's model calls.

The server keeps no conversation state: every request carries the
client's message history and, optionally, the text of an attached PDF.
The service turns that into an agno message list, calls the model and
hands back text chunks for the SSE endpoint.

Echo mode answers locally with ``AI says: "<message>"`` after a short
delay, so the page can be exercised without an API key.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from agno.agent import Agent
from agno.models.openai import OpenAIChat

from pdf_chat.agent.config import AgentConfig, get_agent_config
from pdf_chat.agent.prompts import INSTRUCTIONS, build_messages
from pdf_chat.models.schemas import ChatRequest

logger = logging.getLogger(__name__)

_CONTENT_EVENTS = (None, "RunContent")
_ERROR_EVENTS = ("RunError",)


class AgentServiceError(Exception):
    """Raised when the generation API call fails."""

    pass


def echo_reply(message: str) -> str:
    """Reply used in echo mode."""
    return f'AI says: "{message}"'


class AgentService:
    """Service for calling the chat model.

    Wraps Agno's Agent with:
    - Stateless requests built from client-supplied history
    - Document context injection
    - Clean streaming interface for SSE endpoints
    - Centralized error handling
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agent = None if self._config.echo_mode else self._create_agent()

    @property
    def echo_mode(self) -> bool:
        return self._config.echo_mode

    @property
    def model_name(self) -> str:
        return "echo" if self.echo_mode else self._config.model_name

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Agent bound to an OpenAI-compatible chat model.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            description="A helpful assistant that can read documents attached by the user.",
            instructions=INSTRUCTIONS,
            # Output as markdown for rich formatting in UI
            markdown=True,
        )

    def _messages(self, request: ChatRequest) -> list:
        return build_messages(
            request.message,
            request.history,
            request.document,
            max_history=self._config.max_history_messages,
        )

    async def stream_reply(self, request: ChatRequest) -> AsyncGenerator[str]:
        """Stream reply chunks for a chat request.

        Args:
            request: Message, history and optional document.

        Yields:
            Response text chunks as they arrive.

        Raises:
            AgentServiceError: If the model call fails.
        """
        if self._agent is None:
            await asyncio.sleep(self._config.echo_delay)
            yield echo_reply(request.message)
            return

        try:
            response_stream = self._agent.arun(self._messages(request), stream=True)

            async for chunk in response_stream:
                event = getattr(chunk, "event", None)
                if event in _ERROR_EVENTS:
                    raise AgentServiceError(str(getattr(chunk, "content", "") or "Run failed"))
                if event not in _CONTENT_EVENTS:
                    continue
                content = getattr(chunk, "content", None)
                if isinstance(content, str) and content:
                    yield content

        except AgentServiceError:
            raise
        except Exception as e:
            logger.error(f"Model call failed ({self._config.model_name}): {e}")
            raise AgentServiceError(str(e)) from e

    async def get_reply(self, request: ChatRequest) -> str:
        """Get the complete reply for a chat request.

        Non-streaming alternative for simpler use cases.

        Raises:
            AgentServiceError: If the model call fails.
        """
        if self._agent is None:
            await asyncio.sleep(self._config.echo_delay)
            return echo_reply(request.message)

        try:
            response = await self._agent.arun(self._messages(request))
        except Exception as e:
            logger.error(f"Model call failed ({self._config.model_name}): {e}")
            raise AgentServiceError(str(e)) from e

        return str(response.content or "")


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Returns:
        The AgentService instance.

    Raises:
        ValueError: If the configuration is incomplete.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
