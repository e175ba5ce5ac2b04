"""Agent configuration with environment variable loading.

Pydantic-based configuration for the chat agent.
Supports OpenAI and OpenAI-compatible APIs via custom base URL,
plus an offline echo mode for local development.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


class AgentConfig(BaseModel):
    """Configuration for the chat agent.

    Attributes:
        api_key: API key for model access (optional in echo mode).
        base_url: API base URL (None for OpenAI default).
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
        max_history_messages: How many earlier turns are forwarded per request.
        echo_mode: Answer locally with an echo instead of calling the API.
        echo_delay: Seconds to wait before an echo reply.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", "")),
        description="API key for LLM provider",
        validate_default=True,
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for OpenAI default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    max_history_messages: int = Field(
        default=20,
        ge=0,
        description="Earlier turns forwarded with each request (~10 exchanges)",
    )
    echo_mode: bool = Field(
        default_factory=lambda: _env_flag("LLM_ECHO_MODE"),
        description="Reply with a local echo instead of calling the API",
    )
    echo_delay: float = Field(
        default=0.8,
        ge=0.0,
        description="Delay in seconds before an echo reply",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @model_validator(mode="after")
    def require_api_key(self) -> "AgentConfig":
        """An API key is mandatory unless echo mode is on."""
        if not self.echo_mode and not self.api_key:
            raise ValueError(
                "API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env "
                "(or LLM_ECHO_MODE=true for offline use)"
            )
        return self


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set and echo mode is off.
    """
    return AgentConfig()
