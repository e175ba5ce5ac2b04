"""Agno agent logic for the model call.

Responsibilities:
    - Agent initialization with OpenAI-compatible models
    - Forwarding client-side history with each request
    - Prepending attached document text to the new user turn
    - Streaming token generation coordination
    - Offline echo replies for development

Maintains clean separation from the HTTP layer.
"""

from pdf_chat.agent.chat_agent import AgentService, AgentServiceError, get_agent_service
from pdf_chat.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "AgentService",
    "AgentServiceError",
    "get_agent_config",
    "get_agent_service",
]
