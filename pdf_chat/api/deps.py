"""Shared FastAPI dependencies."""

import logging

from fastapi import HTTPException, status

from pdf_chat.agent.chat_agent import AgentService, get_agent_service

logger = logging.getLogger(__name__)


def get_chat_service() -> AgentService:
    """Resolve the agent service, reporting missing configuration as 503."""
    try:
        return get_agent_service()
    except ValueError as e:
        logger.error(f"LLM backend is not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="LLM backend is not configured",
        ) from e
