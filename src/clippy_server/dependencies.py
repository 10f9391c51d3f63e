"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
routers to inject settings, the conversation store and the assistant
components created at startup.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from clippy_server.assistant import TitleSummarizer, TurnOrchestrator
from clippy_server.config import ClippyServerSettings
from clippy_server.conversations import ConversationManager


@lru_cache
def get_settings() -> ClippyServerSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the CLIPPY_ prefix.

    Returns:
        ClippyServerSettings: The application configuration settings.
    """
    return ClippyServerSettings()


def _get_state(request: Request, name: str, label: str):
    if not hasattr(request.app.state, name):
        raise HTTPException(
            status_code=503,
            detail=f"{label} not initialized",
        )
    return getattr(request.app.state, name)


def get_orchestrator(request: Request) -> TurnOrchestrator:
    """Get the reply orchestrator created during application startup.

    Raises:
        HTTPException: If the orchestrator is not initialized (503 Service Unavailable).
    """
    return _get_state(request, "orchestrator", "Reply orchestrator")


def get_title_summarizer(request: Request) -> TitleSummarizer:
    """Get the title summarizer created during application startup.

    Raises:
        HTTPException: If the summarizer is not initialized (503 Service Unavailable).
    """
    return _get_state(request, "title_summarizer", "Title summarizer")


def get_conversation_manager(request: Request) -> ConversationManager:
    """Get a ConversationManager for the configured conversations directory.

    Uses settings from app.state instead of the cached get_settings(), so
    tests can run with their own isolated settings.

    Args:
        request: The FastAPI request object.

    Returns:
        ConversationManager: A new ConversationManager instance.
    """
    settings: ClippyServerSettings = request.app.state.settings
    return ConversationManager(conversations_dir=settings.resolved_conversations_dir)
