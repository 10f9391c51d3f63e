"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clippy_server import __version__
from clippy_server.assistant import OllamaBackend, TitleSummarizer, TurnOrchestrator
from clippy_server.config import ClippyServerSettings
from clippy_server.ollama import OllamaClient
from clippy_server.routers import conversations, health
from clippy_server.tools import build_default_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    Expensive objects (the Ollama client, the shared HTTP client used by
    tools, the tool registry and the assistant components) are created once
    at startup and stored in app.state for reuse across all requests. The
    tool registry is complete before the first request is served and is only
    read afterwards.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: ClippyServerSettings = app.state.settings

    app.state.ollama_client = OllamaClient(
        host=settings.ollama_host, timeout=settings.ollama_timeout
    )
    logger.info(f"Initialized Ollama client with host: {settings.ollama_host}")

    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout)

    registry = build_default_registry(settings, app.state.http_client)
    app.state.tool_registry = registry
    logger.info(f"Registered tools: {', '.join(registry.names())}")

    app.state.orchestrator = TurnOrchestrator(
        backend=OllamaBackend(app.state.ollama_client, model=settings.reply_model),
        registry=registry,
    )
    app.state.title_summarizer = TitleSummarizer(
        backend=OllamaBackend(app.state.ollama_client, model=settings.title_model),
    )

    # Check initial connectivity
    connected = await app.state.ollama_client.check_connection()
    if connected:
        logger.info("Successfully connected to Ollama")
    else:
        logger.warning("Could not connect to Ollama - check if server is running")

    yield

    # Shutdown: Clean up resources
    await app.state.http_client.aclose()
    if hasattr(app.state, "ollama_client"):
        await app.state.ollama_client.close()
        logger.info("Ollama client closed")


def create_app(settings: ClippyServerSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a FastAPI instance with all routers,
    middleware, and configuration applied. It can accept an optional
    settings object for testing or explicit configuration.

    Args:
        settings: Optional ClippyServerSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from clippy_server.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="clippy-server",
        description="Headless FastAPI server for tool-augmented LLM conversations via Ollama",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(conversations.router)

    return app
