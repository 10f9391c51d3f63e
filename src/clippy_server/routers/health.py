"""Health check and greeting endpoints."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from clippy_server import __version__
from clippy_server.models.health import HealthResponse
from clippy_server.ollama import OllamaClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def greeting() -> str:
    return "Hi, my name is Clippy!"


@router.get("/api/v1/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of the clippy-server.
    Also checks connectivity to the Ollama server if the client is initialized
    and lists the registered tools.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    ollama_connected = None
    ollama_host = None
    tools: list[str] = []

    if hasattr(request.app.state, "ollama_client"):
        ollama_client: OllamaClient = request.app.state.ollama_client
        ollama_host = ollama_client.host

        try:
            ollama_connected = await ollama_client.check_connection()
            logger.debug(f"Ollama connectivity check: {ollama_connected}")
        except Exception as e:
            logger.warning(f"Ollama connectivity check failed: {e}")
            ollama_connected = False

    if hasattr(request.app.state, "tool_registry"):
        tools = request.app.state.tool_registry.names()

    return HealthResponse(
        status="ok",
        version=__version__,
        ollama_connected=ollama_connected,
        ollama_host=ollama_host,
        tools=tools,
    )
