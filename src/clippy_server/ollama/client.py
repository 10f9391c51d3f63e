"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient for
communicating with the Ollama API. All operations are async and the client
is designed to be created once at startup and reused.
"""

import logging
from typing import Any

import ollama

from clippy_server.ollama.types import ChatResult

logger = logging.getLogger(__name__)


def _chunk_to_dict(chunk: Any) -> dict[str, Any]:
    """Convert a stream chunk to a plain dict."""
    if hasattr(chunk, "model_dump"):
        return chunk.model_dump()
    if isinstance(chunk, dict):
        return chunk
    # Fallback: convert to dict using vars()
    return vars(chunk)


class OllamaClient:
    """Async client for interacting with Ollama API.

    This client wraps ollama.AsyncClient and provides high-level async methods
    for chatting (with optional tools) and checking connectivity.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(self, host: str, timeout: float | None = None) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
            timeout: Optional request timeout in seconds
        """
        self.host = host
        self._client = ollama.AsyncClient(host=host, timeout=timeout)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            # Try to list models as a connectivity check
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def chat(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        options: dict[str, Any] | None = None,
    ) -> ChatResult:
        """Run a chat request and collect the complete response.

        The request always uses Ollama's streaming API; chunks are collected
        into a single ChatResult. Tool calls may arrive in any chunk and are
        accumulated in arrival order.

        Args:
            model: The model name to use for the chat
            messages: List of message dicts in Ollama format:
                      [{"role": "user", "content": "..."}, ...]
            tools: Optional function-tool schemas offered to the model
            options: Optional model parameters (temperature, etc.)

        Returns:
            ChatResult: The collected response. ``done`` is False if the
            stream ended without its completion marker.

        Raises:
            Exception: If the Ollama API request fails
        """
        result = ChatResult()
        content_parts: list[str] = []

        try:
            logger.debug(
                f"Starting chat with model: {model}, "
                f"messages: {len(messages)}, tools: {len(tools or [])}"
            )

            async for chunk in await self._client.chat(
                model=model,
                messages=messages,
                tools=tools or None,
                stream=True,
                options=options,
            ):
                chunk_dict = _chunk_to_dict(chunk)
                message = chunk_dict.get("message") or {}

                content = message.get("content") or ""
                if content:
                    content_parts.append(content)

                for tool_call in message.get("tool_calls") or []:
                    result.tool_calls.append(tool_call)

                if chunk_dict.get("done"):
                    result.done = True
                    result.eval_count = chunk_dict.get("eval_count")
                    result.prompt_eval_count = chunk_dict.get("prompt_eval_count")
                    break

        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            raise

        result.content = "".join(content_parts)
        logger.debug(
            f"Chat completed: done={result.done}, "
            f"content_length={len(result.content)}, "
            f"tool_calls={len(result.tool_calls)}"
        )
        return result

    async def close(self) -> None:
        """Close the client and clean up resources.

        This method is provided for completeness but ollama.AsyncClient
        doesn't require explicit cleanup in current versions.
        """
        logger.debug("OllamaClient closed")
