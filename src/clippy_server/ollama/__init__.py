"""Ollama client wrapper and integration layer.

This package provides async client wrappers for communicating with the Ollama API.
All Ollama interactions are async and use streaming under the hood.
"""

from clippy_server.ollama.client import OllamaClient
from clippy_server.ollama.types import ChatResult

__all__ = ["OllamaClient", "ChatResult"]
