"""clippy-server: Headless FastAPI server for tool-augmented LLM conversations.

This package provides a REST API for holding conversations with a model served
by Ollama that can call tools (weather, date, holidays, calculator) while
composing its reply.
"""

__version__ = "0.1.0"

from clippy_server.app import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
