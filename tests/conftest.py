"""Pytest configuration and shared fixtures for clippy-server tests.

This module provides common fixtures used across all test modules,
including test app creation and async client setup.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clippy_server import create_app
from clippy_server.config import ClippyServerSettings


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with isolated temporary directories.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        ClippyServerSettings: Settings instance configured for testing.
    """
    return ClippyServerSettings(
        host="127.0.0.1",
        port=8080,
        ollama_host="http://localhost:11434",
        reply_model="llama3.1:8b",
        title_model="llama3.2:1b",
        data_dir=str(tmp_path),
        conversations_dir="conversations",
        weather_api_key="test-key",
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
