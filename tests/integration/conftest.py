"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that replace the
Ollama client with a scripted fake, so API endpoints run the real reply
loop, title summarizer and tools without a model server.
"""

from unittest.mock import AsyncMock, patch

import pytest

from clippy_server.ollama import ChatResult


def reply(content):
    """A collected Ollama response carrying a final answer."""
    return ChatResult(content=content, done=True)


def tool_call(name, arguments=None):
    """A collected Ollama response requesting a single tool call."""
    return ChatResult(
        done=True,
        tool_calls=[{"function": {"name": name, "arguments": arguments or {}}}],
    )


class ScriptedChat:
    """Fake for OllamaClient.chat that answers by model.

    Requests for the title model get ``title``; requests for any other model
    consume ``replies`` in order, repeating the last one once exhausted.
    Exceptions are raised instead of returned. Every call is recorded.
    """

    def __init__(self, title_model):
        self.title_model = title_model
        self.title = reply("Test Conversation")
        self.replies = [reply("Hello! How can I help you today?")]
        self.calls = []

    async def __call__(self, model, messages, tools=None, options=None):
        self.calls.append({"model": model, "messages": messages, "tools": tools})
        if model == self.title_model:
            response = self.title
        elif len(self.replies) > 1:
            response = self.replies.pop(0)
        else:
            response = self.replies[0]
        if isinstance(response, Exception):
            raise response
        return response

    def reply_calls(self):
        return [call for call in self.calls if call["model"] != self.title_model]

    def title_calls(self):
        return [call for call in self.calls if call["model"] == self.title_model]


@pytest.fixture
def scripted_chat(test_settings):
    return ScriptedChat(title_model=test_settings.title_model)


@pytest.fixture(autouse=True)
def mock_ollama_client(test_settings, scripted_chat):
    """Mock OllamaClient for all integration tests.

    This fixture patches the OllamaClient class before the app is created,
    ensuring the lifespan uses our mock instead of creating a real client.
    """
    with patch("clippy_server.app.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.host = test_settings.ollama_host
        mock_instance.check_connection.return_value = True
        mock_instance.chat.side_effect = scripted_chat.__call__

        mock_client_class.return_value = mock_instance

        yield mock_instance
