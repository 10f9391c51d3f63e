"""Fixtures for unit tests of the reply loop and title generation."""

import pytest

from clippy_server.assistant import Completion, Role, ToolCallRequest, TranscriptMessage
from clippy_server.conversations import AssistantMessage, Conversation, UserMessage


class ScriptedBackend:
    """ReasoningBackend stub that replays canned responses.

    Each call records a copy of the transcript it received. Once the script
    is exhausted the last response is repeated. Exceptions in the script are
    raised instead of returned.
    """

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def complete(self, transcript, tools):
        self.calls.append((list(transcript), list(tools)))
        if len(self.responses) > 1:
            response = self.responses.pop(0)
        else:
            response = self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def final(content):
    """A completion whose single choice is a final text answer."""
    return Completion(choices=[TranscriptMessage(role=Role.ASSISTANT, content=content)])


def tool_calls(*calls):
    """A completion requesting the given (call_id, tool_name, arguments) calls."""
    return Completion(
        choices=[
            TranscriptMessage(
                role=Role.ASSISTANT,
                content="",
                tool_calls=tuple(
                    ToolCallRequest(call_id=call_id, tool_name=name, raw_arguments=args)
                    for call_id, name, args in calls
                ),
            )
        ]
    )


@pytest.fixture
def scripted_backend():
    """Factory for ScriptedBackend instances."""

    def _factory(*responses):
        return ScriptedBackend(responses)

    return _factory


@pytest.fixture
def completions():
    """Builders for canned completions."""

    class _Completions:
        pass

    builders = _Completions()
    builders.final = final
    builders.tool_calls = tool_calls
    builders.empty = lambda: Completion(choices=[])
    return builders


@pytest.fixture
def make_conversation():
    """Factory for in-memory conversations from (role, content) pairs."""

    def _factory(*messages):
        history = []
        for role, content in messages:
            if role == "user":
                history.append(UserMessage(content=content))
            else:
                history.append(AssistantMessage(content=content))
        return Conversation(conversation_id="0123456789", messages=history)

    return _factory
