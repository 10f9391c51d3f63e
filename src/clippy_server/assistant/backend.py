"""Reasoning backend boundary and its Ollama adapter.

The orchestrator only sees the ReasoningBackend protocol. OllamaBackend
translates transcripts and tool declarations to Ollama chat payloads and
the collected Ollama response back to a Completion.
"""

import json
import logging
import uuid
from typing import Any, Protocol, Sequence

from clippy_server.assistant.errors import BackendError
from clippy_server.assistant.types import (
    Completion,
    Role,
    ToolCallRequest,
    TranscriptMessage,
)
from clippy_server.ollama.client import OllamaClient
from clippy_server.ollama.types import ChatResult
from clippy_server.tools.base import ToolDeclaration

logger = logging.getLogger(__name__)


class ReasoningBackend(Protocol):
    async def complete(
        self,
        transcript: Sequence[TranscriptMessage],
        tools: Sequence[ToolDeclaration],
    ) -> Completion:
        """Send a transcript and tool declarations to the model.

        Raises:
            BackendError: On any transport, auth or rate-limit failure
        """
        ...


def _decode_arguments(raw_arguments: str) -> dict[str, Any]:
    """Turn serialized arguments back into the object Ollama expects."""
    try:
        decoded = json.loads(raw_arguments or "{}")
    except json.JSONDecodeError:
        return {}
    return decoded if isinstance(decoded, dict) else {}


def to_ollama_message(message: TranscriptMessage) -> dict[str, Any]:
    """Convert a transcript message to an Ollama chat message dict."""
    ollama_msg: dict[str, Any] = {
        "role": message.role.value,
        "content": message.content,
    }

    if message.tool_calls:
        ollama_msg["tool_calls"] = [
            {
                "function": {
                    "name": call.tool_name,
                    "arguments": _decode_arguments(call.raw_arguments),
                }
            }
            for call in message.tool_calls
        ]

    if message.role == Role.TOOL and message.tool_name:
        ollama_msg["tool_name"] = message.tool_name

    return ollama_msg


def to_ollama_tool(declaration: ToolDeclaration) -> dict[str, Any]:
    """Convert a tool declaration to an Ollama function-tool schema."""
    return {
        "type": "function",
        "function": {
            "name": declaration.name,
            "description": declaration.description,
            "parameters": declaration.parameters,
        },
    }


def _to_tool_call_request(tool_call: dict[str, Any]) -> ToolCallRequest:
    function = tool_call.get("function") or {}
    arguments = function.get("arguments")
    if isinstance(arguments, str):
        raw_arguments = arguments
    else:
        raw_arguments = json.dumps(arguments or {})
    return ToolCallRequest(
        call_id=tool_call.get("id") or f"call_{uuid.uuid4().hex[:12]}",
        tool_name=function.get("name") or "",
        raw_arguments=raw_arguments,
    )


def to_completion(result: ChatResult) -> Completion:
    """Convert a collected Ollama response to a Completion.

    A response without its completion marker carries no choice.
    """
    if not result.done:
        return Completion(choices=[])

    message = TranscriptMessage(
        role=Role.ASSISTANT,
        content=result.content,
        tool_calls=tuple(_to_tool_call_request(call) for call in result.tool_calls),
    )
    return Completion(choices=[message])


class OllamaBackend:
    """ReasoningBackend backed by a model served by Ollama.

    Attributes:
        model: Name of the Ollama model used for every request
    """

    def __init__(
        self,
        client: OllamaClient,
        model: str,
        options: dict[str, Any] | None = None,
    ) -> None:
        self._client = client
        self.model = model
        self._options = options

    async def complete(
        self,
        transcript: Sequence[TranscriptMessage],
        tools: Sequence[ToolDeclaration],
    ) -> Completion:
        messages = [to_ollama_message(message) for message in transcript]
        ollama_tools = [to_ollama_tool(declaration) for declaration in tools]

        try:
            result = await self._client.chat(
                model=self.model,
                messages=messages,
                tools=ollama_tools or None,
                options=self._options,
            )
        except Exception as e:
            raise BackendError(f"model request failed: {e}") from e

        return to_completion(result)
