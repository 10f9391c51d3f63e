"""Transcript construction for replies and titles."""

from typing import Sequence

from clippy_server.assistant.types import (
    MessageView,
    Role,
    ToolCallRequest,
    TranscriptMessage,
)

REPLY_SYSTEM_PROMPT = (
    "You are a helpful, concise AI assistant. "
    "Provide accurate, safe, and clear responses."
)

TITLE_SYSTEM_PROMPT = (
    "Generate a concise, descriptive title for the conversation based on the "
    "user's first message. Do not answer the message; only describe its topic. "
    "The title should be a single line, no more than 80 characters, and should "
    "not include any special characters or emojis. Only return the title, "
    "nothing else."
)

_REPLAYED_ROLES = (Role.USER, Role.ASSISTANT)


def build_reply_transcript(messages: Sequence[MessageView]) -> list[TranscriptMessage]:
    """Seed a reply transcript: system prompt, then user/assistant history.

    Messages with any other role are not replayed.
    """
    transcript = [TranscriptMessage(role=Role.SYSTEM, content=REPLY_SYSTEM_PROMPT)]
    for message in messages:
        if message.role in _REPLAYED_ROLES:
            transcript.append(
                TranscriptMessage(role=Role(message.role), content=message.content)
            )
    return transcript


def build_title_transcript(messages: Sequence[MessageView]) -> list[TranscriptMessage]:
    """Title transcript: system prompt plus the first user message only."""
    transcript = [TranscriptMessage(role=Role.SYSTEM, content=TITLE_SYSTEM_PROMPT)]
    for message in messages:
        if message.role == Role.USER:
            transcript.append(TranscriptMessage(role=Role.USER, content=message.content))
            break
    return transcript


def tool_result_message(call: ToolCallRequest, content: str) -> TranscriptMessage:
    return TranscriptMessage(
        role=Role.TOOL,
        content=content,
        tool_call_id=call.call_id,
        tool_name=call.tool_name,
    )
