"""Data types for conversation storage.

This module defines the persisted messages and metadata of a conversation.
"""

from dataclasses import dataclass


@dataclass
class UserMessage:
    """A message from the user."""

    role: str = "user"
    content: str = ""
    message_id: str = ""
    timestamp: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'user'."""
        self.role = "user"


@dataclass
class AssistantMessage:
    """A reply from the assistant."""

    role: str = "assistant"
    content: str = ""
    message_id: str = ""
    timestamp: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'assistant'."""
        self.role = "assistant"


# Union type for all stored message types
Message = UserMessage | AssistantMessage


@dataclass
class ConversationMetadata:
    """Metadata for a conversation."""

    conversation_id: str
    created_at: str
    updated_at: str
    title: str = ""
    message_count: int = 0
    format_version: str = "1.0"
