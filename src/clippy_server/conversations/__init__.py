"""Conversation storage for clippy-server.

This package provides JSON-file persistence of conversations and their
user/assistant message history.
"""

from clippy_server.conversations.conversation import Conversation
from clippy_server.conversations.manager import ConversationManager
from clippy_server.conversations.types import (
    AssistantMessage,
    ConversationMetadata,
    Message,
    UserMessage,
)

__all__ = [
    # Core classes
    "Conversation",
    "ConversationManager",
    # Message types
    "Message",
    "UserMessage",
    "AssistantMessage",
    # Metadata
    "ConversationMetadata",
]
