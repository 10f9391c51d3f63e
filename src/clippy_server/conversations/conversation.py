"""Conversation class for managing individual conversations.

This module provides the Conversation class which handles:
- Loading and saving conversation data to JSON files
- Adding messages to the conversation history
- Managing the title and metadata
"""

import json
import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from clippy_server.conversations.types import (
    AssistantMessage,
    ConversationMetadata,
    Message,
    UserMessage,
)

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Current UTC time as an ISO 8601 string with a Z suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _message_from_dict(data: dict[str, Any]) -> Message:
    """Convert a dictionary to the appropriate Message type.

    Args:
        data: Message data as a dictionary

    Returns:
        Appropriate Message dataclass instance

    Raises:
        ValueError: If role is unknown
    """
    role = data.get("role")

    if role == "user":
        return UserMessage(**data)
    elif role == "assistant":
        return AssistantMessage(**data)
    else:
        raise ValueError(f"Unknown message role: {role}")


class Conversation:
    """A conversation with its message history and metadata.

    A conversation is persisted as a JSON file with the following structure:
    {
        "metadata": {...},
        "messages": [...]
    }
    """

    def __init__(
        self,
        conversation_id: str,
        messages: list[Message] | None = None,
        metadata: ConversationMetadata | None = None,
    ):
        """Initialize a Conversation.

        Args:
            conversation_id: Unique conversation identifier (10-char hex)
            messages: Initial message history (default: empty)
            metadata: Conversation metadata (default: auto-generated)
        """
        self.conversation_id = conversation_id
        self.messages: list[Message] = messages or []

        if metadata is None:
            now = utc_now()
            self.metadata = ConversationMetadata(
                conversation_id=conversation_id,
                created_at=now,
                updated_at=now,
                message_count=len(self.messages),
            )
        else:
            self.metadata = metadata

    @property
    def title(self) -> str:
        return self.metadata.title

    def add_message(self, message: Message) -> None:
        """Add a message to the conversation history.

        Updates the message_count in metadata and the updated_at timestamp.

        Args:
            message: The message to add
        """
        self.messages.append(message)
        self.metadata.message_count = len(self.messages)
        self.metadata.updated_at = utc_now()

    def add_user_message(self, content: str) -> UserMessage:
        message = UserMessage(
            content=content,
            message_id=Conversation.generate_id(),
            timestamp=utc_now(),
        )
        self.add_message(message)
        return message

    def add_assistant_message(self, content: str) -> AssistantMessage:
        message = AssistantMessage(
            content=content,
            message_id=Conversation.generate_id(),
            timestamp=utc_now(),
        )
        self.add_message(message)
        return message

    def set_title(self, title: str) -> None:
        self.metadata.title = title
        self.metadata.updated_at = utc_now()

    def to_dict(self) -> dict[str, Any]:
        """Convert conversation to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the conversation
        """
        return {
            "metadata": asdict(self.metadata),
            "messages": [asdict(msg) for msg in self.messages],
        }

    def save(self, conversations_dir: Path) -> None:
        """Save the conversation to a JSON file.

        Args:
            conversations_dir: Directory where conversation files are stored
        """
        conversations_dir.mkdir(parents=True, exist_ok=True)
        file_path = conversations_dir / f"{self.conversation_id}.json"

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        logger.debug(f"Saved conversation {self.conversation_id} to {file_path}")

    @classmethod
    def load(cls, conversation_id: str, conversations_dir: Path) -> "Conversation":
        """Load a conversation from a JSON file.

        Args:
            conversation_id: The conversation ID to load
            conversations_dir: Directory where conversation files are stored

        Returns:
            Loaded Conversation instance

        Raises:
            FileNotFoundError: If conversation file doesn't exist
            ValueError: If conversation data is invalid
        """
        file_path = conversations_dir / f"{conversation_id}.json"

        if not file_path.exists():
            raise FileNotFoundError(f"Conversation {conversation_id} not found")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        metadata_dict = data["metadata"]
        metadata = ConversationMetadata(
            conversation_id=metadata_dict["conversation_id"],
            created_at=metadata_dict["created_at"],
            updated_at=metadata_dict["updated_at"],
            title=metadata_dict.get("title", ""),
            message_count=metadata_dict.get("message_count", 0),
            format_version=metadata_dict.get("format_version", "1.0"),
        )

        messages = [
            _message_from_dict(msg_dict) for msg_dict in data.get("messages", [])
        ]

        return cls(conversation_id=conversation_id, messages=messages, metadata=metadata)

    @staticmethod
    def generate_id() -> str:
        """Generate a new unique identifier.

        Returns:
            10-character hexadecimal string
        """
        return uuid.uuid4().hex[:10]
