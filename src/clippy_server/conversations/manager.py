"""ConversationManager for CRUD operations on stored conversations.

This module provides the ConversationManager class which handles:
- Creating new conversations
- Listing conversations, newest first
- Retrieving, saving and deleting conversations
"""

import logging
import re
from pathlib import Path

from clippy_server.conversations.conversation import Conversation

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[0-9a-f]{10}")


class ConversationManager:
    """Manages conversations stored as JSON files in a directory."""

    def __init__(self, conversations_dir: Path):
        """Initialize the ConversationManager.

        Args:
            conversations_dir: Directory where conversation JSON files are stored
        """
        self.conversations_dir = conversations_dir
        self.conversations_dir.mkdir(parents=True, exist_ok=True)

    def create_conversation(self, first_message: str) -> Conversation:
        """Create an unsaved conversation holding the first user message.

        The caller persists it with save_conversation() once the reply exists.
        """
        conversation = Conversation(conversation_id=Conversation.generate_id())
        conversation.add_user_message(first_message)
        return conversation

    def save_conversation(self, conversation: Conversation) -> None:
        conversation.save(self.conversations_dir)
        logger.info(f"Saved conversation {conversation.conversation_id}")

    def list_conversations(self) -> list[Conversation]:
        """List all conversations, sorted by updated_at descending.

        Returns:
            List of Conversation objects, newest first
        """
        conversations: list[Conversation] = []

        for file_path in self.conversations_dir.glob("*.json"):
            conversation_id = file_path.stem
            try:
                conversations.append(
                    Conversation.load(conversation_id, self.conversations_dir)
                )
            except Exception as e:
                logger.warning(f"Failed to load conversation {conversation_id}: {e}")
                continue

        conversations.sort(key=lambda c: c.metadata.updated_at, reverse=True)

        logger.debug(f"Listed {len(conversations)} conversations")
        return conversations

    def get_conversation(self, conversation_id: str) -> Conversation:
        """Get a specific conversation by ID.

        Raises:
            FileNotFoundError: If the conversation doesn't exist
        """
        self._check_id(conversation_id)
        conversation = Conversation.load(conversation_id, self.conversations_dir)
        logger.debug(f"Retrieved conversation {conversation_id}")
        return conversation

    def delete_conversation(self, conversation_id: str) -> None:
        """Delete a conversation.

        Raises:
            FileNotFoundError: If the conversation doesn't exist
        """
        self._check_id(conversation_id)
        file_path = self.conversations_dir / f"{conversation_id}.json"

        if not file_path.exists():
            raise FileNotFoundError(f"Conversation {conversation_id} not found")

        file_path.unlink()
        logger.info(f"Deleted conversation {conversation_id}")

    @staticmethod
    def _check_id(conversation_id: str) -> None:
        # IDs become file names; anything else can't name a stored conversation
        if not _ID_PATTERN.fullmatch(conversation_id):
            raise FileNotFoundError(f"Conversation {conversation_id} not found")
