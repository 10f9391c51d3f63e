"""Conversation title generation."""

import logging

from clippy_server.assistant.backend import ReasoningBackend
from clippy_server.assistant.errors import EmptyTitleError, NoChoicesError
from clippy_server.assistant.transcript import build_title_transcript
from clippy_server.assistant.types import ConversationView

logger = logging.getLogger(__name__)

EMPTY_CONVERSATION_TITLE = "An empty conversation"
MAX_TITLE_LENGTH = 80

_TITLE_TRIM_CHARS = " \t\r\n-\"'"


def clean_title(raw: str) -> str:
    """Normalize a model-generated title to a single short line."""
    title = " ".join(raw.splitlines())
    title = title.strip(_TITLE_TRIM_CHARS)
    return title[:MAX_TITLE_LENGTH].rstrip()


class TitleSummarizer:
    """Condenses the first user message of a conversation into a title."""

    def __init__(self, backend: ReasoningBackend) -> None:
        self._backend = backend

    async def title(self, conversation: ConversationView) -> str:
        """Generate a title for a conversation.

        Returns:
            str: The cleaned title, or EMPTY_CONVERSATION_TITLE for a
            conversation without messages

        Raises:
            BackendError: If the backend request fails
            NoChoicesError: If the backend returns no message
            EmptyTitleError: If the cleaned title is empty
        """
        if not conversation.messages:
            return EMPTY_CONVERSATION_TITLE

        logger.info(
            f"Generating title for conversation {conversation.conversation_id}"
        )

        completion = await self._backend.complete(
            build_title_transcript(conversation.messages), []
        )
        if not completion.choices:
            raise NoChoicesError()

        title = clean_title(completion.choices[0].content)
        if not title:
            raise EmptyTitleError()

        return title
