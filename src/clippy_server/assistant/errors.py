"""Exceptions raised by the reply orchestrator and the title summarizer."""

from clippy_server.assistant.types import TurnExitReason


class AssistantError(Exception):
    """Base class for reply and title failures.

    Attributes:
        reason: The enumerated exit reason of the failed invocation
    """

    reason: TurnExitReason = TurnExitReason.BACKEND_FAILURE
    default_message = "assistant failure"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EmptyConversationError(AssistantError):
    reason = TurnExitReason.EMPTY_CONVERSATION
    default_message = "conversation has no messages"


class BackendError(AssistantError):
    """Transport, auth or rate-limit failure of the reasoning backend."""

    reason = TurnExitReason.BACKEND_FAILURE
    default_message = "reasoning backend request failed"


class NoChoicesError(AssistantError):
    reason = TurnExitReason.NO_CHOICES
    default_message = "no choices returned by the model"


class TooManyToolCallsError(AssistantError):
    reason = TurnExitReason.TOO_MANY_TOOL_CALLS
    default_message = "too many tool calls, unable to generate reply"


class EmptyTitleError(AssistantError):
    reason = TurnExitReason.EMPTY_TITLE
    default_message = "empty response from the model for title generation"
