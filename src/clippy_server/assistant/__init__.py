"""Reply orchestration and title generation.

This package contains the tool-augmented reply loop, the title summarizer,
the reasoning backend boundary (with its Ollama adapter) and the error
taxonomy shared by all of them.
"""

from clippy_server.assistant.backend import OllamaBackend, ReasoningBackend
from clippy_server.assistant.errors import (
    AssistantError,
    BackendError,
    EmptyConversationError,
    EmptyTitleError,
    NoChoicesError,
    TooManyToolCallsError,
)
from clippy_server.assistant.orchestrator import MAX_TOOL_ROUNDS, TurnOrchestrator
from clippy_server.assistant.title import (
    EMPTY_CONVERSATION_TITLE,
    MAX_TITLE_LENGTH,
    TitleSummarizer,
    clean_title,
)
from clippy_server.assistant.types import (
    Completion,
    ConversationView,
    Role,
    ToolCallRecord,
    ToolCallRequest,
    TranscriptMessage,
    TurnExitReason,
    TurnResult,
)

__all__ = [
    # Core classes
    "TurnOrchestrator",
    "TitleSummarizer",
    "OllamaBackend",
    "ReasoningBackend",
    # Constants
    "MAX_TOOL_ROUNDS",
    "MAX_TITLE_LENGTH",
    "EMPTY_CONVERSATION_TITLE",
    "clean_title",
    # Types
    "Completion",
    "ConversationView",
    "Role",
    "ToolCallRecord",
    "ToolCallRequest",
    "TranscriptMessage",
    "TurnExitReason",
    "TurnResult",
    # Errors
    "AssistantError",
    "BackendError",
    "EmptyConversationError",
    "EmptyTitleError",
    "NoChoicesError",
    "TooManyToolCallsError",
]
