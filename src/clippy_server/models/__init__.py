"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from clippy_server.models.conversations import (
    ContinueConversationResponse,
    ConversationDetailResponse,
    ConversationListItem,
    ConversationListResponse,
    MessageRequest,
    MessageResponse,
    StartConversationResponse,
    ToolCallExecuted,
)
from clippy_server.models.health import HealthResponse

__all__ = [
    "ContinueConversationResponse",
    "ConversationDetailResponse",
    "ConversationListItem",
    "ConversationListResponse",
    "HealthResponse",
    "MessageRequest",
    "MessageResponse",
    "StartConversationResponse",
    "ToolCallExecuted",
]
