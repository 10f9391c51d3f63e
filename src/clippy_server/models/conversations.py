"""Pydantic models for conversation API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class MessageRequest(BaseModel):
    """Request body for starting or continuing a conversation."""

    message: str = Field(description="The user message to send")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"message": "What's the weather like in Barcelona?"}]}
    )


class ToolCallExecuted(BaseModel):
    """A tool call the assistant made while producing a reply."""

    call_id: str = Field(description="Identifier of the tool call")
    tool_name: str = Field(description="Name of the tool that was requested")
    arguments: str = Field(description="Serialized JSON arguments of the call")
    output: str = Field(description="Text fed back to the model")
    ok: bool = Field(description="Whether the tool executed successfully")

    model_config = ConfigDict(from_attributes=True)


class StartConversationResponse(BaseModel):
    """Response body for POST /api/v1/conversations."""

    conversation_id: str = Field(description="Conversation identifier")
    title: str = Field(description="Generated conversation title")
    reply: str = Field(description="The assistant's reply")
    tool_calls_executed: list[ToolCallExecuted] = Field(
        default_factory=list,
        description="Tools executed while producing the reply",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "conversation_id": "a1b2c3d4e5",
                "title": "Weather in Barcelona",
                "reply": "It is sunny and 24°C in Barcelona right now.",
                "tool_calls_executed": [],
            }
        }
    )


class ContinueConversationResponse(BaseModel):
    """Response body for POST /api/v1/conversations/{conversation_id}/messages."""

    conversation_id: str = Field(description="Conversation identifier")
    reply: str = Field(description="The assistant's reply")
    tool_calls_executed: list[ToolCallExecuted] = Field(
        default_factory=list,
        description="Tools executed while producing the reply",
    )


class MessageResponse(BaseModel):
    """A stored conversation message."""

    role: str = Field(description="Message role (user or assistant)")
    content: str = Field(description="Message content")
    message_id: str = Field(description="Unique message identifier")
    timestamp: str = Field(description="ISO 8601 timestamp")

    model_config = ConfigDict(from_attributes=True)


class ConversationListItem(BaseModel):
    """Summary of a conversation in the list response."""

    conversation_id: str
    title: str
    created_at: str
    updated_at: str
    message_count: int


class ConversationListResponse(BaseModel):
    conversations: list[ConversationListItem]


class ConversationDetailResponse(BaseModel):
    """A conversation with its full message history."""

    conversation_id: str
    title: str
    created_at: str
    updated_at: str
    message_count: int
    messages: list[MessageResponse]
