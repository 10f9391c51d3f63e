"""Conversation API endpoints.

This module provides endpoints for:
- Starting a conversation (title + first reply)
- Continuing a conversation with a new user message
- Listing, describing and deleting conversations
"""

import asyncio
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from clippy_server.assistant import (
    AssistantError,
    TitleSummarizer,
    TurnExitReason,
    TurnOrchestrator,
    TurnResult,
)
from clippy_server.conversations import Conversation, ConversationManager
from clippy_server.dependencies import (
    get_conversation_manager,
    get_orchestrator,
    get_title_summarizer,
)
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

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])

DEFAULT_TITLE = "Untitled conversation"

_REASON_STATUS = {
    TurnExitReason.EMPTY_CONVERSATION: status.HTTP_400_BAD_REQUEST,
    TurnExitReason.BACKEND_FAILURE: status.HTTP_502_BAD_GATEWAY,
    TurnExitReason.NO_CHOICES: status.HTTP_502_BAD_GATEWAY,
    TurnExitReason.TOO_MANY_TOOL_CALLS: status.HTTP_502_BAD_GATEWAY,
}


def _error(
    status_code: int, code: str, message: str, details: dict[str, Any] | None = None
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            }
        },
    )


def _require_message(body: MessageRequest) -> str:
    message = body.message.strip()
    if not message:
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "invalid_argument",
            "message is required",
            {"argument": "message"},
        )
    return body.message


def _not_found(conversation_id: str) -> HTTPException:
    return _error(
        status.HTTP_404_NOT_FOUND,
        "conversation_not_found",
        f"Conversation {conversation_id} not found",
        {"conversation_id": conversation_id},
    )


def _load(manager: ConversationManager, conversation_id: str) -> Conversation:
    try:
        return manager.get_conversation(conversation_id)
    except FileNotFoundError:
        raise _not_found(conversation_id)
    except Exception as e:
        logger.error(f"Failed to load conversation {conversation_id}: {e}")
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "conversation_load_error",
            f"Failed to load conversation: {str(e)}",
        )


def _save(manager: ConversationManager, conversation: Conversation) -> None:
    try:
        manager.save_conversation(conversation)
    except Exception as e:
        logger.error(
            f"Failed to save conversation {conversation.conversation_id}: {e}"
        )
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "conversation_save_error",
            f"Failed to save conversation: {str(e)}",
        )


async def _generate_reply(
    orchestrator: TurnOrchestrator, conversation: Conversation, timeout: float
) -> TurnResult:
    """Run the reply loop under the configured deadline, mapping failures to HTTP errors."""
    try:
        return await asyncio.wait_for(orchestrator.run(conversation), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(
            f"Reply for conversation {conversation.conversation_id} "
            f"timed out after {timeout}s"
        )
        raise _error(
            status.HTTP_504_GATEWAY_TIMEOUT,
            "reply_timeout",
            f"Reply generation timed out after {timeout} seconds",
            {"conversation_id": conversation.conversation_id},
        )
    except AssistantError as e:
        logger.error(
            f"Reply for conversation {conversation.conversation_id} failed "
            f"({e.reason.value}): {e}"
        )
        raise _error(
            _REASON_STATUS.get(e.reason, status.HTTP_500_INTERNAL_SERVER_ERROR),
            e.reason.value,
            f"Failed to generate reply: {str(e)}",
            {"conversation_id": conversation.conversation_id},
        )


async def _generate_title(
    summarizer: TitleSummarizer, conversation: Conversation, timeout: float
) -> str:
    """Generate a title, falling back to DEFAULT_TITLE on any assistant failure."""
    try:
        return await asyncio.wait_for(summarizer.title(conversation), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(
            f"Title generation for conversation {conversation.conversation_id} timed out"
        )
    except AssistantError as e:
        logger.warning(
            f"Title generation for conversation {conversation.conversation_id} "
            f"failed ({e.reason.value}): {e}"
        )
    return DEFAULT_TITLE


def _tool_calls_executed(result: TurnResult) -> list[ToolCallExecuted]:
    return [ToolCallExecuted.model_validate(record) for record in result.tool_calls]


@router.post(
    "",
    response_model=StartConversationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a new conversation",
)
async def start_conversation(
    body: MessageRequest,
    request: Request,
    manager: Annotated[ConversationManager, Depends(get_conversation_manager)],
    orchestrator: Annotated[TurnOrchestrator, Depends(get_orchestrator)],
    summarizer: Annotated[TitleSummarizer, Depends(get_title_summarizer)],
) -> StartConversationResponse:
    """Start a conversation with a first user message.

    Generates a title and the assistant's reply. A failed title falls back
    to a default; a failed reply fails the request and nothing is stored.

    Raises:
        HTTPException: 400 for an empty message, 502/504 if the reply fails
    """
    message = _require_message(body)
    timeout = request.app.state.settings.reply_timeout

    conversation = manager.create_conversation(message)

    title = await _generate_title(summarizer, conversation, timeout)
    conversation.set_title(title)

    result = await _generate_reply(orchestrator, conversation, timeout)
    conversation.add_assistant_message(result.content)

    _save(manager, conversation)
    logger.info(f"Started conversation {conversation.conversation_id}")

    return StartConversationResponse(
        conversation_id=conversation.conversation_id,
        title=conversation.title,
        reply=result.content,
        tool_calls_executed=_tool_calls_executed(result),
    )


@router.post(
    "/{conversation_id}/messages",
    response_model=ContinueConversationResponse,
    summary="Continue a conversation",
)
async def continue_conversation(
    conversation_id: str,
    body: MessageRequest,
    request: Request,
    manager: Annotated[ConversationManager, Depends(get_conversation_manager)],
    orchestrator: Annotated[TurnOrchestrator, Depends(get_orchestrator)],
) -> ContinueConversationResponse:
    """Add a user message to a conversation and reply to it.

    Raises:
        HTTPException: 400 for an empty message, 404 if the conversation
        doesn't exist, 502/504 if the reply fails
    """
    message = _require_message(body)
    conversation = _load(manager, conversation_id)
    timeout = request.app.state.settings.reply_timeout

    conversation.add_user_message(message)
    result = await _generate_reply(orchestrator, conversation, timeout)
    conversation.add_assistant_message(result.content)

    _save(manager, conversation)

    return ContinueConversationResponse(
        conversation_id=conversation_id,
        reply=result.content,
        tool_calls_executed=_tool_calls_executed(result),
    )


@router.get(
    "",
    response_model=ConversationListResponse,
    summary="List all conversations",
)
async def list_conversations(
    manager: Annotated[ConversationManager, Depends(get_conversation_manager)],
) -> ConversationListResponse:
    """List all conversations, most recently updated first."""
    items = [
        ConversationListItem(
            conversation_id=conversation.conversation_id,
            title=conversation.title,
            created_at=conversation.metadata.created_at,
            updated_at=conversation.metadata.updated_at,
            message_count=conversation.metadata.message_count,
        )
        for conversation in manager.list_conversations()
    ]
    return ConversationListResponse(conversations=items)


@router.get(
    "/{conversation_id}",
    response_model=ConversationDetailResponse,
    summary="Describe a conversation",
)
async def describe_conversation(
    conversation_id: str,
    manager: Annotated[ConversationManager, Depends(get_conversation_manager)],
) -> ConversationDetailResponse:
    """Get a conversation with all of its messages.

    Raises:
        HTTPException: 404 if the conversation doesn't exist
    """
    conversation = _load(manager, conversation_id)
    return ConversationDetailResponse(
        conversation_id=conversation.conversation_id,
        title=conversation.title,
        created_at=conversation.metadata.created_at,
        updated_at=conversation.metadata.updated_at,
        message_count=conversation.metadata.message_count,
        messages=[MessageResponse.model_validate(msg) for msg in conversation.messages],
    )


@router.delete(
    "/{conversation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a conversation",
)
async def delete_conversation(
    conversation_id: str,
    manager: Annotated[ConversationManager, Depends(get_conversation_manager)],
) -> Response:
    """Delete a conversation.

    Raises:
        HTTPException: 404 if the conversation doesn't exist
    """
    try:
        manager.delete_conversation(conversation_id)
    except FileNotFoundError:
        raise _not_found(conversation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
