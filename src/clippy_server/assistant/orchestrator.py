"""Tool-augmented turn orchestrator.

Turns a conversation into a finished assistant reply by repeatedly asking
the reasoning backend for a completion, executing the tools it requests and
feeding their results back, until the model answers in text or the round
ceiling is reached.

Tool failures (unknown tool, bad arguments, execution errors) are written
into the transcript as tool messages so the model can recover. Backend
failures, empty responses and an exhausted round budget end the reply with
an AssistantError.
"""

import logging

from clippy_server.assistant.backend import ReasoningBackend
from clippy_server.assistant.errors import (
    EmptyConversationError,
    NoChoicesError,
    TooManyToolCallsError,
)
from clippy_server.assistant.transcript import build_reply_transcript, tool_result_message
from clippy_server.assistant.types import (
    ConversationView,
    ToolCallRecord,
    ToolCallRequest,
    TranscriptMessage,
    TurnExitReason,
    TurnResult,
)
from clippy_server.tools.base import ToolExecutionError
from clippy_server.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

MAX_TOOL_ROUNDS = 15


class TurnOrchestrator:
    """Drives the reply loop for one conversation at a time.

    An orchestrator holds no per-request state and can serve concurrent
    replies; each call works on its own transcript.
    """

    def __init__(self, backend: ReasoningBackend, registry: ToolRegistry) -> None:
        self._backend = backend
        self._registry = registry

    async def reply(self, conversation: ConversationView) -> str:
        """Generate the assistant's reply text for a conversation."""
        result = await self.run(conversation)
        return result.content

    async def run(self, conversation: ConversationView) -> TurnResult:
        """Generate a reply and report the tool calls made along the way.

        Args:
            conversation: The conversation to answer; it is never modified

        Returns:
            TurnResult: Final text, number of model rounds and tool call records

        Raises:
            EmptyConversationError: If the conversation has no messages
            BackendError: If a backend request fails
            NoChoicesError: If the backend returns no message
            TooManyToolCallsError: If the model is still requesting tools
                after MAX_TOOL_ROUNDS rounds
        """
        if not conversation.messages:
            raise EmptyConversationError()

        logger.info(
            f"Generating reply for conversation {conversation.conversation_id}"
        )

        transcript = build_reply_transcript(conversation.messages)
        records: list[ToolCallRecord] = []

        for round_number in range(1, MAX_TOOL_ROUNDS + 1):
            completion = await self._backend.complete(
                transcript, self._registry.declarations()
            )

            if not completion.choices:
                raise NoChoicesError()

            message = completion.choices[0]

            if not message.tool_calls:
                if not message.content.strip():
                    logger.warning(
                        f"Model returned an empty reply for conversation "
                        f"{conversation.conversation_id}"
                    )
                logger.debug(f"Reply finished after {round_number} round(s)")
                return TurnResult(
                    content=message.content,
                    rounds=round_number,
                    tool_calls=records,
                    reason=TurnExitReason.DONE,
                )

            transcript.append(message)
            for call in message.tool_calls:
                result_message, record = await self._dispatch(call)
                transcript.append(result_message)
                records.append(record)

        logger.warning(
            f"Tool call budget of {MAX_TOOL_ROUNDS} rounds exhausted for "
            f"conversation {conversation.conversation_id}"
        )
        raise TooManyToolCallsError()

    async def _dispatch(
        self, call: ToolCallRequest
    ) -> tuple[TranscriptMessage, ToolCallRecord]:
        """Execute one requested tool call and wrap its outcome as a tool message."""
        logger.info(f"Tool call received: name={call.tool_name}, args={call.raw_arguments}")

        tool = self._registry.get(call.tool_name)
        ok = False
        if tool is None:
            logger.warning(f"Model requested unknown tool: {call.tool_name}")
            output = f"unknown tool: {call.tool_name}"
        else:
            try:
                output = await tool.execute(call.raw_arguments)
                ok = True
            except ToolExecutionError as e:
                logger.warning(f"Tool {call.tool_name} failed: {e}")
                output = f"tool execution failed: {e}"
            except Exception:
                logger.exception(f"Unexpected error in tool {call.tool_name}")
                output = "tool execution failed: unexpected error"

        record = ToolCallRecord(
            call_id=call.call_id,
            tool_name=call.tool_name,
            arguments=call.raw_arguments,
            output=output,
            ok=ok,
        )
        return tool_result_message(call, output), record
