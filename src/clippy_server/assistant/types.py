"""Data types for the tool-augmented turn orchestrator.

These types are backend-agnostic: the reasoning backend adapter translates
them to and from its own wire format.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Sequence


class Role(str, Enum):
    """Message author role."""

    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    SYSTEM = "system"


class TurnExitReason(str, Enum):
    """Why a reply or title invocation terminated."""

    DONE = "done"
    EMPTY_CONVERSATION = "empty_conversation"
    BACKEND_FAILURE = "backend_failure"
    NO_CHOICES = "no_choices"
    TOO_MANY_TOOL_CALLS = "too_many_tool_calls"
    EMPTY_TITLE = "empty_title"


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool invocation requested by the reasoning backend.

    Attributes:
        call_id: Identifier tying the tool's result message to this call
        tool_name: Name of the requested tool
        raw_arguments: Serialized JSON arguments, opaque to the orchestrator
    """

    call_id: str
    tool_name: str
    raw_arguments: str = "{}"


@dataclass(frozen=True)
class TranscriptMessage:
    """One message of the transcript sent to the reasoning backend.

    ``tool_calls`` is only set on assistant messages that request tools;
    ``tool_call_id`` and ``tool_name`` are only set on tool result messages.
    """

    role: Role
    content: str = ""
    tool_calls: tuple[ToolCallRequest, ...] = ()
    tool_call_id: str | None = None
    tool_name: str | None = None


@dataclass
class Completion:
    """Result of one reasoning backend call.

    An empty ``choices`` list means the backend answered without any message.
    """

    choices: list[TranscriptMessage] = field(default_factory=list)


@dataclass
class ToolCallRecord:
    """Outcome of one dispatched tool call."""

    call_id: str
    tool_name: str
    arguments: str
    output: str
    ok: bool


@dataclass
class TurnResult:
    """Final outcome of a successful reply invocation."""

    content: str
    rounds: int
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    reason: TurnExitReason = TurnExitReason.DONE


class MessageView(Protocol):
    role: str
    content: str


class ConversationView(Protocol):
    """Read-only view of a stored conversation."""

    conversation_id: str

    @property
    def messages(self) -> Sequence[MessageView]: ...
