"""Type definitions for Ollama integration.

This module contains the dataclass used for representing a collected
(non-incremental) chat response from the Ollama streaming API.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ChatResult:
    """A complete chat response assembled from Ollama stream chunks.

    Attributes:
        content: Concatenated message content of all chunks
        tool_calls: Tool calls requested by the model, in the order received.
                    Each entry has the Ollama shape
                    {"function": {"name": str, "arguments": dict}}
        done: True if the stream delivered its completion marker
        eval_count: Number of generated tokens (final chunk only)
        prompt_eval_count: Number of prompt tokens (final chunk only)
    """

    content: str = ""
    tool_calls: list[dict[str, Any]] = field(default_factory=list)
    done: bool = False
    eval_count: int | None = None
    prompt_eval_count: int | None = None
