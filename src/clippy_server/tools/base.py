"""Tool contract shared by every built-in tool.

A tool is any object with a ``name``, a ``declaration()`` and an async
``execute(arguments)``. Tools do not inherit from a common base class; they
become available to the model by being registered in a ToolRegistry.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

ArgsT = TypeVar("ArgsT", bound=BaseModel)


class ToolExecutionError(Exception):
    """A tool failed; the message is safe to show to the model."""


@dataclass(frozen=True)
class ToolDeclaration:
    """Declarative description of a tool offered to the model.

    Attributes:
        name: Unique tool name
        description: What the tool does, written for the model
        parameters: JSON schema of the arguments object
    """

    name: str
    description: str
    parameters: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )


@runtime_checkable
class Tool(Protocol):
    """A capability the model can invoke mid-answer."""

    name: str

    def declaration(self) -> ToolDeclaration: ...

    async def execute(self, arguments: str) -> str:
        """Run the tool with serialized JSON arguments.

        Raises:
            ToolExecutionError: If the arguments are invalid or the tool fails
        """
        ...


def parse_arguments(arguments: str, model: type[ArgsT]) -> ArgsT:
    """Validate serialized tool arguments against a pydantic model.

    Empty input is treated as an empty object.

    Raises:
        ToolExecutionError: If the arguments are not valid JSON or fail validation
    """
    try:
        return model.model_validate_json(arguments or "{}")
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'arguments'}: {err['msg']}"
            for err in e.errors()
        )
        raise ToolExecutionError(f"failed to parse arguments: {problems}") from e
