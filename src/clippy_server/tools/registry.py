"""Registry of the tools available to the model.

The registry is filled once during application startup and only read
afterwards, so concurrent requests can share it without locking.
"""

import logging

from clippy_server.tools.base import Tool, ToolDeclaration

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Maps tool names to executable tools."""

    def __init__(self, tools: list[Tool] | None = None) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        """Add a tool, replacing any tool already registered under its name."""
        if tool.name in self._tools:
            logger.debug(f"Replacing registered tool: {tool.name}")
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def get(self, name: str) -> Tool | None:
        """Look up a tool by name, returning None if it is not registered."""
        return self._tools.get(name)

    def declarations(self) -> list[ToolDeclaration]:
        """Snapshot of the declarations of all registered tools."""
        return [tool.declaration() for tool in self._tools.values()]

    def names(self) -> list[str]:
        return sorted(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
