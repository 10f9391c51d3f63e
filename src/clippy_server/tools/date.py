"""Tool returning the current date and time."""

from datetime import datetime
from typing import Callable

from clippy_server.tools.base import ToolDeclaration


def _local_now() -> datetime:
    return datetime.now().astimezone()


class DateTool:
    """Returns today's date and time in RFC 3339 format."""

    name = "get_today_date"

    def __init__(self, clock: Callable[[], datetime] = _local_now) -> None:
        self._clock = clock

    def declaration(self) -> ToolDeclaration:
        return ToolDeclaration(
            name=self.name,
            description="Get today's date and time in RFC3339 format",
        )

    async def execute(self, arguments: str) -> str:
        return self._clock().isoformat(timespec="seconds")
