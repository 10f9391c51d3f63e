"""Tool listing local bank and public holidays from an iCalendar feed."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from clippy_server.integrations.calendar import CalendarClient, CalendarError
from clippy_server.tools.base import ToolDeclaration, ToolExecutionError, parse_arguments


class HolidayArguments(BaseModel):
    before_date: date | None = None
    after_date: date | None = None
    max_count: int | None = Field(default=None, ge=0)

    @field_validator("before_date", "after_date", mode="before")
    @classmethod
    def _parse_rfc3339(cls, value: object) -> object:
        # Accept full RFC 3339 timestamps as well as plain dates
        if isinstance(value, str) and value:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value or None


class HolidayTool:
    """Reads holidays from a configurable calendar feed."""

    name = "get_holidays"

    def __init__(self, client: CalendarClient, link: str) -> None:
        self._client = client
        self._link = link

    def declaration(self) -> ToolDeclaration:
        return ToolDeclaration(
            name=self.name,
            description=(
                "Gets local bank and public holidays. Each line is a single holiday "
                "in the format 'YYYY-MM-DD: Holiday Name'."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "before_date": {
                        "type": "string",
                        "description": (
                            "Optional date in RFC3339 format to get holidays before "
                            "this date. If not provided, all holidays will be returned."
                        ),
                    },
                    "after_date": {
                        "type": "string",
                        "description": (
                            "Optional date in RFC3339 format to get holidays after "
                            "this date. If not provided, all holidays will be returned."
                        ),
                    },
                    "max_count": {
                        "type": "integer",
                        "description": (
                            "Optional maximum number of holidays to return. "
                            "If not provided, all holidays will be returned."
                        ),
                    },
                },
            },
        )

    async def execute(self, arguments: str) -> str:
        args = parse_arguments(arguments, HolidayArguments)

        try:
            events = await self._client.load_events(self._link)
        except CalendarError as e:
            raise ToolExecutionError(f"failed to load holiday events: {e}") from e

        holidays: list[str] = []
        for event in events:
            if args.max_count and len(holidays) >= args.max_count:
                break
            if args.before_date and event.start > args.before_date:
                continue
            if args.after_date and event.start < args.after_date:
                continue
            holidays.append(f"{event.start.isoformat()}: {event.summary}")

        return "\n".join(holidays)
