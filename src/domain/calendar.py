"""Calendar range and grid models."""

from datetime import date, datetime
from enum import StrEnum
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.core.config import settings
from src.domain.filters import CalendarMode


def to_local_naive(value: datetime) -> datetime:
    """Wall-clock time in the configured timezone; naive values are already local."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(settings.timezone)).replace(tzinfo=None)


class DateRange(BaseModel):
    """Inclusive instant range. Derived, never persisted."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def to_local_wall_clock(cls, v: datetime) -> datetime:
        """Task instants are naive local time, so aware bounds are converted to match."""
        return to_local_naive(v)

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start > self.end:
            msg = f"Invalid range: start {self.start.isoformat()} is after end {self.end.isoformat()}"
            raise ValueError(msg)
        return self

    def contains(self, instant: datetime) -> bool:
        return self.start <= to_local_naive(instant) <= self.end

    def contains_date(self, day: date) -> bool:
        return self.start.date() <= day <= self.end.date()


class GridCell(BaseModel):
    """A single day cell. Blank padding positions are represented by None, not by a cell."""

    model_config = ConfigDict(frozen=True)

    day: date
    highlighted: bool = Field(default=False, description="Inside the selected week")
    starting_day: bool = Field(default=False, description="Rounded left edge of the highlight")
    ending_day: bool = Field(default=False, description="Rounded right edge of the highlight")
    selected: bool = Field(default=False, description="The anchor day itself")

    @property
    def key(self) -> str:
        return self.day.isoformat()


class MonthGrid(BaseModel):
    """Monday-first month grid of 7-cell rows."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    rows: tuple[tuple[GridCell | None, ...], ...]

    @property
    def cells(self) -> list[GridCell]:
        """Non-blank cells in calendar order."""
        return [cell for row in self.rows for cell in row if cell is not None]


class CalendarGrid(BaseModel):
    """Everything a calendar mode renders for one anchor."""

    model_config = ConfigDict(frozen=True)

    mode: CalendarMode
    anchor: date
    months: tuple[MonthGrid, ...] = Field(default=(), description="One grid for month/week, 24 for year")
    week: tuple[GridCell, ...] = Field(default=(), description="Week strip for day mode")


class PageDirection(StrEnum):
    """Paging direction within a calendar mode."""

    NEXT = "next"
    PREV = "prev"

    @property
    def step(self) -> int:
        return 1 if self is PageDirection.NEXT else -1
