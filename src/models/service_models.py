"""Pydantic models for service layer return types.

These models provide type safety at service boundaries between the calendar
core and the screens that render it.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from src.core.errors import ErrorResponse
from src.domain.calendar import CalendarGrid, DateRange
from src.domain.filters import CalendarMode
from src.domain.staff import EmployeesResponse, Team
from src.domain.task import Task


SlotKey = tuple[date, int, str]


class FilterOption(BaseModel):
    """Label/value pair offered by a filter dropdown."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class CellMap(BaseModel):
    """Tasks bucketed by calendar cell for one period.

    ``days`` maps a date to its tasks; ``slots`` maps (date, hour, group key)
    to the tasks of one timeline cell. Lists keep the input order.
    """

    model_config = ConfigDict(frozen=True)

    period: DateRange
    days: dict[date, tuple[Task, ...]] = Field(default_factory=dict)
    slots: dict[SlotKey, tuple[Task, ...]] = Field(default_factory=dict)
    group_keys: tuple[str, ...] = ()
    group_colors: dict[str, str] = Field(default_factory=dict)
    skipped_task_ids: tuple[str, ...] = Field(default=(), description="Tasks left out for unparsable start dates")

    def tasks_on(self, day: date) -> list[Task]:
        return list(self.days.get(day, ()))

    def tasks_at(self, day: date, hour: int, group_key: str) -> list[Task]:
        return list(self.slots.get((day, hour, group_key), ()))

    def tasks_for_group(self, day: date, group_key: str) -> list[Task]:
        """All of one group's tasks on a day, as shown in the week table."""
        return [task for task in self.days.get(day, ()) if task.group_key == group_key]

    def hours_on(self, day: date) -> list[int]:
        return sorted({hour for (slot_day, hour, _) in self.slots if slot_day == day})

    @property
    def task_count(self) -> int:
        return sum(len(tasks) for tasks in self.days.values())


class TimelineEvent(BaseModel):
    """A task projected onto the day or week timeline."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    start: datetime
    end: datetime
    title: str
    summary: str = Field(description="\"<type> - <name>\" line shown on the event")
    type: str
    status: str
    notes: str | None = None
    color: str = Field(description="Status color")
    group_key: str
    group_color: str | None = None
    border_color: str | None = Field(default=None, description="Darkened group color for the left edge")
    time_label: str = ""


class DayColumn(BaseModel):
    """One team or employee column of the day timeline."""

    model_config = ConfigDict(frozen=True)

    group_key: str
    label: str
    color: str
    border_color: str
    events: tuple[TimelineEvent, ...] = ()


class ScheduleSnapshot(BaseModel):
    """Task and staff collections fetched for one computation pass."""

    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...] = ()
    teams: tuple[Team, ...] = ()
    employees: EmployeesResponse = Field(default_factory=EmployeesResponse)
    loading: bool = False
    error: ErrorResponse | None = None


class CalendarView(BaseModel):
    """Everything the calendar screen renders for the current state."""

    model_config = ConfigDict(frozen=True)

    mode: CalendarMode
    anchor: date
    title: str
    period: DateRange
    grid: CalendarGrid
    cells: CellMap
    visible_tasks: tuple[Task, ...] = ()
    events: dict[date, tuple[TimelineEvent, ...]] = Field(default_factory=dict)
    columns: tuple[DayColumn, ...] = Field(default=(), description="Day mode only")
    group_options: tuple[FilterOption, ...] = ()
    loading: bool = False
    error: ErrorResponse | None = None
