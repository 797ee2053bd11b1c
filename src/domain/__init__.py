"""Domain models and DTOs."""

from src.domain.calendar import CalendarGrid, DateRange, GridCell, MonthGrid, PageDirection
from src.domain.filters import CalendarMode, FilterChip, FilterField, FilterState, SortOrder
from src.domain.staff import Employee, EmployeesResponse, Team
from src.domain.task import Task, TaskStatus


__all__ = [
    "CalendarGrid",
    "CalendarMode",
    "DateRange",
    "Employee",
    "EmployeesResponse",
    "FilterChip",
    "FilterField",
    "FilterState",
    "GridCell",
    "MonthGrid",
    "PageDirection",
    "SortOrder",
    "Task",
    "TaskStatus",
    "Team",
]
