"""Options offered by the filter dialog dropdowns."""

import logging
from collections.abc import Iterable
from datetime import date, timedelta

from src.core import labels
from src.core.config import constants
from src.core.date_math import week_start
from src.domain.filters import CalendarMode, SortOrder
from src.domain.staff import Employee, EmployeesResponse, Team
from src.domain.task import TaskStatus
from src.models.service_models import FilterOption


logger = logging.getLogger(__name__)


class TaskTypeRegistry:
    """Open set of task type tags.

    Seeded with the built-in types; users may append their own at runtime.
    Tags are trimmed and lower-cased. Duplicate detection is left to callers
    through ``contains``.
    """

    def __init__(self, seed: Iterable[str] = constants.DEFAULT_TASK_TYPES) -> None:
        self._types: list[str] = [self.normalize(tag) for tag in seed]

    @staticmethod
    def normalize(tag: str) -> str:
        return tag.strip().lower()

    @property
    def types(self) -> list[str]:
        return list(self._types)

    def contains(self, tag: str) -> bool:
        return self.normalize(tag) in self._types

    def add(self, tag: str) -> str:
        """Append a user-defined type tag.

        Raises:
            ValueError: If the tag is blank
        """
        normalized = self.normalize(tag)
        if not normalized:
            msg = "Task type cannot be empty"
            raise ValueError(msg)
        self._types.append(normalized)
        logger.info(f"Added custom task type {normalized!r}")
        return normalized

    def options(self) -> list[FilterOption]:
        return [FilterOption(label=labels.TYPE_LABELS.get(tag, tag.capitalize()), value=tag) for tag in self._types]


def team_options(teams: Iterable[Team] | None) -> list[FilterOption]:
    return [FilterOption(label=team.name or labels.group_label(str(team.id)), value=str(team.id)) for team in teams or ()]


def employee_options(employees: EmployeesResponse | Iterable[Employee] | None) -> list[FilterOption]:
    if isinstance(employees, EmployeesResponse):
        employees = employees.employees
    return [FilterOption(label=employee.full_name, value=str(employee.id)) for employee in employees or ()]


def group_options(
    selected_types: Iterable[str] | None,
    teams: Iterable[Team] | None = None,
    employees: EmployeesResponse | Iterable[Employee] | None = None,
) -> list[FilterOption]:
    """Group filter options compatible with the selected task types.

    Crew types offer teams, employee types (trainings) offer employees. With
    both kinds selected, or nothing selected, everything is offered. A
    selection of custom types only offers the unassigned option. The
    unassigned option always comes first.

    Args:
        selected_types: Type tags currently selected in the form
        teams: Known teams
        employees: Known employees, wrapped or as a plain list

    Returns:
        Ordered option list
    """
    unassigned = FilterOption(label=constants.UNASSIGNED_LABEL, value=constants.UNASSIGNED_GROUP_KEY)
    teams_offered = team_options(teams)
    employees_offered = employee_options(employees)

    selected = {str(tag).lower() for tag in selected_types or ()}
    if not selected:
        return [unassigned, *teams_offered, *employees_offered]

    has_crew_types = bool(selected & constants.CREW_TASK_TYPES)
    has_employee_types = bool(selected & constants.EMPLOYEE_TASK_TYPES)

    if has_crew_types and has_employee_types:
        return [unassigned, *teams_offered, *employees_offered]
    if has_crew_types:
        return [unassigned, *teams_offered]
    if has_employee_types:
        return [unassigned, *employees_offered]
    return [unassigned]


def status_options() -> list[FilterOption]:
    return [FilterOption(label=labels.STATUS_LABELS[status], value=status) for status in TaskStatus]


def sort_options() -> list[FilterOption]:
    return [
        FilterOption(label=labels.filter_value_label("dateSort", order), value=order)
        for order in (SortOrder.NEAREST, SortOrder.FARTHEST)
    ]


def mode_options() -> list[FilterOption]:
    return [FilterOption(label=labels.MODE_LABELS[mode], value=mode) for mode in CalendarMode]


def day_options(year: int) -> list[FilterOption]:
    """Every day of a year, labelled dd.MM.yyyy."""
    first = date(year, 1, 1)
    total = (date(year, 12, 31) - first).days + 1
    days = (first + timedelta(days=offset) for offset in range(total))
    return [FilterOption(label=day.strftime("%d.%m.%Y"), value=day.isoformat()) for day in days]


def week_options(year: int) -> list[FilterOption]:
    """Monday-start weeks of a year, labelled "dd.MM - dd.MM".

    Starts with the week containing January 1st and stops before the first
    week that ends in the next year.
    """
    options: list[FilterOption] = []
    monday = week_start(date(year, 1, 1))
    while True:
        sunday = monday + timedelta(days=6)
        if sunday.year > year:
            break
        options.append(FilterOption(label=f"{monday:%d.%m} - {sunday:%d.%m}", value=monday.isoformat()))
        monday += timedelta(weeks=1)
    return options


def month_options(year: int) -> list[FilterOption]:
    """The twelve months of a year, labelled "<month> <year>" with YYYY-MM values."""
    return [
        FilterOption(label=f"{labels.MONTHS_NOMINATIVE[month - 1]} {year}", value=f"{year:04d}-{month:02d}")
        for month in range(1, 13)
    ]


def date_options(mode: CalendarMode | str, year: int) -> list[FilterOption]:
    """Date dropdown options matching the anchor shape of a mode."""
    mode = CalendarMode(mode)
    if mode == CalendarMode.DAY:
        return day_options(year)
    if mode == CalendarMode.WEEK:
        return week_options(year)
    return month_options(year)

