"""Data source contracts for tasks and staff, plus an in-memory implementation."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from src.domain.staff import Employee, EmployeesResponse, Team
from src.domain.task import Task


logger = logging.getLogger(__name__)


class TaskDataSource(Protocol):
    """Supplies the full current task list; no pagination."""

    async def fetch_tasks(self) -> list[Task]: ...


class StaffDataSource(Protocol):
    """Supplies teams as a bare list and employees wrapped in a response object."""

    async def fetch_teams(self) -> list[Team]: ...

    async def fetch_employees(self) -> EmployeesResponse: ...


class InMemoryDataSource:
    """Task and staff source backed by raw backend payloads held in memory.

    Records are validated on every fetch, so a malformed payload surfaces as
    a pydantic ValidationError just like a bad response would.
    """

    def __init__(
        self,
        *,
        tasks: Iterable[Mapping[str, Any] | Task] = (),
        teams: Iterable[Mapping[str, Any] | Team] = (),
        employees: Iterable[Mapping[str, Any] | Employee] = (),
    ) -> None:
        self._tasks = list(tasks)
        self._teams = list(teams)
        self._employees = list(employees)

    def add_task(self, record: Mapping[str, Any] | Task) -> None:
        self._tasks.append(record)

    async def fetch_tasks(self) -> list[Task]:
        tasks = [Task.model_validate(record) for record in self._tasks]
        logger.debug(f"Fetched {len(tasks)} tasks from memory")
        return tasks

    async def fetch_teams(self) -> list[Team]:
        return [Team.model_validate(record) for record in self._teams]

    async def fetch_employees(self) -> EmployeesResponse:
        return EmployeesResponse(employees=tuple(Employee.model_validate(record) for record in self._employees))
