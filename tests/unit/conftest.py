"""Pytest configuration and fixtures for unit tests."""

from datetime import date

import pytest

from src.domain.filters import CalendarMode, FilterState
from src.domain.staff import Employee, EmployeesResponse, Team
from src.domain.task import Task
from src.interface.data_source import InMemoryDataSource
from src.services.filter_store import FilterStore


@pytest.fixture
def today() -> date:
    """A fixed Wednesday so week and month computations are predictable."""
    return date(2024, 3, 13)


@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults."""

    def _make(task_id: int | str, start: str, **fields: object) -> Task:
        fields.setdefault("type", "montaż")
        fields.setdefault("status", "Zaplanowane")
        return Task(id=task_id, start_date=start, **fields)

    return _make


@pytest.fixture
def sample_tasks(make_task) -> list[Task]:
    """A week of mixed tasks around the fixed today."""
    return [
        make_task(1, "2024-03-11T09:00:00", type="oględziny", status="wykonane", group=1, name="Kowalski"),
        make_task(2, "2024-03-13T09:30:00", type="montaż", status="Zaplanowane", group=1, notes="Dach płaski"),
        make_task(3, "2024-03-13T09:45:00", type="montaż", status="niewykonane", group=2),
        make_task(4, "2024-03-13T14:00:00", type="serwis", status="Zaplanowane", group=None),
        make_task(5, "2024-03-20T10:00:00", type="szkolenie", status="Zaplanowane", group=7),
        make_task(6, "2024-04-02T08:00:00", type="przegląd", status="wykonane", group=2),
    ]


@pytest.fixture
def teams() -> list[Team]:
    return [
        Team(id=1, nazwa="Ekipa Północ", user_ids=(7, 8)),
        Team(id=2, nazwa="Ekipa Południe"),
        Team(id=3, nazwa="Ekipa Zapasowa"),
    ]


@pytest.fixture
def employees() -> EmployeesResponse:
    return EmployeesResponse(
        employees=(
            Employee(id=7, first_name="Anna", last_name="Nowak", phone="600100200"),
            Employee(id=8, first_name="Piotr", last_name="Zieliński"),
        )
    )


@pytest.fixture
def store() -> FilterStore:
    """Fresh shared filter store in day mode with no anchor."""
    return FilterStore()


@pytest.fixture
def make_store():
    """Factory for a store positioned on a given mode and anchor."""

    def _make(mode: CalendarMode | str = CalendarMode.DAY, anchor: str = "") -> FilterStore:
        return FilterStore(FilterState(mode=CalendarMode(mode), date_anchor=anchor))

    return _make


@pytest.fixture
def in_memory_source() -> InMemoryDataSource:
    """Data source fed with raw backend payloads."""
    return InMemoryDataSource(
        tasks=[
            {"id": 1, "start_date": "2024-03-13T09:00:00", "nazwa": "Montaż PV", "typ": "montaż", "grupa": 1},
            {"id": 2, "start_date": "2024-03-13T09:15:00", "typ": "serwis", "status": "wykonane", "grupa": 0},
            {"id": 3, "start_date": "2024-03-14T11:00:00", "typ": "oględziny", "grupa": 2},
            {"id": 4, "start_date": "not a date", "typ": "serwis"},
            {"id": 5, "start_date": None, "typ": "serwis", "status": None},
        ],
        teams=[{"id": 1, "nazwa": "Ekipa Północ", "user_ids": [7]}, {"id": 2, "nazwa": "Ekipa Południe"}],
        employees=[{"id": 7, "first_name": "Anna", "last_name": "Nowak"}],
    )
