"""Centralized display labels for calendar headers, filters and columns.

All user-facing strings are defined here so the vocabulary (Polish by
default) can be changed in one place.
"""

from collections.abc import Iterable
from datetime import date

from src.core.config import constants
from src.core.date_math import week_days
from src.domain.filters import CalendarMode, SortOrder
from src.domain.staff import Employee, Team
from src.domain.task import Task


MONTHS_NOMINATIVE = (
    "Styczeń",
    "Luty",
    "Marzec",
    "Kwiecień",
    "Maj",
    "Czerwiec",
    "Lipiec",
    "Sierpień",
    "Wrzesień",
    "Październik",
    "Listopad",
    "Grudzień",
)

MONTHS_GENITIVE = (
    "Stycznia",
    "Lutego",
    "Marca",
    "Kwietnia",
    "Maja",
    "Czerwca",
    "Lipca",
    "Sierpnia",
    "Września",
    "Października",
    "Listopada",
    "Grudnia",
)

WEEKDAYS = ("Poniedziałek", "Wtorek", "Środa", "Czwartek", "Piątek", "Sobota", "Niedziela")
WEEKDAYS_SHORT = ("Pon", "Wt", "Śr", "Czw", "Pt", "Sob", "Niedz")

MODE_LABELS = {
    CalendarMode.DAY: "Dzień",
    CalendarMode.WEEK: "Tydzień",
    CalendarMode.MONTH: "Miesiąc",
    CalendarMode.YEAR: "Rok",
}

FILTER_LABELS = {
    "taskType": "Typ",
    "taskStatus": "Status",
    "taskGroup": "Ekipa",
    "dateSort": "Sortowanie",
    "dateFilter": "Data",
}

TYPE_LABELS = {
    "oględziny": "Oględziny",
    "montaż": "Montaż",
    "przegląd": "Przegląd",
    "serwis": "Serwis",
    "szkolenie": "Szkolenie",
}

STATUS_LABELS = {
    "wykonane": "Wykonane",
    "niewykonane": "Niewykonane",
    "Zaplanowane": "Zaplanowane",
}


def month_name(day: date) -> str:
    return MONTHS_NOMINATIVE[day.month - 1]


def weekday_name(day: date, *, short: bool = False) -> str:
    names = WEEKDAYS_SHORT if short else WEEKDAYS
    return names[day.weekday()]


def header_title(mode: CalendarMode | str, day: date) -> str:
    """Title shown above the calendar, e.g. "Piątek, 9 Grudnia" in day mode."""
    mode = CalendarMode(mode)

    if mode == CalendarMode.DAY:
        return f"{weekday_name(day)}, {day.day} {MONTHS_GENITIVE[day.month - 1]}"

    if mode == CalendarMode.WEEK:
        days = week_days(day)
        start, end = days[0], days[-1]
        if start.month == end.month:
            return f"{start.day} - {end.day} {MONTHS_GENITIVE[start.month - 1]}"
        return f"{start.day} {MONTHS_GENITIVE[start.month - 1]} – {end.day} {MONTHS_GENITIVE[end.month - 1]}"

    if mode == CalendarMode.MONTH:
        return f"{month_name(day)} {day.year}"

    return str(day.year)


def filter_label(chip_type: str) -> str:
    return FILTER_LABELS.get(chip_type, chip_type)


def filter_value_label(chip_type: str, value: str) -> str:
    """Human label for a single filter value shown on a chip."""
    if chip_type == "taskType":
        return TYPE_LABELS.get(value, value)
    if chip_type == "taskStatus":
        return STATUS_LABELS.get(value, value)
    if chip_type == "dateSort":
        return "Najdalsza" if value == SortOrder.FARTHEST else "Najbliższa"
    return value


def group_label(
    group_key: str,
    teams: Iterable[Team] | None = None,
    employees: Iterable[Employee] | None = None,
) -> str:
    """Column header for a group key.

    Team name first, then employee name, then a generic "Ekipa <id>".
    """
    for team in teams or ():
        if str(team.id) == group_key:
            return team.name
    if group_key == constants.UNASSIGNED_GROUP_KEY:
        return constants.UNASSIGNED_LABEL
    for employee in employees or ():
        if str(employee.id) == group_key:
            return employee.full_name
    return f"Ekipa {group_key}"


def time_range_label(task: Task) -> str:
    """Clock times shown on a task card, "09:00 - 11:30" or just "09:00" without a later end.

    Empty when the start cannot be parsed.
    """
    start = task.start_instant
    if start is None:
        return ""
    end = task.end_instant
    if end is None or end <= start:
        return f"{start:%H:%M}"
    return f"{start:%H:%M} - {end:%H:%M}"
