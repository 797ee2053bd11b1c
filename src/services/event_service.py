"""Timeline events and day columns built from bucketed tasks."""

import logging
from collections.abc import Iterable
from datetime import date

from src.core.config import constants
from src.core.labels import group_label, time_range_label
from src.core.logging import span
from src.domain.staff import Employee, Team
from src.domain.task import Task
from src.models.service_models import CellMap, DayColumn, TimelineEvent


logger = logging.getLogger(__name__)


def darken_color(color: str, percent: int = constants.BORDER_DARKEN_PERCENT) -> str:
    """Darken a ``#RRGGBB`` color by ``percent`` of full scale on every channel.

    Channels bottom out at 0. Alpha digits after the first six are dropped.

    Raises:
        ValueError: If the value is not a hex color
    """
    digits = color.lstrip("#")
    if len(digits) < 6:
        msg = f"Invalid color {color!r}: expected #RRGGBB"
        raise ValueError(msg)

    step = int(255 * percent / 100 + 0.5)
    channels = [max(0, int(digits[i : i + 2], 16) - step) for i in (0, 2, 4)]
    return "#" + "".join(f"{channel:02x}" for channel in channels)


def type_color(task_type: str) -> str:
    """Badge color for a task type, case-insensitive."""
    return constants.TYPE_COLORS.get(task_type.lower(), constants.CALENDAR_PRIMARY_COLOR)


def to_event(task: Task, *, group_color: str | None = None) -> TimelineEvent | None:
    """Project a task onto the timeline, or None if its start cannot be parsed.

    The end defaults to the start; an end before the start is clamped to it.
    """
    start = task.start_instant
    if start is None:
        return None

    end = task.end_instant or start
    if end < start:
        logger.debug(f"Task {task.id} ends before it starts, clamping end to start")
        end = start

    return TimelineEvent(
        task_id=str(task.id),
        start=start,
        end=end,
        title=task.title,
        summary=f"{task.type} - {task.name}",
        type=task.type,
        status=task.status,
        notes=task.notes.strip() if task.notes and task.notes.strip() else None,
        color=task.status_color,
        group_key=task.group_key,
        group_color=group_color,
        border_color=darken_color(group_color) if group_color else None,
        time_label=time_range_label(task),
    )


def events_by_date(cells: CellMap) -> dict[date, tuple[TimelineEvent, ...]]:
    """Timeline events for every day of a bucketed period, in day order."""
    with span("event_service.events_by_date"):
        events: dict[date, tuple[TimelineEvent, ...]] = {}
        for day in sorted(cells.days):
            projected = (to_event(task, group_color=cells.group_colors.get(task.group_key)) for task in cells.days[day])
            events[day] = tuple(event for event in projected if event is not None)
        return events


def day_columns(
    cells: CellMap,
    day: date,
    *,
    teams: Iterable[Team] | None = None,
    employees: Iterable[Employee] | None = None,
) -> list[DayColumn]:
    """Columns of the day timeline: one per group with tasks on ``day``.

    Columns follow the period's group order and keep its colors, so a team
    has the same color on every day. Empty when the day has no tasks.
    """
    with span("event_service.day_columns"):
        teams = list(teams or ())
        employees = list(employees or ())

        present = {task.group_key for task in cells.tasks_on(day)}
        columns: list[DayColumn] = []
        for key in cells.group_keys:
            if key not in present:
                continue
            color = cells.group_colors.get(key, constants.TEAM_COLORS[0])
            events = tuple(
                event
                for event in (to_event(task, group_color=color) for task in cells.tasks_for_group(day, key))
                if event is not None
            )
            columns.append(
                DayColumn(
                    group_key=key,
                    label=group_label(key, teams, employees),
                    color=color,
                    border_color=darken_color(color),
                    events=events,
                )
            )

        logger.debug(f"Built {len(columns)} day columns for {day.isoformat()}")
        return columns
