"""Task bucketing service: groups tasks into calendar cells for rendering."""

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from src.core.config import constants, settings
from src.core.logging import span
from src.domain.calendar import DateRange
from src.domain.staff import Team
from src.domain.task import Task
from src.models.service_models import CellMap, SlotKey


logger = logging.getLogger(__name__)


def _group_sort_key(group_key: str) -> tuple[int, int, str]:
    """Numeric IDs ascending, then non-numeric keys, then the unassigned sentinel."""
    if group_key == constants.UNASSIGNED_GROUP_KEY:
        return (2, 0, group_key)
    try:
        return (0, int(group_key), group_key)
    except ValueError:
        return (1, 0, group_key)


def ordered_group_keys(*, tasks: Iterable[Task] = (), teams: Iterable[Team] = ()) -> list[str]:
    """Union of task group keys and known team IDs in column order.

    Teams without tasks still get a column.
    """
    keys = {task.group_key for task in tasks}
    keys.update(str(team.id) for team in teams)
    return sorted(keys, key=_group_sort_key)


def assign_colors(group_keys: Sequence[str]) -> dict[str, str]:
    """Cycle the team palette by position in the ordered key list."""
    palette = constants.TEAM_COLORS
    return {key: palette[index % len(palette)] for index, key in enumerate(group_keys)}


def bucket(tasks: Iterable[Task] | None, date_range: DateRange, *, teams: Iterable[Team] | None = None) -> CellMap:
    """Bucket tasks by day and by (day, hour, group) for one period.

    Tasks starting outside the range are left out. Tasks whose start instant
    cannot be parsed are skipped and logged instead of failing the pass.

    Args:
        tasks: Task snapshot (None is treated as empty)
        date_range: Inclusive period being rendered
        teams: Known teams, so that empty teams still get a column

    Returns:
        CellMap with every bucket in input order
    """
    with span("bucket_service.bucket"):
        days: dict[date, list[Task]] = {}
        slots: dict[SlotKey, list[Task]] = {}
        in_range: list[Task] = []
        skipped: list[str] = []

        for task in tasks or ():
            start = task.start_instant
            if start is None:
                logger.warning(f"Skipping task {task.id}: unparsable start date {task.start_date!r}")
                skipped.append(str(task.id))
                continue
            if not date_range.contains(start):
                continue

            in_range.append(task)
            day = start.date()
            days.setdefault(day, []).append(task)
            slots.setdefault((day, start.hour, task.group_key), []).append(task)

        group_keys = ordered_group_keys(tasks=in_range, teams=teams or ())

        logger.debug(f"Bucketed {len(in_range)} tasks into {len(slots)} slots across {len(days)} days")

        return CellMap(
            period=date_range,
            days={day: tuple(items) for day, items in days.items()},
            slots={key: tuple(items) for key, items in slots.items()},
            group_keys=tuple(group_keys),
            group_colors=assign_colors(group_keys),
            skipped_task_ids=tuple(skipped),
        )


def split_visible(tasks: Sequence[Task], capacity: int | None = None) -> tuple[list[Task], int]:
    """Split a bucket into the tasks shown in the cell and the "+N more" count."""
    limit = capacity if capacity is not None else settings.max_visible_tasks_per_cell
    visible = list(tasks[:limit])
    return visible, len(tasks) - len(visible)


def timeline_hours() -> list[int]:
    """Hour rows shown by the day and week timelines."""
    return list(range(settings.timeline_start_hour, settings.timeline_end_hour + 1))
