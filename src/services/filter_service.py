"""Filter pipeline: narrows and sorts a task snapshot by the current filter state."""

import json
import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from src.core.config import settings
from src.core.date_math import anchor_kind, parse_anchor, week_start
from src.core.logging import span
from src.domain.filters import UNASSIGNED, CalendarMode, FilterChip, FilterField, FilterState, SortOrder
from src.domain.task import Task
from src.services.filter_store import FilterStore


logger = logging.getLogger(__name__)

CHIP_DATE = "dateFilter"
CHIP_SORT = "dateSort"
CHIP_TYPE = "taskType"
CHIP_STATUS = "taskStatus"
CHIP_GROUP = "taskGroup"

CHIP_FIELDS: dict[str, FilterField] = {
    CHIP_DATE: FilterField.DATE,
    CHIP_SORT: FilterField.SORT,
    CHIP_TYPE: FilterField.TYPE,
    CHIP_STATUS: FilterField.STATUS,
    CHIP_GROUP: FilterField.GROUP,
}

# Legacy "all statuses" value sent by older clients
_ALL_STATUSES = "wszystkie"


def _date_predicate(mode: CalendarMode, anchor: str) -> Callable[[datetime], bool] | None:
    """Build the start-instant test for an anchor, or None to skip the date dimension."""
    kind = anchor_kind(anchor)
    if kind is None:
        logger.warning(f"Ignoring date filter: unparsable anchor {anchor!r}")
        return None

    day = parse_anchor(anchor)

    if kind == "year":
        return lambda start: start.year == day.year
    if kind == "month" or mode == CalendarMode.MONTH:
        return lambda start: (start.year, start.month) == (day.year, day.month)
    if mode == CalendarMode.DAY:
        return lambda start: start.date() == day
    if mode == CalendarMode.WEEK:
        first = week_start(day)
        last = first + timedelta(days=6)
        return lambda start: first <= start.date() <= last
    return lambda start: start.year == day.year


def _matches_date(task: Task, predicate: Callable[[datetime], bool]) -> bool:
    start = task.start_instant
    return start is not None and predicate(start)


def _matches_set(value: str, selected: frozenset[str]) -> bool:
    """Case-insensitive membership. An empty selection matches everything."""
    if not selected:
        return True
    return value.casefold() in {item.casefold() for item in selected}


def matches_group(task: Task, selected: frozenset[str]) -> bool:
    """Whether a task belongs to one of the selected teams/employees.

    The unassigned sentinel matches tasks without a group; IDs are compared as strings.
    """
    if not selected:
        return True
    if task.is_unassigned:
        return UNASSIGNED in selected
    return str(task.group) in selected


def matches_search(task: Task, search: str) -> bool:
    """Case-insensitive substring match over name, type and notes."""
    needle = search.strip().casefold()
    if not needle:
        return True
    haystack = (task.name, task.type, task.notes or "")
    return any(needle in field.casefold() for field in haystack)


def sort_tasks(tasks: Iterable[Task], sort_order: SortOrder | str) -> list[Task]:
    """Stable sort on start instant.

    ``nearest`` puts the latest start first, ``farthest`` the earliest. Tasks
    with an unparsable start always go last, in input order.
    """
    order = SortOrder(sort_order)
    dated: list[Task] = []
    undated: list[Task] = []
    for task in tasks:
        (dated if task.start_instant is not None else undated).append(task)

    dated.sort(key=lambda task: task.start_instant, reverse=order == SortOrder.NEAREST)
    return dated + undated


def apply(
    tasks: Iterable[Task] | None,
    filter_state: FilterState,
    mode: CalendarMode | str | None = None,
    date_anchor: str | None = None,
    *,
    search: str = "",
) -> list[Task]:
    """Filter and sort a task snapshot.

    Dimensions are combined with AND; values within one dimension with OR.
    The input is never modified, so calling this twice with the same
    arguments returns equal lists.

    Args:
        tasks: Task snapshot (None is treated as empty)
        filter_state: Current filter selections
        mode: Calendar mode for the date dimension (defaults to the state's mode)
        date_anchor: Anchor for the date dimension (defaults to the state's anchor)
        search: Optional free-text query

    Returns:
        New list of matching tasks in sort order
    """
    with span("filter_service.apply"):
        active_mode = CalendarMode(mode) if mode is not None else filter_state.mode
        anchor = (date_anchor if date_anchor is not None else filter_state.date_anchor).strip()

        date_test = _date_predicate(active_mode, anchor) if anchor else None

        selected: list[Task] = []
        for task in tasks or ():
            if date_test is not None and not _matches_date(task, date_test):
                continue
            if not _matches_set(task.type, filter_state.type_set):
                continue
            if not _matches_set(task.status, filter_state.status_set):
                continue
            if not matches_group(task, filter_state.group_set):
                continue
            if not matches_search(task, search):
                continue
            selected.append(task)

        logger.debug(f"Filter kept {len(selected)} tasks (mode={active_mode}, anchor={anchor!r})")

        return sort_tasks(selected, filter_state.sort_order)


def state_to_chips(state: FilterState) -> list[FilterChip]:
    """Active filter dimensions as removable chips.

    Set-valued dimensions are JSON-encoded lists. The sort chip only appears
    when the order differs from the configured default.
    """
    chips: list[FilterChip] = []

    if state.has_date_filter:
        chips.append(FilterChip(name=CHIP_DATE, value=state.date_anchor, type=CHIP_DATE))
    if state.sort_order != settings.default_sort_order:
        chips.append(FilterChip(name=CHIP_SORT, value=str(state.sort_order), type=CHIP_SORT))

    for chip_type, values in (
        (CHIP_TYPE, state.type_set),
        (CHIP_STATUS, state.status_set),
        (CHIP_GROUP, state.group_set),
    ):
        if values:
            chips.append(FilterChip(name=chip_type, value=json.dumps(sorted(values), ensure_ascii=False), type=chip_type))

    return chips


def _decode_chip_values(value: str) -> list[str]:
    """Decode a JSON-encoded list, falling back to a single plain value."""
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        if value and value not in ("[]", _ALL_STATUSES):
            return [value]
        return []
    if isinstance(parsed, list):
        return [str(item) for item in parsed]
    return [str(parsed)]


def _decode_sort(value: str) -> SortOrder:
    try:
        return SortOrder(value)
    except ValueError:
        if value:
            logger.debug(f"Unknown sort chip value {value!r}, using the default order")
        return SortOrder(settings.default_sort_order)


def chips_to_state(chips: Iterable[FilterChip]) -> dict[FilterField, object]:
    """Inverse of state_to_chips: the filter fields the chips describe.

    Unknown chip types are ignored.
    """
    updates: dict[FilterField, object] = {}
    for chip in chips:
        field = CHIP_FIELDS.get(chip.type)
        if field is None:
            logger.debug(f"Ignoring unknown filter chip type {chip.type!r}")
            continue
        if field == FilterField.DATE:
            updates[field] = chip.value
        elif field == FilterField.SORT:
            updates[field] = _decode_sort(chip.value)
        else:
            updates[field] = _decode_chip_values(chip.value)
    return updates


def remove_chip(store: FilterStore, chip: FilterChip, *, origin: str | None = None) -> None:
    """Reset the dimension a chip stands for to its empty/default value."""
    field = CHIP_FIELDS.get(chip.type)
    if field is None:
        logger.debug(f"Cannot remove unknown filter chip type {chip.type!r}")
        return
    store.clear_field(field, origin=origin)


