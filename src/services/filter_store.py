"""Shared, cross-screen filter store.

The store is the only mutable state shared between screens. It is changed
exclusively through its actions; every effective change bumps a version
counter and is published to subscribers together with the origin token of
whoever made it.
"""

import logging
from collections.abc import Callable, Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from src.core.config import settings
from src.domain.filters import CalendarMode, FilterField, FilterState, SortOrder


logger = logging.getLogger(__name__)


class StoreChange(BaseModel):
    """Notification sent to subscribers after an effective change."""

    model_config = ConfigDict(frozen=True)

    version: int
    fields: tuple[FilterField, ...]
    origin: str | None = None
    state: FilterState


Listener = Callable[[StoreChange], None]


def default_state(*, mode: CalendarMode | str = CalendarMode.DAY) -> FilterState:
    """Filter state of a fresh session: no anchor, default sort, empty sets."""
    return FilterState(sort_order=SortOrder(settings.default_sort_order), mode=CalendarMode(mode))


class FilterStore:
    """In-session filter store passed by reference to the screens that share it."""

    def __init__(self, initial: FilterState | None = None) -> None:
        self._state = initial or default_state()
        self._version = 0
        self._listeners: list[Listener] = []

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    def get(self, field: FilterField | str) -> object:
        return self._state.get(FilterField(field))

    @property
    def date_anchor(self) -> str:
        return self._state.date_anchor

    @property
    def sort_order(self) -> SortOrder:
        return self._state.sort_order

    @property
    def type_set(self) -> frozenset[str]:
        return self._state.type_set

    @property
    def status_set(self) -> frozenset[str]:
        return self._state.status_set

    @property
    def group_set(self) -> frozenset[str]:
        return self._state.group_set

    @property
    def mode(self) -> CalendarMode:
        return self._state.mode

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Actions

    def set_date(self, anchor: str | None, *, origin: str | None = None) -> StoreChange | None:
        return self.set_all({FilterField.DATE: anchor or ""}, origin=origin)

    def set_sort(self, sort_order: SortOrder | str, *, origin: str | None = None) -> StoreChange | None:
        return self.set_all({FilterField.SORT: SortOrder(sort_order)}, origin=origin)

    def set_type(self, values: Iterable[object] | None, *, origin: str | None = None) -> StoreChange | None:
        return self.set_all({FilterField.TYPE: values}, origin=origin)

    def set_status(self, values: Iterable[object] | None, *, origin: str | None = None) -> StoreChange | None:
        return self.set_all({FilterField.STATUS: values}, origin=origin)

    def set_group(self, values: Iterable[object] | None, *, origin: str | None = None) -> StoreChange | None:
        return self.set_all({FilterField.GROUP: values}, origin=origin)

    def set_mode(self, mode: CalendarMode | str, *, origin: str | None = None) -> StoreChange | None:
        return self.set_all({FilterField.MODE: CalendarMode(mode)}, origin=origin)

    def clear_field(self, field: FilterField | str, *, origin: str | None = None) -> StoreChange | None:
        """Reset one dimension to its fresh-session value."""
        field = FilterField(field)
        fresh = default_state(mode=self._state.mode)
        return self.set_all({field: fresh.get(field)}, origin=origin)

    def reset_all(self, *, origin: str | None = None) -> StoreChange | None:
        """Clear every filter. The calendar mode is navigation state and is kept."""
        fresh = default_state(mode=self._state.mode)
        changed = tuple(field for field in FilterField if fresh.get(field) != self._state.get(field))
        return self._commit(fresh, fields=changed, origin=origin)

    def set_all(
        self,
        updates: Mapping[FilterField | str, object],
        *,
        origin: str | None = None,
    ) -> StoreChange | None:
        """Apply several dimension updates as one change.

        Args:
            updates: New values keyed by filter field
            origin: Token identifying the writer, echoed to subscribers

        Returns:
            The published change, or None when nothing actually changed

        Raises:
            ValueError: If a field name or value is invalid
        """
        normalized = {FilterField(field): value for field, value in updates.items()}
        data = self._state.model_dump()
        data.update({field.value: value for field, value in normalized.items()})
        new_state = FilterState.model_validate(data)

        changed = tuple(field for field in normalized if new_state.get(field) != self._state.get(field))
        return self._commit(new_state, fields=changed, origin=origin)

    def _commit(
        self,
        new_state: FilterState,
        *,
        fields: tuple[FilterField, ...],
        origin: str | None,
    ) -> StoreChange | None:
        if new_state == self._state:
            return None

        self._state = new_state
        self._version += 1
        change = StoreChange(version=self._version, fields=fields, origin=origin, state=new_state)

        logger.debug(f"Filter store v{self._version}: {', '.join(fields)} changed by {origin or 'unknown'}")

        for listener in list(self._listeners):
            listener(change)
        return change
