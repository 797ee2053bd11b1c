"""Two-way synchronization between a screen's filter form and the shared store."""

import logging
from collections.abc import Callable, Iterable
from datetime import date
from uuid import uuid4

from src.core.config import settings
from src.core.date_math import default_anchor
from src.core.logging import log_with_screen_context, span
from src.domain.filters import SET_FIELDS, CalendarMode, FilterField, sorted_values
from src.services.filter_store import FilterStore, StoreChange


logger = logging.getLogger(__name__)

# Dimensions edited through the filter form; the mode is driven by the calendar controller
DRAFT_FIELDS: tuple[FilterField, ...] = (
    FilterField.DATE,
    FilterField.SORT,
    FilterField.TYPE,
    FilterField.STATUS,
    FilterField.GROUP,
)

DraftListener = Callable[[FilterField], None]


def same_value(field: FilterField, local: object, shared: object) -> bool:
    """Order-insensitive equality between a draft value and a store value."""
    if field in SET_FIELDS:
        return sorted_values(local) == sorted_values(shared)  # type: ignore[arg-type]
    return str(local or "") == str(shared or "")


def _as_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return [str(item) for item in value]  # type: ignore[union-attr]


def _to_draft(field: FilterField, value: object) -> object:
    if field in SET_FIELDS:
        return sorted_values(value)  # type: ignore[arg-type]
    return str(value or "")


def _initial_draft(field: FilterField) -> object:
    """Blank form value; the sort starts at the default so a fresh form agrees with a fresh store."""
    if field == FilterField.SORT:
        return str(settings.default_sort_order)
    return _to_draft(field, None)


class FilterDraft:
    """Form-scoped filter values, kept exactly as the user entered them."""

    def __init__(self, values: dict[FilterField, object] | None = None) -> None:
        self._values: dict[FilterField, object] = {field: _initial_draft(field) for field in DRAFT_FIELDS}
        for field, value in (values or {}).items():
            field = FilterField(field)
            self._values[field] = _as_list(value) if field in SET_FIELDS else value
        self._listeners: list[DraftListener] = []

    def get(self, field: FilterField | str) -> object:
        return self._values[FilterField(field)]

    def values(self) -> dict[FilterField, object]:
        return dict(self._values)

    def set(self, field: FilterField | str, value: object) -> None:
        """Change one form value and notify watchers if it differs."""
        field = FilterField(field)
        if field not in DRAFT_FIELDS:
            msg = f"Field {field} is not part of the filter form"
            raise ValueError(msg)
        if field in SET_FIELDS:
            value = _as_list(value)
        if self._values[field] == value:
            return
        self._values[field] = value
        for listener in list(self._listeners):
            listener(field)

    def watch(self, listener: DraftListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def unwatch() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unwatch


class FilterStateSync:
    """Keeps a FilterDraft and a FilterStore eventually consistent.

    Every push carries this sync's origin token, and the store stamps each
    change with a version. Store notifications carrying our own token, or a
    version we already pushed, are never pulled back into the draft, so a
    push cannot bounce back as a pull.
    """

    def __init__(self, store: FilterStore, draft: FilterDraft | None = None, *, screen: str = "calendar") -> None:
        self.store = store
        self.draft = draft or FilterDraft()
        self.screen = screen
        self.token = f"{screen}:{uuid4().hex}"
        self._last_pushed_version = 0
        self._detach: list[Callable[[], None]] = []

    @property
    def last_pushed_version(self) -> int:
        return self._last_pushed_version

    @property
    def attached(self) -> bool:
        return bool(self._detach)

    def attach(self) -> None:
        if self.attached:
            return
        self._detach = [
            self.store.subscribe(self.on_store_changed),
            self.draft.watch(self.on_draft_changed),
        ]

    def detach(self) -> None:
        for stop in self._detach:
            stop()
        self._detach = []

    def mount(self, mode: CalendarMode | str, today: date | None = None) -> str:
        """Prepare the form when a screen opens.

        If the store has no anchor yet, the mode's default anchor is written
        into the store and the draft before any interaction. Everything else
        is pulled from the store.

        Args:
            mode: Calendar mode the screen opens in
            today: Reference date for the default anchor (local today if omitted)

        Returns:
            The date anchor in effect after mounting
        """
        with span("filter_sync_service.mount"):
            self.attach()

            if not self.store.date_anchor.strip():
                anchor = default_anchor(mode, today)
                change = self.store.set_date(anchor, origin=self.token)
                if change is not None:
                    self._last_pushed_version = change.version
                log_with_screen_context(logger, "info", "Default date anchor applied", screen=self.screen, anchor=anchor)

            self.pull()
            return self.store.date_anchor

    def on_draft_changed(self, field: FilterField) -> None:
        """Push one form value to the store if the store holds something else."""
        local = self.draft.get(field)
        if same_value(field, local, self.store.get(field)):
            return

        change = self.store.set_all({field: local}, origin=self.token)
        if change is not None:
            self._last_pushed_version = change.version
            logger.debug(f"{self.screen}: pushed {field} (v{change.version})")

    def on_store_changed(self, change: StoreChange) -> None:
        """Pull a store change into the draft unless this sync made it."""
        if change.origin == self.token or change.version <= self._last_pushed_version:
            return
        self.pull(field for field in change.fields if field in DRAFT_FIELDS)

    def pull(self, fields: Iterable[FilterField] = DRAFT_FIELDS) -> list[FilterField]:
        """Copy store values into the draft where they differ.

        Returns:
            The fields that were updated
        """
        updated: list[FilterField] = []
        for field in fields:
            shared = self.store.get(field)
            if same_value(field, self.draft.get(field), shared):
                continue
            self.draft.set(field, _to_draft(field, shared))
            updated.append(field)

        if updated:
            logger.debug(f"{self.screen}: pulled {', '.join(updated)} from store v{self.store.version}")
        return updated
