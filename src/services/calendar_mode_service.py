"""Calendar mode controller: mode transitions, paging and day selection."""

import logging
from datetime import date

from pydantic import BaseModel, ConfigDict

from src.core import labels
from src.core.config import settings
from src.core.date_math import (
    ClampPolicy,
    anchor_matches_mode,
    default_anchor,
    derive_range,
    enumerate_cells,
    format_anchor,
    local_today,
    page_anchor,
    parse_anchor,
)
from src.core.logging import span
from src.domain.calendar import CalendarGrid, DateRange, PageDirection
from src.domain.filters import CalendarMode, FilterField
from src.services.filter_store import FilterStore


logger = logging.getLogger(__name__)


# Every mode can be reached from every other; there is no terminal mode
MODE_TRANSITIONS: dict[CalendarMode, set[CalendarMode]] = {
    CalendarMode.DAY: {CalendarMode.WEEK, CalendarMode.MONTH, CalendarMode.YEAR},
    CalendarMode.WEEK: {CalendarMode.DAY, CalendarMode.MONTH, CalendarMode.YEAR},
    CalendarMode.MONTH: {CalendarMode.DAY, CalendarMode.WEEK, CalendarMode.YEAR},
    CalendarMode.YEAR: {CalendarMode.DAY, CalendarMode.WEEK, CalendarMode.MONTH},
}


class PendingTransition(BaseModel):
    """Paging step whose slide animation has not settled yet."""

    model_config = ConfigDict(frozen=True)

    mode: CalendarMode
    direction: PageDirection
    from_date: date
    to_date: date


class CalendarModeController:
    """Owns the calendar mode and current date on top of the shared filter store.

    The store's date anchor is the source of truth; the controller only keeps
    the full current date so that month paging can remember the day of month.
    """

    def __init__(
        self,
        store: FilterStore,
        *,
        today: date | None = None,
        clamp: ClampPolicy | None = None,
    ) -> None:
        self.store = store
        self.clamp = clamp
        self.token = "calendar-mode"
        self._today = today
        self._current_date: date | None = None
        self._pending: PendingTransition | None = None

    @property
    def mode(self) -> CalendarMode:
        return self.store.mode

    @property
    def today(self) -> date:
        return self._today or local_today()

    @property
    def pending(self) -> PendingTransition | None:
        return self._pending

    @property
    def current_date(self) -> date:
        """Date the calendar is positioned on, derived from the store anchor.

        Falls back to today when the store holds no usable anchor.
        """
        anchor = self.store.date_anchor
        if self._current_date is not None and format_anchor(self.mode, self._current_date) == anchor:
            return self._current_date
        try:
            return parse_anchor(anchor)
        except ValueError:
            return self.today

    @property
    def date_range(self) -> DateRange:
        return derive_range(self.mode, self.current_date)

    @property
    def grid(self) -> CalendarGrid:
        return enumerate_cells(self.mode, self.current_date)

    @property
    def header_title(self) -> str:
        return labels.header_title(self.mode, self.current_date)

    def set_mode(self, mode: CalendarMode | str) -> str:
        """Switch calendar mode.

        The stored anchor is kept if it already has the new mode's shape;
        otherwise the new mode's default anchor is written. Any paging still
        in flight is dropped.

        Args:
            mode: Target calendar mode

        Returns:
            The date anchor in effect after the switch

        Raises:
            ValueError: If the mode is unknown
        """
        with span("calendar_mode_service.set_mode"):
            target = CalendarMode(mode)
            current_mode = self.mode
            self._pending = None

            if target == current_mode:
                return self.store.date_anchor

            if target not in MODE_TRANSITIONS[current_mode]:
                msg = f"Cannot switch calendar from {current_mode} to {target}"
                raise ValueError(msg)

            current = self.current_date
            anchor = self.store.date_anchor
            if anchor_matches_mode(target, anchor):
                self._current_date = current
            else:
                anchor = default_anchor(target, self.today)
                self._current_date = self.today

            self.store.set_all({FilterField.MODE: target, FilterField.DATE: anchor}, origin=self.token)
            logger.info(f"Calendar mode {current_mode} -> {target} (anchor {anchor})")
            return anchor

    def page(self, direction: PageDirection | str) -> PendingTransition:
        """Move one period forward or back within the current mode."""
        with span("calendar_mode_service.page"):
            mode = self.mode
            current = self.current_date
            target = page_anchor(mode, current, direction, clamp=self.clamp)

            self._pending = PendingTransition(
                mode=mode,
                direction=PageDirection(direction),
                from_date=current,
                to_date=target,
            )
            self._current_date = target
            self.store.set_date(format_anchor(mode, target), origin=self.token)
            return self._pending

    def settle(self) -> PendingTransition | None:
        """Mark the running slide animation as finished."""
        finished, self._pending = self._pending, None
        return finished

    def on_swipe(self, translation_x: float) -> PendingTransition | None:
        """Resolve a finished horizontal swipe; left pages forward, right back."""
        if abs(translation_x) <= settings.swipe_threshold_px:
            return None
        return self.page(PageDirection.NEXT if translation_x < 0 else PageDirection.PREV)

    def select_day(self, day: date) -> str:
        """Open a specific day, e.g. after tapping it in the month or year grid."""
        with span("calendar_mode_service.select_day"):
            self._pending = None
            self._current_date = day
            anchor = format_anchor(CalendarMode.DAY, day)
            self.store.set_all({FilterField.MODE: CalendarMode.DAY, FilterField.DATE: anchor}, origin=self.token)
            return anchor

    def go_to_today(self) -> str:
        """Jump back to the period containing today."""
        self._pending = None
        self._current_date = self.today
        anchor = default_anchor(self.mode, self.today)
        self.store.set_date(anchor, origin=self.token)
        return anchor
