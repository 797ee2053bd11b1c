"""Calendar arithmetic: period ranges, month grids, paging and anchor strings.

Weeks always start on Monday regardless of locale. Everything here is a pure
function of its arguments; "today" is only read when a caller omits it.
"""

import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import Literal
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from src.core.config import constants, settings
from src.domain.calendar import CalendarGrid, DateRange, GridCell, MonthGrid, PageDirection
from src.domain.filters import CalendarMode


ClampPolicy = Literal["last_day", "first_day"]

_DAY_ANCHOR = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_ANCHOR = re.compile(r"^(\d{4})-(\d{2})$")
_YEAR_ANCHOR = re.compile(r"^(\d{4})$")


def local_today() -> date:
    """Current date on the configured wall clock."""
    return datetime.now(ZoneInfo(settings.timezone)).date()


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def weekday_offset(day: date) -> int:
    """Monday-first column of a date (Monday=0 ... Sunday=6).

    Derived from Sunday-first indexing via (index + 6) % 7, so Sunday maps to 6.
    """
    sunday_first_index = (day.weekday() + 1) % 7
    return (sunday_first_index + 6) % 7


def week_start(value: date | datetime) -> date:
    """Monday of the week containing the given date."""
    day = _as_date(value)
    return day - timedelta(days=weekday_offset(day))


def week_days(value: date | datetime) -> list[date]:
    """The seven dates, Monday to Sunday, of the week containing the given date."""
    monday = week_start(value)
    return [monday + timedelta(days=i) for i in range(constants.DAYS_PER_WEEK)]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def derive_range(mode: CalendarMode | str, anchor: date | datetime) -> DateRange:
    """Concrete inclusive instant range a mode covers around an anchor.

    Args:
        mode: Calendar mode
        anchor: Any date inside the wanted period

    Returns:
        DateRange from the first instant of the period to its last

    Raises:
        ValueError: If mode is not a known calendar mode
    """
    mode = CalendarMode(mode)
    day = _as_date(anchor)

    if mode == CalendarMode.DAY:
        first, last = day, day
    elif mode == CalendarMode.WEEK:
        first = week_start(day)
        last = first + timedelta(days=6)
    elif mode == CalendarMode.MONTH:
        first = day.replace(day=1)
        last = day.replace(day=days_in_month(day.year, day.month))
    else:
        first = date(day.year, 1, 1)
        last = date(day.year, 12, 31)

    return DateRange(start=start_of_day(first), end=end_of_day(last))


def month_grid(
    year: int,
    month: int,
    *,
    highlight: tuple[date, date] | None = None,
    selected: date | None = None,
) -> MonthGrid:
    """Build a Monday-first grid for one month.

    Leading blanks fill the weekday offset of the 1st, trailing blanks complete
    the last row. Cells inside ``highlight`` are flagged, and the first and last
    highlighted cell of every row get the rounded start/end flags.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        highlight: Inclusive (first, last) dates to flag, e.g. the selected week
        selected: Date to mark as the selected day

    Returns:
        MonthGrid whose rows all have exactly 7 positions
    """
    first = date(year, month, 1)
    length = days_in_month(year, month)

    positions: list[date | None] = [None] * weekday_offset(first)
    positions.extend(first + timedelta(days=i) for i in range(length))
    remainder = len(positions) % constants.DAYS_PER_WEEK
    if remainder:
        positions.extend([None] * (constants.DAYS_PER_WEEK - remainder))

    rows: list[tuple[GridCell | None, ...]] = []
    for row_start in range(0, len(positions), constants.DAYS_PER_WEEK):
        row_dates = positions[row_start : row_start + constants.DAYS_PER_WEEK]
        lit = [d is not None and highlight is not None and highlight[0] <= d <= highlight[1] for d in row_dates]
        lit_columns = [i for i, flag in enumerate(lit) if flag]

        row: list[GridCell | None] = []
        for column, day in enumerate(row_dates):
            if day is None:
                row.append(None)
                continue
            row.append(
                GridCell(
                    day=day,
                    highlighted=lit[column],
                    starting_day=bool(lit_columns) and column == lit_columns[0],
                    ending_day=bool(lit_columns) and column == lit_columns[-1],
                    selected=day == selected,
                )
            )
        rows.append(tuple(row))

    return MonthGrid(year=year, month=month, rows=tuple(rows))


def enumerate_cells(mode: CalendarMode | str, anchor: date | datetime) -> CalendarGrid:
    """Grid cells a mode renders for an anchor.

    - day: the Monday-Sunday strip containing the anchor, anchor flagged selected
    - week: the anchor's month grid with the anchor's week highlighted
    - month: the anchor's month grid
    - year: 24 month grids, the anchor's year followed by the next one

    Raises:
        ValueError: If mode is not a known calendar mode
    """
    mode = CalendarMode(mode)
    day = _as_date(anchor)

    if mode == CalendarMode.DAY:
        strip = tuple(GridCell(day=d, selected=d == day) for d in week_days(day))
        return CalendarGrid(mode=mode, anchor=day, week=strip)

    if mode == CalendarMode.WEEK:
        monday = week_start(day)
        grid = month_grid(day.year, day.month, highlight=(monday, monday + timedelta(days=6)))
        return CalendarGrid(mode=mode, anchor=day, months=(grid,))

    if mode == CalendarMode.MONTH:
        return CalendarGrid(mode=mode, anchor=day, months=(month_grid(day.year, day.month),))

    months = []
    for index in range(constants.YEAR_VIEW_MONTHS):
        year = day.year + index // 12
        months.append(month_grid(year, index % 12 + 1))
    return CalendarGrid(mode=mode, anchor=day, months=tuple(months))


def shift_months(day: date, months: int, *, clamp: ClampPolicy | None = None) -> date:
    """Move a date by whole months.

    When the day-of-month does not exist in the destination month, ``last_day``
    clamps to that month's last day and ``first_day`` lands on day 1 of it.
    """
    policy = clamp or settings.month_paging_clamp
    moved = day + relativedelta(months=months)
    if policy == "first_day" and day.day > days_in_month(moved.year, moved.month):
        return moved.replace(day=1)
    return moved


def page_anchor(
    mode: CalendarMode | str,
    anchor: date | datetime,
    direction: PageDirection | str,
    *,
    clamp: ClampPolicy | None = None,
) -> date:
    """Advance an anchor by one period unit of the mode."""
    mode = CalendarMode(mode)
    step = PageDirection(direction).step
    day = _as_date(anchor)

    if mode == CalendarMode.DAY:
        return day + timedelta(days=step)
    if mode == CalendarMode.WEEK:
        return day + timedelta(weeks=step)
    if mode == CalendarMode.MONTH:
        return shift_months(day, step, clamp=clamp)
    return shift_months(day, 12 * step, clamp=clamp)


def format_anchor(mode: CalendarMode | str, value: date | datetime) -> str:
    """Encode a date as the anchor string a mode stores.

    Day anchors are the date, week anchors the week's Monday, month and year
    anchors the year-month.
    """
    mode = CalendarMode(mode)
    day = _as_date(value)
    if mode == CalendarMode.DAY:
        return day.isoformat()
    if mode == CalendarMode.WEEK:
        return week_start(day).isoformat()
    return f"{day.year:04d}-{day.month:02d}"


def anchor_kind(value: str) -> Literal["day", "month", "year"] | None:
    """Which granularity an anchor string encodes, or None if it is malformed."""
    try:
        parse_anchor(value)
    except ValueError:
        return None
    value = value.strip()
    if _DAY_ANCHOR.match(value):
        return "day"
    if _MONTH_ANCHOR.match(value):
        return "month"
    return "year"


def parse_anchor(value: str) -> date:
    """Decode an anchor string into the first date it denotes.

    Accepts ``YYYY-MM-DD``, ``YYYY-MM`` (first of month) and ``YYYY`` (Jan 1).

    Raises:
        ValueError: If the value matches none of the formats or is not a real date
    """
    text = (value or "").strip()
    if match := _DAY_ANCHOR.match(text):
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    if match := _MONTH_ANCHOR.match(text):
        return date(int(match.group(1)), int(match.group(2)), 1)
    if match := _YEAR_ANCHOR.match(text):
        return date(int(match.group(1)), 1, 1)
    msg = f"Invalid date anchor: {value!r}. Use YYYY-MM-DD, YYYY-MM or YYYY"
    raise ValueError(msg)


def anchor_matches_mode(mode: CalendarMode | str, value: str) -> bool:
    """Whether a stored anchor already has the shape a mode expects."""
    mode = CalendarMode(mode)
    kind = anchor_kind(value)
    if kind is None:
        return False
    if mode == CalendarMode.DAY:
        return kind == "day"
    if mode == CalendarMode.WEEK:
        return kind == "day" and weekday_offset(parse_anchor(value)) == 0
    if mode == CalendarMode.MONTH:
        return kind == "month"
    return kind in ("month", "year")


def default_anchor(mode: CalendarMode | str, today: date | None = None) -> str:
    """Anchor a mode starts from when nothing is selected yet.

    Day: today. Week: this week's Monday. Month and year: this year-month.
    """
    return format_anchor(mode, today or local_today())
