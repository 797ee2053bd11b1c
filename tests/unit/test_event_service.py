"""Unit tests for event_service module."""

from datetime import date, datetime

import pytest

from src.core.config import constants
from src.core.date_math import derive_range
from src.domain.filters import CalendarMode
from src.services import bucket_service, event_service


@pytest.fixture
def week_cells(sample_tasks, today):
    return bucket_service.bucket(sample_tasks, derive_range(CalendarMode.WEEK, today))


@pytest.mark.unit
class TestColors:
    """Tests for color helpers."""

    @pytest.mark.parametrize(
        ("color", "expected"),
        [
            ("#FFB3D9", "#b2668c"),
            ("#B3F5D1", "#66a884"),
            ("#202020", "#000000"),
            ("#4CBF2426", "#007200"),
        ],
    )
    def test_darken_color(self, color, expected):
        assert event_service.darken_color(color) == expected

    def test_darken_by_zero_keeps_channels(self):
        assert event_service.darken_color("#ABCDEF", percent=0) == "#abcdef"

    @pytest.mark.parametrize("color", ["#FFF", "blue"])
    def test_invalid_color_rejected(self, color):
        with pytest.raises(ValueError):
            event_service.darken_color(color)

    def test_type_color(self):
        assert event_service.type_color("Montaż") == "#4CBF24"
        assert event_service.type_color("serwis") == constants.CALENDAR_PRIMARY_COLOR


@pytest.mark.unit
class TestToEvent:
    """Tests for projecting a task onto the timeline."""

    def test_fields(self, make_task):
        task = make_task(
            9,
            "2024-03-13T09:00:00",
            end_date="2024-03-13T11:30:00",
            name="Kowalski",
            status="niewykonane",
            notes="  Brama od podwórza ",
        )

        event = event_service.to_event(task, group_color="#FFB3D9")

        assert event.task_id == "9"
        assert event.start == datetime(2024, 3, 13, 9, 0)
        assert event.end == datetime(2024, 3, 13, 11, 30)
        assert event.summary == "montaż - Kowalski"
        assert event.color == constants.STATUS_COLORS["niewykonane"]
        assert event.notes == "Brama od podwórza"
        assert event.border_color == "#b2668c"
        assert event.time_label == "09:00 - 11:30"

    def test_end_defaults_to_start(self, make_task):
        event = event_service.to_event(make_task(1, "2024-03-13T09:00:00"))

        assert event.end == event.start
        assert event.time_label == "09:00"
        assert event.group_color is None
        assert event.border_color is None

    def test_end_before_start_is_clamped(self, make_task):
        event = event_service.to_event(make_task(1, "2024-03-13T09:00:00", end_date="2024-03-13T08:00:00"))

        assert event.end == event.start

    def test_blank_notes_dropped(self, make_task):
        assert event_service.to_event(make_task(1, "2024-03-13T09:00:00", notes="   ")).notes is None

    def test_unnamed_task_uses_type_as_title(self, make_task):
        assert event_service.to_event(make_task(1, "2024-03-13T09:00:00", type="serwis")).title == "Serwis"

    def test_undated_task_has_no_event(self, make_task):
        assert event_service.to_event(make_task(1, "soon")) is None


@pytest.mark.unit
class TestEventsByDate:
    """Tests for events_by_date function."""

    def test_days_in_order_with_group_colors(self, week_cells):
        events = event_service.events_by_date(week_cells)

        assert list(events) == [date(2024, 3, 11), date(2024, 3, 13)]
        wednesday = events[date(2024, 3, 13)]
        assert [e.task_id for e in wednesday] == ["2", "3", "4"]
        assert wednesday[0].group_color == week_cells.group_colors["1"]
        assert wednesday[2].group_key == constants.UNASSIGNED_GROUP_KEY

    def test_empty_period(self, today):
        cells = bucket_service.bucket([], derive_range(CalendarMode.DAY, today))

        assert event_service.events_by_date(cells) == {}


@pytest.mark.unit
class TestDayColumns:
    """Tests for day_columns function."""

    def test_one_column_per_group_with_tasks(self, week_cells, teams, employees):
        columns = event_service.day_columns(
            week_cells, date(2024, 3, 13), teams=teams, employees=employees.employees
        )

        assert [c.group_key for c in columns] == ["1", "2", constants.UNASSIGNED_GROUP_KEY]
        assert [c.label for c in columns] == ["Ekipa Północ", "Ekipa Południe", "Nieprzydzielone"]
        assert [[e.task_id for e in c.events] for c in columns] == [["2"], ["3"], ["4"]]

    def test_colors_stay_stable_across_days(self, week_cells):
        monday = event_service.day_columns(week_cells, date(2024, 3, 11))
        wednesday = event_service.day_columns(week_cells, date(2024, 3, 13))

        assert monday[0].group_key == "1"
        assert monday[0].color == wednesday[0].color == week_cells.group_colors["1"]
        assert monday[0].border_color == event_service.darken_color(monday[0].color)

    def test_employee_column_label(self, make_task, employees, today):
        cells = bucket_service.bucket(
            [make_task(1, "2024-03-13T10:00:00", type="szkolenie", group=7)],
            derive_range(CalendarMode.DAY, today),
        )

        columns = event_service.day_columns(cells, today, employees=employees.employees)

        assert [c.label for c in columns] == ["Anna Nowak"]

    def test_day_without_tasks_has_no_columns(self, week_cells):
        assert event_service.day_columns(week_cells, date(2024, 3, 12)) == []
