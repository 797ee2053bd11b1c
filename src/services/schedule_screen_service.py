"""Schedule screen service: loads data and composes the calendar view."""

import logging
from datetime import date

from src.core.date_math import ClampPolicy
from src.core.errors import classify_data_source_error
from src.core.logging import log_with_screen_context, span
from src.domain.filters import CalendarMode, FilterState
from src.domain.staff import EmployeesResponse
from src.domain.task import Task
from src.interface.data_source import StaffDataSource, TaskDataSource
from src.models.service_models import CalendarView, ScheduleSnapshot
from src.services import bucket_service, event_service, filter_options_service, filter_service
from src.services.calendar_mode_service import CalendarModeController
from src.services.filter_store import FilterStore
from src.services.filter_sync_service import FilterStateSync


logger = logging.getLogger(__name__)


async def load_snapshot(
    *,
    tasks_source: TaskDataSource,
    staff_source: StaffDataSource | None = None,
    screen: str | None = None,
) -> ScheduleSnapshot:
    """Fetch tasks and staff for one computation pass.

    Failures never propagate: the error is classified and returned on an
    empty snapshot so the screen can show it.

    Args:
        tasks_source: Task collaborator
        staff_source: Team/employee collaborator (optional)
        screen: Screen name used in log context

    Returns:
        ScheduleSnapshot with loading cleared and error set on failure
    """
    with span("schedule_screen_service.load_snapshot"):
        try:
            tasks = await tasks_source.fetch_tasks()
            teams = await staff_source.fetch_teams() if staff_source else []
            employees = await staff_source.fetch_employees() if staff_source else EmployeesResponse()
        except Exception as e:
            error = classify_data_source_error(e)
            log_with_screen_context(
                logger, "error", f"Failed to load schedule data: {e}", screen=screen, error_code=error.code
            )
            return ScheduleSnapshot(error=error)

        snapshot = ScheduleSnapshot(
            tasks=tuple(tasks or ()),
            teams=tuple(teams or ()),
            employees=employees or EmployeesResponse(),
        )
        log_with_screen_context(logger, "info", "Schedule data loaded", screen=screen, task_count=len(snapshot.tasks))
        return snapshot


class ScheduleScreen:
    """Calendar screen wiring: data snapshot, mode controller and filter sync.

    ``render`` returns the same CalendarView object for as long as the
    snapshot, filter state, current date and search text are unchanged.
    """

    def __init__(
        self,
        *,
        store: FilterStore,
        tasks_source: TaskDataSource,
        staff_source: StaffDataSource | None = None,
        screen: str = "calendar",
        today: date | None = None,
        clamp: ClampPolicy | None = None,
    ) -> None:
        self.store = store
        self.screen = screen
        self.tasks_source = tasks_source
        self.staff_source = staff_source
        self.controller = CalendarModeController(store, today=today, clamp=clamp)
        self.sync = FilterStateSync(store, screen=screen)
        self.snapshot = ScheduleSnapshot(loading=True)
        self._view: CalendarView | None = None
        self._view_inputs: tuple[ScheduleSnapshot, FilterState, date, str] | None = None

    def mount(self) -> str:
        """Attach the filter form and apply the default anchor if none is set."""
        return self.sync.mount(self.store.mode, self.controller.today)

    def unmount(self) -> None:
        self.sync.detach()

    async def refresh(self) -> ScheduleSnapshot:
        """Reload data; the previous snapshot stays visible while loading."""
        self.snapshot = self.snapshot.model_copy(update={"loading": True, "error": None})
        self.snapshot = await load_snapshot(
            tasks_source=self.tasks_source,
            staff_source=self.staff_source,
            screen=self.screen,
        )
        return self.snapshot

    def _is_current(self, inputs: tuple[ScheduleSnapshot, FilterState, date, str]) -> bool:
        if self._view_inputs is None:
            return False
        snapshot, state, current, search = self._view_inputs
        return snapshot is inputs[0] and state == inputs[1] and current == inputs[2] and search == inputs[3]

    def render(self, *, search: str = "") -> CalendarView:
        """Compute everything the calendar screen shows for the current state."""
        inputs = (self.snapshot, self.store.state, self.controller.current_date, search)
        if self._view is not None and self._is_current(inputs):
            return self._view

        with span("schedule_screen_service.render"):
            snapshot, state, current, _ = inputs
            period = self.controller.date_range
            # The grid is bounded by the period, so only the non-date dimensions apply here.
            matching = filter_service.apply(snapshot.tasks, state, date_anchor="", search=search)
            cells = bucket_service.bucket(matching, period, teams=snapshot.teams)
            columns = (
                event_service.day_columns(
                    cells, current, teams=snapshot.teams, employees=snapshot.employees.employees
                )
                if state.mode == CalendarMode.DAY
                else []
            )

            view = CalendarView(
                mode=state.mode,
                anchor=current,
                title=self.controller.header_title,
                period=period,
                grid=self.controller.grid,
                cells=cells,
                visible_tasks=tuple(filter_service.apply(snapshot.tasks, state, search=search)),
                events=event_service.events_by_date(cells),
                columns=tuple(columns),
                group_options=tuple(
                    filter_options_service.group_options(state.type_set, snapshot.teams, snapshot.employees)
                ),
                loading=snapshot.loading,
                error=snapshot.error,
            )

        self._view = view
        self._view_inputs = inputs
        return view

    def select_task(self, task_id: int | str) -> Task | None:
        """Task handed to navigation when a cell or card is tapped.

        Returns None if the task is no longer part of the snapshot.
        """
        for task in self.snapshot.tasks:
            if str(task.id) == str(task_id):
                return task
        logger.warning(f"Selected task {task_id} is not in the current snapshot")
        return None
