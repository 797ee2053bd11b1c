"""Unit tests for filter_sync_service module."""

import pytest

from src.domain.filters import CalendarMode, FilterField, SortOrder
from src.services.filter_store import StoreChange
from src.services.filter_sync_service import FilterDraft, FilterStateSync, same_value


@pytest.fixture
def sync(store):
    sync = FilterStateSync(store, screen="tasks")
    sync.attach()
    return sync


@pytest.mark.unit
class TestMount:
    """Tests for default anchor derivation on mount."""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (CalendarMode.DAY, "2024-03-13"),
            (CalendarMode.WEEK, "2024-03-11"),
            (CalendarMode.MONTH, "2024-03"),
        ],
    )
    def test_default_anchor_written_to_store_and_draft(self, store, today, mode, expected):
        sync = FilterStateSync(store)

        anchor = sync.mount(mode, today)

        assert anchor == expected
        assert store.date_anchor == expected
        assert sync.draft.get(FilterField.DATE) == expected
        assert sync.attached

    def test_existing_anchor_is_kept(self, make_store, today):
        store = make_store(CalendarMode.DAY, "2024-01-05")
        store.set_type(["serwis"])
        sync = FilterStateSync(store)

        anchor = sync.mount(CalendarMode.DAY, today)

        assert anchor == "2024-01-05"
        assert sync.draft.get(FilterField.DATE) == "2024-01-05"
        assert sync.draft.get(FilterField.TYPE) == ["serwis"]

    def test_mount_twice_does_not_duplicate_subscriptions(self, store, today):
        sync = FilterStateSync(store)
        sync.mount(CalendarMode.DAY, today)
        sync.mount(CalendarMode.DAY, today)
        version = store.version

        sync.draft.set(FilterField.STATUS, ["wykonane"])

        assert store.version == version + 1


@pytest.mark.unit
class TestDraftToStore:
    """Tests for pushing local changes."""

    def test_draft_change_is_pushed(self, sync, store):
        sync.draft.set(FilterField.TYPE, ["serwis", "montaż"])

        assert store.type_set == frozenset({"serwis", "montaż"})
        assert sync.last_pushed_version == store.version

    def test_push_happens_once_without_echo(self, sync, store):
        """A push must not come back as a pull that rewrites the draft."""
        draft_events: list[FilterField] = []
        sync.draft.watch(draft_events.append)

        sync.draft.set(FilterField.GROUP, ["2", "1"])

        assert store.version == 1
        assert draft_events == [FilterField.GROUP]
        assert sync.draft.get(FilterField.GROUP) == ["2", "1"]

    def test_order_only_change_is_not_pushed(self, sync, store):
        sync.draft.set(FilterField.TYPE, ["a", "b"])
        version = store.version

        sync.draft.set(FilterField.TYPE, ["b", "a"])

        assert store.version == version

    def test_round_trip_keeps_draft(self, sync, store):
        sync.draft.set(FilterField.STATUS, ["niewykonane", "wykonane"])
        sync.draft.set(FilterField.SORT, "farthest")
        before = sync.draft.values()

        updated = sync.pull()

        assert updated == []
        for field, value in before.items():
            assert same_value(field, sync.draft.get(field), value)
        assert store.sort_order == SortOrder.FARTHEST

    def test_mode_is_not_a_draft_field(self, sync):
        with pytest.raises(ValueError):
            sync.draft.set(FilterField.MODE, "week")


@pytest.mark.unit
class TestStoreToDraft:
    """Tests for pulling shared changes."""

    def test_foreign_change_is_pulled(self, sync, store):
        store.set_status(["wykonane"], origin="calendar:other")

        assert sync.draft.get(FilterField.STATUS) == ["wykonane"]

    def test_pulled_value_is_not_pushed_back(self, sync, store):
        store.set_group([3, 1], origin="calendar:other")

        assert store.version == 1
        assert sync.draft.get(FilterField.GROUP) == ["1", "3"]

    def test_two_screens_converge(self, store, today):
        calendar = FilterStateSync(store, screen="calendar")
        tasks = FilterStateSync(store, screen="tasks")
        calendar.mount(CalendarMode.DAY, today)
        tasks.mount(CalendarMode.DAY, today)
        version = store.version

        calendar.draft.set(FilterField.TYPE, ["serwis"])
        tasks.draft.set(FilterField.SORT, "farthest")

        assert store.version == version + 2
        assert tasks.draft.get(FilterField.TYPE) == ["serwis"]
        assert calendar.draft.get(FilterField.SORT) == "farthest"

    def test_own_or_stale_changes_are_ignored(self, sync, store):
        sync.draft.set(FilterField.DATE, "2024-03-13")
        stale = StoreChange(version=1, fields=(FilterField.DATE,), origin="other", state=store.state)
        own = StoreChange(version=99, fields=(FilterField.DATE,), origin=sync.token, state=store.state)
        store.set_date("2024-03-14", origin="other")
        sync.draft.set(FilterField.DATE, "2024-03-20")

        sync.on_store_changed(stale)
        sync.on_store_changed(own)

        assert sync.draft.get(FilterField.DATE) == "2024-03-20"

    def test_divergence_heals_on_next_pull(self, store):
        sync = FilterStateSync(store)
        store.set_type(["serwis"], origin="other")

        assert sync.draft.get(FilterField.TYPE) == []
        assert sync.pull() == [FilterField.TYPE]
        assert sync.draft.get(FilterField.TYPE) == ["serwis"]

    def test_detach_stops_both_directions(self, sync, store):
        sync.detach()

        store.set_type(["serwis"], origin="other")
        sync.draft.set(FilterField.STATUS, ["wykonane"])

        assert sync.draft.get(FilterField.TYPE) == []
        assert store.status_set == frozenset()


@pytest.mark.unit
class TestFilterDraft:
    """Tests for the form-scoped draft."""

    def test_initial_values(self):
        draft = FilterDraft({FilterField.TYPE: "serwis", FilterField.SORT: "nearest"})

        assert draft.get(FilterField.TYPE) == ["serwis"]
        assert draft.get(FilterField.STATUS) == []
        assert draft.get(FilterField.DATE) == ""

    def test_fresh_draft_agrees_with_fresh_store(self, store):
        sync = FilterStateSync(store)

        assert sync.draft.get(FilterField.SORT) == "nearest"
        assert sync.pull() == []

    def test_unchanged_value_does_not_notify(self):
        draft = FilterDraft()
        events: list[FilterField] = []
        draft.watch(events.append)

        draft.set(FilterField.TYPE, ["a"])
        draft.set(FilterField.TYPE, ["a"])

        assert events == [FilterField.TYPE]

    def test_unwatch(self):
        draft = FilterDraft()
        events: list[FilterField] = []
        unwatch = draft.watch(events.append)

        unwatch()
        draft.set(FilterField.TYPE, ["a"])

        assert events == []
