"""Filter state models shared by the calendar and task-list screens."""

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.config import constants


UNASSIGNED = constants.UNASSIGNED_GROUP_KEY


class CalendarMode(StrEnum):
    """Calendar granularity."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class SortOrder(StrEnum):
    """Task list ordering by start instant.

    NEAREST sorts descending (latest start first); FARTHEST sorts ascending.
    """

    NEAREST = "nearest"
    FARTHEST = "farthest"


class FilterField(StrEnum):
    """Dimensions of the filter state, one per store action."""

    DATE = "date_anchor"
    SORT = "sort_order"
    TYPE = "type_set"
    STATUS = "status_set"
    GROUP = "group_set"
    MODE = "mode"


SET_FIELDS: tuple[FilterField, ...] = (FilterField.TYPE, FilterField.STATUS, FilterField.GROUP)


def normalize_values(values: Iterable[object] | None) -> frozenset[str]:
    """Coerce a selection (list, set, None) into a frozenset of strings."""
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset({values}) if values else frozenset()
    return frozenset(str(v) for v in values)


def sorted_values(values: Iterable[object] | None) -> list[str]:
    """Order-insensitive comparison form of a selection."""
    return sorted(normalize_values(values))


class FilterState(BaseModel):
    """Immutable snapshot of every filter dimension.

    An empty set means "no filter on that dimension".
    """

    model_config = ConfigDict(frozen=True)

    date_anchor: str = Field(default="", description="YYYY-MM-DD, week-start YYYY-MM-DD, or YYYY-MM")
    sort_order: SortOrder = Field(default=SortOrder.NEAREST, description="Start instant ordering")
    type_set: frozenset[str] = Field(default_factory=frozenset, description="Selected type tags")
    status_set: frozenset[str] = Field(default_factory=frozenset, description="Selected statuses")
    group_set: frozenset[str] = Field(default_factory=frozenset, description="Selected team/employee IDs")
    mode: CalendarMode = Field(default=CalendarMode.DAY, description="Active calendar mode")

    @field_validator("type_set", "status_set", "group_set", mode="before")
    @classmethod
    def coerce_selection(cls, v: object) -> frozenset[str]:
        """Accept lists of ints/strings and None; IDs are compared as strings."""
        return normalize_values(v)  # type: ignore[arg-type]

    @field_validator("date_anchor", mode="before")
    @classmethod
    def none_anchor_is_empty(cls, v: object) -> object:
        return "" if v is None else v

    def get(self, field: FilterField) -> object:
        return getattr(self, field.value)

    @property
    def has_date_filter(self) -> bool:
        return bool(self.date_anchor.strip())


class FilterChip(BaseModel):
    """One active filter rendered as a removable chip.

    Set-valued dimensions carry their selection JSON-encoded in ``value``.
    """

    name: str
    value: str
    type: str
