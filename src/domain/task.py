"""Task domain models and enums."""

import logging
from datetime import datetime
from enum import StrEnum
from functools import cached_property
from zoneinfo import ZoneInfo

from dateutil import parser as dateutil_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.config import constants, settings


logger = logging.getLogger(__name__)


class TaskStatus(StrEnum):
    """Known task statuses. The status field itself accepts any string."""

    PLANNED = "Zaplanowane"
    DONE = "wykonane"
    NOT_DONE = "niewykonane"


def parse_instant(value: str | None) -> datetime | None:
    """Parse an ISO-8601 instant into a naive local datetime.

    Aware instants are converted to the configured timezone first so that
    date and hour bucketing happen on the operator's wall clock.

    Returns:
        Naive datetime, or None when the value is empty or unparsable
    """
    if not value:
        return None
    try:
        parsed = dateutil_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(settings.timezone)).replace(tzinfo=None)
    return parsed


class Task(BaseModel):
    """Task data transfer object.

    Field aliases match the backend payload (``nazwa``, ``typ``, ``grupa``...),
    so raw records can be validated directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int | str = Field(..., description="Unique task ID from the backend")
    start_date: str = Field(default="", description="Start instant (ISO format)")
    end_date: str | None = Field(default=None, description="End instant (ISO format), defaults to start")
    name: str = Field(default="", alias="nazwa", description="Task title")
    type: str = Field(default="", alias="typ", description="Open, user-extensible type tag")
    status: str = Field(default=TaskStatus.PLANNED, description="Lifecycle status")
    group: int | str | None = Field(default=None, alias="grupa", description="Assigned team or employee ID")
    notes: str | None = Field(default=None, alias="notatki", description="Free-text notes")
    installation_id: int | None = Field(default=None, alias="instalacja_id", description="Linked installation")

    @field_validator("group", mode="before")
    @classmethod
    def blank_group_is_unassigned(cls, v: object) -> object:
        """Backend sends 0, '' or null for tasks nobody is assigned to."""
        if v in (None, "", 0, "0"):
            return None
        return v

    @field_validator("name", "type", mode="before")
    @classmethod
    def none_to_empty(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("start_date", mode="before")
    @classmethod
    def coerce_start_date(cls, v: object) -> object:
        """Null or non-string starts become text; parse_instant decides whether they are usable."""
        if v is None:
            return ""
        if isinstance(v, int | float):
            return str(v)
        return v

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_is_planned(cls, v: object) -> object:
        if v is None or v == "":
            return TaskStatus.PLANNED
        return v if isinstance(v, str) else str(v)

    @cached_property
    def start_instant(self) -> datetime | None:
        """Parsed start instant, or None if start_date is malformed."""
        return parse_instant(self.start_date)

    @cached_property
    def end_instant(self) -> datetime | None:
        """Parsed end instant, falling back to the start instant."""
        return parse_instant(self.end_date) or self.start_instant

    @property
    def group_key(self) -> str:
        """Key used to partition tasks into team/employee columns."""
        if self.group is None:
            return constants.UNASSIGNED_GROUP_KEY
        return str(self.group)

    @property
    def is_unassigned(self) -> bool:
        return self.group is None

    @property
    def title(self) -> str:
        """Display title: the task name, or the capitalized type when unnamed."""
        if self.name:
            return self.name
        return self.type[:1].upper() + self.type[1:].lower()

    @property
    def status_color(self) -> str:
        return constants.STATUS_COLORS.get(self.status, constants.STATUS_COLOR_OTHER)
