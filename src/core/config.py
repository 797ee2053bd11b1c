"""Configuration management for crewcal."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Calendar Configuration
    timezone: str = Field(
        default="Europe/Warsaw",
        description="IANA timezone that timezone-aware task instants are converted to before bucketing",
    )
    month_paging_clamp: Literal["last_day", "first_day"] = Field(
        default="last_day",
        description=(
            "What month paging does when the current day does not exist in the destination month: "
            "'last_day' clamps to the month's last day, 'first_day' lands on day 1"
        ),
    )
    swipe_threshold_px: int = Field(default=50, description="Horizontal swipe distance that pages the calendar")

    # Timeline Configuration
    timeline_start_hour: int = Field(default=8, ge=0, le=23, description="First hour row shown in day/week timelines")
    timeline_end_hour: int = Field(default=23, ge=0, le=23, description="Last hour row shown in day/week timelines")
    max_visible_tasks_per_cell: int = Field(
        default=2, ge=1, description="Tasks shown per timeline cell before collapsing into '+N more'"
    )

    # Filter Configuration
    default_sort_order: Literal["nearest", "farthest"] = Field(
        default="nearest", description="Sort order used by a freshly reset filter store"
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="production", description="Deployment environment reported to Logfire")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Group keys
    UNASSIGNED_GROUP_KEY: str = "unassigned"
    UNASSIGNED_LABEL: str = "Nieprzydzielone"

    # Team column colors, cycled by group key position
    TEAM_COLORS: tuple[str, ...] = (
        "#FFB3D9",  # light pink
        "#B3F5D1",  # light green
        "#FFD4B3",  # light orange
        "#B5D3F7",
        "#FFE4B5",
        "#DDA0DD",
    )

    # Task status colors
    STATUS_COLORS: dict[str, str] = {
        "wykonane": "#4CBF2426",
        "niewykonane": "#FF9800",
        "Zaplanowane": "#03A9F4",
    }
    STATUS_COLOR_OTHER: str = "#9C27B0"

    # Type badge colors; unknown types use the primary calendar color
    TYPE_COLORS: dict[str, str] = {
        "oględziny": "#FF7E01",
        "montaż": "#4CBF24",
        "szkolenie": "#CE177D",
    }
    CALENDAR_PRIMARY_COLOR: str = "#FF3F01"
    BORDER_DARKEN_PERCENT: int = 30

    # Task types that need a crew (teams) vs. a single person (employees)
    CREW_TASK_TYPES: frozenset[str] = frozenset({"oględziny", "montaż", "przegląd", "serwis"})
    EMPLOYEE_TASK_TYPES: frozenset[str] = frozenset({"szkolenie"})
    DEFAULT_TASK_TYPES: tuple[str, ...] = ("oględziny", "montaż", "przegląd", "serwis")

    # Calendar grid
    DAYS_PER_WEEK: int = 7
    YEAR_VIEW_MONTHS: int = 24  # selected year followed by the next one


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
