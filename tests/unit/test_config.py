"""Tests for configuration validation."""

import pytest
from pydantic import ValidationError

from src.core.config import Constants, Settings


@pytest.mark.unit
class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MONTH_PAGING_CLAMP", raising=False)
        monkeypatch.delenv("TIMEZONE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.timezone == "Europe/Warsaw"
        assert settings.month_paging_clamp == "last_day"
        assert settings.swipe_threshold_px == 50
        assert settings.max_visible_tasks_per_cell == 2
        assert (settings.timeline_start_hour, settings.timeline_end_hour) == (8, 23)
        assert settings.default_sort_order == "nearest"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MONTH_PAGING_CLAMP", "first_day")
        monkeypatch.setenv("MAX_VISIBLE_TASKS_PER_CELL", "3")

        settings = Settings(_env_file=None)

        assert settings.month_paging_clamp == "first_day"
        assert settings.max_visible_tasks_per_cell == 3

    def test_invalid_clamp_policy_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, month_paging_clamp="middle")

    def test_invalid_hour_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, timeline_end_hour=24)


def test_team_palette_has_six_colors() -> None:
    assert len(Constants.TEAM_COLORS) == 6
    assert Constants.UNASSIGNED_GROUP_KEY == "unassigned"
