import pytest

from dinner_planner.config import Settings, get_setting, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DINNER_PLANNER_LOG_LEVEL", raising=False)
    assert get_settings() == Settings(match_threshold=0.3, expiring_within_days=3, log_level="INFO")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DINNER_PLANNER_MATCH_THRESHOLD", "0.1")
    monkeypatch.setenv("DINNER_PLANNER_EXPIRING_WITHIN_DAYS", "5")
    monkeypatch.setenv("DINNER_PLANNER_LOG_LEVEL", "warning")
    settings = get_settings()
    assert settings.match_threshold == 0.1
    assert settings.expiring_within_days == 5
    assert settings.log_level == "WARNING"


def test_blank_value_uses_default(monkeypatch):
    monkeypatch.setenv("DINNER_PLANNER_MATCH_THRESHOLD", "  ")
    assert get_setting("match_threshold", "0.3") == "0.3"


def test_invalid_threshold(monkeypatch):
    monkeypatch.setenv("DINNER_PLANNER_MATCH_THRESHOLD", "1.5")
    with pytest.raises(ValueError):
        get_settings()


def test_threshold_setting_changes_matching(monkeypatch):
    from dinner_planner.core.matcher import is_available
    from dinner_planner.models import PantryItem

    pantry = [PantryItem(id="1", name="tomatoes")]
    assert is_available("tomato", pantry)
    monkeypatch.setenv("DINNER_PLANNER_MATCH_THRESHOLD", "0.1")
    assert not is_available("tomato", pantry)
