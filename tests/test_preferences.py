"""Tests for coach preference persistence."""

from coach.app.preferences import (
    CoachPreferences,
    load_preferences,
    save_preferences,
    PREF_VERSION,
)
import json


def test_round_trip_preferences(tmp_path):
    prefs = CoachPreferences(tutorial_enabled=False, locale="fr")
    save_preferences(prefs, tmp_path)
    assert load_preferences(tmp_path) == prefs


def test_missing_file_gives_defaults(tmp_path):
    prefs = load_preferences(tmp_path)
    assert prefs.tutorial_enabled is True
    assert prefs.version == PREF_VERSION


def test_corrupt_file_fallback(tmp_path):
    (tmp_path / "coach_prefs.json").write_text("not valid json", encoding="utf-8")
    loaded = load_preferences(tmp_path)
    assert loaded == CoachPreferences()


def test_version_mismatch_resets_but_keeps_locale(tmp_path):
    save_preferences(CoachPreferences(tutorial_enabled=False, locale="ru"), tmp_path)
    path = tmp_path / "coach_prefs.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    data["version"] = 999
    path.write_text(json.dumps(data), encoding="utf-8")
    loaded = load_preferences(tmp_path)
    assert loaded.version == PREF_VERSION
    assert loaded.tutorial_enabled is True
    assert loaded.locale == "ru"
