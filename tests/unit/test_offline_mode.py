from __future__ import annotations

from app.offline_mode import offline_mode_enabled


def test_offline_by_default_under_pytest(monkeypatch):
    monkeypatch.delenv("LIFENAV_OFFLINE", raising=False)
    assert offline_mode_enabled()


def test_explicit_flag_overrides_pytest_default(monkeypatch):
    monkeypatch.setenv("LIFENAV_OFFLINE", "false")
    assert not offline_mode_enabled()
    monkeypatch.setenv("LIFENAV_OFFLINE", " ON ")
    assert offline_mode_enabled()


def test_online_outside_tests_without_flag(monkeypatch):
    monkeypatch.delenv("LIFENAV_OFFLINE", raising=False)
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    assert not offline_mode_enabled()
