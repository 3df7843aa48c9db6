from __future__ import annotations

from response_envelope.core.config import Settings, get_settings, settings


def test_defaults(monkeypatch):
    for key in ("EXPOSE_INTERNAL_ERRORS", "VALIDATION_ERROR_STATUS"):
        monkeypatch.delenv(key, raising=False)
    s = Settings(_env_file=None)
    assert s.EXPOSE_INTERNAL_ERRORS is False
    assert s.VALIDATION_ERROR_STATUS == 422


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("expose_internal_errors", "true")
    monkeypatch.setenv("VALIDATION_ERROR_STATUS", "400")
    s = Settings(_env_file=None)
    assert s.EXPOSE_INTERNAL_ERRORS is True
    assert s.VALIDATION_ERROR_STATUS == 400


def test_get_settings_returns_singleton():
    assert get_settings() is settings


def test_validation_status_setting_applies(client, monkeypatch):
    monkeypatch.setattr(settings, "VALIDATION_ERROR_STATUS", 400)
    r = client.get("/items/abc")
    assert r.status_code == 400
    assert r.json()["statusCode"] == 400
