import pytest
from pydantic import ValidationError

from app.config import Settings


@pytest.mark.parametrize("missing", ["SECRET_KEY", "PORT", "RAZORPAY_KEY_ID", "POSTGRES_DB"])
def test_missing_required_setting_fails_at_startup(monkeypatch, missing):
    monkeypatch.delenv(missing, raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_load_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9100")
    monkeypatch.setenv("POSTGRES_PASSWORD", "p@ss word")

    settings = Settings(_env_file=None)

    assert settings.port == 9100
    assert settings.currency == "usd"
    assert "p%40ss+word@" in settings.database_url
