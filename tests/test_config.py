# /tests/test_config.py

from lab_allocation.core.config import Settings


def test_settings_are_read_from_the_environment_at_construction(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("CORS_ORIGINS", "http://lab.local, http://admin.local")
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

    settings = Settings(_env_file=None)

    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 15
    assert settings.cors_origin_list == ["http://lab.local", "http://admin.local"]
    assert settings.ADMIN_PASSWORD is None


def test_defaults_apply_when_nothing_is_set(monkeypatch):
    for name in ("DATABASE_URL", "JWT_ALGORITHM", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.DATABASE_URL == "sqlite:///./lab_allocation.db"
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.LOG_LEVEL == "INFO"
