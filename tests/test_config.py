"""
Tests for application settings.
"""

from worklog.infra.config import Settings


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = Settings(config_dir=tmp_path / "cfg", data_dir=tmp_path / "data")

    assert settings.company_name == "Zimmerei"
    assert settings.currency == "CHF"
    assert settings.preferences.hourly_wage == 38
    assert (tmp_path / "data").is_dir()
    assert settings.get_db_url() == f"sqlite:///{tmp_path / 'data' / 'worklog.db'}"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("WORKLOG_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("WORKLOG_REQUEST_TIMEOUT", "5")
    settings = Settings(config_dir=tmp_path, data_dir=tmp_path)

    assert settings.get_db_url() == "sqlite:///:memory:"
    assert settings.request_timeout == 5.0


def test_yaml_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "settings.yaml").write_text(
        "company_name: Acme\n"
        "currency: EUR\n"
        "preferences:\n"
        "  scriptUrl: https://x/exec\n"
        "  hourlyWage: 45\n",
        encoding="utf-8",
    )
    settings = Settings(config_dir=tmp_path, data_dir=tmp_path)

    assert settings.company_name == "Acme"
    assert settings.currency == "EUR"
    assert settings.preferences.script_url == "https://x/exec"
    assert settings.preferences.hourly_wage == 45
