from pathlib import Path

import pytest
import yaml

from config import config_path, load_settings
from exceptions import ConfigError


def test_config_read_from_yml(journal_env):
    journal_env(
        "pull_requests:\n"
        "  enabled: true\n"
        "  auth:\n"
        "    personal_access_token: my-access-token\n"
        "  select:\n"
        "    - repo: felipesere/sane-flags\n"
        "      authors:\n"
        "        - felipesere\n"
        "reminders:\n"
        "  enabled: true\n"
    )

    settings = load_settings()

    assert settings.pull_requests is not None
    assert settings.pull_requests.select[0].authors == {"felipesere"}
    assert settings.reminders_enabled
    assert settings.notes.enabled


def test_reminders_are_off_without_their_section(journal_env):
    journal_env("")
    assert not load_settings().reminders_enabled


def test_env_overrides_the_file(journal_env, monkeypatch, tmp_path):
    journal_env("")
    monkeypatch.setenv("JOURNAL__DIR", "env/set/the/dir")
    monkeypatch.setenv("JOURNAL__PULL_REQUESTS__AUTH__PERSONAL_ACCESS_TOKEN", "my-access-token")

    settings = load_settings()

    assert settings.dir == Path("env/set/the/dir")
    assert settings.pull_requests.auth.personal_access_token.get_secret_value() == "my-access-token"


def test_default_location_is_the_home_directory(monkeypatch, tmp_path):
    monkeypatch.delenv("JOURNAL__CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config_path() == tmp_path / ".journal.yaml"


def test_missing_file_is_reported(monkeypatch, tmp_path):
    missing = tmp_path / "missing.yaml"
    monkeypatch.setenv("JOURNAL__CONFIG", str(missing))

    with pytest.raises(ConfigError) as e:
        load_settings()

    assert str(missing) in str(e.value)
    assert "JOURNAL__CONFIG" in str(e.value)


def test_missing_dir_is_invalid(journal_env, tmp_path):
    (tmp_path / ".journal.yaml").write_text("reminders:\n  enabled: true\n")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings()


def test_to_yaml_masks_the_token(journal_env):
    journal_env("pull_requests:\n  auth:\n    personal_access_token: secret\n")

    dumped = yaml.safe_load(load_settings().to_yaml())

    assert dumped["pull_requests"]["auth"]["personal_access_token"] == "***"
    assert "secret" not in load_settings().to_yaml()
