"""Integration tests for vcs.cli.commands.config_cmd: set, get, list with real temp files."""

from pathlib import Path

import pytest
import typer
from pytest_mock import MockerFixture

from vcs.cli.commands.config_cmd import do_config_get, do_config_list, do_config_set
from vcs.config.settings import SettingSource, get_setting_value, list_settings


class TestConfigCmd:
    """Integration tests for config command functions with a temp settings file."""

    @pytest.fixture(autouse=True)
    def _isolate_settings(self, tmp_path: Path, mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch) -> None:
        """Redirect settings I/O to a temporary directory and clear VCS_* variables."""
        config_dir = tmp_path / ".vcs"
        config_dir.mkdir()

        mocker.patch("vcs.config.settings.CONFIG_DIR", config_dir)
        mocker.patch("vcs.config.settings.SETTINGS_PATH", config_dir / "config.toml")
        for env_name in ("VCS_GIT_BINARY", "VCS_GIT_TIMEOUT", "VCS_LOG_LEVEL"):
            monkeypatch.delenv(env_name, raising=False)

    def test_config_set_and_get_roundtrip(self) -> None:
        """Setting a key via do_config_set then reading via the settings API returns the stored value."""
        do_config_set("git-timeout", "90")

        entry = get_setting_value("git_timeout")
        assert entry.value == "90"
        assert entry.source == SettingSource.FILE

    def test_config_set_multiple_keys(self) -> None:
        do_config_set("git-timeout", "90")
        do_config_set("git-binary", "/usr/local/bin/git")
        do_config_set("log-level", "info")

        assert get_setting_value("git_timeout").value == "90"
        assert get_setting_value("git_binary").value == "/usr/local/bin/git"
        assert get_setting_value("log_level").value == "INFO"

    def test_config_set_unknown_key_exits(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            do_config_set("api-key", "secret")
        assert exc_info.value.exit_code == 1
        assert not (tmp_path / ".vcs" / "config.toml").exists()

    def test_config_set_invalid_value_exits(self) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            do_config_set("git-timeout", "-1")
        assert exc_info.value.exit_code == 1
        assert get_setting_value("git_timeout").source == SettingSource.DEFAULT

    def test_config_get(self) -> None:
        do_config_set("log-level", "debug")
        do_config_get("log-level")

    def test_config_get_unknown_key_exits(self) -> None:
        with pytest.raises(typer.Exit):
            do_config_get("nonexistent-key")

    def test_config_get_broken_file_exits(self, tmp_path: Path) -> None:
        (tmp_path / ".vcs" / "config.toml").write_text("[settings\n", encoding="utf-8")
        with pytest.raises(typer.Exit):
            do_config_get("git-timeout")

    def test_config_list_shows_all_keys(self) -> None:
        do_config_list()

        entries = list_settings()
        assert [entry.cli_key for entry in entries] == ["git-binary", "git-timeout", "log-level"]

    def test_config_list_after_set(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """list_settings reflects values set via do_config_set, with the environment winning."""
        do_config_set("git-timeout", "10")
        do_config_set("git-binary", "/opt/git")
        monkeypatch.setenv("VCS_GIT_BINARY", "/env/git")

        do_config_list()
        entries_by_cli_key = {entry.cli_key: entry for entry in list_settings()}

        assert entries_by_cli_key["git-timeout"].value == "10"
        assert entries_by_cli_key["git-timeout"].source == SettingSource.FILE
        assert entries_by_cli_key["git-binary"].value == "/env/git"
        assert entries_by_cli_key["git-binary"].source == SettingSource.ENV
        assert entries_by_cli_key["log-level"].source == SettingSource.DEFAULT
