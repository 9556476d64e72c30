"""Tests for settings models, TOML storage and the settings loader."""

from __future__ import annotations

import logging
import stat
from pathlib import Path

import pytest
import toml
from pydantic import ValidationError

from linear_cli.config import (
    ConfigStorage,
    Settings,
    SettingsLoader,
    default_config_path,
    load_settings,
    resolve_api_token,
)
from linear_cli.shared.constants import Cache
from linear_cli.shared.errors import ApplicationError, ErrorCode, InfrastructureError


class TestSettings:
    def test_defaults(self, config_path):
        settings = Settings()

        assert settings.api.api_token is None
        assert settings.api.endpoint == "https://api.linear.app/graphql"
        assert settings.cache.ttl_ms == Cache.DEFAULT_TTL_MS
        assert settings.validation.strict is False
        assert settings.logging.level == "WARNING"

    def test_token_is_not_in_repr(self, settings):
        assert "lin_api_test_token_1234" not in repr(settings)

    def test_log_level_is_normalized(self):
        assert Settings.model_validate({"logging": {"level": "debug"}}).logging.level == "DEBUG"

        with pytest.raises(ValidationError):
            Settings.model_validate({"logging": {"level": "loud"}})

    def test_toml_roundtrip(self, settings, tmp_path: Path):
        path = tmp_path / "config.toml"

        settings.to_toml_file(path)
        loaded = Settings.from_toml_file(path)

        assert loaded.api.api_token == "lin_api_test_token_1234"
        assert loaded.api.default_team_id == "team-1"
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text('[api]\ndefault_team_id = "from-file"\n', encoding="utf-8")
        monkeypatch.setenv("LINEAR_CLI_API__DEFAULT_TEAM_ID", "from-env")
        monkeypatch.setenv("LINEAR_CLI_CACHE__TTL_MS", "1000")

        settings = Settings.from_toml_file(path)

        assert settings.api.default_team_id == "from-env"
        assert settings.cache.ttl_ms == 1000

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Settings.from_toml_file(tmp_path / "missing.toml")


class TestConfigStorage:
    def test_missing_file_is_empty(self, tmp_path: Path):
        assert ConfigStorage(tmp_path / "config.toml").load_config_dict() == {}

    def test_set_nested_value_creates_tables(self, tmp_path: Path):
        path = tmp_path / "nested" / "config.toml"
        storage = ConfigStorage(path)

        storage.set_nested_value("api.api_token", "lin_api_secret")
        storage.set_nested_value("api.default_team_id", "team-1")

        assert toml.load(path) == {
            "api": {"api_token": "lin_api_secret", "default_team_id": "team-1"}
        }
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_existing_keys_are_kept(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[cache]\nttl_ms = 1000\n', encoding="utf-8")

        ConfigStorage(path).set_nested_value("api.default_project_id", "proj-1")

        assert toml.load(path) == {
            "cache": {"ttl_ms": 1000},
            "api": {"default_project_id": "proj-1"},
        }

    def test_backup_and_rollback(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        storage = ConfigStorage(path)
        storage.set_nested_value("api.default_team_id", "first")
        storage.set_nested_value("api.default_team_id", "second")

        assert storage.rollback_to_backup() is True
        assert toml.load(path)["api"]["default_team_id"] == "first"

    def test_rollback_without_backup(self, tmp_path: Path):
        assert ConfigStorage(tmp_path / "config.toml").rollback_to_backup() is False

    def test_scalar_in_the_way(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('api = "oops"\n', encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            ConfigStorage(path).set_nested_value("api.api_token", "x")

        assert exc_info.value.code is ErrorCode.INVALID_CONFIG
        assert exc_info.value.context.additional_data == {"config_key": "api.api_token"}

    def test_save_failure_is_logged_config_error(self, tmp_path: Path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = ConfigStorage(blocker / "config.toml")

        with caplog.at_level(logging.ERROR, logger="linear_cli.config.storage"):
            with pytest.raises(ApplicationError) as exc_info:
                storage.save_config_dict({"api": {"default_team_id": "team-1"}})

        assert exc_info.value.code is ErrorCode.CONFIG_ERROR
        assert exc_info.value.context.operation == "save_config"
        [record] = caplog.records
        assert record.error_code == "CONFIG_ERROR"
        assert record.operation == "save_config"

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[api\n", encoding="utf-8")

        with pytest.raises(InfrastructureError) as exc_info:
            ConfigStorage(path).load_config_dict()

        assert exc_info.value.code is ErrorCode.INVALID_CONFIG


class TestLoader:
    def test_default_config_path_from_env(self, config_path):
        assert default_config_path() == config_path

    def test_default_config_path_in_home(self, monkeypatch):
        monkeypatch.delenv("LINEAR_CLI_CONFIG", raising=False)

        assert default_config_path() == Path.home() / ".config" / "linear-cli" / "config.toml"

    def test_load_settings_without_file(self, config_path):
        assert load_settings().api.api_token is None

    def test_load_settings_invalid_file(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[cache]\nttl_ms = -5\n", encoding="utf-8")

        with pytest.raises(InfrastructureError) as exc_info:
            load_settings()

        assert exc_info.value.code is ErrorCode.INVALID_CONFIG

    def test_resolve_api_token_falls_back_to_env(self, config_path, monkeypatch):
        settings = Settings()
        assert resolve_api_token(settings) is None

        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_from_env")
        assert resolve_api_token(settings) == "lin_api_from_env"

    def test_configured_token_wins(self, settings, monkeypatch):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_from_env")

        assert resolve_api_token(settings) == "lin_api_test_token_1234"

    def test_loader_caches_and_reloads(self, config_path):
        loader = SettingsLoader()

        first = loader.get_config()
        assert loader.get_config() is first

        updated = loader.set_value("api.default_team_id", "team-9")

        assert updated is not first
        assert loader.get_config().api.default_team_id == "team-9"
        assert loader.config_path == config_path

    def test_dotenv_file_is_loaded(self, config_path, monkeypatch):
        # load_dotenv writes into os.environ; registering the variable first
        # makes monkeypatch remove it again on teardown
        monkeypatch.setenv("LINEAR_CLI_API__DEFAULT_PROJECT_ID", "unset")
        monkeypatch.delenv("LINEAR_CLI_API__DEFAULT_PROJECT_ID")
        Path(".env").write_text("LINEAR_CLI_API__DEFAULT_PROJECT_ID=proj-env\n", encoding="utf-8")

        settings = SettingsLoader().get_config()

        assert settings.api.default_project_id == "proj-env"
