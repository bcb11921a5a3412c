"""Tests for configuration loading.

**Feature: persona-daily**
"""

import tempfile
from pathlib import Path

import pytest
import toml

from personadaily.config import (
    DEFAULT_MODEL,
    Settings,
    create_template_config,
    get_config_path,
    load_config,
)


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, temp_dir: Path):
        settings = load_config(temp_dir / "absent.toml")

        assert settings == Settings()
        assert settings.gemini.model == DEFAULT_MODEL
        assert settings.estimator.max_retries == 5
        assert settings.estimator.initial_delay_ms == 1000

    def test_values_are_read(self, temp_dir: Path):
        path = temp_dir / "config.toml"
        path.write_text(toml.dumps({
            "gemini": {"api_key": "abc", "model": "gemini-x"},
            "estimator": {"max_retries": 2},
            "storage": {"db_path": str(temp_dir / "p.db")},
        }))

        settings = load_config(path)

        assert settings.gemini.api_key == "abc"
        assert settings.gemini.model == "gemini-x"
        assert settings.estimator.max_retries == 2
        assert settings.estimator.initial_delay_ms == 1000
        assert settings.storage.db_path == temp_dir / "p.db"

    def test_invalid_toml_gives_defaults(self, temp_dir: Path):
        path = temp_dir / "config.toml"
        path.write_text("[gemini\napi_key = ")

        assert load_config(path) == Settings()

    def test_invalid_values_give_defaults(self, temp_dir: Path):
        path = temp_dir / "config.toml"
        path.write_text(toml.dumps({"estimator": {"max_retries": -1}}))

        assert load_config(path) == Settings()

    def test_paths_are_expanded(self, temp_dir: Path):
        path = temp_dir / "config.toml"
        path.write_text(toml.dumps({"storage": {"export_dir": "~/exports"}}))

        settings = load_config(path)

        assert settings.storage.export_dir == Path.home() / "exports"


class TestApiKey:
    def test_env_var_fallback(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert Settings().resolved_api_key() == "from-env"

    def test_config_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        settings = Settings.model_validate({"gemini": {"api_key": "from-config"}})
        assert settings.resolved_api_key() == "from-config"


class TestTemplate:
    def test_template_round_trips(self, temp_dir: Path):
        path = create_template_config(temp_dir / "nested" / "config.toml")

        assert path.exists()
        settings = load_config(path)
        assert settings.gemini.model == DEFAULT_MODEL
        assert settings.estimator.max_retries == 5

    def test_env_var_overrides_config_path(self, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("PERSONADAILY_CONFIG", str(temp_dir / "custom.toml"))
        assert get_config_path() == temp_dir / "custom.toml"
