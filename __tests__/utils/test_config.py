import logging

import pytest
from pydantic import ValidationError

from graphnote.block import default_schema
from graphnote.utils import EditorConfig, configure_logging


ENV_KEYS = (
    "GRAPHNOTE_DEFAULT_CODE_LANGUAGE",
    "GRAPHNOTE_HIGHLIGHT_THEME",
    "GRAPHNOTE_SEARCH_TIMEOUT",
    "GRAPHNOTE_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    # set before deleting so monkeypatch also undoes values loaded from .env files
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


class TestEditorConfig:
    """Tests for loading settings from the environment."""

    def test_defaults(self, clean_env):
        config = EditorConfig.from_env(load_env_file=False)
        assert config.default_code_language == "typescript"
        assert config.highlight_theme == "light-plus"
        assert config.search_timeout == 2.0
        assert config.log_level == "INFO"

    def test_from_env(self, clean_env):
        clean_env.setenv("GRAPHNOTE_DEFAULT_CODE_LANGUAGE", "python")
        clean_env.setenv("GRAPHNOTE_HIGHLIGHT_THEME", "dark-plus")
        clean_env.setenv("GRAPHNOTE_SEARCH_TIMEOUT", "0.5")
        clean_env.setenv("GRAPHNOTE_LOG_LEVEL", "debug")
        config = EditorConfig.from_env(load_env_file=False)
        assert config.default_code_language == "python"
        assert config.highlight_theme == "dark-plus"
        assert config.search_timeout == 0.5
        assert config.log_level == "DEBUG"

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("GRAPHNOTE_DEFAULT_CODE_LANGUAGE=go\n")
        config = EditorConfig.from_env(str(env_file))
        assert config.default_code_language == "go"

    def test_invalid_values(self, clean_env):
        clean_env.setenv("GRAPHNOTE_SEARCH_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            EditorConfig.from_env(load_env_file=False)
        with pytest.raises(ValidationError):
            EditorConfig(log_level="LOUD")

    def test_schema_uses_configured_language(self):
        schema = default_schema(EditorConfig(default_code_language="rust"))
        assert schema.validate_props("codeBlock").language == "rust"


class TestLogging:

    def test_configure_logging(self):
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        configure_logging(logging.WARNING)
        assert logging.getLogger().level == logging.WARNING
