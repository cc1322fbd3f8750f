"""
EditorConfig - runtime settings of an editing session.

Values come from the environment (optionally a ``.env`` file):

    GRAPHNOTE_DEFAULT_CODE_LANGUAGE   language of new code blocks (typescript)
    GRAPHNOTE_HIGHLIGHT_THEME         highlight theme (light-plus)
    GRAPHNOTE_SEARCH_TIMEOUT          graph search timeout in seconds (2.0)
    GRAPHNOTE_LOG_LEVEL               log level (INFO)
"""

import os

import dotenv
from pydantic import BaseModel, Field, field_validator


class EditorConfig(BaseModel):
    default_code_language: str = Field(default="typescript", description="Language of new code blocks")
    highlight_theme: str = Field(default="light-plus", description="Theme used for code highlighting")
    search_timeout: float = Field(default=2.0, gt=0, description="Graph search timeout in seconds")
    log_level: str = Field(default="INFO", description="Log level name")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v!r}")
        return v

    @classmethod
    def from_env(cls, env_file: str | None = None, load_env_file: bool = True) -> "EditorConfig":
        if load_env_file:
            dotenv.load_dotenv(env_file)
        values = {}
        if language := os.getenv("GRAPHNOTE_DEFAULT_CODE_LANGUAGE"):
            values["default_code_language"] = language
        if theme := os.getenv("GRAPHNOTE_HIGHLIGHT_THEME"):
            values["highlight_theme"] = theme
        if timeout := os.getenv("GRAPHNOTE_SEARCH_TIMEOUT"):
            values["search_timeout"] = timeout
        if level := os.getenv("GRAPHNOTE_LOG_LEVEL"):
            values["log_level"] = level
        return cls.model_validate(values)
