# Role: Central configuration module. Loads .env into environment variables, computes runtime flags (DEBUG)
# and exposes typed Settings. Importers read gemini_chat.config.DEBUG without threading flags around.

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, NonNegativeFloat, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_chat.core.conversation_controller import FailurePolicy

DEBUG: bool = False

DEFAULT_MODEL = "gemini-1.5-flash-latest"
DEFAULT_BACKEND_URL = "http://127.0.0.1:8000"


class Settings(BaseSettings):
    """Runtime settings read from the environment (and .env). Validation errors name the variable."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    api_key: Optional[str] = Field(default=None, validation_alias="GEMINI_API_KEY")
    model: str = Field(default=DEFAULT_MODEL, validation_alias="GEMINI_MODEL")
    temperature: Optional[NonNegativeFloat] = Field(default=None, validation_alias="GEMINI_TEMPERATURE")
    # None keeps the call unbounded.
    request_timeout: Optional[PositiveFloat] = Field(default=None, validation_alias="CHAT_REQUEST_TIMEOUT")
    failure_policy: FailurePolicy = Field(default=FailurePolicy.DROP_PROMPT, validation_alias="CHAT_FAILURE_POLICY")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    backend_url: str = Field(default=DEFAULT_BACKEND_URL, validation_alias="CHAT_BACKEND_URL")

    @field_validator("failure_policy", mode="before")
    @classmethod
    def _lower_policy(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("backend_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")


def load_env() -> None:
    """
    Load .env into os.environ, then recompute DEBUG.
    This makes DEBUG correct even if load_env() is called after import.
    """
    global DEBUG
    load_dotenv()
    DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}


def get_settings() -> Settings:
    # Reads the current environment on every call.
    return Settings()


def setup_logging() -> logging.Logger:
    # Key line: one handler on the package logger; repeated calls only adjust the level.
    logger = logging.getLogger("gemini_chat")
    logger.setLevel(logging.DEBUG if DEBUG else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
