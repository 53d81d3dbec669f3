"""Runtime settings, read from the environment (and `.env`) at startup."""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers whose level follows Settings.log_level
APP_LOGGERS = ("career_quest", "backend")

ENV_FILE = Path(__file__).parent.parent / ".env"

_SETTINGS_DEFAULTS: dict[str, Any] = {
    "api_key": "",
    "content_url": "https://api.worqhat.com/api/ai/content/v4",
    "image_url": "https://api.worqhat.com/api/ai/images/generate/v2",
    "model_id": "aicon-v4-alpha-160824",
    "randomness": 0.5,
    "image_style": "Anime",
    "image_orientation": "Square",
    "counselor_name": "John",
    "http_timeout": 120.0,
    "session_idle_timeout": 3600.0,
    "log_level": "INFO",
    "host": "0.0.0.0",
    "port": 3000,
}


class Settings(BaseModel):
    api_key: str
    content_url: str
    image_url: str
    model_id: str
    randomness: float
    image_style: str
    image_orientation: str
    counselor_name: str
    http_timeout: float
    session_idle_timeout: float
    log_level: str
    host: str
    port: int

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level {value!r}")
        return value

    @property
    def offline(self) -> bool:
        """No API key configured: use the canned generators instead of HTTP."""
        return not self.api_key

    def public(self) -> dict[str, Any]:
        """Settings safe to show to a client (no secrets)."""
        data = self.model_dump(exclude={"api_key"})
        data["offline"] = self.offline
        return data


def load_settings(env_file: Path | None = ENV_FILE) -> Settings:
    """Read settings from the environment, falling back to defaults.

    Each field is read from the upper-cased env var of the same name
    (api_key → API_KEY). Invalid values raise pydantic.ValidationError.
    """
    if env_file is not None:
        load_dotenv(env_file)
    values: dict[str, Any] = dict(_SETTINGS_DEFAULTS)
    for key in _SETTINGS_DEFAULTS:
        raw = os.getenv(key.upper())
        if raw is not None and raw != "":
            values[key] = raw
    return Settings.model_validate(values)


def configure_logging(level: str) -> None:
    """Apply `level` to the app's loggers and make sure their records are printed.

    Runs inside the process that serves requests, so it also holds under
    `uvicorn --reload` and plain `uvicorn backend.app:app`.
    """
    level = level.upper()
    logging.basicConfig(format=LOG_FORMAT)
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(level)
