"""Runtime settings (data directory, languages, log level).

Values come from the environment, optionally seeded from a `.env` file at the
repo root. Explicit keyword overrides win over the environment:

    DATA_DIR          Storage directory (default: ./data)
    DEFAULT_LANGUAGE  Language used when a caller passes none (default: en)
    LANGUAGES         Comma-separated recognized language codes (default: en,es)
    LOG_LEVEL         Root log level for the API app (default: INFO)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from wayfarer.errors import PreconditionError

ROOT = Path(__file__).parent.parent
DEFAULT_DATA_DIR = ROOT / "data"


class Settings(BaseModel):
    """Configuration handed to storage and the API app."""

    data_dir: Path = DEFAULT_DATA_DIR
    default_language: str = "en"
    languages: tuple[str, ...] = Field(default=("en", "es"))
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _default_is_recognized(self) -> "Settings":
        if self.default_language not in self.languages:
            raise ValueError(
                f"default language {self.default_language!r} is not one of {self.languages}"
            )
        return self

    def resolve_language(self, code: str | None) -> str:
        """Return `code`, or the default when None; reject unknown codes."""
        if code is None or code == "":
            return self.default_language
        if code not in self.languages:
            raise PreconditionError(f"Unrecognized language code {code!r}")
        return code


def load_settings(**overrides: Any) -> Settings:
    """Build settings from `.env` + environment, with keyword overrides on top."""
    load_dotenv(ROOT / ".env")

    values: dict[str, Any] = {}
    if os.getenv("DATA_DIR"):
        values["data_dir"] = Path(os.environ["DATA_DIR"])
    if os.getenv("DEFAULT_LANGUAGE"):
        values["default_language"] = os.environ["DEFAULT_LANGUAGE"]
    if os.getenv("LANGUAGES"):
        values["languages"] = tuple(
            code.strip() for code in os.environ["LANGUAGES"].split(",") if code.strip()
        )
    if os.getenv("LOG_LEVEL"):
        values["log_level"] = os.environ["LOG_LEVEL"].upper()

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
