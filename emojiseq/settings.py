"""Build-time settings for the emoji table generator.

The runtime matching API reads no configuration; these values only steer
``cli/generate_table.py``. Every field can be set from the environment with
the ``EMOJISEQ_`` prefix, e.g. ``EMOJISEQ_OUTPUT_PATH=/tmp/table.json``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

OFFICIAL_DIR = Path(__file__).resolve().parent / "official"
DATA_DIR = OFFICIAL_DIR / "data"

DEFAULT_SEQUENCES_PATH = DATA_DIR / "emoji-sequences.txt"
DEFAULT_ZWJ_SEQUENCES_PATH = DATA_DIR / "emoji-zwj-sequences.txt"
DEFAULT_ARTIFACT_PATH = OFFICIAL_DIR / "sequences.json"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class GeneratorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EMOJISEQ_", extra="ignore")

    sequences_path: Path = Field(
        default=DEFAULT_SEQUENCES_PATH,
        description="Unicode emoji-sequences.txt",
    )
    zwj_sequences_path: Path = Field(
        default=DEFAULT_ZWJ_SEQUENCES_PATH,
        description="Unicode emoji-zwj-sequences.txt",
    )
    output_path: Path = Field(
        default=DEFAULT_ARTIFACT_PATH,
        description="Where the generated JSON table is written",
    )
    log_level: LogLevel = "INFO"
    log_json: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value
