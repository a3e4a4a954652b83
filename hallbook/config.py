"""Runtime settings, read once from ``HALLBOOK_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "HALLBOOK_"


class Settings(BaseModel):
    persistence_enabled: bool = True
    receipts_enabled: bool = True
    receipt_dir: str = "receipts"
    currency: str = "BGN"
    long_stay_discount: bool = True
    suggestion_window_days: int = Field(default=30, ge=0)
    utilization_window_days: int = Field(default=30, ge=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``).

        Only variables that are present override the defaults; values are
        coerced by pydantic, so ``HALLBOOK_RECEIPTS_ENABLED=false`` works.
        """
        env = os.environ if environ is None else environ
        values = {
            name: env[ENV_PREFIX + name.upper()]
            for name in cls.model_fields
            if ENV_PREFIX + name.upper() in env
        }
        return cls.model_validate(values)
