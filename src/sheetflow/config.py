from __future__ import annotations

from collections.abc import Mapping
import os

from pydantic import BaseModel, Field

ENV_SAVE_TIMEOUT = "SHEETFLOW_SAVE_TIMEOUT"
ENV_LOG_LEVEL = "SHEETFLOW_LOG_LEVEL"


class SheetflowConfig(BaseModel):
    """Runtime configuration for workbooks and the CLI."""

    save_timeout: float = Field(
        default=10.0, ge=0, description="Serialization time budget in seconds."
    )
    log_level: str = Field(default="WARNING", description="Logging level.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SheetflowConfig:
        """Build a config from `SHEETFLOW_*` environment variables.

        Args:
            environ: Environment mapping; defaults to ``os.environ``.

        Returns:
            Config with unset variables left at their defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        timeout = env.get(ENV_SAVE_TIMEOUT, "").strip()
        if timeout:
            values["save_timeout"] = timeout
        log_level = env.get(ENV_LOG_LEVEL, "").strip()
        if log_level:
            values["log_level"] = log_level
        return cls.model_validate(values)


__all__ = ["ENV_LOG_LEVEL", "ENV_SAVE_TIMEOUT", "SheetflowConfig"]
