# rigcurve/config.py
import logging
import os

from pydantic import BaseModel, field_validator


class AppSettings(BaseModel):
    log_level: str = "INFO"
    log_file: str | None = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v!r}")
        return v

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, env=None) -> "AppSettings":
        env = os.environ if env is None else env
        return cls(
            log_level=env.get("RIGCURVE_LOG_LEVEL", "INFO"),
            log_file=env.get("RIGCURVE_LOG_FILE") or None,
        )
