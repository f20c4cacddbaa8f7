# clipboard_store/config.py
"""Process settings (env-driven)."""
from __future__ import annotations
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    pass


def _number(env: Mapping[str, str], name: str, default: float, cast=float):
    raw = env.get(name, "").strip()
    if not raw:
        return cast(default)
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def _flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "0").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    ttl_seconds: float = 24 * 60 * 60  # 24 h
    sweep_interval_seconds: float = 60 * 60  # 1 h
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self):
        if not 0 < self.port < 65536:
            raise ConfigError(f"port must be in 1..65535, got {self.port}")
        if not (math.isfinite(self.ttl_seconds) and self.ttl_seconds > 0):
            raise ConfigError(f"ttl_seconds must be a positive finite number, got {self.ttl_seconds}")
        if not (math.isfinite(self.sweep_interval_seconds) and self.sweep_interval_seconds > 0):
            raise ConfigError(f"sweep_interval_seconds must be a positive finite number, got {self.sweep_interval_seconds}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("CLIPBOARD_HOST", "").strip() or cls.host,
            port=_number(env, "CLIPBOARD_PORT", cls.port, int),
            ttl_seconds=_number(env, "CLIPBOARD_TTL_SECONDS", cls.ttl_seconds),
            sweep_interval_seconds=_number(env, "CLIPBOARD_SWEEP_INTERVAL_SECONDS", cls.sweep_interval_seconds),
            log_level=(env.get("LOG_LEVEL", "").strip() or cls.log_level).upper(),
            log_json=_flag(env, "LOG_JSON"),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
