"""Formatter settings and environment loading utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .formatter import DEFAULT_ENTRY_LIMIT_BYTES, ServiceContext

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


_load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise RuntimeError(f"Invalid boolean for environment variable {name}: {value!r}")


def _env_number(name: str, default: float, kind: type = int):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return kind(value.strip())
    except ValueError as exc:
        raise RuntimeError(f"Invalid number for environment variable {name}: {value!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    check_payload_limit: bool = True
    include_message_template: bool = False
    entry_limit_bytes: int = DEFAULT_ENTRY_LIMIT_BYTES
    log_level: str = "INFO"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    traffic_target_url: str = "http://localhost:8000/weatherforecast"
    traffic_interval_seconds: float = 5.0

    @property
    def service_context(self) -> ServiceContext | None:
        if not self.service_name:
            return None
        return ServiceContext(service=self.service_name, version=self.service_version)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            check_payload_limit=_env_bool("STACKDRIVER_CHECK_PAYLOAD_LIMIT", True),
            include_message_template=_env_bool("STACKDRIVER_INCLUDE_MESSAGE_TEMPLATE", False),
            entry_limit_bytes=_env_number("STACKDRIVER_ENTRY_LIMIT_BYTES", DEFAULT_ENTRY_LIMIT_BYTES),
            log_level=os.getenv("STACKDRIVER_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            service_name=os.getenv("STACKDRIVER_SERVICE_NAME") or None,
            service_version=os.getenv("STACKDRIVER_SERVICE_VERSION") or None,
            traffic_target_url=os.getenv(
                "TRAFFIC_TARGET_URL", "http://localhost:8000/weatherforecast"
            ),
            traffic_interval_seconds=_env_number("TRAFFIC_INTERVAL_SECONDS", 5.0, float),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings."""

    return Settings.from_env()
