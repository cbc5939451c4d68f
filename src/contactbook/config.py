"""Settings read from the environment. Entry points load .env before calling load_settings."""

import logging
import math
import os
from collections.abc import Callable
from dataclasses import dataclass

from contactbook.infrastructure.osascript import OSASCRIPT, OsascriptRunner
from contactbook.service import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_LOOKUP_TIMEOUT,
    DEFAULT_TIMEOUT,
    DirectoryService,
)

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    osascript: str = OSASCRIPT
    script_timeout: float = DEFAULT_TIMEOUT
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    list_limit: int = DEFAULT_LIST_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL


def _positive(name: str, default: float, cast: Callable[[str], float]) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        return default
    return value if value > 0 and math.isfinite(value) else default


def _log_level(name: str) -> str:
    level = os.environ.get(name, "").strip().upper()
    # getLevelName maps a registered name to its number, anything else to a string.
    if level and isinstance(logging.getLevelName(level), int):
        return level
    return DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    return Settings(
        osascript=os.environ.get("CONTACTBOOK_OSASCRIPT", "").strip() or OSASCRIPT,
        script_timeout=_positive("CONTACTBOOK_SCRIPT_TIMEOUT", DEFAULT_TIMEOUT, float),
        lookup_timeout=_positive("CONTACTBOOK_LOOKUP_TIMEOUT", DEFAULT_LOOKUP_TIMEOUT, float),
        list_limit=_positive("CONTACTBOOK_LIST_LIMIT", DEFAULT_LIST_LIMIT, int),
        log_level=_log_level("CONTACTBOOK_LOG_LEVEL"),
    )


def build_service(settings: Settings | None = None) -> DirectoryService:
    """DirectoryService wired to osascript with the given (or environment) settings."""
    settings = settings or load_settings()
    return DirectoryService(
        OsascriptRunner(settings.osascript),
        timeout=settings.script_timeout,
        lookup_timeout=settings.lookup_timeout,
        list_limit=settings.list_limit,
    )
