"""Esindex exporter configuration.

Every field can be set via an environment variable with the same
(upper-case) name, e.g. ES_URI, ES_INDEX_PREFIX, QUERY_INTERVAL.
Command-line flags parsed in main.py take precedence over the environment.
"""

from __future__ import annotations

import math
import re
from datetime import time
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator

from shared.config import Settings as BaseSettings
from shared.es_client import parse_es_uri


class ConfigurationError(Exception):
    """Missing or malformed configuration; fatal at startup."""


_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = r"(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"^(?:{_DURATION_PART})+$")
_DURATION_TOKEN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` time of day."""
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError(f"invalid time format: {value!r} (expected HH:MM)")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"invalid time of day: {value!r}")
    return time(hour, minute)


def parse_duration(value: str | int | float) -> float:
    """Parse ``5s``, ``500ms``, ``1m30s`` or a bare number of seconds."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        text = str(value).strip()
        try:
            seconds = float(text)
        except ValueError:
            if not _DURATION_RE.match(text):
                raise ValueError(f"invalid duration: {value!r}") from None
            seconds = sum(
                float(number) * _DURATION_UNITS[unit]
                for number, unit in _DURATION_TOKEN.findall(text)
            )
    if not math.isfinite(seconds):
        raise ValueError(f"duration must be finite: {value!r}")
    if seconds <= 0:
        raise ValueError(f"duration must be positive: {value!r}")
    return seconds


class ExporterSettings(BaseSettings):
    """All configuration for the esindex exporter."""

    # --- Elasticsearch ---
    # http(s)://username:password@host:9200
    es_uri: str
    # Today's index is es_index_prefix + YYYY.MM.DD
    es_index_prefix: str
    # Per-request bound for every call to the cluster
    timeout: float = 5.0
    # Extra ping attempts before giving up at startup
    startup_retries: int = Field(default=0, ge=0)

    # --- Schedule ---
    query_interval: int = Field(gt=0)  # seconds between checks
    # Monitored window [start_time, end_time), same-day, local to `timezone`
    start_time: time = time(9, 0)
    end_time: time = time(18, 0)

    # --- Metrics endpoint ---
    listen_host: str = "0.0.0.0"
    listen_port: int = Field(default=9184, gt=0, lt=65536)

    # --- Behaviour ---
    # False drops gauge labels for previous days' indices on every write
    keep_stale_indices: bool = True
    # Log every index name once after connecting
    log_index_inventory: bool = True

    @field_validator("es_uri")
    @classmethod
    def _check_uri(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        parse_es_uri(value)
        return value

    @field_validator("es_index_prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {value!r}") from e
        return value

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _parse_clock(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_clock(value)
        return value

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: Any) -> float:
        return parse_duration(value)

    @property
    def window_is_empty(self) -> bool:
        """Same-day comparison makes an end at or before the start match nothing."""
        return self.end_time <= self.start_time

    @property
    def window_label(self) -> str:
        return f"{self.start_time:%H:%M} - {self.end_time:%H:%M}"


def load_settings(**overrides: Any) -> ExporterSettings:
    """Build settings from env/.env plus explicit overrides.

    ``None`` overrides are ignored so unset CLI flags fall through to the
    environment. Raises ConfigurationError with one line per problem.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return ExporterSettings(**values)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "settings"
            message = err["msg"].removeprefix("Value error, ")
            problems.append(f"{field.upper()}: {message}")
        raise ConfigurationError("; ".join(problems)) from e
