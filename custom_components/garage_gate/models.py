"""Data models for the Garage Gate integration."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Mapping

from homeassistant.config_entries import ConfigEntry

from .const import (
    CONF_BASE_URL,
    CONF_CLOSE_TIME,
    CONF_OPEN_TIME,
    CONF_TOKEN,
    DEFAULT_CLOSE_TIME,
    DEFAULT_OPEN_TIME,
    STATUS_UNKNOWN,
)

_LOGGER = logging.getLogger(__name__)

_OPTIONAL_SECONDS = (
    "operation_time",
    "timeout_remaining",
    "auto_close_time",
    "auto_close_remaining",
)


class GateDirection(StrEnum):
    """Direction of a gate command."""

    OPEN = "open"
    CLOSE = "close"


def _as_bool(data: Mapping[str, Any], key: str) -> bool:
    # anything that is not a recognisable boolean reads as False
    value = data.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _as_seconds(data: Mapping[str, Any], key: str) -> int | None:
    """Read an optional seconds field; unusable values count as not reported."""
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            _LOGGER.debug("Ignoring %s: %r", key, value)
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = int(value)
    if not isinstance(value, int) or value < 0:
        _LOGGER.debug("Ignoring %s: %r", key, value)
        return None
    return value


@dataclass(frozen=True)
class GateStatus:
    """Snapshot of the gate as reported by /gate/status."""

    status: str
    sensor_closed: bool = False
    sensor_open: bool = False
    alert_active: bool = False
    auto_close_enabled: bool = False
    operation_time: int | None = None
    timeout_remaining: int | None = None
    auto_close_time: int | None = None
    auto_close_remaining: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> GateStatus:
        """Decode a status payload, raising ValueError when it is malformed."""
        if not isinstance(data, Mapping):
            raise ValueError(f"Status payload is not an object: {data!r}")

        status = data.get("status")
        return cls(
            status=STATUS_UNKNOWN if status is None else str(status),
            sensor_closed=_as_bool(data, "sensor_closed"),
            sensor_open=_as_bool(data, "sensor_open"),
            alert_active=_as_bool(data, "alert_active"),
            auto_close_enabled=_as_bool(data, "auto_close_enabled"),
            **{key: _as_seconds(data, key) for key in _OPTIONAL_SECONDS},
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "sensor_closed": self.sensor_closed,
            "sensor_open": self.sensor_open,
            "alert_active": self.alert_active,
            "auto_close_enabled": self.auto_close_enabled,
            "operation_time": self.operation_time,
            "timeout_remaining": self.timeout_remaining,
            "auto_close_time": self.auto_close_time,
            "auto_close_remaining": self.auto_close_remaining,
        }


@dataclass(frozen=True)
class GateSettings:
    """Settings of one gate, as stored in its config entry."""

    base_url: str = ""
    token: str = ""
    open_time: int = DEFAULT_OPEN_TIME
    close_time: int = DEFAULT_CLOSE_TIME

    @classmethod
    def from_entry(cls, entry: ConfigEntry) -> GateSettings:
        """Build settings from entry data, overridden by entry options."""
        merged = {**entry.data, **entry.options}
        return cls(
            base_url=merged.get(CONF_BASE_URL) or "",
            token=merged.get(CONF_TOKEN) or "",
            open_time=max(0, int(merged.get(CONF_OPEN_TIME, DEFAULT_OPEN_TIME))),
            close_time=max(0, int(merged.get(CONF_CLOSE_TIME, DEFAULT_CLOSE_TIME))),
        )

    def duration_for(self, direction: GateDirection) -> int:
        if direction is GateDirection.OPEN:
            return self.open_time
        return self.close_time


@dataclass(frozen=True)
class GateViewState:
    """What the entities render: connectivity, last status and the running command."""

    connected: bool = False
    last_status: GateStatus | None = None
    operating: bool = False
    operation_message: str | None = None
