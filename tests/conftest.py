"""Fixtures for Garage Gate tests."""

from __future__ import annotations

import asyncio

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.garage_gate.const import (
    CONF_BASE_URL,
    CONF_CLOSE_TIME,
    CONF_OPEN_TIME,
    CONF_TOKEN,
    DOMAIN,
    NAME,
)
from custom_components.garage_gate.models import GateStatus

BASE_URL = "http://gate.test"
TOKEN = "secret"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations):
    yield


@pytest.fixture
def config_entry() -> MockConfigEntry:
    return MockConfigEntry(
        domain=DOMAIN,
        title=NAME,
        data={
            CONF_BASE_URL: BASE_URL,
            CONF_TOKEN: TOKEN,
            CONF_OPEN_TIME: 0,
            CONF_CLOSE_TIME: 0,
        },
    )


class FakeGateApi:
    """In-memory stand-in for GateApiClient that records every call."""

    def __init__(self) -> None:
        self.healthy = True
        self.status: GateStatus | None = GateStatus(status="closed", sensor_closed=True)
        self.accept_commands = True
        self.calls: list[tuple] = []
        # when set, health checks wait on this event before answering
        self.health_gate: asyncio.Event | None = None
        self.health_called = asyncio.Event()

    async def async_check_health(self, base_url: str) -> bool:
        self.calls.append(("health", base_url))
        self.health_called.set()
        if self.health_gate is not None:
            await self.health_gate.wait()
        return self.healthy

    async def async_fetch_status(self, base_url: str) -> GateStatus | None:
        self.calls.append(("status", base_url))
        return self.status

    async def async_send_command(self, base_url: str, token: str, direction) -> bool:
        self.calls.append((str(direction), base_url, token))
        return self.accept_commands

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def fake_api() -> FakeGateApi:
    return FakeGateApi()


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Yield to the loop until predicate() holds."""
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.01)
