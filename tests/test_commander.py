"""Tests for the command coordinator."""

import asyncio
from unittest.mock import patch

import pytest

from custom_components.garage_gate.commander import GateCommander
from custom_components.garage_gate.exceptions import (
    GateBusyError,
    GateCommandFailedError,
    GateNotConfiguredError,
)
from custom_components.garage_gate.models import GateDirection, GateSettings, GateStatus
from custom_components.garage_gate.state import GateStateStore

from .conftest import BASE_URL, TOKEN, FakeGateApi, wait_until


def _commander(fake_api: FakeGateApi, settings: GateSettings) -> GateCommander:
    holder = {"settings": settings}
    commander = GateCommander(fake_api, GateStateStore(), lambda: holder["settings"])
    commander.settings_holder = holder
    return commander


def _settings(**kwargs) -> GateSettings:
    return GateSettings(**{"base_url": "gate.test", "token": TOKEN, **kwargs})


@pytest.mark.parametrize(
    ("base_url", "token"),
    [("", TOKEN), ("  ", TOKEN), ("gate.test", ""), ("gate.test", "  ")],
)
async def test_missing_configuration_makes_no_request(
    fake_api: FakeGateApi, base_url: str, token: str
) -> None:
    commander = _commander(fake_api, GateSettings(base_url=base_url, token=token))
    notices = []
    commander.async_add_notice_listener(notices.append)

    with pytest.raises(GateNotConfiguredError):
        await commander.async_issue_command(GateDirection.OPEN)

    assert fake_api.calls == []
    assert notices == ["Base URL or token is missing"]
    assert commander.store.state.operating is False


async def test_rejected_command_leaves_state_untouched(fake_api: FakeGateApi) -> None:
    fake_api.accept_commands = False
    commander = _commander(fake_api, _settings())
    commander.store.async_set(last_status=GateStatus(status="closed"))
    before = commander.store.state
    notices = []
    commander.async_add_notice_listener(notices.append)

    with (
        patch.object(GateCommander, "_async_settle") as mock_settle,
        pytest.raises(GateCommandFailedError),
    ):
        await commander.async_issue_command(GateDirection.OPEN)

    assert commander.store.state == before
    assert notices == ["Opening failed"]
    mock_settle.assert_not_called()
    assert fake_api.count("status") == 0


async def test_accepted_command_operates_for_settle_duration(
    fake_api: FakeGateApi,
) -> None:
    commander = _commander(fake_api, _settings(open_time=5))
    notices = []
    commander.async_add_notice_listener(notices.append)
    seen_during_settle = []

    async def settle(seconds):
        seen_during_settle.append((seconds, commander.store.state))

    fake_api.status = GateStatus(status="open", sensor_open=True)
    with patch.object(commander, "_async_settle", side_effect=settle):
        await commander.async_issue_command(GateDirection.OPEN)

    seconds, state = seen_during_settle[0]
    assert seconds == 5
    assert state.operating is True
    assert state.operation_message == "Opening in progress…"
    assert notices == ["Opening in progress…"]
    assert fake_api.calls == [
        ("open", BASE_URL, TOKEN),
        ("status", BASE_URL),
    ]
    assert commander.store.state.operating is False
    assert commander.store.state.operation_message is None
    assert commander.store.state.last_status == fake_api.status


async def test_close_uses_close_duration(fake_api: FakeGateApi) -> None:
    commander = _commander(fake_api, _settings(open_time=5, close_time=9))

    with patch.object(commander, "_async_settle") as mock_settle:
        await commander.async_issue_command(GateDirection.CLOSE)

    mock_settle.assert_awaited_once_with(9)
    assert fake_api.calls[0] == ("close", BASE_URL, TOKEN)


async def test_duration_is_read_when_command_is_accepted(
    fake_api: FakeGateApi,
) -> None:
    commander = _commander(fake_api, _settings(open_time=3))
    settled = []

    async def settle(seconds):
        commander.settings_holder["settings"] = _settings(
            base_url="other.test", open_time=30
        )
        settled.append(seconds)

    with patch.object(commander, "_async_settle", side_effect=settle):
        await commander.async_issue_command(GateDirection.OPEN)

    assert settled == [3]
    assert fake_api.calls[-1] == ("status", BASE_URL)


async def test_absent_refresh_keeps_status(fake_api: FakeGateApi) -> None:
    commander = _commander(fake_api, _settings())
    known = GateStatus(status="closed")
    commander.store.async_set(last_status=known)
    fake_api.status = None

    with patch.object(commander, "_async_settle"):
        await commander.async_issue_command(GateDirection.OPEN)

    assert commander.store.state.last_status is known


async def test_cleanup_runs_when_refresh_fails(fake_api: FakeGateApi) -> None:
    commander = _commander(fake_api, _settings())

    async def broken(base_url):
        raise RuntimeError("boom")

    fake_api.async_fetch_status = broken
    with (
        patch.object(commander, "_async_settle"),
        pytest.raises(RuntimeError),
    ):
        await commander.async_issue_command(GateDirection.OPEN)

    assert commander.store.state.operating is False
    assert commander.store.state.operation_message is None


async def test_second_command_while_operating_is_rejected(
    fake_api: FakeGateApi,
) -> None:
    commander = _commander(fake_api, _settings())
    errors = []

    async def settle(seconds):
        assert commander.busy
        with pytest.raises(GateBusyError):
            await commander.async_issue_command(GateDirection.CLOSE)
        errors.append("rejected")

    with patch.object(commander, "_async_settle", side_effect=settle):
        await commander.async_issue_command(GateDirection.OPEN)

    assert errors == ["rejected"]
    assert fake_api.count("close") == 0
    assert not commander.busy


async def test_notice_listener_can_unsubscribe(fake_api: FakeGateApi) -> None:
    commander = _commander(fake_api, _settings())
    notices = []
    unsub = commander.async_add_notice_listener(notices.append)
    unsub()

    with patch.object(commander, "_async_settle"):
        await commander.async_issue_command(GateDirection.CLOSE)

    assert notices == []


async def test_operating_lasts_for_the_settle_duration(fake_api: FakeGateApi) -> None:
    commander = _commander(fake_api, _settings(open_time=1))
    loop = asyncio.get_running_loop()
    started = loop.time()

    task = asyncio.create_task(commander.async_issue_command(GateDirection.OPEN))
    await wait_until(lambda: commander.store.state.operating)

    await asyncio.sleep(0.5)
    assert commander.store.state.operating is True
    assert commander.store.state.operation_message == "Opening in progress…"
    assert fake_api.count("status") == 0

    await task

    assert loop.time() - started >= 0.9
    assert commander.store.state.operating is False
    assert commander.store.state.operation_message is None
    assert fake_api.count("status") == 1


async def test_busy_rejection_is_announced(fake_api: FakeGateApi) -> None:
    commander = _commander(fake_api, _settings())
    notices = []
    commander.async_add_notice_listener(notices.append)

    async def settle(seconds):
        with pytest.raises(GateBusyError):
            await commander.async_issue_command(GateDirection.CLOSE)

    with patch.object(commander, "_async_settle", side_effect=settle):
        await commander.async_issue_command(GateDirection.OPEN)

    assert notices == ["Opening in progress…", "A command is already in progress"]
