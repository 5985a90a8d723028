"""Execution of open/close commands against the gate."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from homeassistant.core import CALLBACK_TYPE, callback

from .api import GateApiClient, normalize_base_url
from .const import (
    FAILURE_MESSAGES,
    NOTICE_BUSY,
    NOTICE_MISSING_CONFIG,
    OPERATION_MESSAGES,
)
from .exceptions import GateBusyError, GateCommandFailedError, GateNotConfiguredError
from .models import GateDirection, GateSettings
from .state import GateStateStore

_LOGGER = logging.getLogger(__name__)


class GateCommander:
    """Runs one command at a time and keeps ``operating`` in the store.

    A command accepted by the device marks the gate as operating, waits the
    configured settle duration, refreshes the status once and clears the
    operating flag again, whatever happens in between.
    """

    def __init__(
        self,
        api: GateApiClient,
        store: GateStateStore,
        settings_provider: Callable[[], GateSettings],
    ) -> None:
        self.api = api
        self.store = store
        self._settings_provider = settings_provider
        self._lock = asyncio.Lock()
        self._notice_listeners: list[Callable[[str], None]] = []

    @property
    def busy(self) -> bool:
        return self._lock.locked() or self.store.state.operating

    @callback
    def async_add_notice_listener(
        self, notice_callback: Callable[[str], None]
    ) -> CALLBACK_TYPE:
        """Receive user-facing notices; returns a callable that unsubscribes."""
        self._notice_listeners.append(notice_callback)

        @callback
        def remove_listener() -> None:
            if notice_callback in self._notice_listeners:
                self._notice_listeners.remove(notice_callback)

        return remove_listener

    def _notify(self, message: str) -> None:
        for notice_callback in list(self._notice_listeners):
            notice_callback(message)

    async def async_issue_command(self, direction: GateDirection) -> None:
        """Send a command and track it until the settle duration has passed.

        Raises GateNotConfiguredError, GateBusyError or GateCommandFailedError
        without touching the operating state; each is announced as a notice
        first.
        """
        direction = GateDirection(direction)
        # settings are fixed for the whole command once it is accepted
        settings = self._settings_provider()
        base_url = normalize_base_url(settings.base_url)
        if not base_url or not settings.token.strip():
            self._notify(NOTICE_MISSING_CONFIG)
            raise GateNotConfiguredError(NOTICE_MISSING_CONFIG)
        if self.busy:
            self._notify(NOTICE_BUSY)
            raise GateBusyError(NOTICE_BUSY)

        async with self._lock:
            if not await self.api.async_send_command(
                base_url, settings.token, direction
            ):
                _LOGGER.error("Command '%s' was not accepted by %s", direction, base_url)
                self._notify(FAILURE_MESSAGES[direction])
                raise GateCommandFailedError(direction)

            message = OPERATION_MESSAGES[direction]
            try:
                self.store.async_set(operating=True, operation_message=message)
                self._notify(message)

                await self._async_settle(settings.duration_for(direction))

                status = await self.api.async_fetch_status(base_url)
                if status is not None:
                    self.store.async_set(last_status=status)
            except Exception as e:
                _LOGGER.error("Command '%s' failed: %s", direction, repr(e))
                raise
            finally:
                self.store.async_set(operating=False, operation_message=None)

    async def _async_settle(self, seconds: int) -> None:
        """Wait for the gate to travel."""
        await asyncio.sleep(seconds)
