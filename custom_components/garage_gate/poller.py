"""Periodic reachability and status polling of a gate controller."""

from __future__ import annotations

import asyncio
import logging

from homeassistant.core import HomeAssistant

from .api import GateApiClient, normalize_base_url
from .const import DOMAIN, POLL_INTERVAL
from .state import GateStateStore

_LOGGER = logging.getLogger(__name__)


class GateStatusPoller:
    """Polls one base URL on a fixed period and writes into the state store.

    Only one loop runs at a time. Restarting with a new URL cancels the
    running loop before the new one starts, and results of a superseded
    cycle are dropped.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        api: GateApiClient,
        store: GateStateStore,
        interval: float = POLL_INTERVAL,
    ) -> None:
        self.hass = hass
        self.api = api
        self.store = store
        self.interval = interval
        self._base_url = ""
        self._task: asyncio.Task | None = None
        self._generation = 0
        self._lock = asyncio.Lock()

    @property
    def base_url(self) -> str:
        """Normalized URL the current loop polls."""
        return self._base_url

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, base_url: str | None) -> None:
        """Start polling; a loop must not already be running."""
        if self.running:
            raise RuntimeError("Poller is already running")

        self._generation += 1
        self._base_url = normalize_base_url(base_url)
        self._task = self.hass.async_create_background_task(
            self._async_run(self._base_url, self._generation),
            name=f"{DOMAIN} poller {self._base_url or '<unset>'}",
        )

    async def async_restart(self, base_url: str | None) -> None:
        """Stop the current loop and start a new one on base_url."""
        _LOGGER.debug(
            "Restarting poller: %s -> %s",
            self._base_url,
            normalize_base_url(base_url),
        )
        async with self._lock:
            await self._async_cancel()
            self.start(base_url)

    async def async_stop(self) -> None:
        """Cancel the running loop and wait until it has finished."""
        async with self._lock:
            await self._async_cancel()

    async def _async_cancel(self) -> None:
        # bumping the generation discards a cycle that is past its last await
        self._generation += 1
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            if asyncio.current_task().cancelling():
                raise

    async def _async_run(self, base_url: str, generation: int) -> None:
        while True:
            await self.async_poll_once(base_url, generation)
            await asyncio.sleep(self.interval)

    async def async_poll_once(self, base_url: str, generation: int | None = None) -> None:
        """Run one poll cycle against an already normalized base URL."""
        if not base_url:
            self._write(generation, connected=False)
            return

        try:
            connected = await self.api.async_check_health(base_url)
            self._write(generation, connected=connected)

            status = await self.api.async_fetch_status(base_url)
            if status is not None:
                self._write(generation, last_status=status)
        except Exception as e:
            _LOGGER.warning("Unable to poll %s - %s", base_url, repr(e))
            self._write(generation, connected=False)

    def _write(self, generation: int | None, **changes) -> None:
        if generation is not None and generation != self._generation:
            _LOGGER.debug("Dropping result of a superseded poll cycle")
            return
        self.store.async_set(**changes)
