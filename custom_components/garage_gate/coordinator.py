"""Runtime wiring of one Garage Gate config entry."""

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers import device_registry as dr
from homeassistant.helpers.device_registry import DeviceInfo

from .api import GateApiClient, normalize_base_url
from .commander import GateCommander
from .const import DOMAIN, NAME, POLL_INTERVAL
from .models import GateDirection, GateSettings
from .poller import GateStatusPoller
from .state import GateStateStore

EVENT_NOTICE = f"{DOMAIN}_notice"


class GateCoordinator:
    """Owns the API client, the state store, the poller and the commander of a gate."""

    def __init__(
        self,
        hass: HomeAssistant,
        entry: ConfigEntry,
        api: GateApiClient | None = None,
        poll_interval: float = POLL_INTERVAL,
    ):
        self.hass = hass
        self.entry = entry
        self.logger = logging.getLogger(__name__)
        self.settings = GateSettings.from_entry(entry)
        self.api = api or GateApiClient(async_get_clientsession(hass))
        self.store = GateStateStore()
        self.poller = GateStatusPoller(hass, self.api, self.store, poll_interval)
        self.commander = GateCommander(self.api, self.store, lambda: self.settings)
        self._unsub_notices = self.commander.async_add_notice_listener(self._on_notice)

    @property
    def data(self):
        return self.store.state

    def async_start(self) -> None:
        self.poller.start(self.settings.base_url)

    async def async_shutdown(self) -> None:
        self._unsub_notices()
        await self.poller.async_stop()

    async def async_apply_settings(self, settings: GateSettings) -> None:
        """Take new settings into use; the poller restarts only on a URL change."""
        previous, self.settings = self.settings, settings
        if normalize_base_url(previous.base_url) != normalize_base_url(settings.base_url):
            self.logger.info(
                "Base URL changed from '%s' to '%s'",
                normalize_base_url(previous.base_url),
                normalize_base_url(settings.base_url),
            )
            await self.poller.async_restart(settings.base_url)
            self._async_update_device()

    async def send_command(self, direction: GateDirection) -> None:
        """Send a command to the controller."""
        await self.commander.async_issue_command(direction)

    @callback
    def _async_update_device(self) -> None:
        device_registry = dr.async_get(self.hass)
        device = device_registry.async_get_device(
            identifiers={(DOMAIN, self.entry.entry_id)}
        )
        if device is not None:
            device_registry.async_update_device(
                device.id,
                configuration_url=normalize_base_url(self.settings.base_url) or None,
            )

    @callback
    def _on_notice(self, message: str) -> None:
        self.logger.info("%s", message)
        self.hass.bus.async_fire(
            EVENT_NOTICE, {"entry_id": self.entry.entry_id, "message": message}
        )

    def get_device_info(self):
        return DeviceInfo(
            identifiers={(DOMAIN, self.entry.entry_id)},
            name=self.entry.title,
            manufacturer=NAME,
            configuration_url=normalize_base_url(self.settings.base_url) or None,
        )
