"""Support for Garage Gate button entities."""

import logging

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, STATUS_CLOSED, STATUS_OPEN
from .coordinator import GateCoordinator
from .entity import GateEntity
from .exceptions import GateError
from .models import GateDirection

_LOGGER = logging.getLogger(__name__)

# a button is hidden while the gate already reports this status
_SETTLED_STATUS = {
    GateDirection.OPEN: STATUS_OPEN,
    GateDirection.CLOSE: STATUS_CLOSED,
}


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
):
    """Set up buttons from a config entry."""

    coordinator: GateCoordinator = config_entry.runtime_data
    async_add_entities(
        GateControlButton(coordinator, config_entry, direction)
        for direction in GateDirection
    )


class GateControlButton(GateEntity, ButtonEntity):
    """Button entity that opens or closes the gate."""

    def __init__(
        self,
        coordinator: GateCoordinator,
        config_entry: ConfigEntry,
        direction: GateDirection,
    ):
        """Initialize control button."""
        super().__init__(coordinator, config_entry, f"ctl_{direction}")
        self.direction = direction
        self._attr_translation_key = f"control_{direction}"

    @property
    def available(self) -> bool:
        """Unavailable while a command runs or the gate is already there."""
        state = self.coordinator.data
        if state.operating:
            return False
        status = state.last_status
        return status is None or status.status != _SETTLED_STATUS[self.direction]

    async def async_press(self):
        """Send command when button is pressed."""
        try:
            await self.coordinator.send_command(self.direction)
        except GateError as e:
            _LOGGER.error("Failed to send command '%s': %s", self.direction, e)
            raise HomeAssistantError(
                translation_domain=DOMAIN, translation_key=e.translation_key
            ) from e

    @property
    def icon(self):
        """Return icon."""
        return {
            GateDirection.OPEN: "mdi:gate-open",
            GateDirection.CLOSE: "mdi:gate",
        }.get(self.direction)
