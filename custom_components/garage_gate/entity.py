"""Base entity for Garage Gate."""

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import callback
from homeassistant.helpers.entity import Entity

from .coordinator import GateCoordinator


class GateEntity(Entity):
    """Entity that renders the gate's shared view state."""

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(self, coordinator: GateCoordinator, config_entry: ConfigEntry, key: str):
        self.coordinator = coordinator
        self._attr_unique_id = f"{config_entry.entry_id}_{key}"
        self._attr_device_info = coordinator.get_device_info()

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        self.async_on_remove(
            self.coordinator.store.async_add_listener(self._handle_state_update)
        )

    @callback
    def _handle_state_update(self) -> None:
        self.async_write_ha_state()
