import logging

from homeassistant.components.sensor import SensorDeviceClass, SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import STATUS_OPTIONS, STATUS_UNKNOWN
from .coordinator import GateCoordinator
from .entity import GateEntity

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, config_entry: ConfigEntry, async_add_entities):
    """Set up sensor from a config entry."""

    coordinator: GateCoordinator = config_entry.runtime_data
    async_add_entities([GateStatusSensor(coordinator, config_entry)])


class GateStatusSensor(GateEntity, SensorEntity):
    """Sensor to display the last known status of the gate."""

    _attr_translation_key = "gate_status"
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = STATUS_OPTIONS
    _attr_icon = "mdi:gate"

    def __init__(self, coordinator: GateCoordinator, config_entry: ConfigEntry):
        super().__init__(coordinator, config_entry, "state")

    @property
    def available(self) -> bool:
        return self.coordinator.data.last_status is not None

    @property
    def native_value(self):
        status = self.coordinator.data.last_status
        if status is None:
            return None
        # statuses the controller may add later show up as unknown
        return status.status if status.status in STATUS_OPTIONS else STATUS_UNKNOWN

    @property
    def extra_state_attributes(self):
        status = self.coordinator.data.last_status
        if status is None:
            return None
        attributes = status.as_dict()
        attributes["raw_status"] = attributes.pop("status")
        return attributes
