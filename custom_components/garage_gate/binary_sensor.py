"""Binary sensors for Garage Gate connectivity, alerts and running commands."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .coordinator import GateCoordinator
from .entity import GateEntity
from .models import GateViewState


@dataclass(frozen=True, kw_only=True)
class GateBinarySensorDescription(BinarySensorEntityDescription):
    """Describes a binary sensor derived from the view state."""

    is_on_fn: Callable[[GateViewState], bool | None]
    attributes_fn: Callable[[GateViewState], dict[str, Any] | None] = lambda _: None
    needs_status: bool = False


BINARY_SENSORS: tuple[GateBinarySensorDescription, ...] = (
    GateBinarySensorDescription(
        key="connected",
        translation_key="connected",
        device_class=BinarySensorDeviceClass.CONNECTIVITY,
        entity_category=EntityCategory.DIAGNOSTIC,
        is_on_fn=lambda state: state.connected,
    ),
    GateBinarySensorDescription(
        key="alert",
        translation_key="alert",
        device_class=BinarySensorDeviceClass.PROBLEM,
        is_on_fn=lambda state: state.last_status.alert_active,
        needs_status=True,
    ),
    GateBinarySensorDescription(
        key="operating",
        translation_key="operating",
        device_class=BinarySensorDeviceClass.RUNNING,
        is_on_fn=lambda state: state.operating,
        attributes_fn=lambda state: {"message": state.operation_message},
    ),
)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
):
    coordinator: GateCoordinator = config_entry.runtime_data
    async_add_entities(
        GateBinarySensor(coordinator, config_entry, description)
        for description in BINARY_SENSORS
    )


class GateBinarySensor(GateEntity, BinarySensorEntity):
    entity_description: GateBinarySensorDescription

    def __init__(
        self,
        coordinator: GateCoordinator,
        config_entry: ConfigEntry,
        description: GateBinarySensorDescription,
    ):
        super().__init__(coordinator, config_entry, description.key)
        self.entity_description = description

    @property
    def available(self) -> bool:
        if self.entity_description.needs_status:
            return self.coordinator.data.last_status is not None
        return True

    @property
    def is_on(self) -> bool | None:
        return self.entity_description.is_on_fn(self.coordinator.data)

    @property
    def extra_state_attributes(self):
        return self.entity_description.attributes_fn(self.coordinator.data)
