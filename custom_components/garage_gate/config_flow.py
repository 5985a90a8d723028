"""Garage Gate config flow."""

import logging
from typing import Any, Mapping

from homeassistant import config_entries
from homeassistant.config_entries import (
    SOURCE_RECONFIGURE,
    ConfigEntry,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
import voluptuous as vol

from .api import GateApiClient, normalize_base_url
from .const import (
    CONF_BASE_URL,
    CONF_CLOSE_TIME,
    CONF_OPEN_TIME,
    CONF_TOKEN,
    DEFAULT_CLOSE_TIME,
    DEFAULT_OPEN_TIME,
    DOMAIN,
    NAME,
)
from .models import GateSettings

_LOGGER = logging.getLogger(__name__)

SECONDS = vol.All(vol.Coerce(int), vol.Range(min=0))


class GateConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Garage Gate config flow."""

    VERSION = 1

    def __init__(self) -> None:
        """Initialize the config flow."""
        self.gate_config: dict[str, Any] = {}

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Return the options flow."""
        return GateOptionsFlow()

    async def async_step_user(self, user_input=None) -> ConfigFlowResult:
        """Handle configuration flow initiated by the user."""
        errors: dict[str, str] = {}
        gate_config = self.gate_config
        if user_input:
            gate_config.update(user_input)
            base_url = normalize_base_url(user_input.get(CONF_BASE_URL))
            gate_config[CONF_BASE_URL] = base_url

            reconfiguring = self.source == SOURCE_RECONFIGURE
            exclude = self._get_reconfigure_entry().entry_id if reconfiguring else None
            errors = _validate_settings(self.hass, gate_config, exclude)
            if errors.get("base") == "already_configured" and not reconfiguring:
                return self.async_abort(reason="already_configured")
            if not errors and not await self._test_connection(base_url):
                errors["base"] = "cannot_connect"

        if user_input and not errors:
            if reconfiguring:
                # the form holds every setting, so stale options must not shadow it
                return self.async_update_reload_and_abort(
                    self._get_reconfigure_entry(), data=gate_config, options={}
                )
            return self.async_create_entry(title=NAME, data=gate_config)

        return self.async_show_form(
            step_id="user",
            data_schema=self._create_schema(gate_config),
            errors=errors,
        )

    async def async_step_reconfigure(self, user_input: dict[str, Any] | None = None):
        """Handle reconfiguration flow initiated by the user."""
        entry = self._get_reconfigure_entry()
        self.gate_config.update({**entry.data, **entry.options})
        return await self.async_step_user()

    async def _test_connection(self, base_url: str) -> bool:
        api = GateApiClient(async_get_clientsession(self.hass))
        healthy = await api.async_check_health(base_url)
        if not healthy:
            _LOGGER.error("Connection test against %s failed", base_url)
        return healthy

    @staticmethod
    def _create_schema(user_input: Mapping[str, Any]) -> vol.Schema:
        """Generate base schema."""
        return vol.Schema(
            {
                vol.Required(
                    CONF_BASE_URL, default=user_input.get(CONF_BASE_URL, "")
                ): str,
                vol.Required(CONF_TOKEN, default=user_input.get(CONF_TOKEN, "")): str,
                vol.Optional(
                    CONF_OPEN_TIME,
                    default=user_input.get(CONF_OPEN_TIME, DEFAULT_OPEN_TIME),
                ): SECONDS,
                vol.Optional(
                    CONF_CLOSE_TIME,
                    default=user_input.get(CONF_CLOSE_TIME, DEFAULT_CLOSE_TIME),
                ): SECONDS,
            }
        )


class GateOptionsFlow(OptionsFlow):
    """Edit the settings of a gate; they apply without a reload."""

    async def async_step_init(self, user_input=None) -> ConfigFlowResult:
        errors: dict[str, str] = {}
        current = {**self.config_entry.data, **self.config_entry.options}
        if user_input is not None:
            current.update(user_input)
            current[CONF_BASE_URL] = normalize_base_url(user_input.get(CONF_BASE_URL))
            errors = _validate_settings(self.hass, current, self.config_entry.entry_id)
            if not errors:
                return self.async_create_entry(data=current)

        return self.async_show_form(
            step_id="init",
            data_schema=GateConfigFlow._create_schema(current),
            errors=errors,
        )


def _validate_settings(
    hass: HomeAssistant, settings: Mapping[str, Any], exclude_entry_id: str | None
) -> dict[str, str]:
    """Check URL and token; the URL must not belong to another entry."""
    base_url = normalize_base_url(settings.get(CONF_BASE_URL))
    if not base_url:
        return {CONF_BASE_URL: "invalid_url"}
    if not (settings.get(CONF_TOKEN) or "").strip():
        return {CONF_TOKEN: "missing_token"}
    for entry in hass.config_entries.async_entries(DOMAIN):
        if entry.entry_id == exclude_entry_id:
            continue
        if normalize_base_url(GateSettings.from_entry(entry).base_url) == base_url:
            return {"base": "already_configured"}
    return {}
