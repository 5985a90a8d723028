"""Client for the gate controller HTTP API."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import aiohttp
from homeassistant.util.json import json_loads

from .const import (
    CONNECT_TIMEOUT,
    PATH_CLOSE,
    PATH_HEALTH,
    PATH_OPEN,
    PATH_STATUS,
    READ_TIMEOUT,
    REQUEST_TIMEOUT,
)
from .models import GateDirection, GateStatus

_LOGGER = logging.getLogger(__name__)

CLIENT_TIMEOUT = aiohttp.ClientTimeout(
    total=REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT, sock_read=READ_TIMEOUT
)


def normalize_base_url(raw: str | None) -> str:
    """Return the base URL with a scheme and without a trailing slash.

    Blank input normalizes to an empty string, which callers must treat as
    "not configured" and never request.
    """
    if raw is None:
        return ""
    url = raw.strip()
    if not url:
        return ""
    if not url.startswith(("http://", "https://")):
        url = f"http://{url}"
    return url.rstrip("/")


def _make_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class ApiResponse:
    """Outcome of a request that reached the device."""

    status: int
    body: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class GateApiClient:
    """Stateless wrapper around the four gate controller endpoints.

    No method raises on transport errors: failures are reported as ``False``
    or ``None``. Nothing is retried here.
    """

    def __init__(self, session: aiohttp.ClientSession) -> None:
        self._session = session

    async def _async_get(
        self,
        base_url: str,
        path: str,
        token: str | None = None,
        read_body: bool = False,
    ) -> ApiResponse | None:
        """GET a path; None means the device could not be reached."""
        url = _make_url(base_url, path)
        headers = {"Accept": "application/json"}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with self._session.get(
                url, headers=headers, timeout=CLIENT_TIMEOUT
            ) as resp:
                body = await resp.text() if read_body else None
                return ApiResponse(resp.status, body)
        except (aiohttp.ClientError, TimeoutError, UnicodeDecodeError) as e:
            _LOGGER.debug("Request to %s failed - %s", url, repr(e))
            return None

    async def async_check_health(self, base_url: str) -> bool:
        """Return True iff /health answers with HTTP 200."""
        if not base_url:
            return False
        resp = await self._async_get(base_url, PATH_HEALTH)
        return resp is not None and resp.status == 200

    async def async_fetch_status(self, base_url: str) -> GateStatus | None:
        """Fetch /gate/status; None when unreachable, refused or malformed."""
        if not base_url:
            return None
        resp = await self._async_get(base_url, PATH_STATUS, read_body=True)
        if resp is None:
            return None
        if not resp.ok or not resp.body:
            _LOGGER.debug("Status request answered HTTP %s", resp.status)
            return None

        try:
            return GateStatus.from_dict(json_loads(resp.body))
        except ValueError as e:
            _LOGGER.debug("Malformed status payload - %s", repr(e))
            return None

    async def async_open_gate(self, base_url: str, token: str) -> bool:
        """Send the open command; True iff the device answered 2xx."""
        return await self._async_command(base_url, PATH_OPEN, token)

    async def async_close_gate(self, base_url: str, token: str) -> bool:
        """Send the close command; True iff the device answered 2xx."""
        return await self._async_command(base_url, PATH_CLOSE, token)

    async def async_send_command(
        self, base_url: str, token: str, direction: GateDirection
    ) -> bool:
        if direction is GateDirection.OPEN:
            return await self.async_open_gate(base_url, token)
        return await self.async_close_gate(base_url, token)

    async def _async_command(self, base_url: str, path: str, token: str) -> bool:
        if not base_url:
            return False
        resp = await self._async_get(base_url, path, token=token)
        if resp is None:
            return False
        if not resp.ok:
            _LOGGER.debug("Command %s answered HTTP %s", path, resp.status)
        return resp.ok
