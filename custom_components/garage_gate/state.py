"""Shared view state of a gate."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

from homeassistant.core import CALLBACK_TYPE, callback

from .models import GateViewState


class GateStateStore:
    """Holds the current GateViewState and notifies listeners on change.

    The poller owns ``connected``, the commander owns ``operating`` and
    ``operation_message``; both may replace ``last_status``. Updates run
    synchronously on the event loop so writes never interleave.
    """

    def __init__(self) -> None:
        self._state = GateViewState()
        self._listeners: list[Callable[[], None]] = []

    @property
    def state(self) -> GateViewState:
        return self._state

    @callback
    def async_set(self, **changes: Any) -> GateViewState:
        """Replace the snapshot with the given fields changed."""
        new_state = replace(self._state, **changes)
        if new_state.operating != (new_state.operation_message is not None):
            raise ValueError(
                "operating and operation_message must be set together"
            )
        if new_state == self._state:
            return new_state

        self._state = new_state
        for update_callback in list(self._listeners):
            update_callback()
        return new_state

    @callback
    def async_add_listener(self, update_callback: Callable[[], None]) -> CALLBACK_TYPE:
        """Listen for state changes; returns a callable that unsubscribes."""
        self._listeners.append(update_callback)

        @callback
        def remove_listener() -> None:
            if update_callback in self._listeners:
                self._listeners.remove(update_callback)

        return remove_listener
