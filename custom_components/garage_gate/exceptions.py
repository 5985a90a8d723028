"""Errors raised by the Garage Gate command path."""


class GateError(Exception):
    """Base class for Garage Gate errors."""

    translation_key = "unknown"


class GateNotConfiguredError(GateError):
    """Base URL or bearer token is missing."""

    translation_key = "missing_config"


class GateBusyError(GateError):
    """Another command is still in flight."""

    translation_key = "busy"


class GateCommandFailedError(GateError):
    """The device did not accept the command."""

    translation_key = "command_failed"

    def __init__(self, direction: str) -> None:
        super().__init__(f"Device did not accept '{direction}' command")
        self.direction = direction
