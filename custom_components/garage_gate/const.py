"""Constants for the Garage Gate integration."""

DOMAIN = "garage_gate"
NAME = "Garage Gate"

# Configuration keys
CONF_BASE_URL = "base_url"
CONF_TOKEN = "token"
CONF_OPEN_TIME = "open_time"
CONF_CLOSE_TIME = "close_time"

# Default values
DEFAULT_OPEN_TIME = 5
DEFAULT_CLOSE_TIME = 5

# Request timeouts in seconds
CONNECT_TIMEOUT = 10.0
READ_TIMEOUT = 10.0
REQUEST_TIMEOUT = 15.0

# State polling interval in seconds
POLL_INTERVAL = 5.0

# Device API paths
PATH_HEALTH = "health"
PATH_STATUS = "gate/status"
PATH_OPEN = "gate/open"
PATH_CLOSE = "gate/close"

STATUS_OPEN = "open"
STATUS_CLOSED = "closed"
STATUS_OPENING = "opening"
STATUS_CLOSING = "closing"
STATUS_UNKNOWN = "unknown"

STATUS_OPTIONS = [
    STATUS_OPEN,
    STATUS_CLOSED,
    STATUS_OPENING,
    STATUS_CLOSING,
    STATUS_UNKNOWN,
]

OPERATION_MESSAGES = {
    "open": "Opening in progress…",
    "close": "Closing in progress…",
}

FAILURE_MESSAGES = {
    "open": "Opening failed",
    "close": "Closing failed",
}
NOTICE_MISSING_CONFIG = "Base URL or token is missing"
NOTICE_BUSY = "A command is already in progress"
