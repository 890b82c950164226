"""Shared constants and configuration defaults for the ART monitoring client."""

# Socket configuration
DEFAULT_HOST = None  # resolver's local address
DEFAULT_SOCKET_TIMEOUT = 5.0
DEFAULT_RECV_BUFFER_SIZE = 2048

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"  # or "json"

# Root logger name shared by all components
LOGGER_NAME = "artmon"

# Top-level sections of the daemon's status reply
SECTION_DISCIPLINING = "disciplining"
SECTION_OSCILLATOR = "oscillator"
SECTION_CLOCK = "clock"
SECTION_GNSS = "gnss"
SECTION_DISCIPLINING_PARAMETERS = "disciplining_parameters"
SECTION_ACTION_REQUESTED = "action_requested"

REPORT_SECTIONS = (
    SECTION_DISCIPLINING,
    SECTION_OSCILLATOR,
    SECTION_CLOCK,
    SECTION_GNSS,
    SECTION_DISCIPLINING_PARAMETERS,
    SECTION_ACTION_REQUESTED,
)

# Older daemons echo the processed action under this key
LEGACY_ACTION_REQUESTED_KEY = "Action requested"
