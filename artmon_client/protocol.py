"""
Monitoring request protocol.

The daemon accepts a single JSON object per connection carrying the numeric
code of the requested action, e.g. ``{"request": 7}`` for an EEPROM read.
"""

import json
from enum import IntEnum
from typing import List, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from artmon_common.exceptions import DecodeError


class RequestKind(IntEnum):
    """Actions the daemon's monitoring socket understands.

    The value is the wire code; the lower-case member name is the spelling
    used on the command line.
    """
    NONE = 0
    CALIBRATION = 1
    GNSS_START = 2
    GNSS_STOP = 3
    GNSS_SOFT = 4
    GNSS_HARD = 5
    GNSS_COLD = 6
    READ_EEPROM = 7
    SAVE_EEPROM = 8
    FAKE_HOLDOVER_START = 9
    FAKE_HOLDOVER_STOP = 10
    MRO_COARSE_INC = 11
    MRO_COARSE_DEC = 12

    @property
    def cli_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> "RequestKind":
        """Parse a command-line request name such as ``gnss_start``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown request {name}") from None

    @classmethod
    def cli_names(cls) -> List[str]:
        """Request names accepted on the command line (NONE is implicit)."""
        return [kind.cli_name for kind in cls if kind is not cls.NONE]


class MonitoringRequest(BaseModel):
    """The request message sent to the daemon."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    request: RequestKind = RequestKind.NONE

    def to_wire(self) -> bytes:
        # The daemon reads one compact JSON object, no terminator
        return json.dumps({"request": int(self.request)}, separators=(",", ":")).encode()


def encode_request(kind: RequestKind = RequestKind.NONE) -> bytes:
    """Encode a request kind into the wire message."""
    return MonitoringRequest(request=kind).to_wire()


def decode_request(data: Union[bytes, str]) -> RequestKind:
    """Parse a wire request back into its RequestKind.

    Raises:
        DecodeError: If the data is not a valid request message
    """
    try:
        return MonitoringRequest.model_validate_json(data).request
    except ValidationError as e:
        raise DecodeError(f"Invalid monitoring request: {e}") from e
