"""
Status reply decoding.

Parsing is fail-fast: bytes that are not a JSON object raise DecodeError.
Everything after that is best effort. Absent sections are recorded as absent,
and malformed sections or fields degrade to unknown values.
"""

import json
from typing import Any, Dict, Optional, Tuple, Type, Union

from artmon_common.constants import (
    SECTION_DISCIPLINING,
    SECTION_OSCILLATOR,
    SECTION_CLOCK,
    SECTION_GNSS,
    SECTION_DISCIPLINING_PARAMETERS,
    SECTION_ACTION_REQUESTED,
    LEGACY_ACTION_REQUESTED_KEY,
)
from artmon_common.exceptions import DecodeError
from artmon_common.logging import get_bound_logger

from .models import (
    Clock,
    Disciplining,
    DiscipliningParameters,
    Gnss,
    Oscillator,
    ReportSection,
    StatusReport,
    as_text,
)

logger = get_bound_logger("decoder")

SECTION_MODELS: Dict[str, Type[ReportSection]] = {
    SECTION_DISCIPLINING: Disciplining,
    SECTION_OSCILLATOR: Oscillator,
    SECTION_CLOCK: Clock,
    SECTION_GNSS: Gnss,
    SECTION_DISCIPLINING_PARAMETERS: DiscipliningParameters,
}


def parse_document(data: Union[bytes, str]) -> Dict[str, Any]:
    """Parse raw reply bytes into a JSON object.

    Raises:
        DecodeError: If the data is not UTF-8 JSON or not an object
    """
    if isinstance(data, bytes):
        # The daemon may include the C string terminator
        data = data.rstrip(b"\x00 \t\r\n")
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Reply is not valid UTF-8: {e}",
                              details={"bytes": len(data)}) from e
    else:
        text = data.rstrip("\x00 \t\r\n")

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Reply is not well-formed JSON: {e}",
                          details={"bytes": len(text), "position": e.pos}) from e
    except (ValueError, RecursionError) as e:
        # Nesting too deep or an integer literal over the interpreter's digit limit
        raise DecodeError(f"Reply is not decodable JSON: {e}",
                          details={"bytes": len(text)}) from e

    if not isinstance(document, dict):
        raise DecodeError(f"Reply is a JSON {type(document).__name__}, expected an object")
    return document


def _decode_section(name: str, value: Any) -> ReportSection:
    model = SECTION_MODELS[name]
    if not isinstance(value, dict):
        logger.warning("decoder.section_malformed", section=name, type=type(value).__name__)
        value = {}
    return model.model_validate(value)


def _decode_action(document: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    for key in (SECTION_ACTION_REQUESTED, LEGACY_ACTION_REQUESTED_KEY):
        if key in document:
            value = document[key]
            return True, None if value is None else as_text(value)
    return False, None


def decode_status_report(data: Union[bytes, str]) -> StatusReport:
    """Decode the daemon's reply into a StatusReport.

    Raises:
        DecodeError: If the reply is not a well-formed JSON object
    """
    document = parse_document(data)

    sections: Dict[str, Any] = {}
    present = set()
    for name in SECTION_MODELS:
        if name in document:
            present.add(name)
            sections[name] = _decode_section(name, document[name])

    has_action, action = _decode_action(document)
    if has_action:
        present.add(SECTION_ACTION_REQUESTED)

    report = StatusReport(
        **sections,
        action_requested=action,
        present_sections=frozenset(present),
        raw=document,
    )
    logger.debug("decoder.decoded", sections=sorted(present))
    return report
