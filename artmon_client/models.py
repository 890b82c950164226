"""
Typed model of the daemon's status reply.

Every section is always available as an object; which sections the daemon
actually sent is recorded in ``StatusReport.present_sections``. Inside a
section each field is validated on its own: a missing, null or unusable value
becomes ``None`` instead of failing the whole report.
"""

import json
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from artmon_common.constants import (
    SECTION_DISCIPLINING,
    SECTION_OSCILLATOR,
    SECTION_CLOCK,
    SECTION_GNSS,
    SECTION_DISCIPLINING_PARAMETERS,
    SECTION_ACTION_REQUESTED,
)
from artmon_common.logging import get_bound_logger

logger = get_bound_logger("decoder")


class DiscipliningStatus(str, Enum):
    """Phase of the disciplining algorithm."""
    TRACKING = "TRACKING"
    LOCK_LOW_RESOLUTION = "LOCK_LOW_RESOLUTION"
    LOCK_HIGH_RESOLUTION = "LOCK_HIGH_RESOLUTION"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DiscipliningStatus":
        if value in (cls.TRACKING.value, cls.LOCK_LOW_RESOLUTION.value, cls.LOCK_HIGH_RESOLUTION.value):
            return cls(value)
        return cls.OTHER


class ReportSection(BaseModel):
    """Base for reply sections: lenient, per-field validation."""
    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    section: ClassVar[str] = ""

    @field_validator('*', mode='wrap')
    @classmethod
    def default_on_invalid(cls, value: Any, handler: ValidatorFunctionWrapHandler,
                            info: ValidationInfo) -> Any:
        try:
            result = handler(value)
        except ValidationError as e:
            logger.debug("decoder.field_invalid",
                         section=cls.section, field=info.field_name,
                         value=repr(value), error=e.errors()[0]["msg"])
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        # JSON true/false is not a number
        if isinstance(value, bool) and isinstance(result, (int, float)) and not isinstance(result, bool):
            logger.debug("decoder.field_invalid",
                         section=cls.section, field=info.field_name,
                         value=repr(value), error="boolean for a numeric field")
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return result


class Disciplining(ReportSection):
    section: ClassVar[str] = SECTION_DISCIPLINING

    status: Optional[str] = None
    tracking_only: Optional[bool] = None
    current_phase_convergence_count: Optional[int] = None
    valid_phase_convergence_threshold: Optional[int] = None
    convergence_progress: Optional[float] = None
    ready_for_holdover: Optional[bool] = None

    @property
    def status_kind(self) -> DiscipliningStatus:
        return DiscipliningStatus.parse(self.status)


class Oscillator(ReportSection):
    section: ClassVar[str] = SECTION_OSCILLATOR

    model: Optional[str] = None
    fine_ctrl: Optional[NonNegativeInt] = None
    coarse_ctrl: Optional[NonNegativeInt] = None
    lock: Optional[bool] = None
    temperature: Optional[float] = None


class Clock(ReportSection):
    section: ClassVar[str] = SECTION_CLOCK

    clock_class: Optional[str] = Field(default=None, alias="class")
    offset: Optional[int] = None


class Gnss(ReportSection):
    section: ClassVar[str] = SECTION_GNSS

    fix: Optional[int] = None
    fix_ok: Optional[bool] = Field(default=None, alias="fixOk")
    antenna_status: Optional[int] = None
    antenna_power: Optional[int] = None
    survey_in_position_error: Optional[float] = None
    ls_change: Optional[int] = Field(default=None, alias="lsChange")
    leap_seconds: Optional[int] = None


class CalibrationParameters(ReportSection):
    """Calibration block of the disciplining parameters.

    Node and coefficient series are passed through as the daemon formats
    them; they are not parsed.
    """
    section: ClassVar[str] = "calibration_parameters"

    ctrl_nodes_length: Optional[int] = None
    ctrl_load_nodes: Optional[str] = None
    ctrl_drift_coeffs: Optional[str] = None
    coarse_equilibrium: Optional[int] = None
    calibration_date: Optional[int] = None
    calibration_valid: Optional[bool] = None
    ctrl_nodes_length_factory: Optional[int] = None
    ctrl_load_nodes_factory: Optional[str] = None
    ctrl_drift_coeffs_factory: Optional[str] = None
    coarse_equilibrium_factory: Optional[int] = None
    estimated_equilibrium_es: Optional[int] = Field(default=None, alias="estimated_equilibrium_ES")


def as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


class DiscipliningParameters(ReportSection):
    section: ClassVar[str] = SECTION_DISCIPLINING_PARAMETERS

    calibration_parameters: Optional[CalibrationParameters] = None
    temperature_table: Dict[str, str] = Field(default_factory=dict)

    @field_validator('calibration_parameters', mode='before')
    @classmethod
    def coerce_calibration_block(cls, value: Any) -> Any:
        # A present block that is not an object still counts as present
        if value is not None and not isinstance(value, dict):
            logger.warning("decoder.section_malformed",
                           section="calibration_parameters", type=type(value).__name__)
            return {}
        return value

    @field_validator('temperature_table', mode='before')
    @classmethod
    def coerce_table_entries(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            logger.warning("decoder.section_malformed",
                           section="temperature_table", type=type(value).__name__)
            return {}
        return {str(label): as_text(mean) for label, mean in value.items()}

    @property
    def has_calibration_parameters(self) -> bool:
        return self.calibration_parameters is not None


class StatusReport(BaseModel):
    """Decoded status reply of the daemon."""
    model_config = ConfigDict(frozen=True)

    disciplining: Disciplining = Field(default_factory=Disciplining)
    oscillator: Oscillator = Field(default_factory=Oscillator)
    clock: Clock = Field(default_factory=Clock)
    gnss: Gnss = Field(default_factory=Gnss)
    disciplining_parameters: DiscipliningParameters = Field(default_factory=DiscipliningParameters)
    action_requested: Optional[str] = None

    present_sections: FrozenSet[str] = frozenset()
    raw: Dict[str, Any] = Field(default_factory=dict, repr=False)

    def is_present(self, section: str) -> bool:
        """Whether the daemon's reply carried the given top-level section."""
        return section in self.present_sections

    @property
    def has_disciplining(self) -> bool:
        return SECTION_DISCIPLINING in self.present_sections

    @property
    def has_oscillator(self) -> bool:
        return SECTION_OSCILLATOR in self.present_sections

    @property
    def has_clock(self) -> bool:
        return SECTION_CLOCK in self.present_sections

    @property
    def has_gnss(self) -> bool:
        return SECTION_GNSS in self.present_sections

    @property
    def has_disciplining_parameters(self) -> bool:
        return SECTION_DISCIPLINING_PARAMETERS in self.present_sections

    @property
    def has_action_requested(self) -> bool:
        return SECTION_ACTION_REQUESTED in self.present_sections
