"""
Human-readable rendering of a StatusReport.

Produces the indented section listing operators are used to:

    Oscillator detected
    	- model: mRO50
    	- fine_ctrl: 1234
"""

from typing import Any, List, Optional

from .models import (
    CalibrationParameters,
    DiscipliningStatus,
    StatusReport,
)

UNKNOWN = "unknown"

_PHASE_LABELS = {
    DiscipliningStatus.TRACKING: "tracking",
    DiscipliningStatus.LOCK_LOW_RESOLUTION: "lock low resolution",
    DiscipliningStatus.LOCK_HIGH_RESOLUTION: "lock high resolution",
}


def format_value(value: Any, precision: Optional[int] = None) -> str:
    """Format a decoded field, rendering unknown values explicitly."""
    if value is None:
        return UNKNOWN
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float) and precision is not None:
        return f"{value:.{precision}f}"
    return str(value)


def _item(name: str, value: Any, depth: int = 1, precision: Optional[int] = None,
          unit: str = "") -> str:
    text = format_value(value, precision)
    if unit and value is not None:
        text = f"{text} {unit}"
    return "\t" * depth + f"- {name}: {text}"


def _calibration_lines(params: CalibrationParameters) -> List[str]:
    lines = ["\t- Calibration parameters"]
    lines.append(_item("ctrl_nodes_length", params.ctrl_nodes_length, 2))
    lines.append(_item("ctrl_load_nodes", params.ctrl_load_nodes, 2))
    lines.append(_item("ctrl_drift_coeffs", params.ctrl_drift_coeffs, 2))
    lines.append(_item("coarse_equilibrium", params.coarse_equilibrium, 2))
    lines.append(_item("calibration_date", params.calibration_date, 2))
    lines.append(_item("calibration_valid", params.calibration_valid, 2))
    lines.append(_item("ctrl_nodes_length_factory", params.ctrl_nodes_length_factory, 2))
    lines.append(_item("ctrl_load_nodes_factory", params.ctrl_load_nodes_factory, 2))
    lines.append(_item("ctrl_drift_coeffs_factory", params.ctrl_drift_coeffs_factory, 2))
    lines.append(_item("coarse_equilibrium_factory", params.coarse_equilibrium_factory, 2))
    lines.append(_item("estimated_equilibrium_ES", params.estimated_equilibrium_es, 2))
    return lines


def format_report(report: StatusReport) -> List[str]:
    """Render the sections present in the report, one line per entry."""
    lines: List[str] = []

    if report.has_disciplining:
        disc = report.disciplining
        lines.append("Disciplining detected")
        lines.append(_item("Current status", disc.status))
        lines.append(_item("tracking_only", disc.tracking_only))
        lines.append(_item("ready_for_holdover", disc.ready_for_holdover))
        phase = _PHASE_LABELS.get(disc.status_kind)
        if phase:
            lines.append(
                f"\t- {phase} convergence progress: "
                f"{format_value(disc.convergence_progress, 2)} % "
                f"({format_value(disc.current_phase_convergence_count)}"
                f"/{format_value(disc.valid_phase_convergence_threshold)})"
            )

    if report.has_oscillator:
        osc = report.oscillator
        lines.append("Oscillator detected")
        lines.append(_item("model", osc.model))
        lines.append(_item("fine_ctrl", osc.fine_ctrl))
        lines.append(_item("coarse_ctrl", osc.coarse_ctrl))
        lines.append(_item("lock", osc.lock))
        lines.append(_item("temperature", osc.temperature, precision=6))

    if report.has_clock:
        lines.append("Clock detected")
        lines.append(_item("class", report.clock.clock_class))
        lines.append(_item("offset", report.clock.offset))

    if report.has_gnss:
        gnss = report.gnss
        lines.append("GNSS detected")
        lines.append(_item("fix", gnss.fix))
        lines.append(_item("fixOk", gnss.fix_ok))
        lines.append(_item("antenna_status", gnss.antenna_status))
        lines.append(_item("antenna_power", gnss.antenna_power))
        lines.append(_item("survey_in_position_error", gnss.survey_in_position_error,
                           precision=2, unit="m"))
        lines.append(_item("lsChange", gnss.ls_change))
        lines.append(_item("leap_seconds", gnss.leap_seconds))

    if report.has_disciplining_parameters:
        params = report.disciplining_parameters
        lines.append("Disciplining parameters detected")
        if params.has_calibration_parameters:
            lines.extend(_calibration_lines(params.calibration_parameters))
        if params.temperature_table:
            lines.append("\t- Temperature table")
            # Sorted for stable output; the daemon sends no particular order
            for label in sorted(params.temperature_table):
                lines.append(_item(label, params.temperature_table[label], 2))

    if report.has_action_requested:
        lines.append(f"Action requested: {format_value(report.action_requested)}")

    return lines
