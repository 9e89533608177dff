"""
Grid search over setback temperatures.

Candidates are scanned from the most conservative setback outward in 1F
steps; only a strictly lower total replaces the incumbent, so ties resolve
to the setback closest to the desired temperature.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from .energy import SimulationResult

_LOGGER = logging.getLogger(__name__)

ACTION_MAINTAIN = 'MAINTAIN'
ACTION_SETBACK = 'SETBACK'

# Why the answer is MAINTAIN
REASON_BELOW_BREAK_EVEN = 'below_break_even'
REASON_BELOW_MARGIN = 'below_margin'
REASON_ABSENCE_TOO_SHORT = 'absence_too_short'
REASON_NO_IMPROVEMENT = 'no_improvement'

# Why a single candidate was thrown out
REJECT_RECOVERY = 'recovery_exceeds_absence'
REJECT_HOLD = 'hold_too_short'


@dataclass
class OptimizerOutcome:
    action: str
    setback_temp: float
    maintain_kwh: float
    result: Optional[SimulationResult] = None
    savings_pct: float = 0.0
    reason_code: Optional[str] = None
    reason: Optional[str] = None
    candidates_evaluated: int = 0
    candidates_feasible: int = 0


def candidate_setbacks(t_desired, t_outdoor, config):
    """Setback temperatures to try, ordered from mildest to deepest."""
    step = config.setback_search_step
    if t_outdoor > t_desired:
        start = t_desired + config.min_setback_offset
        stop = min(t_outdoor - config.outdoor_margin, t_desired + config.max_setback_offset)
        if stop < start:
            return np.array([])
        return np.arange(start, stop + step / 2, step)

    start = t_desired - config.min_setback_offset
    stop = max(t_outdoor + config.outdoor_margin, t_desired - config.max_setback_offset)
    if stop > start:
        return np.array([])
    return np.arange(start, stop - step / 2, -step)


def rejection_reason(result, absence_hours, config):
    """None if the candidate is usable, else a REJECT_* code."""
    time_left = absence_hours - result.drift_hours - config.restart_buffer_hours
    if result.required_recovery_hours > time_left:
        return REJECT_RECOVERY
    if result.hold_hours < config.min_hold_hours:
        return REJECT_HOLD
    return None


def evaluate_candidates(model, t_desired, t_outdoor, absence_hours):
    """Yields (SimulationResult, reject_code) for every candidate in scan order."""
    for t_setback in candidate_setbacks(t_desired, t_outdoor, model.config):
        result = model.energy_with_setback(t_desired, float(t_setback), t_outdoor, absence_hours)
        yield result, rejection_reason(result, absence_hours, model.config)


def sweep_setbacks(model, t_desired, t_outdoor, absence_hours) -> pd.DataFrame:
    """Every candidate's phase energies and timings, one row per setback."""
    maintain_kwh = model.energy_to_maintain(t_desired, t_outdoor, absence_hours)
    rows = []
    for result, reject in evaluate_candidates(model, t_desired, t_outdoor, absence_hours):
        rows.append({
            'setback_temp': result.setback_temp,
            'total_kwh': result.total_kwh,
            'drift_kwh': result.drift_kwh,
            'hold_kwh': result.hold_kwh,
            'recovery_kwh': result.recovery_kwh,
            'drift_hours': result.drift_hours,
            'hold_hours': result.hold_hours,
            'recovery_hours': result.recovery_hours,
            'passive_drift': result.passive_drift,
            'feasible': reject is None,
            'reject_reason': reject,
            'savings_pct': (maintain_kwh - result.total_kwh) / maintain_kwh * 100 if maintain_kwh > 0 else 0.0,
        })
    columns = ['setback_temp', 'total_kwh', 'drift_kwh', 'hold_kwh', 'recovery_kwh', 'drift_hours',
               'hold_hours', 'recovery_hours', 'passive_drift', 'feasible', 'reject_reason', 'savings_pct']
    return pd.DataFrame(rows, columns=columns)


def _maintain(t_desired, maintain_kwh, code, reason, evaluated=0, feasible=0, savings_pct=0.0):
    return OptimizerOutcome(
        action=ACTION_MAINTAIN,
        setback_temp=t_desired,
        maintain_kwh=maintain_kwh,
        savings_pct=savings_pct,
        reason_code=code,
        reason=reason,
        candidates_evaluated=evaluated,
        candidates_feasible=feasible,
    )


def find_optimal_setback(model, t_desired, t_outdoor, absence_hours) -> OptimizerOutcome:
    config = model.config
    maintain_kwh = model.energy_to_maintain(t_desired, t_outdoor, absence_hours)

    if maintain_kwh <= 0:
        return _maintain(t_desired, maintain_kwh, REASON_NO_IMPROVEMENT,
                         'Outdoor temperature matches the setpoint; there is no load to save')

    best = None
    evaluated = 0
    feasible = 0
    for result, reject in evaluate_candidates(model, t_desired, t_outdoor, absence_hours):
        evaluated += 1
        if reject:
            _LOGGER.debug("Rejecting setback %.1fF: %s", result.setback_temp, reject)
            continue
        feasible += 1
        if best is None or result.total_kwh < best.total_kwh:
            best = result

    if evaluated == 0:
        return _maintain(t_desired, maintain_kwh, REASON_NO_IMPROVEMENT,
                         'Outdoor temperature too close to the setpoint for a meaningful setback')
    if best is None:
        return _maintain(t_desired, maintain_kwh, REASON_ABSENCE_TOO_SHORT,
                         'Absence duration too short for beneficial setback', evaluated, feasible)

    savings_pct = (maintain_kwh - best.total_kwh) / maintain_kwh * 100
    if savings_pct <= 0:
        return _maintain(t_desired, maintain_kwh, REASON_NO_IMPROVEMENT,
                         'No setback temperature uses less energy than maintaining', evaluated, feasible)
    if savings_pct < config.min_savings_pct:
        return _maintain(t_desired, maintain_kwh, REASON_BELOW_MARGIN,
                         f"Potential savings ({savings_pct:.1f}%) too small to justify setback",
                         evaluated, feasible, savings_pct)

    _LOGGER.debug("Best setback %.1fF of %d feasible/%d evaluated: %.3f kWh vs %.3f kWh maintain (%.1f%%)",
                  best.setback_temp, feasible, evaluated, best.total_kwh, maintain_kwh, savings_pct)
    return OptimizerOutcome(
        action=ACTION_SETBACK,
        setback_temp=best.setback_temp,
        maintain_kwh=maintain_kwh,
        result=best,
        savings_pct=savings_pct,
        candidates_evaluated=evaluated,
        candidates_feasible=feasible,
    )
