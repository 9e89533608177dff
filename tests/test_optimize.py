from unittest.mock import MagicMock

import numpy as np
import pytest

from thermaliq.config import EngineConfig
from thermaliq.energy import EnergyModel, SimulationResult
from thermaliq.optimize import (
    ACTION_MAINTAIN,
    ACTION_SETBACK,
    REASON_ABSENCE_TOO_SHORT,
    REASON_BELOW_MARGIN,
    REASON_NO_IMPROVEMENT,
    REJECT_HOLD,
    REJECT_RECOVERY,
    candidate_setbacks,
    find_optimal_setback,
    rejection_reason,
    sweep_setbacks,
)


def _result(t_setback, total, drift_hours=1.0, hold_hours=5.0, recovery_hours=1.0):
    return SimulationResult(
        setback_temp=t_setback,
        drift_kwh=0.0,
        hold_kwh=total,
        recovery_kwh=0.0,
        drift_hours=drift_hours,
        hold_hours=hold_hours,
        recovery_hours=recovery_hours,
        required_recovery_hours=recovery_hours,
        passive_drift=True,
    )


def test_candidates_cooling():
    candidates = candidate_setbacks(72, 85, EngineConfig())
    np.testing.assert_allclose(candidates, np.arange(74, 84))


def test_candidates_heating():
    candidates = candidate_setbacks(68, 25, EngineConfig())
    # Mildest first, never more than 15F from the setpoint
    np.testing.assert_allclose(candidates, np.arange(66, 52, -1))


def test_candidates_bounded_by_outdoor_margin():
    candidates = candidate_setbacks(72, 79, EngineConfig())
    np.testing.assert_allclose(candidates, [74, 75, 76, 77])


@pytest.mark.parametrize("t_outdoor", [72, 73, 75, 69])
def test_candidates_empty_when_outdoor_too_close(t_outdoor):
    assert len(candidate_setbacks(72, t_outdoor, EngineConfig())) == 0


def test_rejection_reasons():
    config = EngineConfig()
    assert rejection_reason(_result(80, 1.0, drift_hours=3, recovery_hours=5), 8, config) == REJECT_RECOVERY
    assert rejection_reason(_result(80, 1.0, hold_hours=0.2), 8, config) == REJECT_HOLD
    assert rejection_reason(_result(80, 1.0), 8, config) is None


def test_ties_resolve_to_mildest_setback():
    model = MagicMock()
    model.config = EngineConfig()
    model.energy_to_maintain.return_value = 10.0
    model.energy_with_setback.side_effect = lambda t_d, t_s, t_o, hours: _result(t_s, 5.0)

    outcome = find_optimal_setback(model, 72, 85, 8)
    assert outcome.action == ACTION_SETBACK
    assert outcome.setback_temp == 74
    assert outcome.candidates_evaluated == 10
    assert outcome.candidates_feasible == 10


def test_scenario_a_picks_global_minimum(model_a):
    outcome = find_optimal_setback(model_a, 72, 85, 8)
    sweep = sweep_setbacks(model_a, 72, 85, 8)
    feasible = sweep[sweep['feasible']]

    assert outcome.action == ACTION_SETBACK
    assert outcome.setback_temp == 80
    assert outcome.result.total_kwh == pytest.approx(feasible['total_kwh'].min())
    assert outcome.savings_pct == pytest.approx(48.2, abs=0.5)


def test_setback_stays_within_bounds(model_a):
    for hours in [8, 12, 24, 48]:
        outcome = find_optimal_setback(model_a, 72, 85, hours)
        assert 74 <= outcome.setback_temp <= 83


def test_absence_too_short(model_a):
    outcome = find_optimal_setback(model_a, 72, 85, 1.0)
    assert outcome.action == ACTION_MAINTAIN
    assert outcome.reason_code == REASON_ABSENCE_TOO_SHORT
    assert outcome.reason == 'Absence duration too short for beneficial setback'
    assert outcome.candidates_evaluated == 10
    assert outcome.candidates_feasible == 0


def test_below_savings_margin(model_a):
    config = model_a.config.with_overrides(min_savings_pct=99.0)
    model = EnergyModel(model_a.envelope, model_a.thermal, model_a.hvac, config)

    outcome = find_optimal_setback(model, 72, 85, 8)
    assert outcome.action == ACTION_MAINTAIN
    assert outcome.reason_code == REASON_BELOW_MARGIN
    assert 'too small to justify setback' in outcome.reason
    assert outcome.savings_pct > 0


def test_no_load_to_save(model_a):
    outcome = find_optimal_setback(model_a, 72, 72, 8)
    assert outcome.action == ACTION_MAINTAIN
    assert outcome.reason_code == REASON_NO_IMPROVEMENT
    assert outcome.maintain_kwh == 0.0


def test_outdoor_too_close(model_a):
    outcome = find_optimal_setback(model_a, 72, 75, 8)
    assert outcome.action == ACTION_MAINTAIN
    assert outcome.reason_code == REASON_NO_IMPROVEMENT
    assert outcome.candidates_evaluated == 0


def test_sweep_frame(model_a):
    sweep = sweep_setbacks(model_a, 72, 85, 8)
    assert list(sweep['setback_temp']) == list(range(74, 84))
    assert {'total_kwh', 'feasible', 'reject_reason', 'savings_pct', 'passive_drift'} <= set(sweep.columns)
    assert sweep['reject_reason'][sweep['feasible']].isna().all()

    empty = sweep_setbacks(model_a, 72, 73, 8)
    assert empty.empty
    assert 'total_kwh' in empty.columns
