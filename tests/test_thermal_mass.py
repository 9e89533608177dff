import itertools
import math

import numpy as np
import pytest

from thermaliq.config import EngineConfig
from thermaliq.constants import CONSTRUCTION_THERMAL_MASS, R_VALUE_MATRIX
from thermaliq.envelope import build_envelope
from thermaliq.inputs import resolve_inputs
from thermaliq.thermal_mass import (
    UNREACHABLE,
    ThermalState,
    build_thermal_state,
    participation_factor,
    thermal_capacitance,
)

STATE = ThermalState(capacitance=1500.0, resistance=1 / 500.0)  # tau = 3 hr


def test_time_constant():
    assert STATE.time_constant == pytest.approx(3.0)


@pytest.mark.parametrize("hours", [0.0, 0.5, 3.0, 48.0, 1000.0])
def test_no_gradient_no_drift(hours):
    assert STATE.temperature_at(72.0, 72.0, hours) == 72.0


def test_temperature_at_relaxes_monotonically_toward_outdoor():
    hours = np.linspace(0, 20, 81)
    temps = STATE.temperature_at(72.0, 85.0, hours)

    assert temps[0] == pytest.approx(72.0)
    assert np.all(np.diff(temps) > 0)
    assert np.all(temps < 85.0)
    # One time constant covers 1 - 1/e of the gap
    assert STATE.temperature_at(72.0, 85.0, 3.0) == pytest.approx(85 - 13 / math.e)


def test_temperature_at_scalar_returns_float():
    assert isinstance(STATE.temperature_at(72.0, 85.0, 1.0), float)


@pytest.mark.parametrize("t_i,t_o", [(72, 85), (68, 25), (72, 72.5), (40, 100)])
@pytest.mark.parametrize("hours", [0.05, 1.0, 2.5, 10.0])
def test_round_trip(t_i, t_o, hours):
    t_mid = STATE.temperature_at(t_i, t_o, hours)
    assert STATE.time_to_reach(t_i, t_mid, t_o) == pytest.approx(hours, rel=1e-6)


def test_time_to_reach_no_gradient_is_zero():
    # Regardless of target
    assert STATE.time_to_reach(72, 80, 72) == 0.0
    assert STATE.time_to_reach(72, 60, 72) == 0.0
    assert STATE.time_to_reach(72, 72, 72) == 0.0


def test_time_to_reach_unreachable():
    # Wrong side of the starting temperature
    assert STATE.time_to_reach(72, 70, 85) == UNREACHABLE
    # At or beyond the outdoor temperature
    assert STATE.time_to_reach(72, 85, 85) == UNREACHABLE
    assert STATE.time_to_reach(72, 90, 85) == UNREACHABLE
    assert math.isinf(UNREACHABLE)


def test_time_to_reach_target_equals_start_is_unreachable():
    # ratio == 1: only the no-gradient case is defined as zero
    assert STATE.time_to_reach(72, 72, 85) == UNREACHABLE
    assert STATE.time_to_reach(68, 68, 25) == UNREACHABLE


def test_participation_scaled_and_capped():
    config = EngineConfig()
    inputs = resolve_inputs({'floor_area': 2000, 'desired_temp': 72, 'outdoor_temp': 85,
                             'absence_duration': 8, 'insulation_quality': 'excellent'})
    assert participation_factor(inputs, config) == pytest.approx(0.85 * 1.15)

    generous = config.with_overrides(participation_factor=0.95)
    assert participation_factor(inputs, generous) == 1.0


def test_unknown_construction_falls_back_to_wood_frame(caplog):
    config = EngineConfig()
    known = resolve_inputs({'floor_area': 2000, 'desired_temp': 72, 'outdoor_temp': 85,
                            'absence_duration': 8})
    odd = resolve_inputs({'floor_area': 2000, 'desired_temp': 72, 'outdoor_temp': 85,
                          'absence_duration': 8, 'construction_type': 'straw_bale'})
    env = build_envelope(known)
    assert thermal_capacitance(odd, env, config) == pytest.approx(thermal_capacitance(known, env, config))
    assert "straw_bale" in caplog.text


def test_scenario_a_time_constant(scenario_a, config):
    inputs = resolve_inputs(scenario_a)
    env = build_envelope(inputs)
    state = build_thermal_state(inputs, env, config)

    assert state.capacitance == pytest.approx(0.11 * 16000 * 0.85)
    assert state.resistance == pytest.approx(1 / env.ua)
    assert 2.0 <= state.time_constant <= 5.0


@pytest.mark.parametrize("construction,quality,floors,area", list(itertools.product(
    CONSTRUCTION_THERMAL_MASS.keys(),
    R_VALUE_MATRIX.keys(),
    [1, 3],
    [400, 2500],
)))
def test_time_constant_positive(construction, quality, floors, area):
    """Calibration is policy, not physics; the only hard requirement is tau > 0."""
    inputs = resolve_inputs({
        'floor_area': area, 'desired_temp': 72, 'outdoor_temp': 95, 'absence_duration': 8,
        'construction_type': construction, 'insulation_quality': quality, 'num_floors': floors,
    })
    state = build_thermal_state(inputs, build_envelope(inputs), EngineConfig())
    assert state.time_constant > 0
