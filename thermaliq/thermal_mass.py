"""
Single lumped-capacitance (1R1C) thermal model of the whole building.

    C * dT/dt = (T_out - T) / R

so with no HVAC the indoor temperature relaxes exponentially toward the
outdoor temperature with time constant tau = R * C (hours).
"""
import logging
import math
from dataclasses import dataclass

import numpy as np

from .constants import DEFAULT_CONSTRUCTION_TYPE, MAX_PARTICIPATION

_LOGGER = logging.getLogger(__name__)

UNREACHABLE = math.inf


@dataclass(frozen=True)
class ThermalState:
    capacitance: float   # BTU/F
    resistance: float    # hr.F/BTU

    @property
    def time_constant(self):
        return self.resistance * self.capacitance

    def temperature_at(self, t_initial, t_outdoor, hours):
        """
        Free-running temperature after `hours` (scalar or array, >= 0).
        """
        decay = np.exp(-np.asarray(hours, dtype=float) / self.time_constant)
        temps = t_outdoor + (t_initial - t_outdoor) * decay
        if np.ndim(temps) == 0:
            return float(temps)
        return temps

    def time_to_reach(self, t_initial, t_target, t_outdoor):
        """
        Hours for a free-running building to go from t_initial to t_target.

        Returns 0 when there is no gradient (t_initial == t_outdoor) and
        UNREACHABLE (inf) when the target is on the wrong side of t_initial
        or at/beyond t_outdoor.
        """
        if t_initial == t_outdoor:
            return 0.0

        ratio = (t_target - t_outdoor) / (t_initial - t_outdoor)
        if ratio <= 0 or ratio >= 1:
            return UNREACHABLE

        return -self.time_constant * math.log(ratio)


def participation_factor(inputs, config):
    scale = config.insulation_participation_scale.get(inputs.insulation_quality, 1.0)
    return min(config.participation_factor * scale, MAX_PARTICIPATION)


def thermal_capacitance(inputs, envelope, config):
    vhc = config.construction_thermal_mass.get(inputs.construction_type)
    if vhc is None:
        _LOGGER.warning("Unknown construction type %r, using %s",
                        inputs.construction_type, DEFAULT_CONSTRUCTION_TYPE)
        vhc = config.construction_thermal_mass[DEFAULT_CONSTRUCTION_TYPE]
    return vhc * envelope.volume * participation_factor(inputs, config)


def build_thermal_state(inputs, envelope, config) -> ThermalState:
    state = ThermalState(
        capacitance=thermal_capacitance(inputs, envelope, config),
        resistance=1.0 / (envelope.effective_u_factor * envelope.total_area),
    )
    _LOGGER.debug("Thermal state: C=%.0f BTU/F, R=%.6f hr.F/BTU, tau=%.2f hr",
                  state.capacitance, state.resistance, state.time_constant)
    return state
