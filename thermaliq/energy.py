import logging
import math
from dataclasses import dataclass

import numpy as np
from scipy.integrate import trapezoid

_LOGGER = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Energy and timing of one three-phase setback (drift, hold, recovery)."""
    setback_temp: float
    drift_kwh: float
    hold_kwh: float
    recovery_kwh: float
    drift_hours: float
    hold_hours: float
    recovery_hours: float           # simulated, capped at the time left
    required_recovery_hours: float  # uncapped, inf if the setpoint can't be regained
    passive_drift: bool

    @property
    def total_kwh(self):
        return self.drift_kwh + self.hold_kwh + self.recovery_kwh


def time_grid(duration_hours, dt_hours):
    """Uniform grid over [0, duration] with spacing no larger than dt."""
    if duration_hours <= 0:
        return np.zeros(1)
    steps = max(1, math.ceil(duration_hours / dt_hours - 1e-9))
    return np.linspace(0.0, duration_hours, steps + 1)


class EnergyModel:
    """
    Electrical energy for holding a setpoint versus setting back during an
    absence. Steady holds are closed form; the drift and recovery phases are
    integrated on a fixed time step because the load follows the indoor
    temperature.
    """

    def __init__(self, envelope, thermal, hvac, config):
        self.envelope = envelope
        self.thermal = thermal
        self.hvac = hvac
        self.config = config

    def heat_transfer_rate(self, t_indoor, t_outdoor):
        """BTU/hr through the envelope, positive when heat flows in."""
        return self.envelope.ua * (t_outdoor - np.asarray(t_indoor, dtype=float))

    def energy_to_maintain(self, t_desired, t_outdoor, hours):
        """kWh to hold t_desired for `hours` against a constant outdoor temperature."""
        q_load = abs(self.envelope.ua * (t_outdoor - t_desired))
        return self.hvac.power_for(q_load) * max(hours, 0.0)

    def _integrate_kwh(self, times, loads_btu_hr):
        if len(times) < 2:
            return 0.0
        return float(trapezoid(self.hvac.power_for(loads_btu_hr), times))

    # --- Recovery (HVAC actively pulling back to the setpoint) ---

    def recovery_drive_temp(self, t_desired, t_outdoor):
        """
        Temperature the building would settle at with the HVAC running flat
        out, sized at recovery_capacity_factor x the steady load at t_desired.
        """
        k = self.config.recovery_capacity_factor
        return t_outdoor - k * (t_outdoor - t_desired)

    def recovery_time(self, t_setback, t_desired, t_outdoor):
        drive = self.recovery_drive_temp(t_desired, t_outdoor)
        return self.thermal.time_to_reach(t_setback, t_desired, drive)

    def recovery_trajectory(self, t_setback, t_desired, t_outdoor, times):
        drive = self.recovery_drive_temp(t_desired, t_outdoor)
        return self.thermal.temperature_at(t_setback, drive, times)

    def _recovery_energy(self, t_setback, t_desired, t_outdoor, hours):
        times = time_grid(hours, self.config.dt_hours)
        drive = self.recovery_drive_temp(t_desired, t_outdoor)
        temps = self.thermal.temperature_at(t_setback, drive, times)

        # HVAC output = envelope load + heat pulled out of (or put into) the mass
        dT_dt = (drive - temps) / self.thermal.time_constant
        loads = np.abs(self.heat_transfer_rate(temps, t_outdoor)) + self.thermal.capacitance * np.abs(dT_dt)
        return self._integrate_kwh(times, loads)

    # --- Drift (HVAC off or throttled while heading for the setback) ---

    def _drift_phase(self, t_desired, t_setback, t_outdoor, absence_hours):
        """Returns (kwh, hours, passive)."""
        is_cooling = t_outdoor > t_desired
        natural = self.thermal.time_to_reach(t_desired, t_setback, t_outdoor)

        if natural <= absence_hours * self.config.passive_drift_fraction:
            return 0.0, natural, True

        # Too slow to drift for free: capped window with the unit still
        # carrying the load until the setback is crossed
        tau = self.thermal.time_constant
        max_drift = min(tau * self.config.active_drift_tau_multiple,
                        absence_hours * self.config.active_drift_fraction)

        times = time_grid(max_drift, self.config.dt_hours)
        temps = self.thermal.temperature_at(t_desired, t_outdoor, times)
        reached = temps >= t_setback if is_cooling else temps <= t_setback

        drift_hours = max_drift
        if reached.any():
            idx = int(np.argmax(reached))
            drift_hours = float(times[idx])
            times, temps = times[:idx + 1], temps[:idx + 1]

        loads = np.abs(self.heat_transfer_rate(temps, t_outdoor))
        return self._integrate_kwh(times, loads), drift_hours, False

    def energy_with_setback(self, t_desired, t_setback, t_outdoor, absence_hours):
        drift_kwh, drift_hours, passive = self._drift_phase(t_desired, t_setback, t_outdoor, absence_hours)

        required_recovery = self.recovery_time(t_setback, t_desired, t_outdoor)

        hold_hours = max(0.0, absence_hours - drift_hours - required_recovery - self.config.restart_buffer_hours)
        hold_kwh = self.energy_to_maintain(t_setback, t_outdoor, hold_hours)

        recovery_hours = min(required_recovery, max(absence_hours - drift_hours, 0.0))
        recovery_kwh = self._recovery_energy(t_setback, t_desired, t_outdoor, recovery_hours)

        result = SimulationResult(
            setback_temp=t_setback,
            drift_kwh=drift_kwh,
            hold_kwh=hold_kwh,
            recovery_kwh=recovery_kwh,
            drift_hours=drift_hours,
            hold_hours=hold_hours,
            recovery_hours=recovery_hours,
            required_recovery_hours=required_recovery,
            passive_drift=passive,
        )
        _LOGGER.debug("Setback %.1fF: drift %.2fh (%s, %.3f kWh), hold %.2fh (%.3f kWh), "
                      "recovery %.2fh (%.3f kWh), total %.3f kWh",
                      t_setback, drift_hours, 'passive' if passive else 'active', drift_kwh,
                      hold_hours, hold_kwh, recovery_hours, recovery_kwh, result.total_kwh)
        return result

    def setback_trajectory(self, t_desired, result, t_outdoor, absence_hours):
        """
        Indoor temperature over the absence for a simulated setback, for
        plotting. Returns (hours, temps).
        """
        dt = self.config.dt_hours
        t_setback = result.setback_temp

        drift_t = time_grid(result.drift_hours, dt)
        drift_temps = self.thermal.temperature_at(t_desired, t_outdoor, drift_t)
        if t_outdoor > t_desired:
            drift_temps = np.minimum(drift_temps, t_setback)
        else:
            drift_temps = np.maximum(drift_temps, t_setback)

        hold_t = result.drift_hours + time_grid(result.hold_hours, dt)
        hold_temps = np.full(len(hold_t), t_setback)

        rec_local = time_grid(result.recovery_hours, dt)
        rec_t = hold_t[-1] + rec_local
        rec_temps = self.recovery_trajectory(t_setback, t_desired, t_outdoor, rec_local)

        tail_t = np.array([rec_t[-1], max(absence_hours, rec_t[-1])])
        tail_temps = np.full(2, t_desired)

        hours = np.concatenate([drift_t, hold_t, rec_t, tail_t])
        temps = np.concatenate([drift_temps, hold_temps, rec_temps, tail_temps])
        return hours, temps
