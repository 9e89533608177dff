"""
Setback strategy orchestration: break-even screen, optimizer call, and the
conversion of energy results into a recommendation with costs.
"""
import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

from .config import EngineConfig
from .constants import WEEKS_PER_MONTH
from .energy import EnergyModel, SimulationResult
from .envelope import EnvelopeComponents, build_envelope, component_heat_transfer
from .hvac import HVACPerformance
from .inputs import BuildingInputs, format_clock_time, resolve_inputs
from .location import altitude_from_zip
from .optimize import ACTION_MAINTAIN, ACTION_SETBACK, REASON_BELOW_BREAK_EVEN, find_optimal_setback
from .rates import resolve_electricity_rate
from .thermal_mass import build_thermal_state

_LOGGER = logging.getLogger(__name__)


@dataclass
class Recommendation:
    action: str
    desired_temp: float
    setback_temp: float
    restart_time: Optional[str]          # clock time, None for MAINTAIN
    return_time: str
    restart_offset_hours: Optional[float]  # hours after leaving
    recovery_hours: float
    message: str
    reason_code: Optional[str] = None
    reason: Optional[str] = None
    simulation: Optional[SimulationResult] = None


@dataclass
class Savings:
    energy_maintain_kwh: float
    energy_setback_kwh: float
    energy_saved_kwh: float
    cost_saved_per_occurrence: float
    cost_saved_monthly: float
    cost_saved_annual: float
    percent_saved: float
    baseline_cost: float
    electricity_rate: float
    rate_source: str
    message: str


@dataclass
class BuildingPhysics:
    time_constant_hours: float
    break_even_hours: float
    volume_cuft: float
    surface_area_sqft: float
    capacitance_btu_per_f: float
    resistance_hr_f_per_btu: float
    effective_u_factor: float
    ua_btu_hr_f: float
    altitude_ft: float


@dataclass
class HVACDiagnostics:
    nominal_seer: float
    effective_seer: float
    cop: float


@dataclass
class AnalysisResult:
    inputs: BuildingInputs
    recommendation: Recommendation
    savings: Savings
    building_physics: BuildingPhysics
    hvac: HVACDiagnostics
    envelope: EnvelopeComponents

    def to_dict(self):
        # BTU/hr through each surface at the desired indoor temperature
        flows = component_heat_transfer(self.envelope, self.inputs.desired_temp, self.inputs.outdoor_temp)
        data = {
            'recommendation': dataclasses.asdict(self.recommendation),
            'savings': dataclasses.asdict(self.savings),
            'building_physics': dataclasses.asdict(self.building_physics),
            'hvac_performance': dataclasses.asdict(self.hvac),
            'envelope_breakdown': {
                name: {'area': s.area, 'u_factor': s.u_factor, 'r_value': s.r_value,
                       'heat_transfer_btu_hr': flows[name]}
                for name, s in self.envelope.surfaces().items()
            },
            'total_heat_transfer_btu_hr': flows['total'],
            'inputs_used': dataclasses.asdict(self.inputs),
        }
        return data


def build_energy_model(inputs, config=None):
    """Envelope -> thermal state -> HVAC -> EnergyModel for one building."""
    config = config or EngineConfig()
    envelope = build_envelope(inputs)
    thermal = build_thermal_state(inputs, envelope, config)
    hvac = HVACPerformance.from_inputs(inputs, altitude_from_zip(inputs.zip_code))
    return EnergyModel(envelope, thermal, hvac, config)


def break_even_hours(thermal, config):
    return config.break_even_multiplier * thermal.time_constant


def _maintain_recommendation(inputs, return_time, message, reason_code, reason):
    return Recommendation(
        action=ACTION_MAINTAIN,
        desired_temp=inputs.desired_temp,
        setback_temp=inputs.desired_temp,
        restart_time=None,
        return_time=return_time,
        restart_offset_hours=None,
        recovery_hours=0.0,
        message=message,
        reason_code=reason_code,
        reason=reason,
    )


def recommend(inputs, model):
    """Runs the EVALUATING -> {MAINTAIN, SETBACK} decision."""
    config = model.config
    start = inputs.absence_start_hours
    return_time = format_clock_time(start + inputs.absence_duration)
    t_be = break_even_hours(model.thermal, config)

    if inputs.absence_duration < t_be:
        return _maintain_recommendation(
            inputs, return_time,
            message=(f"Keep at {inputs.desired_temp:g}F. Your {inputs.absence_duration:g}hr absence is "
                     f"shorter than break-even time ({t_be:.1f}hr)."),
            reason_code=REASON_BELOW_BREAK_EVEN,
            reason='Absence duration less than break-even threshold',
        )

    outcome = find_optimal_setback(model, inputs.desired_temp, inputs.outdoor_temp, inputs.absence_duration)
    if outcome.action == ACTION_MAINTAIN:
        return _maintain_recommendation(
            inputs, return_time,
            message=outcome.reason,
            reason_code=outcome.reason_code,
            reason=outcome.reason,
        )

    result = outcome.result
    restart_offset = inputs.absence_duration - result.recovery_hours - config.restart_buffer_hours
    restart_time = format_clock_time(start + restart_offset)
    lead_minutes = round((inputs.absence_duration - restart_offset) * 60)
    setback_temp = round(outcome.setback_temp)

    return Recommendation(
        action=ACTION_SETBACK,
        desired_temp=inputs.desired_temp,
        setback_temp=setback_temp,
        restart_time=restart_time,
        return_time=return_time,
        restart_offset_hours=restart_offset,
        recovery_hours=result.recovery_hours,
        message=(f"Set to {setback_temp}F when you leave. HVAC will restart at {restart_time} "
                 f"({lead_minutes} min before you return). "
                 f"Expected savings: {outcome.savings_pct:.1f}%"),
        simulation=result,
    )


def calculate_savings(inputs, model, recommendation):
    rate, source = resolve_electricity_rate(inputs)
    maintain_kwh = model.energy_to_maintain(inputs.desired_temp, inputs.outdoor_temp, inputs.absence_duration)
    baseline_cost = maintain_kwh * rate

    if recommendation.action == ACTION_MAINTAIN:
        return Savings(
            energy_maintain_kwh=maintain_kwh,
            energy_setback_kwh=maintain_kwh,
            energy_saved_kwh=0.0,
            cost_saved_per_occurrence=0.0,
            cost_saved_monthly=0.0,
            cost_saved_annual=0.0,
            percent_saved=0.0,
            baseline_cost=baseline_cost,
            electricity_rate=rate,
            rate_source=source,
            message=recommendation.reason or 'Absence too short for savings.',
        )

    setback_kwh = recommendation.simulation.total_kwh
    saved_kwh = max(0.0, maintain_kwh - setback_kwh)
    cost_saved = saved_kwh * rate
    per_week = inputs.days_per_week
    monthly = cost_saved * per_week * WEEKS_PER_MONTH
    annual = cost_saved * per_week * inputs.weeks_per_year

    return Savings(
        energy_maintain_kwh=maintain_kwh,
        energy_setback_kwh=setback_kwh,
        energy_saved_kwh=saved_kwh,
        cost_saved_per_occurrence=cost_saved,
        cost_saved_monthly=monthly,
        cost_saved_annual=annual,
        percent_saved=saved_kwh / maintain_kwh * 100,
        baseline_cost=baseline_cost,
        electricity_rate=rate,
        rate_source=source,
        message=(f"Save ${cost_saved:.2f} per occurrence, ${monthly:.0f}/month, "
                 f"or ${annual:.0f}/year."),
    )


def analyze(inputs, config=None) -> AnalysisResult:
    """
    One offline recommendation for one building and absence.
    `inputs` may be a BuildingInputs or a raw request dict.
    """
    if not isinstance(inputs, BuildingInputs):
        inputs = resolve_inputs(inputs)
    config = config or EngineConfig()

    model = build_energy_model(inputs, config)
    recommendation = recommend(inputs, model)
    savings = calculate_savings(inputs, model, recommendation)

    envelope = model.envelope
    thermal = model.thermal
    physics = BuildingPhysics(
        time_constant_hours=thermal.time_constant,
        break_even_hours=break_even_hours(thermal, config),
        volume_cuft=envelope.volume,
        surface_area_sqft=envelope.total_area,
        capacitance_btu_per_f=thermal.capacitance,
        resistance_hr_f_per_btu=thermal.resistance,
        effective_u_factor=envelope.effective_u_factor,
        ua_btu_hr_f=envelope.ua,
        altitude_ft=model.hvac.altitude_ft,
    )
    hvac = HVACDiagnostics(
        nominal_seer=model.hvac.nominal_seer,
        effective_seer=model.hvac.effective_seer,
        cop=model.hvac.cop,
    )

    _LOGGER.info("Analysis: tau=%.2fh, break-even=%.1fh, absence=%gh -> %s (setback %sF, %.1f%% saved)",
                 physics.time_constant_hours, physics.break_even_hours, inputs.absence_duration,
                 recommendation.action, recommendation.setback_temp, savings.percent_saved)

    return AnalysisResult(
        inputs=inputs,
        recommendation=recommendation,
        savings=savings,
        building_physics=physics,
        hvac=hvac,
        envelope=envelope,
    )
