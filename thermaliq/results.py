import sys

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .optimize import ACTION_SETBACK, sweep_setbacks


def print_report(result, rebates=None):
    rec = result.recommendation
    savings = result.savings
    physics = result.building_physics
    inputs = result.inputs

    print("\n" + "=" * 40)
    print("SETBACK RECOMMENDATION")
    print(f"Action:                {rec.action}")
    if rec.action == ACTION_SETBACK:
        print(f"Setback Temp:          {rec.setback_temp:.0f} F (from {inputs.desired_temp:g} F)")
        print(f"Restart At:            {rec.restart_time} (return {rec.return_time})")
        print(f"Recovery Time:         {rec.recovery_hours * 60:.0f} min")
    else:
        print(f"Reason:                {rec.reason}")
    print(rec.message)
    print("=" * 40)
    print(f"Time Constant (tau):   {physics.time_constant_hours:.2f} hr")
    print(f"Break-even Time:       {physics.break_even_hours:.2f} hr")
    print(f"Volume:                {physics.volume_cuft:.0f} ft3")
    print(f"Surface Area:          {physics.surface_area_sqft:.0f} ft2")
    print(f"Effective U-factor:    {physics.effective_u_factor:.4f} BTU/hr/ft2/F")
    print(f"Thermal Mass (C):      {physics.capacitance_btu_per_f:.0f} BTU/F")
    print(f"Insulation (UA):       {physics.ua_btu_hr_f:.0f} BTU/hr/F")
    print(f"Effective SEER / COP:  {result.hvac.effective_seer:.1f} / {result.hvac.cop:.2f}")
    print("-" * 40)
    print(f"Maintain Energy:       {savings.energy_maintain_kwh:.2f} kWh (${savings.baseline_cost:.2f})")
    print(f"Setback Energy:        {savings.energy_setback_kwh:.2f} kWh")
    print(f"Saved:                 {savings.energy_saved_kwh:.2f} kWh ({savings.percent_saved:.1f}%)")
    print(f"Rate:                  ${savings.electricity_rate:.3f}/kWh ({savings.rate_source})")
    print(f"Annual Savings:        ${savings.cost_saved_annual:.0f}")
    if rebates is not None:
        print("-" * 40)
        print(f"Federal Rebate:        {'Yes' if rebates.federal_eligible else 'No'} - {rebates.federal_reason}")
        print(f"State Rebate ({rebates.state}):    {'Yes' if rebates.state_eligible else 'No'} - {rebates.state_reason}")
    print("=" * 40)
    sys.stdout.flush()


def summarize(results, names=None) -> pd.DataFrame:
    """One row per analysis, for batch runs."""
    rows = []
    for i, result in enumerate(results):
        rec = result.recommendation
        rows.append({
            'name': names[i] if names else i,
            'action': rec.action,
            'setback_temp': rec.setback_temp,
            'restart_time': rec.restart_time,
            'recovery_minutes': round(rec.recovery_hours * 60),
            'time_constant_hours': result.building_physics.time_constant_hours,
            'break_even_hours': result.building_physics.break_even_hours,
            'energy_saved_kwh': result.savings.energy_saved_kwh,
            'percent_saved': result.savings.percent_saved,
            'cost_saved_annual': result.savings.cost_saved_annual,
            'reason': rec.reason,
        })
    return pd.DataFrame(rows)


def plot_results(result, model):
    inputs = result.inputs
    rec = result.recommendation
    hours_total = inputs.absence_duration

    sweep = sweep_setbacks(model, inputs.desired_temp, inputs.outdoor_temp, hours_total)

    plt.figure(figsize=(12, 8))

    # Subplot 1: Indoor temperature over the absence
    plt.subplot(2, 1, 1)
    plt.plot([0, hours_total], [inputs.desired_temp] * 2, label='Maintain', color='grey', linewidth=2)
    if rec.simulation is not None:
        hours, temps = model.setback_trajectory(inputs.desired_temp, rec.simulation, inputs.outdoor_temp, hours_total)
        plt.plot(hours, temps, label=f'Setback to {rec.setback_temp:.0f}F', color='orange', linestyle='--', linewidth=2)
        plt.axvline(x=rec.restart_offset_hours, label=f'Restart {rec.restart_time}', color='green', alpha=0.6, linestyle=':')
    plt.axhline(y=inputs.outdoor_temp, label='Outdoor', color='blue', alpha=0.3)
    plt.ylabel("Temperature (F)")
    plt.xlabel("Hours since leaving")
    plt.title(f"{rec.action}: tau={result.building_physics.time_constant_hours:.1f}h, "
              f"break-even={result.building_physics.break_even_hours:.1f}h")
    plt.legend()
    plt.grid(True)

    # Subplot 2: Candidate energy curve
    plt.subplot(2, 1, 2)
    if not sweep.empty:
        feasible = sweep[sweep['feasible']]
        rejected = sweep[~sweep['feasible']]
        plt.plot(feasible['setback_temp'], feasible['total_kwh'], label='Feasible', color='red', marker='o')
        plt.plot(rejected['setback_temp'], rejected['total_kwh'], label='Rejected', color='grey',
                 marker='x', linestyle='None')
    plt.axhline(y=result.savings.energy_maintain_kwh, label='Maintain', color='black', linestyle='--')
    plt.xlabel("Setback Temperature (F)")
    plt.ylabel("Energy (kWh)")
    plt.legend(loc='upper right', fontsize='small')
    plt.grid(True)

    if not sweep.empty:
        plt.xticks(np.unique(sweep['setback_temp']))

    plt.tight_layout()
    plt.show()
