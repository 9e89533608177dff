"""
Federal and state HVAC rebate eligibility.
Independent of the thermal engine; composed into the response afterwards.
"""
from dataclasses import dataclass, field

from .location import state_from_zip

QUALIFYING_EQUIPMENT = [
    'heat_pump',
    'heat_pump_water_heater',
    'central_ac',
    'furnace',
    'weatherization',
]

EQUIPMENT_NAMES = {
    'heat_pump': 'Heat Pump',
    'heat_pump_water_heater': 'Heat Pump Water Heater',
    'central_ac': 'Central AC',
    'furnace': 'Furnace',
}

STATE_PROGRAMS = {
    'CA': ('California', 'TECH Clean California'),
    'NY': ('New York', 'NYS Clean Heat'),
    'MA': ('Massachusetts', 'Mass Save'),
    'OR': ('Oregon', 'Energy Trust Oregon'),
    'TX': ('Texas', 'Utility rebate programs'),
    'FL': ('Florida', 'Utility rebates (FPL, Duke, etc.)'),
    'PA': ('Pennsylvania', 'PECO / Duquesne Light rebates'),
}

FEDERAL_DETAILS = {
    'credit_percent': 30,
    'heat_pump_cap': 2000,
    'annual_cap': 3200,
    'valid_through': '12/31/2025',
    'form': 'IRS Form 5695',
}


@dataclass
class RebateEligibility:
    federal_eligible: bool
    federal_reason: str
    state_eligible: bool
    state_reason: str
    state: str
    federal_details: dict = field(default_factory=lambda: dict(FEDERAL_DETAILS))


def qualifies_for_federal_rebate(equipment_selected, meets_efficiency):
    if not any(eq in QUALIFYING_EQUIPMENT for eq in equipment_selected):
        return False
    # "yes" / "not_sure" / unanswered are treated optimistically
    return meets_efficiency != 'no'


def _federal_reason(eligible, equipment_selected, meets_efficiency):
    if eligible:
        names = [EQUIPMENT_NAMES[eq] for eq in equipment_selected if eq in EQUIPMENT_NAMES]
        if names:
            return f"{' or '.join(names)} qualifies for Energy Efficient Home Improvement Credit (IRC 25C)"
        if 'weatherization' in equipment_selected:
            return 'Weatherization/Insulation upgrades qualify for Energy Efficient Home Improvement Credit (IRC 25C)'
        return 'Selected equipment qualifies for Federal tax credits'

    if not equipment_selected:
        return ('No qualifying equipment selected. Select heat pump, central AC, furnace, '
                'or weatherization to qualify.')
    if meets_efficiency == 'no':
        return 'Equipment does not meet IRS efficiency criteria (ENERGY STAR or program requirements)'
    return 'Selected equipment does not qualify for Federal rebates'


def calculate_rebate_eligibility(zip_code, equipment_selected=None, meets_efficiency=None):
    equipment_selected = list(equipment_selected or [])

    federal = qualifies_for_federal_rebate(equipment_selected, meets_efficiency)
    federal_reason = _federal_reason(federal, equipment_selected, meets_efficiency)

    state = state_from_zip(zip_code)
    if state in STATE_PROGRAMS:
        name, program = STATE_PROGRAMS[state]
        state_eligible = True
        state_reason = f"{name} has active rebate program: {program}"
    elif state:
        state_eligible = False
        state_reason = f"{state} does not have an active statewide HVAC rebate program"
    else:
        state_eligible = False
        state_reason = 'No active statewide HVAC rebate program for your location'

    return RebateEligibility(
        federal_eligible=federal,
        federal_reason=federal_reason,
        state_eligible=state_eligible,
        state_reason=state_reason,
        state=state or 'Unknown',
    )
