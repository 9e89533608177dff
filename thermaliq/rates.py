"""Electricity rate resolution."""
import logging

from .constants import (
    DEFAULT_ELECTRICITY_RATE,
    STATE_ELECTRICITY_RATES,
    TYPICAL_MONTHLY_KWH,
    TYPICAL_MONTHLY_KWH_LARGE,
)
from .location import state_from_zip

_LOGGER = logging.getLogger(__name__)

RATE_SOURCE_MANUAL = 'manual'
RATE_SOURCE_BILL_USAGE = 'bill_usage'
RATE_SOURCE_BILL_ESTIMATE = 'bill_estimate'
RATE_SOURCE_STATE = 'state_table'
RATE_SOURCE_DEFAULT = 'default'


def typical_monthly_kwh(floor_area):
    for max_area, kwh in TYPICAL_MONTHLY_KWH:
        if floor_area < max_area:
            return kwh
    return TYPICAL_MONTHLY_KWH_LARGE


def resolve_electricity_rate(inputs):
    """
    Returns (rate $/kWh, source). Precedence: explicit rate, bill / usage,
    bill / typical usage for the floor area, state table, flat default.
    """
    if inputs.electricity_rate:
        return float(inputs.electricity_rate), RATE_SOURCE_MANUAL

    bill = inputs.monthly_electric_bill
    if bill and inputs.monthly_kwh_usage:
        return bill / inputs.monthly_kwh_usage, RATE_SOURCE_BILL_USAGE

    if bill:
        return bill / typical_monthly_kwh(inputs.floor_area), RATE_SOURCE_BILL_ESTIMATE

    state = state_from_zip(inputs.zip_code)
    if state in STATE_ELECTRICITY_RATES:
        return STATE_ELECTRICITY_RATES[state], RATE_SOURCE_STATE

    _LOGGER.debug("No rate data for ZIP %s (state %s), using default", inputs.zip_code, state)
    return DEFAULT_ELECTRICITY_RATE, RATE_SOURCE_DEFAULT
