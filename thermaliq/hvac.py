import logging

import numpy as np

from .constants import (
    ALTITUDE_DERATE_PER_1000FT,
    BTU_PER_KWH,
    DEFAULT_SEER,
    MIN_EFFECTIVE_SEER,
    SEER_BY_AGE,
    SEER_PER_COP,
    SEER_TYPE_ADJUSTMENT,
)

_LOGGER = logging.getLogger(__name__)


def default_seer(hvac_age, hvac_type):
    """Typical rating for equipment of a given age and type."""
    seer = SEER_BY_AGE.get(hvac_age)
    if seer is None:
        _LOGGER.warning("Unknown HVAC age %r, assuming SEER %s", hvac_age, SEER_BY_AGE['unknown'])
        seer = SEER_BY_AGE['unknown']
    return float(seer + SEER_TYPE_ADJUSTMENT.get(hvac_type, 0))


class HVACPerformance:
    """
    Electrical performance of the conditioning equipment, derated for altitude
    (thinner air moves less heat per unit of fan/compressor work).
    """

    def __init__(self, seer_rating=DEFAULT_SEER, altitude_ft=0.0, hvac_age='10_15', hvac_type='central_ac'):
        if seer_rating:
            self.nominal_seer = float(seer_rating)
        else:
            self.nominal_seer = default_seer(hvac_age, hvac_type)
        self.altitude_ft = float(altitude_ft)

        altitude_factor = 1 - ALTITUDE_DERATE_PER_1000FT * (self.altitude_ft / 1000.0)
        self.effective_seer = max(self.nominal_seer * altitude_factor, MIN_EFFECTIVE_SEER)
        self.cop = self.effective_seer / SEER_PER_COP

    @classmethod
    def from_inputs(cls, inputs, altitude_ft):
        return cls(
            seer_rating=inputs.seer_rating,
            altitude_ft=altitude_ft,
            hvac_age=inputs.hvac_age,
            hvac_type=inputs.hvac_type,
        )

    def power_for(self, load_btu_hr):
        """Electrical kW needed to move `load_btu_hr` (scalar or array)."""
        load_kw = np.abs(load_btu_hr) / BTU_PER_KWH
        power = load_kw / self.cop
        if np.ndim(power) == 0:
            return float(power)
        return power

    def __repr__(self):
        return (f"HVACPerformance(seer={self.nominal_seer:.1f}, effective={self.effective_seer:.1f}, "
                f"cop={self.cop:.2f}, altitude={self.altitude_ft:.0f} ft)")
