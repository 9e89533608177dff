"""Overridable calibration constants for the setback engine."""
import dataclasses
import json
import logging
import os
import re
from dataclasses import dataclass, field

from . import constants

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """
    Empirically tuned policy numbers. None of these are physical law; they
    encode how aggressive the recommendation is and can be overridden per run.
    """
    construction_thermal_mass: dict = field(
        default_factory=lambda: dict(constants.CONSTRUCTION_THERMAL_MASS))
    participation_factor: float = constants.DEFAULT_PARTICIPATION_FACTOR
    insulation_participation_scale: dict = field(
        default_factory=lambda: dict(constants.INSULATION_PARTICIPATION_SCALE))
    break_even_multiplier: float = constants.BREAK_EVEN_MULTIPLIER
    min_savings_pct: float = constants.MIN_SAVINGS_PCT
    dt_hours: float = constants.DT_HOURS
    passive_drift_fraction: float = constants.PASSIVE_DRIFT_FRACTION
    active_drift_fraction: float = constants.ACTIVE_DRIFT_FRACTION
    active_drift_tau_multiple: float = constants.ACTIVE_DRIFT_TAU_MULTIPLE
    restart_buffer_hours: float = constants.RESTART_BUFFER_HOURS
    min_hold_hours: float = constants.MIN_HOLD_HOURS
    min_setback_offset: float = constants.MIN_SETBACK_OFFSET
    max_setback_offset: float = constants.MAX_SETBACK_OFFSET
    outdoor_margin: float = constants.OUTDOOR_MARGIN
    setback_search_step: float = constants.SETBACK_SEARCH_STEP
    recovery_capacity_factor: float = constants.RECOVERY_CAPACITY_FACTOR

    def __post_init__(self):
        if self.dt_hours <= 0:
            raise ValueError(f"dt_hours must be positive, got {self.dt_hours}")
        if self.setback_search_step <= 0:
            raise ValueError(f"setback_search_step must be positive, got {self.setback_search_step}")
        if self.recovery_capacity_factor <= 1.0:
            # At 1.0 the unit only matches the steady load and never pulls back
            raise ValueError("recovery_capacity_factor must be greater than 1.0")

    def with_overrides(self, **overrides):
        unknown = sorted(set(overrides) - {f.name for f in dataclasses.fields(self)})
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return dataclasses.replace(self, **overrides)


def load_config(filename):
    """
    Loads calibration overrides from a JSON file on top of the defaults.
    C-style // comments are allowed so users can annotate their tuning.
    """
    if not os.path.exists(filename):
        raise ValueError(f"Config file '{filename}' not found.")

    with open(filename, 'r') as f:
        content = re.sub(r'//.*', '', f.read())
    data = json.loads(content)
    data.pop('description', None)

    config = EngineConfig().with_overrides(**data)
    _LOGGER.info("Loaded engine config from %s (%d overrides)", filename, len(data))
    return config
