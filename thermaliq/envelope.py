"""
Building envelope: geometry, per-surface area and U-factor, and the
area-weighted effective U-factor.
"""
import logging
import math
from dataclasses import dataclass

from .constants import (
    DEFAULT_WALL_R_VALUE,
    DEFAULT_WINDOW_U_FACTOR,
    DOOR_AREA_SQFT,
    DOOR_U_FACTOR,
    FLOOR_U_FACTOR,
    FOOTPRINT_ASPECT_RATIO,
    R_VALUE_MATRIX,
    ROOF_R_MULTIPLIER,
    WINDOW_U_FACTORS,
)

_LOGGER = logging.getLogger(__name__)

SURFACES = ('walls', 'windows', 'doors', 'roof', 'floor')


@dataclass(frozen=True)
class Surface:
    area: float      # ft2
    u_factor: float  # BTU/(hr.ft2.F)

    @property
    def r_value(self):
        return 1.0 / self.u_factor

    @property
    def ua(self):
        return self.area * self.u_factor


@dataclass(frozen=True)
class Geometry:
    width: float
    length: float
    perimeter: float
    wall_height: float
    footprint_area: float


@dataclass(frozen=True)
class EnvelopeComponents:
    walls: Surface
    windows: Surface
    doors: Surface
    roof: Surface
    floor: Surface
    volume: float      # ft3
    geometry: Geometry

    def surfaces(self):
        return {name: getattr(self, name) for name in SURFACES}

    @property
    def total_area(self):
        return sum(s.area for s in self.surfaces().values())

    @property
    def ua(self):
        """Overall conductance, BTU/(hr.F)."""
        return sum(s.ua for s in self.surfaces().values())

    @property
    def effective_u_factor(self):
        return self.ua / self.total_area


def wall_r_value(insulation_quality, construction_era):
    r_value = R_VALUE_MATRIX.get(insulation_quality, {}).get(construction_era)
    if r_value is None:
        _LOGGER.warning("No wall R-value for insulation=%r era=%r, using R-%s",
                        insulation_quality, construction_era, DEFAULT_WALL_R_VALUE)
        return DEFAULT_WALL_R_VALUE
    return float(r_value)


def window_u_factor(window_type):
    u = WINDOW_U_FACTORS.get(window_type)
    if u is None:
        _LOGGER.warning("Unknown window type %r, using U-%s", window_type, DEFAULT_WINDOW_U_FACTOR)
        return DEFAULT_WINDOW_U_FACTOR
    return u


def u_factors(inputs):
    r_wall = wall_r_value(inputs.insulation_quality, inputs.construction_era)
    return {
        'walls': 1.0 / r_wall,
        'windows': window_u_factor(inputs.window_type),
        'doors': DOOR_U_FACTOR,
        'roof': 1.0 / (r_wall * ROOF_R_MULTIPLIER),
        'floor': FLOOR_U_FACTOR,
    }


def build_envelope(inputs) -> EnvelopeComponents:
    """
    Simplified rectangular building (1.5:1 footprint). Windows and doors are
    cut out of the gross wall; only single-storey buildings expose a slab.
    """
    footprint_area = inputs.floor_area / inputs.num_floors
    width = math.sqrt(footprint_area / FOOTPRINT_ASPECT_RATIO)
    length = width * FOOTPRINT_ASPECT_RATIO
    perimeter = 2 * (width + length)

    wall_height = inputs.ceiling_height * inputs.num_floors
    gross_wall_area = perimeter * wall_height

    window_area = gross_wall_area * (inputs.window_area_percent / 100.0)
    # Small buildings with many doors: openings can't exceed the wall
    door_area = min(inputs.num_exterior_doors * DOOR_AREA_SQFT, gross_wall_area - window_area)
    net_wall_area = gross_wall_area - window_area - door_area

    exposed_floor_area = footprint_area if inputs.num_floors == 1 else 0.0

    u = u_factors(inputs)
    envelope = EnvelopeComponents(
        walls=Surface(net_wall_area, u['walls']),
        windows=Surface(window_area, u['windows']),
        doors=Surface(door_area, u['doors']),
        roof=Surface(footprint_area, u['roof']),
        floor=Surface(exposed_floor_area, u['floor']),
        volume=inputs.floor_area * inputs.ceiling_height,
        geometry=Geometry(
            width=width,
            length=length,
            perimeter=perimeter,
            wall_height=wall_height,
            footprint_area=footprint_area,
        ),
    )
    _LOGGER.debug("Envelope: area=%.0f ft2, UA=%.1f BTU/hr/F, U_eff=%.4f",
                  envelope.total_area, envelope.ua, envelope.effective_u_factor)
    return envelope


def component_heat_transfer(envelope, t_indoor, t_outdoor):
    """BTU/hr into the building through each surface (negative = heat loss)."""
    delta_t = t_outdoor - t_indoor
    flows = {name: s.ua * delta_t for name, s in envelope.surfaces().items()}
    flows['total'] = envelope.ua * delta_t
    return flows
