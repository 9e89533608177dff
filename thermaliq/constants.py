"""
Static lookup tables and calibration defaults for the setback engine.
These are read-only process-wide constants; overridable calibration lives in
config.EngineConfig, which takes its defaults from here.
"""

# Unit Conversions
BTU_PER_KWH = 3412.0
SEER_PER_COP = 3.412          # SEER (BTU/Wh) -> COP
WEEKS_PER_MONTH = 4.33

# --- ENVELOPE GEOMETRY ---
FOOTPRINT_ASPECT_RATIO = 1.5  # length : width
DOOR_AREA_SQFT = 21.0         # 3 ft x 7 ft
DOOR_U_FACTOR = 0.50
FLOOR_U_FACTOR = 0.10         # slab-on-grade
ROOF_R_MULTIPLIER = 1.5       # roofs typically better insulated than walls
DEFAULT_WALL_R_VALUE = 13.0
DEFAULT_WINDOW_U_FACTOR = 0.49

# Wall R-value (hr.ft2.F/BTU) by insulation quality x construction era
R_VALUE_MATRIX = {
    'poor': {
        'before_1980': 8,
        '1980_2000': 10,
        '2000_2010': 11,
        'after_2010': 13,
    },
    'average': {
        'before_1980': 11,
        '1980_2000': 13,
        '2000_2010': 15,
        'after_2010': 19,
    },
    'good': {
        'before_1980': 15,
        '1980_2000': 19,
        '2000_2010': 21,
        'after_2010': 25,
    },
    'excellent': {
        'before_1980': 19,
        '1980_2000': 25,
        '2000_2010': 30,
        'after_2010': 38,
    },
}

WINDOW_U_FACTORS = {
    'single_pane': 1.04,
    'double_pane': 0.49,
    'triple_pane': 0.27,
    'low_e_double': 0.33,
}

# --- THERMAL MASS (calibrated, not first-principles) ---
# Effective volumetric heat capacity of the thermally active mass, BTU/(ft3.F).
# Tuned so single-storey homes land in a 2-10 hr time constant band.
CONSTRUCTION_THERMAL_MASS = {
    'wood_frame': 0.11,
    'mixed': 0.22,
    'concrete_block': 0.26,
    'brick': 0.35,
    'concrete': 0.53,
}
DEFAULT_CONSTRUCTION_TYPE = 'wood_frame'

DEFAULT_PARTICIPATION_FACTOR = 0.85
# Well-insulated shells keep more interior mass near setpoint
INSULATION_PARTICIPATION_SCALE = {
    'poor': 1.0,
    'average': 1.0,
    'good': 1.08,
    'excellent': 1.15,
}
MAX_PARTICIPATION = 1.0

# --- HVAC ---
DEFAULT_SEER = 14.0
MIN_EFFECTIVE_SEER = 8.0
ALTITUDE_DERATE_PER_1000FT = 0.04
SEER_BY_AGE = {
    'under_5': 16,
    '5_10': 14,
    '10_15': 13,
    '15_plus': 10,
    'unknown': 13,
}
SEER_TYPE_ADJUSTMENT = {
    'heat_pump': 1,
    'window_unit': -2,
}

# --- STRATEGY / SIMULATION CALIBRATION ---
BREAK_EVEN_MULTIPLIER = 2.5        # t_be = 2.5 * tau
MIN_SAVINGS_PCT = 3.0              # setback must beat maintain by this margin
DT_HOURS = 0.05                    # 3 minute integration step
PASSIVE_DRIFT_FRACTION = 0.4       # natural drift allowed if it fits in 40% of absence
ACTIVE_DRIFT_FRACTION = 0.3        # otherwise drift phase capped at 30% of absence...
ACTIVE_DRIFT_TAU_MULTIPLE = 2.0    # ...or 2 tau, whichever is shorter
RESTART_BUFFER_HOURS = 0.25
MIN_HOLD_HOURS = 0.5
MIN_SETBACK_OFFSET = 2.0           # F
MAX_SETBACK_OFFSET = 15.0          # F
OUTDOOR_MARGIN = 2.0               # F, setback never closer than this to outdoor
SETBACK_SEARCH_STEP = 1.0          # F
RECOVERY_CAPACITY_FACTOR = 2.0     # recovery output as a multiple of the steady load

# --- LOCATION / RATES ---
DEFAULT_ALTITUDE_FT = 500.0
ALTITUDE_BY_ZIP_PREFIX = {
    '80': 5280, '84': 4500, '87': 5000,
    '33': 0, '90': 0, '98': 0, '02': 20, '10': 50,
    '75': 500, '30': 1000, '85': 1100,
}

# (first, last) two-digit ZIP prefix -> state
ZIP_PREFIX_STATES = [
    ((1, 2), 'MA'),
    ((3, 14), 'NY'),
    ((15, 19), 'PA'),
    ((20, 22), 'VA'),
    ((30, 31), 'GA'),
    ((32, 34), 'FL'),
    ((60, 62), 'IL'),
    ((75, 79), 'TX'),
    ((80, 81), 'CO'),
    ((85, 86), 'AZ'),
    ((90, 96), 'CA'),
    ((97, 97), 'OR'),
    ((98, 99), 'WA'),
]

DEFAULT_ELECTRICITY_RATE = 0.13    # $/kWh
STATE_ELECTRICITY_RATES = {
    'MA': 0.22, 'CT': 0.21, 'NH': 0.20, 'RI': 0.20, 'CA': 0.19,
    'HI': 0.28, 'AK': 0.23, 'NY': 0.18, 'VT': 0.18,
    'FL': 0.12, 'TX': 0.12, 'LA': 0.10, 'WA': 0.10,
    'ID': 0.10, 'UT': 0.11, 'WY': 0.11, 'OR': 0.11,
}

# Typical monthly usage (kWh) by floor area, for bill-only rate estimates
TYPICAL_MONTHLY_KWH = [
    (1200, 600),
    (2500, 900),
]
TYPICAL_MONTHLY_KWH_LARGE = 1200
