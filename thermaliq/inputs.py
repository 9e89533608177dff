"""Request inputs: defaulting, validation and form-field aliases."""
import dataclasses
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

_LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ['floor_area', 'desired_temp', 'outdoor_temp', 'absence_duration']

NUMERIC_FIELDS = [
    'floor_area', 'ceiling_height', 'num_floors', 'window_area_percent',
    'num_exterior_doors', 'desired_temp', 'outdoor_temp', 'absence_duration',
    'seer_rating', 'electricity_rate', 'monthly_electric_bill',
    'monthly_kwh_usage', 'days_per_week', 'weeks_per_year',
]

# camelCase keys posted by the mobile app
FORM_FIELD_ALIASES = {
    'floorArea': 'floor_area',
    'ceilingHeight': 'ceiling_height',
    'numFloors': 'num_floors',
    'windowAreaPercent': 'window_area_percent',
    'numExteriorDoors': 'num_exterior_doors',
    'constructionType': 'construction_type',
    'constructionEra': 'construction_era',
    'insulationQuality': 'insulation_quality',
    'windowType': 'window_type',
    'desiredTemp': 'desired_temp',
    'outdoorTemp': 'outdoor_temp',
    'absenceDuration': 'absence_duration',
    'absenceStartTime': 'absence_start_time',
    'seerRating': 'seer_rating',
    'hvacType': 'hvac_type',
    'hvacAge': 'hvac_age',
    'zipCode': 'zip_code',
    'utilityRate': 'electricity_rate',
    'electricity_rate_manual': 'electricity_rate',
    'monthlyElectricBill': 'monthly_electric_bill',
    'monthlyKwhUsage': 'monthly_kwh_usage',
    'daysPerWeek': 'days_per_week',
    'weeksPerYear': 'weeks_per_year',
}

WINDOW_TYPE_ALIASES = {
    'low_e': 'low_e_double',
}

CLOCK_FORMATS = ["%I:%M %p", "%I %p", "%H:%M"]


class MissingRequiredInput(ValueError):
    """Raised before any computation when required fields are absent."""

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class InvalidInput(ValueError):
    pass


@dataclass(frozen=True)
class BuildingInputs:
    """
    One analysis request. Every field except the four required ones has a
    default, so a resolved instance is always complete.
    """
    floor_area: float            # ft2, total conditioned
    desired_temp: float          # F
    outdoor_temp: float          # F
    absence_duration: float      # hours
    ceiling_height: float = 8.0  # ft
    num_floors: int = 1
    window_area_percent: float = 15.0
    num_exterior_doors: int = 2
    construction_type: str = 'wood_frame'
    construction_era: str = '1980_2000'
    insulation_quality: str = 'average'
    window_type: str = 'double_pane'
    absence_start_time: str = '8:00 AM'
    seer_rating: Optional[float] = 14.0  # None -> derive from age/type
    hvac_type: str = 'central_ac'
    hvac_age: str = '10_15'
    zip_code: str = '02134'
    electricity_rate: Optional[float] = None       # $/kWh, explicit
    monthly_electric_bill: Optional[float] = None  # $
    monthly_kwh_usage: Optional[float] = None
    days_per_week: float = 5.0
    weeks_per_year: float = 52.0

    @property
    def absence_start_hours(self):
        return parse_clock_time(self.absence_start_time)


@dataclass(frozen=True)
class ScanOverrides:
    """Geometry measured by a room scan. Any subset may be present."""
    floor_area: Optional[float] = None
    ceiling_height: Optional[float] = None
    window_area_percent: Optional[float] = None
    num_exterior_doors: Optional[int] = None


def _is_missing(value):
    if value is None:
        return True
    if isinstance(value, str):
        if value.strip() == '':
            return True
        try:
            float(value)
        except ValueError:
            return True
        return False
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _coerce_number(name, value):
    if value is None or isinstance(value, bool):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Field '{name}' must be numeric, got {value!r}")
    if math.isnan(number):
        return None
    return number


def parse_clock_time(t_str):
    """'8:00 AM', '8 PM' or '17:30' -> fractional hours since midnight."""
    text = str(t_str).strip().upper()
    for fmt in CLOCK_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).time()
        except ValueError:
            continue
        return parsed.hour + parsed.minute / 60.0
    raise InvalidInput(f"Unrecognized clock time: {t_str!r}")


def format_clock_time(hours):
    """Fractional hours (any value, wrapped to a day) -> 'h:mm AM'."""
    total_minutes = int(round(hours * 60)) % (24 * 60)
    h, m = divmod(total_minutes, 60)
    period = 'PM' if h >= 12 else 'AM'
    h12 = h % 12 or 12
    return f"{h12}:{m:02d} {period}"


def apply_scan_overrides(fields: dict, scan: Optional[ScanOverrides]) -> dict:
    """Scan measurements win over form values; missing scan fields fall back."""
    if scan is None:
        return fields
    merged = dict(fields)
    for key, value in dataclasses.asdict(scan).items():
        if value is not None:
            merged[key] = value
    return merged


def resolve_inputs(raw: dict, scan: Optional[ScanOverrides] = None) -> BuildingInputs:
    """
    Builds a complete BuildingInputs from a loosely-typed request dict.

    Accepts snake_case or the app's camelCase keys, numeric strings, and
    None/NaN for "not provided". Raises MissingRequiredInput naming every
    absent required field, InvalidInput for physically meaningless values.
    """
    fields = {}
    for key, value in raw.items():
        name = FORM_FIELD_ALIASES.get(key, key)
        # Explicit snake_case keys win over aliases
        if name in fields and key != name:
            continue
        fields[name] = value

    fields = apply_scan_overrides(fields, scan)

    missing = [name for name in REQUIRED_FIELDS if _is_missing(fields.get(name))]
    if missing:
        raise MissingRequiredInput(missing)

    known = {f.name for f in dataclasses.fields(BuildingInputs)}
    unknown = sorted(set(fields) - known)
    if unknown:
        _LOGGER.debug("Ignoring unrecognized input fields: %s", ", ".join(unknown))

    kwargs = {}
    for name in known:
        if name not in fields:
            continue
        value = fields[name]
        if name in NUMERIC_FIELDS:
            value = _coerce_number(name, value)
        if value is None and name != 'seer_rating':
            # None means "use the default" for everything but the rating,
            # where it selects the age/type-derived default
            continue
        kwargs[name] = value

    for name in ('num_floors', 'num_exterior_doors'):
        if name in kwargs:
            kwargs[name] = int(kwargs[name])
    if 'zip_code' in kwargs:
        kwargs['zip_code'] = str(kwargs['zip_code'])
    if 'seer_rating' in kwargs and not kwargs['seer_rating']:
        kwargs['seer_rating'] = None
    if 'window_type' in kwargs:
        kwargs['window_type'] = WINDOW_TYPE_ALIASES.get(kwargs['window_type'], kwargs['window_type'])

    inputs = BuildingInputs(**kwargs)
    validate_inputs(inputs)
    return inputs


def validate_inputs(inputs: BuildingInputs):
    if inputs.floor_area <= 0:
        raise InvalidInput(f"floor_area must be positive, got {inputs.floor_area}")
    if inputs.ceiling_height <= 0:
        raise InvalidInput(f"ceiling_height must be positive, got {inputs.ceiling_height}")
    if inputs.num_floors < 1:
        raise InvalidInput(f"num_floors must be at least 1, got {inputs.num_floors}")
    if inputs.absence_duration <= 0:
        raise InvalidInput(f"absence_duration must be positive, got {inputs.absence_duration}")
    if not 0 <= inputs.window_area_percent < 100:
        raise InvalidInput(f"window_area_percent must be in [0, 100), got {inputs.window_area_percent}")
    if inputs.num_exterior_doors < 0:
        raise InvalidInput(f"num_exterior_doors cannot be negative, got {inputs.num_exterior_doors}")
    if inputs.seer_rating is not None and inputs.seer_rating <= 0:
        raise InvalidInput(f"seer_rating must be positive, got {inputs.seer_rating}")
    parse_clock_time(inputs.absence_start_time)
