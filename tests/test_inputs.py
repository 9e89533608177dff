import math

import pytest

from thermaliq.inputs import (
    InvalidInput,
    MissingRequiredInput,
    ScanOverrides,
    format_clock_time,
    parse_clock_time,
    resolve_inputs,
)

BASE = {'floor_area': 2000, 'desired_temp': 72, 'outdoor_temp': 85, 'absence_duration': 8}


def test_defaults_fill_optional_fields():
    inputs = resolve_inputs(BASE)
    assert inputs.ceiling_height == 8.0
    assert inputs.num_floors == 1
    assert inputs.window_area_percent == 15.0
    assert inputs.insulation_quality == 'average'
    assert inputs.seer_rating == 14.0
    assert inputs.absence_start_time == '8:00 AM'
    assert inputs.absence_start_hours == 8.0


def test_missing_fields_named_in_order():
    with pytest.raises(MissingRequiredInput) as exc:
        resolve_inputs({'outdoor_temp': 85})
    assert exc.value.fields == ['floor_area', 'desired_temp', 'absence_duration']
    assert str(exc.value) == 'Missing required fields: floor_area, desired_temp, absence_duration'
    # Still a ValueError for callers that don't care about the subtype
    assert isinstance(exc.value, ValueError)


@pytest.mark.parametrize("blank", [None, '', '   ', float('nan'), 'n/a'])
def test_blank_required_values_are_missing(blank):
    with pytest.raises(MissingRequiredInput) as exc:
        resolve_inputs(dict(BASE, floor_area=blank))
    assert exc.value.fields == ['floor_area']


def test_camel_case_form_fields():
    inputs = resolve_inputs({
        'floorArea': '1800',
        'desiredTemp': '70',
        'outdoorTemp': 95,
        'absenceDuration': '9.5',
        'windowType': 'low_e',
        'zipCode': 80202,
        'utilityRate': '0.21',
        'numFloors': '2',
    })
    assert inputs.floor_area == 1800.0
    assert inputs.absence_duration == 9.5
    assert inputs.window_type == 'low_e_double'
    assert inputs.zip_code == '80202'
    assert inputs.electricity_rate == pytest.approx(0.21)
    assert inputs.num_floors == 2
    assert isinstance(inputs.num_floors, int)


def test_snake_case_wins_over_alias():
    inputs = resolve_inputs(dict(BASE, floorArea=999))
    assert inputs.floor_area == 2000


@pytest.mark.parametrize("rating", [None, 0, '0'])
def test_unset_seer_derives_from_equipment(rating):
    inputs = resolve_inputs(dict(BASE, seer_rating=rating))
    assert inputs.seer_rating is None


def test_none_optional_uses_default():
    inputs = resolve_inputs(dict(BASE, ceiling_height=None, monthly_electric_bill=float('nan')))
    assert inputs.ceiling_height == 8.0
    assert inputs.monthly_electric_bill is None


def test_unknown_fields_ignored():
    inputs = resolve_inputs(dict(BASE, favorite_color='teal'))
    assert not hasattr(inputs, 'favorite_color')


@pytest.mark.parametrize("field,value", [
    ('floor_area', -10),
    ('ceiling_height', 0),
    ('absence_duration', 0),
    ('window_area_percent', 100),
    ('num_floors', 0),
    ('num_exterior_doors', -1),
    ('seer_rating', -5),
    ('absence_start_time', 'lunchtime'),
    ('ceiling_height', 'tall'),
])
def test_invalid_values(field, value):
    with pytest.raises(InvalidInput):
        resolve_inputs(dict(BASE, **{field: value}))


def test_scan_overrides_win_over_form():
    scan = ScanOverrides(floor_area=300.0, ceiling_height=9.0)
    inputs = resolve_inputs(dict(BASE, ceiling_height=8, window_area_percent=20), scan=scan)
    assert inputs.floor_area == 300.0
    assert inputs.ceiling_height == 9.0
    # Not measured by the scan: form value kept
    assert inputs.window_area_percent == 20.0


def test_scan_supplies_missing_floor_area():
    inputs = resolve_inputs({'desired_temp': 72, 'outdoor_temp': 85, 'absence_duration': 8},
                            scan=ScanOverrides(floor_area=450.0))
    assert inputs.floor_area == 450.0


@pytest.mark.parametrize("text,hours", [
    ('8:00 AM', 8.0),
    ('8 PM', 20.0),
    ('12:30 am', 0.5),
    ('12:00 PM', 12.0),
    ('17:45', 17.75),
])
def test_parse_clock_time(text, hours):
    assert math.isclose(parse_clock_time(text), hours)


@pytest.mark.parametrize("hours,text", [
    (0.0, '12:00 AM'),
    (12.0, '12:00 PM'),
    (16.0, '4:00 PM'),
    (14.75, '2:45 PM'),
    (25.5, '1:30 AM'),
    (-0.5, '11:30 PM'),
])
def test_format_clock_time(hours, text):
    assert format_clock_time(hours) == text
