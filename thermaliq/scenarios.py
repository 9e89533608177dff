"""Reference buildings used for demos and regression checks."""

SCENARIOS = {
    'typical_workday': {
        'floor_area': 2000,
        'ceiling_height': 8,
        'num_floors': 1,
        'construction_type': 'wood_frame',
        'construction_era': '1980_2000',
        'insulation_quality': 'average',
        'window_type': 'double_pane',
        'desired_temp': 72,
        'outdoor_temp': 85,
        'absence_duration': 8,
        'absence_start_time': '8:00 AM',
        'monthly_electric_bill': 150,
    },
    'short_errand': {
        'floor_area': 2000,
        'ceiling_height': 8,
        'construction_type': 'wood_frame',
        'insulation_quality': 'average',
        'desired_temp': 72,
        'outdoor_temp': 85,
        'absence_duration': 2,
        'absence_start_time': '2:00 PM',
    },
    'weekend_trip': {
        'floor_area': 1800,
        'ceiling_height': 8,
        'construction_type': 'wood_frame',
        'insulation_quality': 'average',
        'desired_temp': 72,
        'outdoor_temp': 90,
        'absence_duration': 48,
        'absence_start_time': '8:00 AM',
        'monthly_electric_bill': 140,
    },
    'well_insulated_long': {
        'floor_area': 2200,
        'ceiling_height': 8,
        'insulation_quality': 'excellent',
        'construction_era': 'after_2010',
        'desired_temp': 72,
        'outdoor_temp': 88,
        'absence_duration': 24,
        'absence_start_time': '8:00 AM',
    },
    'poorly_insulated': {
        'floor_area': 1500,
        'ceiling_height': 8,
        'insulation_quality': 'poor',
        'construction_era': 'before_1980',
        'desired_temp': 72,
        'outdoor_temp': 85,
        'absence_duration': 10,
        'absence_start_time': '8:00 AM',
        'monthly_electric_bill': 160,
    },
    'heating_winter': {
        'floor_area': 2000,
        'ceiling_height': 8,
        'construction_type': 'wood_frame',
        'insulation_quality': 'good',
        'desired_temp': 68,
        'outdoor_temp': 25,
        'absence_duration': 9,
        'absence_start_time': '8:00 AM',
    },
}
