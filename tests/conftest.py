"""Pytest configuration."""
import os
import sys

import pytest

# Add the repo root to sys.path so `thermaliq` and `main` import without installing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from thermaliq.config import EngineConfig  # noqa: E402
from thermaliq.inputs import resolve_inputs  # noqa: E402
from thermaliq.strategy import build_energy_model  # noqa: E402


SCENARIO_A = {
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
}


@pytest.fixture
def scenario_a():
    return dict(SCENARIO_A)


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def model_a(scenario_a, config):
    return build_energy_model(resolve_inputs(scenario_a), config)
