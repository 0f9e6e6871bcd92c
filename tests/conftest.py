"""Shared fixtures for the planet_builder test suite."""
import pytest

from planet_builder import PhysicalState, CompositionState, EARTH, EARTH_COMPOSITION


@pytest.fixture
def earth():
    return PhysicalState.from_params(EARTH)


@pytest.fixture
def earth_composition():
    return CompositionState.from_params(EARTH_COMPOSITION)


@pytest.fixture
def earth_params():
    return {'mass': 5.972e24, 'radius': 6371, 'density': 5515, 'rotation_rate': 24, 'axial_tilt': 23.5}


def make_composition(composition=None, pressure=1.0, thickness=100, coverage=50, depth=3.0, ice_caps=0,
                     albedo=0.3, temperature=288):
    atmosphere = {'pressure': pressure, 'thickness': thickness}
    if composition is not None:
        atmosphere['composition'] = composition
    return {
        'atmosphere': atmosphere,
        'water': {'coverage': coverage, 'depth': depth, 'ice_caps': ice_caps},
        'surface': {'albedo': albedo, 'temperature': temperature},
    }


@pytest.fixture
def composition_params():
    return make_composition
