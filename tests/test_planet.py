import pytest

from planet_builder import Planet, PhysicalState, CompositionState, ValidationError, OceanColor
from planet_builder import EARTH, EARTH_COMPOSITION, MARS_COMPOSITION


def test_earth_end_to_end():
    physical = PhysicalState.from_params(EARTH)
    composition = CompositionState.from_params(EARTH_COMPOSITION)

    assert physical.get_calculated_properties()['surface_gravity'] == pytest.approx(9.81, abs=0.1)
    assert composition.get_effective_temperature() == pytest.approx(288 + composition.calculate_greenhouse_effect())
    assert composition.can_support_liquid_water() is True
    assert composition.get_dominant_gas() == 'N2'


@pytest.mark.parametrize('name', ['Earth', 'Mars', 'Jupiter', 'Moon'])
def test_every_preset_builds(name):
    planet = Planet.from_preset(name)
    assert planet.name == name
    assert planet.physical.is_density_consistent()


def test_borrowed_compositions():
    assert Planet.from_preset('Jupiter').composition == CompositionState.from_params(EARTH_COMPOSITION)
    assert Planet.from_preset('Moon').composition == CompositionState.from_params(MARS_COMPOSITION)


def test_unknown_preset():
    with pytest.raises(KeyError, match='Pluto'):
        Planet.from_preset('Pluto')


def test_preset_names():
    assert Planet.preset_names() == ['Earth', 'Mars', 'Jupiter', 'Moon']


def test_calculated_properties():
    props = Planet.from_preset('Earth').get_calculated_properties()
    assert props['surface_gravity'] == pytest.approx(9.81, abs=0.1)
    assert props['dominant_gas'] == 'N2'
    assert props['ocean_color'] is OceanColor.MEDIUM
    assert props['scale_height'] == pytest.approx(8.4, abs=0.2)


def test_scale_height_without_known_gas():
    planet = Planet.from_preset('Earth').with_composition(atmosphere={'composition': {'other': 100}})
    assert planet.calculate_scale_height() is None


def test_scale_height_without_pressure():
    planet = Planet.from_preset('Earth').with_composition(atmosphere={'pressure': 0})
    assert planet.calculate_scale_height() is None


def test_scale_height_with_effective_temperature_below_zero():
    planet = Planet.from_preset('Earth').with_composition(
        atmosphere={'composition': {'CO2': 100}, 'pressure': 0.01},
        surface={'temperature': 100},
    )
    assert planet.composition.get_effective_temperature() < 0
    assert planet.calculate_scale_height() is None
    assert planet.get_calculated_properties()['scale_height'] is None


def test_planet_is_immutable():
    earth = Planet.from_preset('Earth')
    with pytest.raises(AttributeError):
        earth.name = 'Terra'
    with pytest.raises(AttributeError):
        earth.physical = earth.physical.replace(radius=7000)


def test_edits_return_new_planets():
    earth = Planet.from_preset('Earth')
    edited = earth.with_physical(radius=7000).with_gas_percentage('CO2', 20)
    assert edited.physical.radius == 7000
    assert edited.composition.composition['CO2'] == 20
    assert earth.physical.radius == 6371
    assert earth.composition.composition['CO2'] == 0.04


def test_failed_edit_keeps_planet():
    earth = Planet.from_preset('Earth')
    with pytest.raises(ValidationError):
        earth.with_physical(axial_tilt=200)
    assert earth.physical.axial_tilt == 23.5


def test_from_params(earth_params, composition_params):
    planet = Planet.from_params(earth_params, composition_params({'N2': 79, 'O2': 21}), name='Terra')
    assert planet.name == 'Terra'
    assert planet.composition.get_dominant_gas() == 'N2'


def test_report():
    report = Planet.from_preset('Mars').report()
    assert report.startswith('=== Mars ===')
    assert 'Planet Physical Parameters:' in report
    assert 'Composition Parameters:' in report
    assert 'Atmospheric Scale Height:' in report
