import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

import numpy as np

from ...constants import (COMPOSITION_RANGES, COMPOSITION_SUM_TOLERANCE, DEFAULT_COMPOSITION, MOLECULAR_WEIGHTS,
                          FREEZING_POINT, BOILING_POINT, TRIPLE_POINT_PRESSURE)
from ..errors import ValidationError, ValidationResult, StateResult
from .physical import is_number, normalize_keys

logger = logging.getLogger(__name__)

SECTIONS = ('atmosphere', 'water', 'surface')
ALIASES = {'iceCaps': 'ice_caps'}
ERROR_PREFIX = "Invalid composition parameters"


class OceanColor(Enum):
    """Ocean appearance classes, valued with the packed RGB the renderer paints them with."""
    FROZEN = 0xddeeff
    DEEP = 0x0a1a3a
    MEDIUM = 0x1a4d7a
    SHALLOW = 0x4a8dba


def _check_range(errors: list, record: Mapping, key: str, label: str, unit: str = ''):
    low, high = COMPOSITION_RANGES[key]
    value = record.get(key)
    if not is_number(value):
        errors.append(f"{label} must be a number")
    elif not low <= value <= high:
        errors.append(f"{label} must be between {low:g} and {high:g}{unit}")


def validate_composition_params(params: Mapping | None) -> ValidationResult:
    """
    Check the atmosphere, water and surface records without raising.

    Errors come out in a fixed order: atmosphere presence, composition sum, individual gas percentages, pressure,
    thickness, water presence, water fields, surface presence, surface fields.
    """
    if not isinstance(params, Mapping):
        params = {}
    errors = []

    atmosphere = params.get('atmosphere')
    if not isinstance(atmosphere, Mapping):
        errors.append("Atmosphere parameters are required")
    else:
        composition = atmosphere.get('composition')
        if isinstance(composition, Mapping) and composition:
            total = sum(value for value in composition.values() if is_number(value))
            if abs(total - 100) > COMPOSITION_SUM_TOLERANCE:
                errors.append(f"Atmospheric composition must sum to 100% (currently {total:.1f}%)")
            low, high = COMPOSITION_RANGES['percentage']
            for gas, percentage in composition.items():
                if not is_number(percentage):
                    errors.append(f"{gas} percentage must be a number")
                elif not low <= percentage <= high:
                    errors.append(f"{gas} percentage must be between {low:g} and {high:g}")
        elif isinstance(composition, Mapping):
            errors.append("Atmospheric composition must sum to 100% (currently 0.0%)")
        elif composition is not None:
            errors.append("Atmospheric composition must be a mapping of gas percentages")

        for key, label, unit in (('pressure', 'Atmospheric pressure', ' atm'),
                                 ('thickness', 'Atmospheric thickness', ' km')):
            if atmosphere.get(key) is None:
                errors.append(f"{label} is required")
            else:
                _check_range(errors, atmosphere, key, label, unit)

    water = params.get('water')
    if not isinstance(water, Mapping):
        errors.append("Water parameters are required")
    else:
        water = normalize_keys(water, ALIASES)
        _check_range(errors, water, 'coverage', "Water coverage", "%")
        _check_range(errors, water, 'depth', "Water depth", " km")
        _check_range(errors, water, 'ice_caps', "Ice caps", "%")

    surface = params.get('surface')
    if not isinstance(surface, Mapping):
        errors.append("Surface parameters are required")
    else:
        _check_range(errors, surface, 'albedo', "Albedo")
        _check_range(errors, surface, 'temperature', "Temperature", " K")

    return ValidationResult(tuple(errors))


@dataclass(frozen=True)
class Atmosphere:
    composition: Mapping  # gas -> %
    pressure: float  # atm
    thickness: float  # km


@dataclass(frozen=True)
class Water:
    coverage: float  # % of the surface
    depth: float  # km
    ice_caps: float  # % frozen at the poles


@dataclass(frozen=True)
class Surface:
    albedo: float
    temperature: float  # K


class CompositionState:
    def __init__(self, atmosphere: Mapping | None = None, water: Mapping | None = None,
                 surface: Mapping | None = None):
        params = {'atmosphere': atmosphere, 'water': water, 'surface': surface}
        validation = validate_composition_params(params)
        if not validation.is_valid:
            logger.debug("Rejected composition parameters with %d error(s)", len(validation.errors))
            raise ValidationError(validation.errors, ERROR_PREFIX)

        composition = atmosphere.get('composition')
        if composition is None:
            composition = DEFAULT_COMPOSITION
        water = normalize_keys(water, ALIASES)

        # Insertion order of the gases is kept; `get_dominant_gas` breaks ties with it.
        self._atmosphere = Atmosphere(composition=MappingProxyType(dict(composition)),
                                      pressure=atmosphere['pressure'],
                                      thickness=atmosphere['thickness'])
        self._water = Water(coverage=water['coverage'], depth=water['depth'], ice_caps=water['ice_caps'])
        self._surface = Surface(albedo=surface['albedo'], temperature=surface['temperature'])

    @classmethod
    def from_params(cls, params: Mapping) -> 'CompositionState':
        if not isinstance(params, Mapping):
            params = {}
        return cls(**{section: params.get(section) for section in SECTIONS})

    @classmethod
    def create(cls, params: Mapping) -> StateResult:
        validation = validate_composition_params(params)
        if not validation.is_valid:
            return StateResult(errors=validation.errors, prefix=ERROR_PREFIX)
        return StateResult(state=cls.from_params(params), prefix=ERROR_PREFIX)

    @property
    def atmosphere(self) -> Atmosphere:
        return self._atmosphere

    @property
    def water(self) -> Water:
        return self._water

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def composition(self) -> Mapping:
        return self._atmosphere.composition

    def as_dict(self) -> dict:
        return {
            'atmosphere': {
                'composition': dict(self.composition),
                'pressure': self.atmosphere.pressure,
                'thickness': self.atmosphere.thickness,
            },
            'water': {
                'coverage': self.water.coverage,
                'depth': self.water.depth,
                'ice_caps': self.water.ice_caps,
            },
            'surface': {
                'albedo': self.surface.albedo,
                'temperature': self.surface.temperature,
            },
        }

    def replace(self, atmosphere: Mapping | None = None, water: Mapping | None = None,
                surface: Mapping | None = None) -> 'CompositionState':
        """
        New snapshot with the given sub-records merged into the current ones. Nothing is rebalanced: a new
        `composition` replaces the old mapping as a whole and must sum to 100% on its own.
        """
        params = self.as_dict()
        for section, changes in zip(SECTIONS, (atmosphere, water, surface)):
            if changes:
                aliases = ALIASES if section == 'water' else {}
                params[section].update(normalize_keys(changes, aliases))
        return CompositionState.from_params(params)

    def with_gas_percentage(self, gas: str, percentage: float, balance_gas: str = 'N2') -> 'CompositionState':
        """
        Set one gas and let `balance_gas` absorb the difference so the mixture still adds up to 100%.
        :param gas: Gas symbol to set; appended at the end if not present yet.
        :param percentage: New percentage for `gas`.
        :param balance_gas: Gas whose share becomes max(0, 100 - percentage - everything else).
        :raises ValidationError: If the result is still invalid, e.g. the other gases alone exceed 100 - percentage.
        """
        if gas == balance_gas:
            raise ValueError(f"Cannot rebalance '{gas}' against itself.")
        composition = dict(self.composition)
        composition[gas] = percentage
        if is_number(percentage):
            others = sum(value for key, value in composition.items() if key not in (gas, balance_gas))
            composition[balance_gas] = max(0.0, 100 - percentage - others)
        return self.replace(atmosphere={'composition': composition})

    def get_dominant_gas(self) -> str:
        max_percentage = 0
        dominant_gas = 'unknown'
        for gas, percentage in self.composition.items():
            if percentage > max_percentage:
                max_percentage = percentage
                dominant_gas = gas
        return dominant_gas

    def get_atmosphere_color(self) -> tuple[float, float, float]:
        comp = self.composition
        n2, o2, co2, ch4 = (comp.get(gas, 0) for gas in ('N2', 'O2', 'CO2', 'CH4'))

        if n2 > 60 and o2 > 15:
            return (0.3, 0.6, 1.0)  # Light blue, Earth-like
        if co2 > 50:
            return (1.0, 0.5, 0.3)  # Orange-red, Venus/Mars
        if 'CH4' in comp and ch4 > 30:
            return (1.0, 0.7, 0.4)  # Orange
        if n2 > 80 and ('O2' not in comp or o2 < 5):
            return (1.0, 0.8, 0.5)  # Amber, Titan
        return (0.5, 0.7, 0.9)

    def calculate_greenhouse_effect(self) -> float:
        """
        Temperature change from CO2 and CH4, in K.

        Scales with ln(pressure), so the result is negative below 1 atm. The log is floored at 0.01 atm.
        """
        co2_fraction = self.composition.get('CO2', 0) / 100
        ch4_fraction = self.composition.get('CH4', 0) / 100
        pressure_factor = np.log(max(0.01, self.atmosphere.pressure))
        return float((co2_fraction * 30 + ch4_fraction * 20) * pressure_factor)

    def get_effective_temperature(self) -> float:
        return self.surface.temperature + self.calculate_greenhouse_effect()

    def can_support_liquid_water(self) -> bool:
        temperature = self.get_effective_temperature()
        pressure = self.atmosphere.pressure
        min_temperature = FREEZING_POINT - (1 - pressure) * 10
        max_temperature = BOILING_POINT + (pressure - 1) * 20
        return min_temperature <= temperature <= max_temperature and pressure > TRIPLE_POINT_PRESSURE

    def get_ocean_color_class(self) -> OceanColor:
        if self.get_effective_temperature() < FREEZING_POINT or self.water.ice_caps > 80:
            return OceanColor.FROZEN
        if self.water.depth > 5:
            return OceanColor.DEEP
        if self.water.depth > 1:
            return OceanColor.MEDIUM
        return OceanColor.SHALLOW

    def get_ocean_color(self) -> int:
        return self.get_ocean_color_class().value

    def get_mean_molar_mass(self) -> float | None:
        """Percentage-weighted molar mass (kg/mol) over the gases with a known molecular weight."""
        known = {gas: pct for gas, pct in self.composition.items() if gas in MOLECULAR_WEIGHTS and pct > 0}
        total = sum(known.values())
        if total == 0:
            return None
        return sum(MOLECULAR_WEIGHTS[gas] * pct for gas, pct in known.items()) / total

    def get_calculated_properties(self) -> dict:
        return {
            'dominant_gas': self.get_dominant_gas(),
            'atmosphere_color': self.get_atmosphere_color(),
            'greenhouse_effect': self.calculate_greenhouse_effect(),
            'effective_temperature': self.get_effective_temperature(),
            'can_support_liquid_water': self.can_support_liquid_water(),
            'ocean_color': self.get_ocean_color_class(),
        }

    def report(self) -> str:
        composition = ", ".join(f"{gas}: {pct:g}%" for gas, pct in self.composition.items())
        return "\n".join([
            "Composition Parameters:",
            "",
            "Atmosphere:",
            f"  Composition: {composition}",
            f"  Dominant Gas: {self.get_dominant_gas()}",
            f"  Pressure: {self.atmosphere.pressure:.2f} atm",
            f"  Thickness: {self.atmosphere.thickness:.1f} km",
            f"  Greenhouse Effect: {self.calculate_greenhouse_effect():+.1f} K",
            "",
            "Water:",
            f"  Coverage: {self.water.coverage:.1f}%",
            f"  Depth: {self.water.depth:.2f} km",
            f"  Ice Caps: {self.water.ice_caps:.1f}%",
            "",
            "Surface:",
            f"  Albedo: {self.surface.albedo:.2f}",
            f"  Base Temperature: {self.surface.temperature:.1f} K",
            f"  Effective Temperature: {self.get_effective_temperature():.1f} K",
            f"  Can Support Liquid Water: {'Yes' if self.can_support_liquid_water() else 'No'}",
        ])

    def __str__(self):
        return self.report()

    def __eq__(self, other):
        if not isinstance(other, CompositionState):
            return NotImplemented
        return self.as_dict() == other.as_dict() and list(self.composition) == list(other.composition)

    __hash__ = None
