import math
import logging
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from numbers import Real

import numpy as np

from ...constants import GRAVITATIONAL_CONSTANT, PARAMETER_RANGES, DENSITY_TOLERANCE
from ...math_utils.vector_utils import tilted_axis
from ..errors import ValidationError, ValidationResult, StateResult

logger = logging.getLogger(__name__)

FIELDS = ('mass', 'radius', 'density', 'rotation_rate', 'axial_tilt')
ALIASES = {'rotationRate': 'rotation_rate', 'axialTilt': 'axial_tilt'}
LABELS = {
    'mass': ('Mass', 'kg'),
    'radius': ('Radius', 'km'),
    'density': ('Density', 'kg/m³'),
    'rotation_rate': ('Rotation rate', 'hours'),
    'axial_tilt': ('Axial tilt', 'degrees'),
}
ERROR_PREFIX = "Invalid physical parameters"


def is_number(value) -> bool:
    """Finite real number; booleans don't count."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def normalize_keys(params: Mapping | None, aliases: dict) -> dict:
    if not isinstance(params, Mapping):
        return {}
    return {aliases.get(key, key): value for key, value in params.items()}


def validate_physical_params(params: Mapping | None) -> ValidationResult:
    """
    Check the five physical fields against their ranges, without raising.
    :param params: Mapping with `mass`, `radius`, `density`, `rotation_rate` (or `rotationRate`) and `axial_tilt`
        (or `axialTilt`). Missing keys are reported as errors.
    :return: `ValidationResult` listing every violation, in field order.
    """
    params = normalize_keys(params, ALIASES)
    errors = []
    for name in FIELDS:
        label, unit = LABELS[name]
        value = params.get(name)
        low, high = PARAMETER_RANGES[name]
        if not is_number(value):
            errors.append(f"{label} must be a number")
        elif name != 'axial_tilt' and value <= 0:
            # Axial tilt may be 0
            errors.append(f"{label} must be positive")
        elif not low <= value <= high:
            errors.append(f"{label} must be between {low:g} and {high:g} {unit}")
    return ValidationResult(tuple(errors))


@dataclass(frozen=True)
class PhysicalState:
    mass: float = None  # kg
    radius: float = None  # km
    density: float = None  # kg/m³
    rotation_rate: float = None  # hours per rotation
    axial_tilt: float = None  # degrees

    def __post_init__(self):
        validation = validate_physical_params(self.as_dict())
        if not validation.is_valid:
            logger.debug("Rejected physical parameters with %d error(s)", len(validation.errors))
            raise ValidationError(validation.errors, ERROR_PREFIX)
        if not self.is_density_consistent():
            logger.debug("Density %.1f kg/m³ differs from mass/volume (%.1f kg/m³) by more than %.0f%%",
                         self.density, self.calculate_density_from_mass(), DENSITY_TOLERANCE * 100)

    @classmethod
    def from_params(cls, params: Mapping) -> 'PhysicalState':
        """Build from a record such as a preset; keys outside the five fields are ignored."""
        params = normalize_keys(params, ALIASES)
        return cls(**{name: params.get(name) for name in FIELDS})

    @classmethod
    def create(cls, params: Mapping) -> StateResult:
        validation = validate_physical_params(params)
        if not validation.is_valid:
            return StateResult(errors=validation.errors, prefix=ERROR_PREFIX)
        return StateResult(state=cls.from_params(params), prefix=ERROR_PREFIX)

    def replace(self, **changes) -> 'PhysicalState':
        """New snapshot with `changes` applied; the whole field set is validated again."""
        params = self.as_dict()
        params.update(normalize_keys(changes, ALIASES))
        unknown = set(params) - set(FIELDS)
        if unknown:
            raise TypeError(f"Unknown physical parameter(s): {', '.join(sorted(unknown))}")
        return PhysicalState(**params)

    def as_dict(self) -> dict:
        return asdict(self)

    @property
    def radius_meters(self) -> float:
        return self.radius * 1000

    def calculate_surface_gravity(self) -> float:
        """g = G * M / r², in m/s²"""
        return float(GRAVITATIONAL_CONSTANT * self.mass / self.radius_meters ** 2)

    def calculate_escape_velocity(self) -> float:
        """v = sqrt(2 * G * M / r), in km/s"""
        velocity_ms = np.sqrt(2 * GRAVITATIONAL_CONSTANT * self.mass / self.radius_meters)
        return float(velocity_ms / 1000)

    def calculate_volume(self) -> float:
        # km³
        return (4 / 3) * np.pi * self.radius ** 3

    def calculate_density_from_mass(self) -> float:
        volume_m3 = self.calculate_volume() * 1e9
        return self.mass / volume_m3

    def is_density_consistent(self) -> bool:
        difference = abs(self.calculate_density_from_mass() - self.density) / self.density
        return bool(difference <= DENSITY_TOLERANCE)

    @property
    def rotation_rate_rad_s(self) -> float:
        return 2 * np.pi / (self.rotation_rate * 3600)

    def spin_axis(self) -> np.ndarray:
        return tilted_axis(self.axial_tilt)

    def get_calculated_properties(self) -> dict:
        return {
            'surface_gravity': self.calculate_surface_gravity(),
            'escape_velocity': self.calculate_escape_velocity(),
            'volume': self.calculate_volume(),
            'density_consistent': self.is_density_consistent(),
        }

    def report(self) -> str:
        calculated = self.get_calculated_properties()
        return "\n".join([
            "Planet Physical Parameters:",
            f"  Mass: {self.mass:.3e} kg",
            f"  Radius: {self.radius:.1f} km",
            f"  Density: {self.density:.1f} kg/m³",
            f"  Rotation Rate: {self.rotation_rate:.1f} hours",
            f"  Axial Tilt: {self.axial_tilt:.1f}°",
            "",
            "Calculated Properties:",
            f"  Surface Gravity: {calculated['surface_gravity']:.2f} m/s²",
            f"  Escape Velocity: {calculated['escape_velocity']:.2f} km/s",
            f"  Volume: {calculated['volume']:.3e} km³",
            f"  Density Consistent: {'Yes' if calculated['density_consistent'] else 'No'}",
        ])

    def __str__(self):
        return self.report()
