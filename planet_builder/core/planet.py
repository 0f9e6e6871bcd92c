import logging
from collections.abc import Mapping
from dataclasses import dataclass

from ..constants import GAS_CONSTANT
from .components.physical import PhysicalState
from .components.composition import CompositionState
from .components.presets import PHYSICAL_PRESETS, COMPOSITION_PRESETS, PRESET_PAIRINGS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Planet:
    """
    The pair of snapshots the application holds: physical structure and composition.

    Both are immutable; every edit returns a new `Planet` built from fully revalidated states.
    """
    physical: PhysicalState
    composition: CompositionState
    name: str = 'Custom'

    @classmethod
    def from_params(cls, physical: Mapping, composition: Mapping, name: str = 'Custom') -> 'Planet':
        return cls(PhysicalState.from_params(physical), CompositionState.from_params(composition), name)

    @classmethod
    def from_preset(cls, preset_name: str) -> 'Planet':
        """
        Build one of the named presets. Bodies without a composition of their own borrow one:
        Jupiter uses Earth's, the Moon uses Mars'.
        """
        if preset_name not in PRESET_PAIRINGS:
            raise KeyError(f"Unknown preset '{preset_name}'; available presets: {', '.join(PRESET_PAIRINGS)}")
        physical_name, composition_name = PRESET_PAIRINGS[preset_name]
        planet = cls(PhysicalState.from_params(PHYSICAL_PRESETS[physical_name]),
                     CompositionState.from_params(COMPOSITION_PRESETS[composition_name]),
                     name=preset_name)
        logger.info("Loaded %s preset", preset_name)
        return planet

    @staticmethod
    def preset_names() -> list[str]:
        return list(PRESET_PAIRINGS)

    def with_physical(self, **changes) -> 'Planet':
        return Planet(self.physical.replace(**changes), self.composition, self.name)

    def with_composition(self, **changes) -> 'Planet':
        return Planet(self.physical, self.composition.replace(**changes), self.name)

    def with_gas_percentage(self, gas: str, percentage: float, balance_gas: str = 'N2') -> 'Planet':
        return Planet(self.physical, self.composition.with_gas_percentage(gas, percentage, balance_gas), self.name)

    def calculate_scale_height(self) -> float | None:
        """
        Atmospheric scale height H = R * T / (M * g), in km.
        :return: None if the atmosphere has no pressure, no gas with a known molar mass, or the greenhouse delta
            drives the effective temperature to 0 K or below.
        """
        molar_mass = self.composition.get_mean_molar_mass()
        if molar_mass is None or self.composition.atmosphere.pressure <= 0:
            return None
        temperature = self.composition.get_effective_temperature()
        if temperature <= 0:
            return None
        g = self.physical.calculate_surface_gravity()
        return GAS_CONSTANT * temperature / (molar_mass * g) / 1000

    def get_calculated_properties(self) -> dict:
        properties = self.physical.get_calculated_properties()
        properties.update(self.composition.get_calculated_properties())
        properties['scale_height'] = self.calculate_scale_height()
        return properties

    def report(self) -> str:
        scale_height = self.calculate_scale_height()
        scale_height_str = 'n/a' if scale_height is None else f"{scale_height:.1f} km"
        return "\n\n".join([
            f"=== {self.name} ===",
            self.physical.report(),
            self.composition.report(),
            f"Atmospheric Scale Height: {scale_height_str}",
        ])

    def __str__(self):
        return self.report()
