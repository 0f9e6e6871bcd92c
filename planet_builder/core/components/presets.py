import os
import json
import logging
from types import MappingProxyType

logger = logging.getLogger(__name__)

path_parts = os.path.abspath(__file__).split(os.path.sep)
base_dir = os.path.sep.join(path_parts[:-3])
default_presets = os.path.join(base_dir, 'data', 'presets.json')


def freeze(value):
    """Recursively wrap dicts in read-only views and lists in tuples."""
    if isinstance(value, dict):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(freeze(item) for item in value)
    return value


class Presets:
    @staticmethod
    def load(presets_file: str = default_presets):
        """
        Read the preset tables from a JSON file.
        :return: (physical presets, composition presets, pairings), each a read-only mapping keyed by name.
        """
        with open(presets_file, 'r') as f:
            data = json.load(f)
        physical = {entry.pop('name'): entry for entry in data['physical']}
        composition = {entry.pop('name'): entry for entry in data['composition']}
        pairings = data.get('pairings', {})
        for body_name, (physical_name, composition_name) in pairings.items():
            if physical_name not in physical or composition_name not in composition:
                raise KeyError(f"Preset pairing '{body_name}' refers to an unknown preset: "
                               f"({physical_name}, {composition_name})")
        logger.debug("Loaded %d physical and %d composition presets from %s",
                     len(physical), len(composition), presets_file)
        return freeze(physical), freeze(composition), freeze(pairings)


PHYSICAL_PRESETS, COMPOSITION_PRESETS, PRESET_PAIRINGS = Presets.load()

EARTH = PHYSICAL_PRESETS['Earth']
MARS = PHYSICAL_PRESETS['Mars']
JUPITER = PHYSICAL_PRESETS['Jupiter']
MOON = PHYSICAL_PRESETS['Moon']

EARTH_COMPOSITION = COMPOSITION_PRESETS['Earth']
MARS_COMPOSITION = COMPOSITION_PRESETS['Mars']
VENUS_COMPOSITION = COMPOSITION_PRESETS['Venus']
