from .core.errors import ValidationError, ValidationResult, StateResult
from .core.components.physical import PhysicalState, validate_physical_params
from .core.components.composition import CompositionState, OceanColor, validate_composition_params
from .core.components.presets import (EARTH, MARS, JUPITER, MOON,
                                      EARTH_COMPOSITION, MARS_COMPOSITION, VENUS_COMPOSITION)
from .core.planet import Planet

__version__ = "0.1.0"
