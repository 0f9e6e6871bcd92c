from scipy import constants

# Universal physical constants
GRAVITATIONAL_CONSTANT = 6.674e-11  # m³/(kg·s²)
GAS_CONSTANT = constants.R  # J/(mol·K)

# Gas molecular weights (kg/mol)
MOLECULAR_WEIGHTS = {
    'H2': 0.002016,
    'He': 0.004003,
    'N2': 0.028014,
    'O2': 0.031998,
    'CO2': 0.04401,
    'Ar': 0.039948,
    'CH4': 0.016043,
    'H2O': 0.018015,
}

# Validation ranges, inclusive
PARAMETER_RANGES = {
    'mass': (1e20, 1e30),  # kg
    'radius': (100.0, 100000.0),  # km
    'density': (500.0, 15000.0),  # kg/m³
    'rotation_rate': (0.1, 1000.0),  # hours
    'axial_tilt': (0.0, 180.0),  # degrees
}

COMPOSITION_RANGES = {
    'percentage': (0.0, 100.0),  # %
    'pressure': (0.0, 100.0),  # atm
    'thickness': (0.0, 1000.0),  # km
    'coverage': (0.0, 100.0),  # %
    'depth': (0.0, 100.0),  # km
    'ice_caps': (0.0, 100.0),  # %
    'albedo': (0.0, 1.0),
    'temperature': (0.0, 1000.0),  # K
}

DENSITY_TOLERANCE = 0.01  # Relative
COMPOSITION_SUM_TOLERANCE = 1.0  # Percentage points

DEFAULT_COMPOSITION = {'N2': 78.0, 'O2': 21.0, 'Ar': 0.93, 'CO2': 0.04, 'other': 0.03}

# Liquid water
FREEZING_POINT = 273.0  # K at 1 atm
BOILING_POINT = 373.0  # K at 1 atm
TRIPLE_POINT_PRESSURE = 0.006  # atm
