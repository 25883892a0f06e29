"""
Physical, Numerical and Display Constants

This module contains the constants shared by the orbit geometry core and
the projection/visualization layer. Distances are in kilometres.
"""

import numpy as np

# Planet Physical Constants
PLANET_RADIUS = 6371.0  # Mean planet radius [km]
PLANET_MU = 398600.4418  # Gravitational parameter [km³/s²]
DEFAULT_ALTITUDE = 200.0  # Default orbit altitude above the surface [km]

# Mathematical Constants
PI = np.pi
TWO_PI = 2.0 * np.pi
HALF_PI = 0.5 * np.pi
RAD_TO_DEG = 180.0 / np.pi

# Numerical Tolerances
SINGULARITY_TOLERANCE = 1e-7   # Determinant relative to the squared linear norm
KEPLER_ACCURACY = 1e-15        # Residual accepted by the Kepler solver [rad]
KEPLER_MAX_ITERATIONS = 20     # Newton iteration cap for the Kepler solver
KEPLER_HIGH_ECCENTRICITY = 0.8  # Above this the solver starts from ±π

# Display Parameters
DEFAULT_EYE_LATITUDE = TWO_PI / 16.0  # [rad]
DEFAULT_EYE_LONGITUDE = 0.0           # [rad]
DEFAULT_SCALE = 0.025                 # [km/px]
AXIS_EXTENSION = 1000.0               # Polar axis length beyond the surface [km]
