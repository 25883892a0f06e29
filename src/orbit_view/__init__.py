"""
Orbit View

Geometry of Keplerian orbits for display: ellipses in canonical and
implicit form, affine projection of orbital planes into a viewing frame,
and Kepler's equation for locating a body along its orbit.
"""

__version__ = "1.0.0"

from .geometry.affine import AffineMap
from .geometry.conics import CanonicalEllipse, Ellipse, ImplicitConic
from .dynamics.trajectory import OrbitalPlane, PlanarTrajectory, Trajectory
from .dynamics.kepler import KeplerConvergenceError
from .utils.constants import *
