"""Orbital planes, planar trajectories and Kepler's equation."""

from .trajectory import *
from .kepler import KeplerConvergenceError
