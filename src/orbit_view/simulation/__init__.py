"""
Projection and Visualization Module

This module projects trajectories into a viewing frame and draws the
result with matplotlib.
"""

from .projection import (
    ViewConfiguration,
    ProjectedOrbit,
    projection_matrix,
    plane_matrix,
    plane_affine,
    north_pole,
    project_trajectory,
    create_default_view_configuration,
    create_default_trajectory
)

from .visualization import OrbitPlotter

__all__ = [
    # Projection
    'ViewConfiguration',
    'ProjectedOrbit',
    'projection_matrix',
    'plane_matrix',
    'plane_affine',
    'north_pole',
    'project_trajectory',
    'create_default_view_configuration',
    'create_default_trajectory',

    # Visualization
    'OrbitPlotter'
]
