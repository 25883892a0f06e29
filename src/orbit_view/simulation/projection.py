"""
Orbit Projection for Display

This module turns a 3D trajectory and a viewing direction into the 2D
quantities a renderer needs: the projected orbit ellipse, the planet's
great circle in the orbital plane, the apsis and body markers, and the
line that separates the half of the orbit in front of the planet from
the half behind it.

The eye looks at the planet from ``eye_latitude``/``eye_longitude``.
Screen x points right, screen y up and screen z toward the viewer.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..dynamics.trajectory import OrbitalPlane, PlanarTrajectory, Trajectory
from ..geometry.affine import AffineMap
from ..geometry.conics import CanonicalEllipse, circle
from ..utils.constants import (AXIS_EXTENSION, DEFAULT_ALTITUDE,
                               DEFAULT_EYE_LATITUDE, DEFAULT_EYE_LONGITUDE,
                               DEFAULT_SCALE, HALF_PI, PLANET_RADIUS)
from ..utils.math_utils import rotation_matrix_x, rotation_matrix_z

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewConfiguration:
    """
    Viewing parameters supplied by the user interface.

    Attributes:
        eye_latitude: Latitude of the eye [rad], within [-π/2, π/2]
        eye_longitude: Longitude of the eye [rad]
        scale: Display scale [km/px]
        planet_radius: Radius of the central body [km]
        axis_length: Length of the drawn polar axis [km]
    """
    eye_latitude: float = DEFAULT_EYE_LATITUDE
    eye_longitude: float = DEFAULT_EYE_LONGITUDE
    scale: float = DEFAULT_SCALE
    planet_radius: float = PLANET_RADIUS
    axis_length: float = PLANET_RADIUS + AXIS_EXTENSION

    def __post_init__(self):
        """Validate view configuration."""
        if not abs(self.eye_latitude) <= HALF_PI:
            raise ValueError("Eye latitude must be in range [-π/2, π/2]")
        if not self.scale > 0:
            raise ValueError("Scale must be positive")
        if not self.planet_radius > 0:
            raise ValueError("Planet radius must be positive")
        if self.axis_length < 0:
            raise ValueError("Axis length must be non-negative")


@dataclass(frozen=True, eq=False)
class ProjectedOrbit:
    """
    Screen-space geometry of one trajectory.

    Attributes:
        orbit: Projected orbit ellipse; None for an open trajectory or a
            singular (edge-on) projection
        planet_outline: Planet great circle lying in the orbital plane,
            projected; None for a singular projection
        periapsis: Projected periapsis [km]
        apoapsis: Projected apoapsis [km], None for an open trajectory
        body: Projected body position [km], if requested and defined
        orbit_normal: Orbital plane normal in screen coordinates
        cut_angle: Direction of the screen line splitting the orbit into
            its front and back halves [rad]
        faces_viewer: True when the plane normal points toward the viewer
    """
    orbit: Optional[CanonicalEllipse]
    planet_outline: Optional[CanonicalEllipse]
    periapsis: np.ndarray
    apoapsis: Optional[np.ndarray]
    body: Optional[np.ndarray]
    orbit_normal: np.ndarray
    cut_angle: float
    faces_viewer: bool


def projection_matrix(config: ViewConfiguration) -> np.ndarray:
    """
    Rotation from the planet frame to screen coordinates.

    Returns:
        Rotation matrix [3x3], Rx(eye_latitude - π/2) @ Rz(eye_longitude - π/2)
    """
    return (rotation_matrix_x(config.eye_latitude - HALF_PI)
            @ rotation_matrix_z(config.eye_longitude - HALF_PI))


def plane_matrix(config: ViewConfiguration, plane: OrbitalPlane) -> np.ndarray:
    """Rotation from plane-local coordinates to screen coordinates."""
    return projection_matrix(config) @ plane.to_matrix()


def plane_affine(config: ViewConfiguration, plane: OrbitalPlane) -> AffineMap:
    """
    Affine map taking plane-local 2D points to the screen.

    Depth is dropped, so the map is singular when the plane is seen
    edge-on.
    """
    return AffineMap.from_linear(plane_matrix(config, plane)[:2, :2])


def north_pole(config: ViewConfiguration) -> np.ndarray:
    """Screen position of the end of the planet's polar axis [km]."""
    return (projection_matrix(config) @ np.array([0.0, 0.0, 1.0]))[:2] * config.axis_length


def project_trajectory(config: ViewConfiguration, trajectory: Trajectory,
                       mean_anomaly: Optional[float] = None) -> ProjectedOrbit:
    """
    Project a trajectory onto the screen.

    Args:
        config: View configuration
        trajectory: Trajectory to project
        mean_anomaly: Mean anomaly of the body [rad], in [-2π, 2π]; the
            body marker is omitted when None or when the trajectory is open

    Returns:
        Projected orbit geometry
    """
    mat3 = plane_matrix(config, trajectory.plane)
    mat2 = mat3[:2, :2]
    affine = AffineMap.from_linear(mat2)
    shape = trajectory.shape

    orbit = None
    planet_outline = None
    planet = circle(config.planet_radius).transform(affine)
    if planet is None:
        logger.debug("Orbital plane is edge-on; no ellipses projected")
    else:
        planet_outline = planet.to_canonical()
        if shape.is_closed:
            orbit = shape.to_ellipse().transform(affine).to_canonical()

    apoapsis = shape.apoapsis()
    if apoapsis is not None:
        apoapsis = mat2 @ apoapsis

    body = None
    if mean_anomaly is not None and shape.is_closed:
        body = mat2 @ shape.position_at_mean_anomaly(mean_anomaly)

    orbit_normal = mat3 @ np.array([0.0, 0.0, 1.0])
    cut_dir = np.cross(orbit_normal, np.array([0.0, 0.0, 1.0]))

    return ProjectedOrbit(
        orbit=orbit,
        planet_outline=planet_outline,
        periapsis=mat2 @ shape.periapsis(),
        apoapsis=apoapsis,
        body=body,
        orbit_normal=orbit_normal,
        cut_angle=float(np.arctan2(cut_dir[1], cut_dir[0])),
        faces_viewer=bool(orbit_normal[2] > 0.0),
    )


def create_default_view_configuration() -> ViewConfiguration:
    """Create the default view: slightly above the equator, 0.025 km/px."""
    return ViewConfiguration()


def create_default_trajectory() -> Trajectory:
    """Create a circular equatorial orbit 200 km above the surface."""
    return Trajectory(
        plane=OrbitalPlane(lon_asc_node=0.0, inclination=0.0, arg_peri=0.0),
        shape=PlanarTrajectory(periapsis_distance=PLANET_RADIUS + DEFAULT_ALTITUDE,
                               eccentricity=0.0),
    )
