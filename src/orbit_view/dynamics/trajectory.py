"""
Orbital Planes and Planar Trajectories

This module splits a Keplerian orbit into its orientation in space
(``OrbitalPlane``) and its shape within that plane
(``PlanarTrajectory``). Plane-local coordinates put the focus at the
origin and the periapsis on the +x axis.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..geometry.conics import CanonicalEllipse, from_orbital
from ..utils.constants import (DEFAULT_ALTITUDE, PLANET_RADIUS, TWO_PI)
from ..utils.math_utils import rotation_matrix_313, wrap_to_pi
from . import kepler


@dataclass(frozen=True)
class OrbitalPlane:
    """
    Orientation of an orbital plane.

    Attributes:
        lon_asc_node: Longitude of the ascending node [rad]
        inclination: Inclination [rad]
        arg_peri: Argument of periapsis [rad]
    """
    lon_asc_node: float = 0.0
    inclination: float = 0.0
    arg_peri: float = 0.0

    def to_matrix(self) -> np.ndarray:
        """
        Rotation from plane-local coordinates to the embedding frame.

        Returns:
            Rotation matrix [3x3], Rz(lon_asc_node) @ Rx(inclination) @ Rz(arg_peri)
        """
        return rotation_matrix_313(self.lon_asc_node, self.inclination, self.arg_peri)

    def normal(self) -> np.ndarray:
        """Unit normal of the plane in the embedding frame."""
        return self.to_matrix()[:, 2]


@dataclass(frozen=True)
class PlanarTrajectory:
    """
    In-plane shape of a Keplerian trajectory.

    Attributes:
        periapsis_distance: Periapsis distance [km]
        eccentricity: Eccentricity; below 1 the orbit is closed
    """
    periapsis_distance: float = PLANET_RADIUS + DEFAULT_ALTITUDE
    eccentricity: float = 0.0

    def __post_init__(self):
        """Validate trajectory parameters."""
        if not self.periapsis_distance > 0:
            raise ValueError("Periapsis distance must be positive")
        if not self.eccentricity >= 0:
            raise ValueError("Eccentricity must be non-negative")

    @property
    def is_closed(self) -> bool:
        """True for elliptic (and circular) trajectories."""
        return self.eccentricity < 1.0

    @property
    def semi_major_axis(self) -> float:
        """Semi-major axis [km]; infinite for open trajectories."""
        if not self.is_closed:
            return np.inf
        return self.periapsis_distance / (1.0 - self.eccentricity)

    @property
    def semi_latus_rectum(self) -> float:
        """Semi-latus rectum [km]."""
        return self.periapsis_distance * (1.0 + self.eccentricity)

    def period(self, mu: float) -> float:
        """
        Orbital period.

        Args:
            mu: Standard gravitational parameter [km³/s²]

        Returns:
            Period [s]; infinite for open trajectories
        """
        if not self.is_closed:
            return np.inf
        r = self.semi_major_axis
        return TWO_PI * np.sqrt(r**3 / mu)

    def apoapsis(self) -> Optional[np.ndarray]:
        """Apoapsis location, or None for an open trajectory."""
        if not self.is_closed:
            return None
        return np.array([self.periapsis_distance - 2.0 * self.semi_major_axis, 0.0])

    def periapsis(self) -> np.ndarray:
        """Periapsis location."""
        return np.array([self.periapsis_distance, 0.0])

    def to_ellipse(self) -> CanonicalEllipse:
        """
        Orbit as a canonical ellipse with its focus at the origin.

        Raises:
            ValueError: If the trajectory is open
        """
        if not self.is_closed:
            raise ValueError(
                f"Open trajectory (e={self.eccentricity}) has no ellipse")
        return from_orbital(self.periapsis_distance, self.eccentricity)

    def point(self, true_anomaly: float) -> Optional[np.ndarray]:
        """
        Position at a true anomaly.

        Args:
            true_anomaly: Angle from periapsis as seen from the focus [rad]

        Returns:
            Position (x, y) [km], or None beyond the asymptote of an open
            trajectory
        """
        d = 1.0 + self.eccentricity * np.cos(true_anomaly)
        if d <= 0.0:
            return None
        r = self.semi_latus_rectum / d
        return np.array([r * np.cos(true_anomaly), r * np.sin(true_anomaly)])

    def _require_closed(self) -> None:
        if not self.is_closed:
            raise ValueError(
                f"Kepler's equation needs a closed trajectory (e={self.eccentricity})")

    def mean_anomaly_at(self, time: float, mu: float,
                        mean_anomaly_epoch: float = 0.0) -> float:
        """
        Mean anomaly after ``time`` seconds, wrapped to [-π, π).

        Args:
            time: Time since epoch [s]
            mu: Standard gravitational parameter [km³/s²]
            mean_anomaly_epoch: Mean anomaly at epoch [rad]
        """
        self._require_closed()
        mean_motion = np.sqrt(mu / self.semi_major_axis**3)
        return wrap_to_pi(mean_anomaly_epoch + mean_motion * time)

    def position_at_mean_anomaly(self, mean_anomaly: float) -> np.ndarray:
        """In-plane position at a mean anomaly in [-2π, 2π]."""
        self._require_closed()
        E = kepler.solve(self.eccentricity, mean_anomaly)
        nu = kepler.eccentric_to_true_anomaly(self.eccentricity, E)
        return self.point(nu)

    def position_at_time(self, time: float, mu: float,
                         mean_anomaly_epoch: float = 0.0) -> np.ndarray:
        """In-plane position ``time`` seconds after epoch."""
        mean_anomaly = self.mean_anomaly_at(time, mu, mean_anomaly_epoch)
        return self.position_at_mean_anomaly(mean_anomaly)

    def sample_arc(self, mean_anomaly_start: float = 0.0,
                   mean_anomaly_end: float = TWO_PI,
                   num_points: int = 100) -> np.ndarray:
        """
        Positions evenly spaced in mean anomaly (i.e. in time).

        Args:
            mean_anomaly_start: First mean anomaly [rad]
            mean_anomaly_end: Last mean anomaly [rad]
            num_points: Number of samples

        Returns:
            Positions [num_points x 2] [km]
        """
        self._require_closed()
        if num_points < 2:
            raise ValueError("At least two samples are required")

        anomalies = np.linspace(mean_anomaly_start, mean_anomaly_end, num_points)
        return np.array([self.position_at_mean_anomaly(wrap_to_pi(M)) for M in anomalies])


@dataclass(frozen=True)
class Trajectory:
    """Orbital plane together with the trajectory shape inside it."""
    plane: OrbitalPlane = OrbitalPlane()
    shape: PlanarTrajectory = PlanarTrajectory()

    def to_matrix(self) -> np.ndarray:
        return self.plane.to_matrix()

    def position_3d(self, planar_position: np.ndarray) -> np.ndarray:
        """Lift an in-plane position into the embedding frame."""
        x, y = planar_position
        return self.to_matrix() @ np.array([x, y, 0.0])
