"""
Kepler's Equation

Newton-Raphson inversion of Kepler's equation M = E - e·sin(E) for
elliptic orbits, plus conversions between eccentric and true anomaly.
"""

import logging
import math

import numpy as np

from ..utils.constants import (KEPLER_ACCURACY, KEPLER_HIGH_ECCENTRICITY,
                               KEPLER_MAX_ITERATIONS, PI, TWO_PI)

logger = logging.getLogger(__name__)


class KeplerConvergenceError(RuntimeError):
    """Newton iteration exhausted its cap without meeting the tolerance."""


def evaluate(eccentricity: float, eccentric_anomaly: float) -> float:
    """
    Forward Kepler equation.

    Args:
        eccentricity: Orbital eccentricity
        eccentric_anomaly: Eccentric anomaly [rad]

    Returns:
        Mean anomaly [rad]
    """
    return eccentric_anomaly - eccentricity * math.sin(eccentric_anomaly)


def solve(eccentricity: float, mean_anomaly: float,
          tolerance: float = KEPLER_ACCURACY,
          max_iterations: int = KEPLER_MAX_ITERATIONS) -> float:
    """
    Solve Kepler's equation for eccentric anomaly using Newton-Raphson method.

    Iteration stops when the residual drops below ``tolerance`` or when an
    update leaves the estimate unchanged.

    Args:
        eccentricity: Orbital eccentricity in [0, 1)
        mean_anomaly: Mean anomaly in [-2π, 2π] [rad]
        tolerance: Residual tolerance [rad]
        max_iterations: Maximum number of iterations

    Returns:
        Eccentric anomaly [rad]

    Raises:
        ValueError: If ``mean_anomaly`` is outside [-2π, 2π]
        KeplerConvergenceError: If the iteration cap is reached
    """
    if not (-TWO_PI <= mean_anomaly <= TWO_PI):
        raise ValueError(f"Mean anomaly {mean_anomaly!r} must be in the range [-2π, 2π]")

    # Starting from ±π keeps Newton from overshooting at high eccentricity
    if eccentricity < KEPLER_HIGH_ECCENTRICITY:
        E = mean_anomaly
    else:
        E = math.copysign(PI, mean_anomaly)

    for iteration in range(max_iterations):
        f = E - eccentricity * math.sin(E) - mean_anomaly
        if abs(f) < tolerance:
            logger.debug("Kepler solve converged after %d iterations", iteration)
            return E

        previous = E
        E -= f / (1.0 - eccentricity * math.cos(E))
        if E == previous:
            logger.debug("Kepler solve reached a plateau after %d iterations", iteration + 1)
            return E

    raise KeplerConvergenceError(
        f"Newton's method failed to converge after {max_iterations} iterations: "
        f"solve({eccentricity!r}, {mean_anomaly!r})")


def eccentric_to_true_anomaly(eccentricity: float, eccentric_anomaly: float) -> float:
    """True anomaly [rad] from eccentric anomaly, in (-π, π]."""
    E = eccentric_anomaly
    sin_f = np.sqrt(1 - eccentricity**2) * np.sin(E)
    cos_f = np.cos(E) - eccentricity
    return float(np.arctan2(sin_f, cos_f))


def true_to_eccentric_anomaly(eccentricity: float, true_anomaly: float) -> float:
    """Eccentric anomaly [rad] from true anomaly, in (-π, π]."""
    f = true_anomaly
    sin_E = np.sqrt(1 - eccentricity**2) * np.sin(f)
    cos_E = eccentricity + np.cos(f)
    return float(np.arctan2(sin_E, cos_E))
