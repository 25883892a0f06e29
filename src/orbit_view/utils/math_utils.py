"""
Mathematical Utilities for Orbit Geometry

This module provides the angle helpers and elementary rotation matrices
used to orient orbital planes and viewing frames.
"""

import numpy as np

from .constants import PI, TWO_PI


def normalize_angle(angle: float, center: float = 0.0) -> float:
    """
    Normalize angle to be within [center-π, center+π].

    Args:
        angle: Angle to normalize [rad]
        center: Center of the normalized range [rad]

    Returns:
        Normalized angle [rad]
    """
    normalized = angle - center
    normalized = normalized - TWO_PI * np.floor((normalized + PI) / TWO_PI)
    return float(normalized + center)


def wrap_to_pi(angle: float) -> float:
    """Wrap angle to [-π, π) range."""
    return normalize_angle(angle, 0.0)


def rotation_matrix_x(angle: float) -> np.ndarray:
    """
    Create rotation matrix about X-axis.

    Args:
        angle: Rotation angle [rad]

    Returns:
        Rotation matrix [3x3]
    """
    c = np.cos(angle)
    s = np.sin(angle)

    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c]
    ])


def rotation_matrix_z(angle: float) -> np.ndarray:
    """
    Create rotation matrix about Z-axis.

    Args:
        angle: Rotation angle [rad]

    Returns:
        Rotation matrix [3x3]
    """
    c = np.cos(angle)
    s = np.sin(angle)

    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0]
    ])


def rotation_matrix_313(first: float, second: float, third: float) -> np.ndarray:
    """
    Create rotation matrix using a 3-1-3 Euler angle sequence.

    The result is Rz(first) @ Rx(second) @ Rz(third), so a vector is
    turned by ``third`` first and by ``first`` last.

    Args:
        first: Outer rotation about Z-axis [rad]
        second: Rotation about X-axis [rad]
        third: Inner rotation about Z-axis [rad]

    Returns:
        Rotation matrix [3x3]
    """
    return rotation_matrix_z(first) @ rotation_matrix_x(second) @ rotation_matrix_z(third)


def as_vector2(point) -> np.ndarray:
    """Coerce a 2-element sequence to a float vector, rejecting other shapes."""
    vector = np.asarray(point, dtype=float)
    if vector.shape != (2,):
        raise ValueError(f"Expected a 2D vector, got shape {vector.shape}")
    return vector
