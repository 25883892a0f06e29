"""
Two-Dimensional Affine Maps

This module implements 2D affine transforms stored as 3x3 homogeneous
matrices. They are used to carry orbital-plane geometry into a viewing
frame, where an edge-on view collapses a dimension and leaves the map
singular.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..utils.constants import SINGULARITY_TOLERANCE
from ..utils.math_utils import as_vector2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AffineMap:
    """
    2D affine transform as a homogeneous matrix.

    Attributes:
        matrix: Homogeneous matrix [3x3]; the upper-left 2x2 block is the
            linear part and the first two entries of the last column are
            the translation.
    """
    matrix: np.ndarray

    def __post_init__(self):
        """Validate and freeze the matrix."""
        matrix = np.array(self.matrix, dtype=float)
        if matrix.shape != (3, 3):
            raise ValueError("Affine matrix must be 3x3")
        matrix.setflags(write=False)
        object.__setattr__(self, 'matrix', matrix)

    @classmethod
    def from_linear(cls, linear: np.ndarray,
                    translation: Sequence[float] = (0.0, 0.0)) -> 'AffineMap':
        """
        Build an affine map from its linear part and translation.

        Args:
            linear: Linear part [2x2]
            translation: Translation vector [2]

        Returns:
            Affine map
        """
        linear = np.asarray(linear, dtype=float)
        if linear.shape != (2, 2):
            raise ValueError("Linear part must be 2x2")

        matrix = np.eye(3)
        matrix[:2, :2] = linear
        matrix[:2, 2] = as_vector2(translation)
        return cls(matrix)

    @classmethod
    def identity(cls) -> 'AffineMap':
        """Identity map."""
        return cls(np.eye(3))

    @classmethod
    def translate(cls, offset: Sequence[float]) -> 'AffineMap':
        """Translation by ``offset``."""
        return cls.from_linear(np.eye(2), offset)

    @classmethod
    def rotate(cls, angle: float) -> 'AffineMap':
        """Counter-clockwise rotation by ``angle`` [rad] about the origin."""
        c = np.cos(angle)
        s = np.sin(angle)
        return cls.from_linear(np.array([[c, -s], [s, c]]))

    @classmethod
    def scale(cls, factors: Sequence[float]) -> 'AffineMap':
        """Axis-aligned scaling by ``factors`` (x, y)."""
        sx, sy = as_vector2(factors)
        return cls.from_linear(np.array([[sx, 0.0], [0.0, sy]]))

    @property
    def linear(self) -> np.ndarray:
        """Linear part [2x2]."""
        return self.matrix[:2, :2].copy()

    @property
    def translation(self) -> np.ndarray:
        """Translation vector [2]."""
        return self.matrix[:2, 2].copy()

    @property
    def determinant(self) -> float:
        """Determinant of the homogeneous matrix."""
        return float(np.linalg.det(self.matrix))

    def compose(self, other: 'AffineMap') -> 'AffineMap':
        """
        Compose two maps; ``other`` is applied first.

        Args:
            other: Map applied before this one

        Returns:
            Composite map (self ∘ other)
        """
        return AffineMap(self.matrix @ other.matrix)

    def __matmul__(self, other: 'AffineMap') -> 'AffineMap':
        if not isinstance(other, AffineMap):
            return NotImplemented
        return self.compose(other)

    def invert(self) -> Optional['AffineMap']:
        """
        Invert the map.

        The map counts as singular when its determinant is negligible
        relative to the squared Frobenius norm of the linear part, which
        makes the test independent of the overall scale.

        Returns:
            Inverse map, or None when the matrix is singular
        """
        det = self.determinant
        norm_sq = float(np.sum(self.matrix[:2, :2]**2))
        if norm_sq == 0.0 or abs(det) <= SINGULARITY_TOLERANCE * norm_sq:
            logger.debug("Affine map is singular (det=%g)", det)
            return None

        try:
            inverse = np.linalg.inv(self.matrix)
        except np.linalg.LinAlgError:
            logger.debug("Affine map could not be inverted")
            return None

        return AffineMap(inverse)

    def apply(self, point: Sequence[float]) -> np.ndarray:
        """Map a 2D point."""
        x, y = as_vector2(point)
        return (self.matrix @ np.array([x, y, 1.0]))[:2]

    def __eq__(self, other) -> bool:
        if not isinstance(other, AffineMap):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    def __hash__(self) -> int:
        return hash(self.matrix.tobytes())
