"""
Conic Sections in Canonical and Implicit Form

This module represents an orbital ellipse in two interchangeable forms:

* ``CanonicalEllipse``: center, semi-axes and rotation, which is what a
  renderer draws;
* ``ImplicitConic``: the six coefficients of
  A·x² + B·xy + C·y² + D·x + E·y + F = 0, which transform cleanly under
  an affine change of coordinates.

``Ellipse`` is the union of the two. The module-level functions
``to_canonical``, ``to_implicit`` and ``transform`` are total over that
union; the dataclasses expose the same operations as methods.

The implicit to canonical conversion is only defined for genuine
ellipses (B² - 4AC < 0). Parabolas and hyperbolas are not supported:
feeding them in yields NaN semi-axes, a NaN or infinite center and a
RuntimeWarning.
"""

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from ..utils.math_utils import as_vector2
from .affine import AffineMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class CanonicalEllipse:
    """
    Ellipse given by center, semi-axes and rotation.

    Semi-axes are non-negative. A zero semi-axis denotes a degenerate
    ellipse (a point or a segment), which is a valid value.

    Attributes:
        semi_axes: Semi-axes (a, b) along the rotated x and y directions
        center: Center (x, y)
        rotation: Angle from the x-axis to the ``a`` semi-axis [rad]
    """
    semi_axes: np.ndarray
    center: np.ndarray
    rotation: float = 0.0

    def __post_init__(self):
        """Validate and freeze the vectors."""
        semi_axes = np.array(as_vector2(self.semi_axes))
        center = np.array(as_vector2(self.center))
        if np.any(semi_axes < 0.0):
            raise ValueError("Semi-axes must be non-negative")
        semi_axes.setflags(write=False)
        center.setflags(write=False)
        object.__setattr__(self, 'semi_axes', semi_axes)
        object.__setattr__(self, 'center', center)
        object.__setattr__(self, 'rotation', float(self.rotation))

    @property
    def is_degenerate(self) -> bool:
        """True when either semi-axis is zero."""
        return bool(self.semi_axes[0] == 0.0 or self.semi_axes[1] == 0.0)

    def point_at(self, eta: float) -> np.ndarray:
        """
        Parametric point on the ellipse.

        Args:
            eta: Eccentric angle measured from the ``a`` semi-axis [rad]

        Returns:
            Point (x, y)
        """
        a, b = self.semi_axes
        c = np.cos(self.rotation)
        s = np.sin(self.rotation)
        local_x = a * np.cos(eta)
        local_y = b * np.sin(eta)
        return self.center + np.array([c * local_x - s * local_y,
                                       s * local_x + c * local_y])

    def to_canonical(self) -> 'CanonicalEllipse':
        return self

    def to_implicit(self) -> 'ImplicitConic':
        """Expand the rotated, centered ellipse into quadratic coefficients."""
        a, b = self.semi_axes
        h, k = self.center
        sin_t = math.sin(self.rotation)
        cos_t = math.cos(self.rotation)

        pa = (a * sin_t)**2 + (b * cos_t)**2
        pc = (a * cos_t)**2 + (b * sin_t)**2
        pb = 2.0 * (b * b - a * a) * sin_t * cos_t
        pd = -2.0 * pa * h - pb * k
        pe = -pb * h - 2.0 * pc * k
        pf = pa * h * h + pb * h * k + pc * k * k - a * a * b * b

        return ImplicitConic(pa, pb, pc, pd, pe, pf)

    def transform(self, affine: AffineMap) -> Optional['ImplicitConic']:
        return transform(self, affine)

    def __repr__(self) -> str:
        return (f"CanonicalEllipse(semi_axes={self.semi_axes.tolist()}, "
                f"center={self.center.tolist()}, rotation={self.rotation})")


@dataclass(frozen=True)
class ImplicitConic:
    """
    Conic A·x² + B·xy + C·y² + D·x + E·y + F = 0.

    Scaling every coefficient by the same non-zero factor describes the
    same curve.
    """
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float

    @property
    def coefficients(self) -> np.ndarray:
        """Coefficients (A, B, C, D, E, F)."""
        return np.array([self.a, self.b, self.c, self.d, self.e, self.f])

    @property
    def discriminant(self) -> float:
        """B² - 4AC; negative for an ellipse."""
        return self.b * self.b - 4.0 * self.a * self.c

    @property
    def is_ellipse(self) -> bool:
        """True when the conic is an ellipse (discriminant < 0)."""
        return self.discriminant < 0.0

    def to_matrix(self) -> np.ndarray:
        """Symmetric quadratic-form matrix [3x3] with halved cross terms."""
        return np.array([
            [self.a, self.b / 2.0, self.d / 2.0],
            [self.b / 2.0, self.c, self.e / 2.0],
            [self.d / 2.0, self.e / 2.0, self.f]
        ])

    @classmethod
    def from_matrix(cls, m: np.ndarray) -> 'ImplicitConic':
        """Fold a quadratic-form matrix back into six coefficients."""
        return cls(float(m[0, 0]),
                   float(m[0, 1] + m[1, 0]),
                   float(m[1, 1]),
                   float(m[0, 2] + m[2, 0]),
                   float(m[1, 2] + m[2, 1]),
                   float(m[2, 2]))

    def to_canonical(self) -> CanonicalEllipse:
        """
        Recover center, semi-axes and rotation.

        Only ellipses are supported. Other conics produce NaN semi-axes, a
        NaN or infinite center and a RuntimeWarning; check ``is_ellipse`` first.

        Returns:
            Canonical ellipse
        """
        pa, pb, pc, pd, pe, pf = (np.float64(x) for x in
                                  (self.a, self.b, self.c, self.d, self.e, self.f))
        discr = pb * pb - 4.0 * pa * pc

        if not discr < 0.0:
            warnings.warn(
                f"Conic with discriminant {float(discr):g} is not an ellipse; "
                "canonical parameters are undefined",
                RuntimeWarning, stacklevel=2)

        with np.errstate(divide='ignore', invalid='ignore'):
            center = np.array([2.0 * pc * pd - pb * pe,
                               2.0 * pa * pe - pb * pd]) / discr
            tmp1 = 2.0 * (pa * pe * pe + pc * pd * pd - pb * pd * pe + discr * pf)
            tmp2 = np.sqrt((pa - pc)**2 + pb * pb)
            semi_axes = -np.array([np.sqrt(tmp1 * (pa + pc + tmp2)),
                                   np.sqrt(tmp1 * (pa + pc - tmp2))]) / discr

        if not discr < 0.0:
            # Non-ellipses have no semi-axes
            semi_axes = np.full(2, np.nan)

        theta = math.atan2(-pb, pc - pa) / 2.0
        if math.isnan(theta):
            # Undefined orientation, treated as axis-aligned
            theta = 0.0

        return CanonicalEllipse(semi_axes=semi_axes, center=center, rotation=theta)

    def to_implicit(self) -> 'ImplicitConic':
        return self

    def transform(self, affine: AffineMap) -> Optional['ImplicitConic']:
        return transform(self, affine)


Ellipse = Union[CanonicalEllipse, ImplicitConic]


def from_orbital(periapsis: float, eccentricity: float) -> CanonicalEllipse:
    """
    Ellipse of an orbit with its focus at the origin.

    Periapsis lies on the +x axis.

    Args:
        periapsis: Periapsis distance [km]
        eccentricity: Eccentricity in [0, 1)

    Returns:
        Canonical ellipse
    """
    if not 0.0 <= eccentricity < 1.0:
        raise ValueError("Eccentricity must be in range [0, 1) for an ellipse")

    a = periapsis / (1.0 - eccentricity)
    b = a * math.sqrt(1.0 - eccentricity**2)
    return CanonicalEllipse(semi_axes=(a, b), center=(periapsis - a, 0.0), rotation=0.0)


def circle(radius: float) -> CanonicalEllipse:
    """Circle of ``radius`` centered at the origin."""
    return CanonicalEllipse(semi_axes=(radius, radius), center=(0.0, 0.0), rotation=0.0)


def to_canonical(ellipse: Ellipse) -> CanonicalEllipse:
    """Canonical form of either representation."""
    if isinstance(ellipse, CanonicalEllipse):
        return ellipse
    if isinstance(ellipse, ImplicitConic):
        return ellipse.to_canonical()
    raise TypeError(f"Not an ellipse: {type(ellipse).__name__}")


def to_implicit(ellipse: Ellipse) -> ImplicitConic:
    """Implicit form of either representation."""
    if isinstance(ellipse, ImplicitConic):
        return ellipse
    if isinstance(ellipse, CanonicalEllipse):
        return ellipse.to_implicit()
    raise TypeError(f"Not an ellipse: {type(ellipse).__name__}")


def transform(ellipse: Ellipse, affine: AffineMap) -> Optional[ImplicitConic]:
    """
    Map an ellipse through an affine transform.

    A point x on the image satisfies x = A⁻¹·x' for a point x' on the
    original, so the quadratic form M becomes A⁻ᵀ·M·A⁻¹.

    Args:
        ellipse: Ellipse in either form
        affine: Map applied to the ellipse

    Returns:
        Transformed ellipse in implicit form, or None if ``affine`` is
        singular
    """
    inverse = affine.invert()
    if inverse is None:
        logger.debug("Skipping transform through a singular map")
        return None

    m = to_implicit(ellipse).to_matrix()
    a_inv = inverse.matrix
    n = a_inv.T @ m @ a_inv
    return ImplicitConic.from_matrix(n)
