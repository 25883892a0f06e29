"""
Orbit Visualization

This module draws projected orbits with matplotlib: the planet disk, the
planet's great circle in the orbital plane, the orbit ellipse, the apsis
and body markers and the polar axis.
"""

import logging
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Circle, Ellipse

from ..geometry.conics import CanonicalEllipse
from ..utils.constants import RAD_TO_DEG
from .projection import ProjectedOrbit, ViewConfiguration, north_pole

logger = logging.getLogger(__name__)


class OrbitPlotter:
    """2D orbit visualization in screen coordinates."""

    def __init__(self, figsize: Tuple[int, int] = (8, 8)):
        """Initialize plotter."""
        self.figsize = figsize
        self.fig = None
        self.ax = None

    def plot_projected_orbits(self,
                              config: ViewConfiguration,
                              orbits: Sequence[ProjectedOrbit],
                              show_markers: bool = True,
                              save_path: Optional[str] = None) -> plt.Figure:
        """
        Plot projected orbits around the planet.

        Args:
            config: View configuration the orbits were projected with
            orbits: Projected orbits
            show_markers: Draw apoapsis, periapsis and body markers
            save_path: Optional file to save the figure to

        Returns:
            Figure
        """
        self.fig, self.ax = plt.subplots(figsize=self.figsize)
        self.ax.set_facecolor('black')

        # Planet disk
        self.ax.add_patch(Circle((0.0, 0.0), config.planet_radius,
                                 color='navy', alpha=0.75, zorder=1))

        # Polar axis
        pole = north_pole(config)
        self.ax.plot([pole[0], -pole[0]], [pole[1], -pole[1]],
                     color='cyan', alpha=0.5, linewidth=1.5, zorder=2)

        for projected in orbits:
            if projected.planet_outline is not None:
                self._add_ellipse(projected.planet_outline, color='green',
                                  linewidth=1.0, linestyle='--')
            if projected.orbit is not None:
                self._add_ellipse(projected.orbit, color='red', linewidth=2.0)

            if show_markers:
                self._plot_markers(projected)

        extent = max(config.axis_length, config.planet_radius,
                     *(self._extent(p) for p in orbits))
        self.ax.set_xlim(-1.1 * extent, 1.1 * extent)
        self.ax.set_ylim(-1.1 * extent, 1.1 * extent)
        self.ax.set_aspect('equal')
        self.ax.set_xlabel('Screen X [km]')
        self.ax.set_ylabel('Screen Y [km]')
        self.ax.set_title(
            f'Orbit view (lat {config.eye_latitude * RAD_TO_DEG:.1f}°, '
            f'lon {config.eye_longitude * RAD_TO_DEG:.1f}°)')

        if save_path:
            self.fig.savefig(save_path, dpi=150, bbox_inches='tight')
            logger.info("Orbit plot saved to %s", save_path)

        return self.fig

    def _add_ellipse(self, ellipse: CanonicalEllipse, **style) -> None:
        """Add an ellipse outline; degenerate and undefined ellipses are skipped."""
        if ellipse.is_degenerate or not np.all(np.isfinite(ellipse.semi_axes)):
            return
        a, b = ellipse.semi_axes
        patch = Ellipse(tuple(ellipse.center), width=2.0 * a, height=2.0 * b,
                        angle=ellipse.rotation * RAD_TO_DEG,
                        fill=False, zorder=3, **style)
        self.ax.add_patch(patch)

    def _plot_markers(self, projected: ProjectedOrbit) -> None:
        """Plot apsis and body markers."""
        pe = projected.periapsis
        self.ax.scatter([pe[0]], [pe[1]], color='red', s=40, marker='o',
                        label='Periapsis', zorder=4)

        if projected.apoapsis is not None:
            ap = projected.apoapsis
            self.ax.scatter([ap[0]], [ap[1]], color='orange', s=40, marker='o',
                            label='Apoapsis', zorder=4)

        if projected.body is not None:
            body = projected.body
            self.ax.scatter([body[0]], [body[1]], color='white', s=60, marker='*',
                            label='Body', zorder=5)

    @staticmethod
    def _extent(projected: ProjectedOrbit) -> float:
        """Largest screen distance the orbit reaches."""
        points = [projected.periapsis]
        if projected.apoapsis is not None:
            points.append(projected.apoapsis)
        if projected.orbit is not None and np.all(np.isfinite(projected.orbit.semi_axes)):
            orbit = projected.orbit
            points.append(np.abs(orbit.center) + np.max(orbit.semi_axes))
        return float(max(np.linalg.norm(p) for p in points))

    def close(self) -> None:
        """Release the current figure."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None
