"""
Plot Example: Projected Orbits Around the Planet

Projects a handful of orbits from a user-chosen eye position and saves
the resulting view with matplotlib.
"""

import numpy as np

from orbit_view.dynamics.trajectory import OrbitalPlane, PlanarTrajectory, Trajectory
from orbit_view.simulation.projection import ViewConfiguration, project_trajectory
from orbit_view.simulation.visualization import OrbitPlotter
from orbit_view.utils.constants import PLANET_RADIUS


def main():
    """Main example function."""
    print("=== Orbit View - Plot Example ===\n")

    config = ViewConfiguration(eye_latitude=np.radians(25), eye_longitude=np.radians(40))

    trajectories = [
        # Low circular orbit
        Trajectory(shape=PlanarTrajectory(periapsis_distance=PLANET_RADIUS + 400.0, eccentricity=0.0)),
        # Inclined eccentric orbit
        Trajectory(
            plane=OrbitalPlane(lon_asc_node=np.radians(60), inclination=np.radians(63.4),
                               arg_peri=np.radians(270)),
            shape=PlanarTrajectory(periapsis_distance=PLANET_RADIUS + 600.0, eccentricity=0.7),
        ),
        # Polar orbit
        Trajectory(
            plane=OrbitalPlane(lon_asc_node=np.radians(-30), inclination=np.radians(90)),
            shape=PlanarTrajectory(periapsis_distance=PLANET_RADIUS + 1200.0, eccentricity=0.1),
        ),
    ]

    projected = [project_trajectory(config, t, mean_anomaly=1.0) for t in trajectories]
    for i, p in enumerate(projected, 1):
        print(f"  Orbit {i}: semi-axes {p.orbit.semi_axes} km, faces viewer: {p.faces_viewer}")

    plotter = OrbitPlotter()
    plotter.plot_projected_orbits(config, projected, save_path="orbit_view.png")
    plotter.close()

    print("\nPlot saved to orbit_view.png")


if __name__ == "__main__":
    main()
