"""
Basic Example: Orbit Ellipses, Projection and Kepler's Equation

This example demonstrates the basic usage of the orbit view package:
building an orbit ellipse, converting between its forms, projecting an
inclined orbit into a viewing frame and locating the body over time.
"""

import numpy as np

from orbit_view.dynamics.kepler import evaluate, solve
from orbit_view.dynamics.trajectory import OrbitalPlane, PlanarTrajectory, Trajectory
from orbit_view.simulation.projection import (ViewConfiguration,
                                              create_default_view_configuration,
                                              project_trajectory)
from orbit_view.utils.constants import PLANET_MU, PLANET_RADIUS


def main():
    """Main example function."""
    print("=== Orbit View - Basic Example ===\n")

    # Eccentric orbit with a 200 km periapsis altitude
    print("1. Creating an eccentric trajectory:")
    shape = PlanarTrajectory(periapsis_distance=PLANET_RADIUS + 200.0, eccentricity=0.5)

    print(f"  Periapsis distance: {shape.periapsis_distance:.1f} km")
    print(f"  Eccentricity: {shape.eccentricity:.3f}")
    print(f"  Semi-major axis: {shape.semi_major_axis:.1f} km")
    print(f"  Orbital period: {shape.period(PLANET_MU)/3600:.2f} hours")

    # Canonical and implicit forms
    print("\n2. Orbit ellipse in both forms:")
    ellipse = shape.to_ellipse()
    implicit = ellipse.to_implicit()
    recovered = implicit.to_canonical()

    print(f"  Semi-axes [km]: {ellipse.semi_axes}")
    print(f"  Center [km]: {ellipse.center}")
    print(f"  Implicit coefficients: {implicit.coefficients}")
    print(f"  Recovered semi-axes [km]: {recovered.semi_axes}")

    # Kepler's equation
    print("\n3. Solving Kepler's equation:")
    for mean_anomaly in [0.5, np.pi / 2, 3.0]:
        E = solve(shape.eccentricity, mean_anomaly)
        print(f"  M = {mean_anomaly:.4f} rad -> E = {E:.6f} rad "
              f"(residual {abs(evaluate(shape.eccentricity, E) - mean_anomaly):.1e})")

    # Projection into the default view
    print("\n4. Projecting an inclined orbit:")
    trajectory = Trajectory(
        plane=OrbitalPlane(lon_asc_node=np.radians(30), inclination=np.radians(51.6),
                           arg_peri=np.radians(45)),
        shape=shape,
    )
    config = create_default_view_configuration()
    quarter_period = 0.25 * shape.period(PLANET_MU)
    projected = project_trajectory(config, trajectory,
                                   mean_anomaly=shape.mean_anomaly_at(quarter_period, PLANET_MU))

    print(f"  Projected semi-axes [km]: {projected.orbit.semi_axes}")
    print(f"  Projected center [km]: {projected.orbit.center}")
    print(f"  Rotation: {np.degrees(projected.orbit.rotation):.2f}°")
    print(f"  Periapsis on screen [km]: {projected.periapsis}")
    print(f"  Apoapsis on screen [km]: {projected.apoapsis}")
    print(f"  Body after a quarter period [km]: {projected.body}")
    print(f"  Plane faces viewer: {projected.faces_viewer}")

    # Edge-on view
    print("\n5. Edge-on view of an equatorial orbit:")
    edge_on = project_trajectory(ViewConfiguration(eye_latitude=0.0),
                                 Trajectory(shape=shape))
    print(f"  Orbit ellipse: {edge_on.orbit} (nothing to draw)")

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
