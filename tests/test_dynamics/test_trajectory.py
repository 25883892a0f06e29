"""
Unit tests for orbital plane and planar trajectory module.
"""

import pytest
import numpy as np
from orbit_view.dynamics.trajectory import OrbitalPlane, PlanarTrajectory, Trajectory
from orbit_view.geometry.conics import from_orbital
from orbit_view.utils.constants import PLANET_MU, PLANET_RADIUS

PERIAPSIS = PLANET_RADIUS + 200.0


class TestOrbitalPlane:
    """Test cases for OrbitalPlane class."""

    def test_zero_angles(self):
        """Zero angles leave the plane-local frame unchanged."""
        np.testing.assert_allclose(OrbitalPlane().to_matrix(), np.eye(3))

    def test_rotation_is_orthonormal(self):
        """The plane matrix is a proper rotation."""
        R = OrbitalPlane(lon_asc_node=0.7, inclination=1.1, arg_peri=-2.3).to_matrix()

        np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
        assert np.linalg.det(R) == pytest.approx(1.0)

    def test_composition_order(self):
        """Argument of periapsis turns first, longitude of node last."""
        plane = OrbitalPlane(lon_asc_node=0.0, inclination=np.pi / 2, arg_peri=np.pi / 2)
        periapsis_direction = plane.to_matrix() @ np.array([1.0, 0.0, 0.0])

        # Periapsis turned to +y in-plane, then tilted up to +z
        np.testing.assert_allclose(periapsis_direction, [0.0, 0.0, 1.0], atol=1e-12)

    def test_ascending_node(self):
        """Longitude of the ascending node turns the periapsis about z."""
        plane = OrbitalPlane(lon_asc_node=np.pi / 2, inclination=0.3, arg_peri=0.0)
        np.testing.assert_allclose(plane.to_matrix() @ np.array([1.0, 0.0, 0.0]),
                                   [0.0, 1.0, 0.0], atol=1e-12)

    def test_normal(self):
        """Polar plane with node on +x has its normal along -y."""
        plane = OrbitalPlane(lon_asc_node=0.0, inclination=np.pi / 2, arg_peri=1.0)
        np.testing.assert_allclose(plane.normal(), [0.0, -1.0, 0.0], atol=1e-12)


class TestPlanarTrajectory:
    """Test cases for PlanarTrajectory class."""

    def test_validation(self):
        """Invalid shapes are rejected."""
        with pytest.raises(ValueError):
            PlanarTrajectory(periapsis_distance=0.0, eccentricity=0.1)
        with pytest.raises(ValueError):
            PlanarTrajectory(periapsis_distance=-1.0, eccentricity=0.1)
        with pytest.raises(ValueError):
            PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=-0.1)

    def test_defaults(self):
        """Default trajectory is circular at 200 km altitude."""
        t = PlanarTrajectory()
        assert t.periapsis_distance == PERIAPSIS
        assert t.eccentricity == 0.0
        assert t.is_closed

    def test_circular_apsides(self):
        """Scenario A: apoapsis of a circular orbit sits opposite at the same distance."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.0)

        np.testing.assert_allclose(t.apoapsis(), [-PERIAPSIS, 0.0])
        np.testing.assert_allclose(t.periapsis(), [PERIAPSIS, 0.0])
        assert np.linalg.norm(t.apoapsis()) == pytest.approx(np.linalg.norm(t.periapsis()))

    @pytest.mark.parametrize("eccentricity", [0.1, 0.5, 0.99])
    def test_apoapsis_closed(self, eccentricity):
        """Apoapsis lies at periapsis - 2a."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=eccentricity)
        a = PERIAPSIS / (1.0 - eccentricity)
        np.testing.assert_allclose(t.apoapsis(), [PERIAPSIS - 2.0 * a, 0.0])

    @pytest.mark.parametrize("eccentricity", [1.0, 1.5, 3.0])
    def test_apoapsis_open(self, eccentricity):
        """Open trajectories have no apoapsis."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=eccentricity)
        assert t.apoapsis() is None
        assert not t.is_closed
        np.testing.assert_allclose(t.periapsis(), [PERIAPSIS, 0.0])

    def test_period(self):
        """Period follows Kepler's third law."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.0)
        expected = 2 * np.pi * np.sqrt(PERIAPSIS**3 / PLANET_MU)

        assert t.period(PLANET_MU) == pytest.approx(expected)
        assert 85 * 60 < t.period(PLANET_MU) < 90 * 60

    def test_period_open(self):
        """Open trajectories never repeat."""
        assert PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=1.2).period(PLANET_MU) == np.inf

    def test_derived_lengths(self):
        """Semi-major axis and semi-latus rectum."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.5)
        assert t.semi_major_axis == pytest.approx(2 * PERIAPSIS)
        assert t.semi_latus_rectum == pytest.approx(1.5 * PERIAPSIS)
        assert PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=2.0).semi_major_axis == np.inf

    def test_to_ellipse(self):
        """Closed trajectories convert to the orbit ellipse."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.5)
        ellipse = t.to_ellipse()
        expected = from_orbital(PERIAPSIS, 0.5)

        np.testing.assert_allclose(ellipse.semi_axes, expected.semi_axes)
        np.testing.assert_allclose(ellipse.center, expected.center)

    def test_to_ellipse_open(self):
        """Open trajectories cannot be drawn as ellipses."""
        with pytest.raises(ValueError):
            PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=1.0).to_ellipse()

    def test_point_apsides(self):
        """True anomaly 0 and π reach periapsis and apoapsis."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.5)

        np.testing.assert_allclose(t.point(0.0), t.periapsis())
        np.testing.assert_allclose(t.point(np.pi), t.apoapsis(), atol=1e-9)

    def test_point_on_ellipse(self):
        """Positions satisfy the orbit ellipse equation."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.3)
        conic = t.to_ellipse().to_implicit()
        scale = np.max(np.abs(conic.coefficients))

        for nu in np.linspace(-np.pi, np.pi, 11):
            x, y = t.point(nu)
            value = (conic.a * x * x + conic.b * x * y + conic.c * y * y
                     + conic.d * x + conic.e * y + conic.f)
            assert abs(value) < 1e-10 * scale

    def test_point_beyond_asymptote(self):
        """Open trajectories have no position past their asymptote."""
        hyperbola = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=2.0)
        parabola = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=1.0)

        assert hyperbola.point(np.pi) is None
        assert parabola.point(np.pi) is None
        assert hyperbola.point(0.5) is not None


class TestPositionAtTime:
    """Test cases for Kepler-based positioning."""

    def test_full_period_returns_to_periapsis(self):
        """After one period the body is back at periapsis."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.4)
        position = t.position_at_time(t.period(PLANET_MU), PLANET_MU)
        np.testing.assert_allclose(position, t.periapsis(), atol=1e-6)

    def test_half_period_reaches_apoapsis(self):
        """Half a period after periapsis the body is at apoapsis."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.5)
        position = t.position_at_time(0.5 * t.period(PLANET_MU), PLANET_MU)
        np.testing.assert_allclose(position, t.apoapsis(), atol=1e-6)

    def test_mean_anomaly_wraps(self):
        """Mean anomaly is kept within [-π, π)."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.1)
        period = t.period(PLANET_MU)

        M = t.mean_anomaly_at(3.25 * period, PLANET_MU)
        assert M == pytest.approx(0.5 * np.pi)
        assert t.mean_anomaly_at(0.0, PLANET_MU, mean_anomaly_epoch=1.0) == pytest.approx(1.0)

    def test_circular_position(self):
        """On a circular orbit mean and true anomaly coincide."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.0)
        np.testing.assert_allclose(t.position_at_mean_anomaly(np.pi / 2),
                                   [0.0, PERIAPSIS], atol=1e-9)

    def test_open_trajectory_rejected(self):
        """Kepler's equation does not apply to open trajectories."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=1.5)
        with pytest.raises(ValueError):
            t.position_at_time(100.0, PLANET_MU)
        with pytest.raises(ValueError):
            t.sample_arc()

    def test_sample_arc(self):
        """Samples cover the orbit between the apsis distances."""
        t = PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.2)
        points = t.sample_arc(num_points=50)
        radii = np.linalg.norm(points, axis=1)

        assert points.shape == (50, 2)
        np.testing.assert_allclose(points[0], t.periapsis(), atol=1e-9)
        assert np.all(radii >= PERIAPSIS - 1e-6)
        assert np.all(radii <= np.linalg.norm(t.apoapsis()) + 1e-6)

    def test_sample_arc_requires_two_points(self):
        """A single sample is not an arc."""
        with pytest.raises(ValueError):
            PlanarTrajectory().sample_arc(num_points=1)


class TestTrajectory:
    """Test cases for Trajectory class."""

    def test_position_3d(self):
        """In-plane positions are lifted by the plane rotation."""
        trajectory = Trajectory(
            plane=OrbitalPlane(lon_asc_node=0.0, inclination=np.pi / 2, arg_peri=0.0),
            shape=PlanarTrajectory(periapsis_distance=PERIAPSIS, eccentricity=0.0),
        )
        position = trajectory.position_3d(trajectory.shape.point(np.pi / 2))
        np.testing.assert_allclose(position, [0.0, 0.0, PERIAPSIS], atol=1e-9)


if __name__ == "__main__":
    pytest.main([__file__])
