import numpy as np
import pytest

from orrery.core.config import J2000_JD, OrbitalElements
from orrery.dynamics.kepler import (
    gravitational_parameter,
    orbital_position_at_jd,
    orbital_speed,
    orbital_state_at_jd,
    sample_orbit_path,
    solve_kepler,
)


def _elements(a=300.0, e=0.0, i=0.0, node=0.0, peri=0.0, m0=0.0, n=1.0):
    return OrbitalElements(
        semi_major_axis=a,
        eccentricity=e,
        inclination_deg=i,
        ascending_node_deg=node,
        arg_periapsis_deg=peri,
        mean_anomaly_deg=m0,
        mean_motion_deg_per_day=n,
        epoch_jd=J2000_JD,
    )


EARTH = _elements(a=300.0, e=0.0167, i=0.00005, node=-11.26, peri=102.95,
                  m0=357.52, n=360.0 / 365.256)


@pytest.mark.parametrize("e", [0.0, 0.1, 0.3, 0.6, 0.9, 0.95])
def test_solver_satisfies_kepler_equation(e):
    M = np.linspace(0.0, 2.0 * np.pi, 72, endpoint=False)

    E = solve_kepler(M, e)

    assert E.shape == M.shape
    assert np.max(np.abs(E - e * np.sin(E) - M)) < 1e-5


def test_solver_is_identity_for_circular_orbit():
    assert solve_kepler(1.234, 0.0) == pytest.approx(1.234)


def test_solver_scalar_input_returns_float():
    assert isinstance(solve_kepler(0.5, 0.2), float)


def test_solver_iteration_count_is_tunable():
    M, e = 1.0, 0.5

    assert solve_kepler(M, e, iterations=0) == M
    one = solve_kepler(M, e, iterations=1)
    eight = solve_kepler(M, e, iterations=8)
    assert one != eight
    assert eight - e * np.sin(eight) == pytest.approx(M, abs=1e-12)


@pytest.mark.parametrize("k", [1, 2, 5])
def test_position_is_periodic(k):
    p0 = orbital_position_at_jd(EARTH, EARTH.epoch_jd)
    pk = orbital_position_at_jd(EARTH, EARTH.epoch_jd + k * EARTH.period_days)

    assert np.allclose(p0, pk, atol=1e-6)


def test_one_year_round_trip():
    start = orbital_position_at_jd(EARTH, J2000_JD)
    after = orbital_position_at_jd(EARTH, J2000_JD + 365.256)

    assert np.allclose(start, after, atol=1e-6)
    assert np.linalg.norm(start) == pytest.approx(300.0, rel=0.02)


@pytest.mark.parametrize("e", [0.0, 0.2, 0.6])
def test_radius_at_periapsis_and_apoapsis(e):
    at_periapsis = orbital_state_at_jd(_elements(e=e, m0=0.0), J2000_JD)
    at_apoapsis = orbital_state_at_jd(_elements(e=e, m0=180.0), J2000_JD)

    assert at_periapsis.true_anomaly == pytest.approx(0.0, abs=1e-9)
    assert at_periapsis.radius == pytest.approx(300.0 * (1 - e))
    assert np.linalg.norm(at_periapsis.position) == pytest.approx(300.0 * (1 - e))

    assert abs(at_apoapsis.true_anomaly) == pytest.approx(np.pi, abs=1e-9)
    assert at_apoapsis.radius == pytest.approx(300.0 * (1 + e))


def test_ascending_node_rotates_about_up_axis():
    p = orbital_position_at_jd(_elements(node=90.0), J2000_JD)

    assert np.allclose(p, [0.0, 0.0, -300.0], atol=1e-9)


def test_rotation_order_node_inclination_periapsis():
    # Ry(Ω=0) * Rx(i=90) * Ry(ω=90) lifts periapsis onto the up axis;
    # the reversed order would leave it in the reference plane.
    p = orbital_position_at_jd(_elements(i=90.0, peri=90.0), J2000_JD)

    assert np.allclose(p, [0.0, 300.0, 0.0], atol=1e-9)


def test_zero_inclination_orbit_stays_in_reference_plane():
    elements = _elements(e=0.3, node=40.0, peri=70.0)
    for day in np.linspace(0.0, 360.0, 13):
        p = orbital_position_at_jd(elements, J2000_JD + day)
        assert p[1] == pytest.approx(0.0, abs=1e-9)


def test_gravitational_parameter_from_period():
    assert gravitational_parameter(2.0 * np.pi, 1.0) == pytest.approx(1.0)
    assert gravitational_parameter(10.0, 2.0) == pytest.approx((2 * np.pi / 10.0) ** 2 * 8.0)


def test_circular_speed_matches_circumference_over_period():
    elements = _elements(e=0.0, n=1.0)

    speed = orbital_speed(elements, 300.0)

    assert speed == pytest.approx(2.0 * np.pi * 300.0 / 360.0)


def test_speed_is_higher_at_periapsis():
    elements = _elements(e=0.2)

    assert orbital_speed(elements, elements.periapsis) > orbital_speed(elements, elements.apoapsis)


def test_sample_orbit_path_covers_orbit():
    elements = _elements(e=0.2, i=10.0, node=30.0, peri=45.0)

    path = sample_orbit_path(elements, num_points=64)

    assert path.shape == (64, 3)
    radii = np.linalg.norm(path, axis=1)
    assert radii.min() == pytest.approx(elements.periapsis)
    assert np.all(radii <= elements.apoapsis + 1e-9)
    assert np.allclose(path[0], orbital_position_at_jd(elements, J2000_JD))
