"""
Keplerian Orbits
================

Analytic two-body orbit evaluation from orbital elements.

Orbits lie in the XZ plane before orientation (Y is the orbit normal) and
are placed in the world frame by rotating Ω about Y, i about X, then ω
about Y.
"""

from dataclasses import dataclass

import numpy as np

from ..core.config import OrbitalElements
from ..core.transforms import UP, X_AXIS, rotation_matrix

TWO_PI = 2.0 * np.pi

# Fixed Newton iteration count; bounded cost per frame
DEFAULT_KEPLER_ITERATIONS = 8


def gravitational_parameter(period: float, radius: float) -> float:
    """
    Gravitational parameter from Kepler's third law.

    Args:
        period: Orbital period (any time unit)
        radius: Circular orbit radius or semi-major axis

    Returns:
        mu = (2*pi/T)^2 * r^3 in radius^3 / time^2
    """
    return (TWO_PI / period) ** 2 * radius ** 3


def wrap_two_pi(angle):
    """Wrap an angle (radians) into [0, 2*pi)."""
    return np.mod(angle, TWO_PI)


def solve_kepler(mean_anomaly, eccentricity: float,
                 iterations: int = DEFAULT_KEPLER_ITERATIONS):
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly.

    Newton-Raphson seeded at E = M, run for a fixed number of iterations
    without a convergence test. Near-circular orbits reach machine
    precision well within the default count; accuracy degrades as e
    approaches 1.

    Args:
        mean_anomaly: Mean anomaly M [rad], scalar or array
        eccentricity: Eccentricity e in [0, 1)
        iterations: Number of Newton steps

    Returns:
        Eccentric anomaly E [rad], same shape as mean_anomaly
    """
    M = np.asarray(mean_anomaly, dtype=float)
    e = eccentricity
    E = M.copy()

    for _ in range(iterations):
        f = E - e * np.sin(E) - M
        fp = 1.0 - e * np.cos(E)
        E = E - f / fp

    return float(E) if E.ndim == 0 else E


def true_anomaly(eccentric_anomaly, eccentricity: float):
    """True anomaly ν [rad] in (-pi, pi] from the eccentric anomaly."""
    e = eccentricity
    cos_E = np.cos(eccentric_anomaly)
    sin_E = np.sin(eccentric_anomaly)
    denom = 1.0 - e * cos_E

    cos_nu = (cos_E - e) / denom
    sin_nu = np.sqrt(max(0.0, 1.0 - e * e)) * sin_E / denom

    return np.arctan2(sin_nu, cos_nu)


def orbital_radius(semi_major_axis: float, eccentricity: float, eccentric_anomaly):
    """Distance from the focus, r = a(1 - e*cos(E))."""
    return semi_major_axis * (1.0 - eccentricity * np.cos(eccentric_anomaly))


def orientation_matrix(elements: OrbitalElements) -> np.ndarray:
    """Orbital plane to world rotation: Ry(Ω) * Rx(i) * Ry(ω)."""
    return (rotation_matrix(elements.ascending_node_deg, UP)
            @ rotation_matrix(elements.inclination_deg, X_AXIS)
            @ rotation_matrix(elements.arg_periapsis_deg, UP))


def mean_anomaly_at_jd(elements: OrbitalElements, jd: float) -> float:
    """Mean anomaly [rad] at a Julian date, wrapped into [0, 2*pi)."""
    d_days = jd - elements.epoch_jd
    M = np.radians(elements.mean_anomaly_deg + elements.mean_motion_deg_per_day * d_days)
    return float(wrap_two_pi(M))


@dataclass
class OrbitSample:
    """Orbit evaluated at one instant."""
    position: np.ndarray  # world frame
    radius: float
    true_anomaly: float  # rad
    eccentric_anomaly: float  # rad
    mean_anomaly: float  # rad


def orbital_state_at_jd(elements: OrbitalElements,
                        jd: float,
                        iterations: int = DEFAULT_KEPLER_ITERATIONS) -> OrbitSample:
    """
    Evaluate an orbit at a Julian date.

    Elements are assumed valid; see OrbitalElements.validate().

    Args:
        elements: Orbital elements
        jd: Julian date
        iterations: Kepler solver iterations

    Returns:
        OrbitSample with world position and anomalies
    """
    e = elements.eccentricity
    M = mean_anomaly_at_jd(elements, jd)
    E = solve_kepler(M, e, iterations)
    nu = float(true_anomaly(E, e))
    r = float(orbital_radius(elements.semi_major_axis, e, E))

    # Position in the orbital plane (XZ, Y-up)
    p = np.array([r * np.cos(nu), 0.0, r * np.sin(nu)])

    return OrbitSample(
        position=orientation_matrix(elements) @ p,
        radius=r,
        true_anomaly=nu,
        eccentric_anomaly=E,
        mean_anomaly=M,
    )


def orbital_position_at_jd(elements: OrbitalElements,
                           jd: float,
                           iterations: int = DEFAULT_KEPLER_ITERATIONS) -> np.ndarray:
    """World-space position of a body at a Julian date."""
    return orbital_state_at_jd(elements, jd, iterations).position


def orbital_speed(elements: OrbitalElements, radius: float) -> float:
    """
    Vis-viva speed at a given radius.

    The gravitational parameter comes from the elements' own period, so
    the result is consistent with the scene-scaled semi-major axis.

    Returns:
        Speed in scene units per day
    """
    a = elements.semi_major_axis
    mu = gravitational_parameter(elements.period_days, a)
    return float(np.sqrt(max(0.0, mu * (2.0 / radius - 1.0 / a))))


def sample_orbit_path(elements: OrbitalElements,
                      num_points: int = 256,
                      iterations: int = DEFAULT_KEPLER_ITERATIONS) -> np.ndarray:
    """
    World positions around one full orbit, evenly spaced in mean anomaly.

    The points form a closed loop (the last connects back to the first).

    Returns:
        (num_points, 3) array
    """
    e = elements.eccentricity
    M = np.linspace(0.0, TWO_PI, num_points, endpoint=False)
    E = solve_kepler(M, e, iterations)
    nu = true_anomaly(E, e)
    r = orbital_radius(elements.semi_major_axis, e, E)

    plane = np.column_stack([r * np.cos(nu), np.zeros(num_points), r * np.sin(nu)])
    return plane @ orientation_matrix(elements).T
