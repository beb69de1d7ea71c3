"""
Simulation Configuration
========================

Body table and simulation parameters for the orrery.

Distances are in scene units with Earth's orbit at 300 units (1 AU),
angles in degrees, rotation speeds in degrees per real second.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Time constants
J2000_JD = 2451545.0
SECONDS_PER_DAY = 86400.0

AU_KM = 149597870.7

# Scene calibration; other bodies are expressed relative to Earth
EARTH_ORBIT_RADIUS = 300.0
EARTH_SCALE = 10.0
EARTH_ORBIT_SPEED_DEG_S = 20.0  # one year every 18 real seconds at dilation 1
EARTH_ROTATION_SPEED_DEG_S = 50.0
EARTH_YEAR_DAYS = 365.256


class ConfigurationError(ValueError):
    """Raised when body or orbital parameters violate their invariants."""


@dataclass(frozen=True)
class OrbitalElements:
    """Keplerian elements of a closed orbit around the central body."""
    semi_major_axis: float  # scene units
    eccentricity: float
    inclination_deg: float
    ascending_node_deg: float  # Ω
    arg_periapsis_deg: float  # ω
    mean_anomaly_deg: float  # M0 at epoch
    mean_motion_deg_per_day: float
    epoch_jd: float = J2000_JD

    @property
    def period_days(self) -> float:
        """Orbital period derived from the mean motion."""
        return 360.0 / abs(self.mean_motion_deg_per_day)

    @property
    def periapsis(self) -> float:
        return self.semi_major_axis * (1.0 - self.eccentricity)

    @property
    def apoapsis(self) -> float:
        return self.semi_major_axis * (1.0 + self.eccentricity)

    def validate(self):
        """
        Check the element invariants.

        Only elliptical orbits are supported: a > 0 and 0 <= e < 1.

        Raises:
            ConfigurationError: If any invariant is violated
        """
        values = (self.semi_major_axis, self.eccentricity, self.inclination_deg,
                  self.ascending_node_deg, self.arg_periapsis_deg,
                  self.mean_anomaly_deg, self.mean_motion_deg_per_day,
                  self.epoch_jd)
        if not all(math.isfinite(v) for v in values):
            raise ConfigurationError(f"Orbital elements must be finite: {self}")
        if self.semi_major_axis <= 0:
            raise ConfigurationError(
                f"Semi-major axis must be positive, got {self.semi_major_axis}")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ConfigurationError(
                f"Eccentricity must be in [0, 1), got {self.eccentricity}")
        if self.mean_motion_deg_per_day == 0:
            raise ConfigurationError("Mean motion must be non-zero")


@dataclass
class BodyParameters:
    """Static parameters of one rendered body."""
    name: str
    scale: float
    rotation_speed_deg_s: float
    obliquity_deg: float = 0.0
    rotation_period_hours: float = 24.0  # informational, shown on the HUD
    elements: Optional[OrbitalElements] = None  # None for the central body
    primary: Optional[str] = None  # key of the body this one orbits

    @property
    def retrograde(self) -> bool:
        """Whether the body spins clockwise when seen from above its orbit."""
        return (self.rotation_speed_deg_s < 0) != (self.obliquity_deg > 90.0)

    def validate(self):
        if self.scale <= 0:
            raise ConfigurationError(f"{self.name}: scale must be positive")
        if not 0.0 <= self.obliquity_deg <= 180.0:
            raise ConfigurationError(
                f"{self.name}: obliquity must be in [0, 180] degrees")
        # Retrograde spin is encoded by obliquity > 90; a negative rate on
        # top of that would flip it back.
        if self.rotation_speed_deg_s < 0 and self.obliquity_deg > 90.0:
            raise ConfigurationError(
                f"{self.name}: ambiguous retrograde encoding "
                f"(negative rotation speed and obliquity {self.obliquity_deg})")
        if self.elements is not None:
            self.elements.validate()


@dataclass
class MoonParameters:
    """Satellite integrated numerically around its primary."""
    key: str = "moon"
    name: str = "Moon"
    primary: str = "earth"
    orbit_radius: float = EARTH_SCALE * 3.5  # nominal, scene units
    period_days: float = 27.321661  # sidereal month
    scale: float = EARTH_SCALE * 0.27
    obliquity_deg: float = 6.68
    rotation_period_hours: float = 655.72
    tidally_locked: bool = True

    # Integration
    max_step_s: float = 600.0
    epsilon_s: float = 1e-6

    @property
    def period_seconds(self) -> float:
        return self.period_days * SECONDS_PER_DAY

    def to_body_parameters(self) -> BodyParameters:
        # Tidally locked bodies get their spin angle from their position
        rate = 0.0 if self.tidally_locked else 360.0 / (self.rotation_period_hours * 3600.0)
        return BodyParameters(
            name=self.name,
            scale=self.scale,
            rotation_speed_deg_s=rate,
            obliquity_deg=self.obliquity_deg,
            rotation_period_hours=self.rotation_period_hours,
            primary=self.primary,
        )

    def validate(self):
        if self.orbit_radius <= 0:
            raise ConfigurationError("Moon orbit radius must be positive")
        if self.period_days <= 0:
            raise ConfigurationError("Moon period must be positive")
        if self.max_step_s <= 0:
            raise ConfigurationError("Integration sub-step must be positive")
        if self.epsilon_s < 0:
            raise ConfigurationError("Integration epsilon must be non-negative")


@dataclass
class ClockParameters:
    """Simulation clock settings."""
    epoch_jd: float = J2000_JD
    time_dilation: float = 1.0
    # Keeps Earth at its legacy pace of 20 degrees per real second
    days_per_real_second: float = EARTH_YEAR_DAYS * EARTH_ORBIT_SPEED_DEG_S / 360.0
    time_adjust_step: float = 0.1  # dilation change per speed-up/slow-down
    start_paused: bool = False


def _elements(a_rel, e, i, node, peri, m0, n) -> OrbitalElements:
    return OrbitalElements(
        semi_major_axis=EARTH_ORBIT_RADIUS * a_rel,
        eccentricity=e,
        inclination_deg=i,
        ascending_node_deg=node,
        arg_periapsis_deg=peri,
        mean_anomaly_deg=m0,
        mean_motion_deg_per_day=n,
    )


def _sun() -> BodyParameters:
    return BodyParameters(
        name="Sun",
        scale=100.0,
        rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 0.037,
        obliquity_deg=7.25,
        rotation_period_hours=609.12,
    )


def _earth() -> BodyParameters:
    return BodyParameters(
        name="Earth",
        scale=EARTH_SCALE,
        rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S,
        obliquity_deg=23.44,
        rotation_period_hours=23.93,
        elements=_elements(1.0, 0.0167, 0.00005, -11.26, 102.95, 357.52,
                           360.0 / EARTH_YEAR_DAYS),
        primary="sun",
    )


def _mars() -> BodyParameters:
    return BodyParameters(
        name="Mars",
        scale=EARTH_SCALE * 0.5,
        rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 0.960,
        obliquity_deg=25.19,
        rotation_period_hours=24.62,
        elements=_elements(1.3, 0.0934, 1.850, 49.558, 286.502, 19.373, 0.524039),
        primary="sun",
    )


def default_bodies() -> Dict[str, BodyParameters]:
    """
    Sun and the eight planets.

    Orbit radii are compressed relative to Earth for display; the angular
    elements are the J2000 mean elements. Retrograde rotators (Venus,
    Uranus) are encoded by obliquity > 90 with a positive rotation speed.
    """
    return {
        "sun": _sun(),
        "mercury": BodyParameters(
            name="Mercury",
            scale=EARTH_SCALE * 0.3,
            rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 17.241,
            obliquity_deg=0.034,
            rotation_period_hours=1407.6,
            elements=_elements(0.6, 0.2056, 7.005, 48.331, 29.124, 174.796, 4.092317),
            primary="sun",
        ),
        "venus": BodyParameters(
            name="Venus",
            scale=EARTH_SCALE * 0.9,
            rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 4.115,
            obliquity_deg=177.36,
            rotation_period_hours=5832.5,
            elements=_elements(0.8, 0.0068, 3.3947, 76.680, 54.884, 50.115, 1.602136),
            primary="sun",
        ),
        "earth": _earth(),
        "mars": _mars(),
        "jupiter": BodyParameters(
            name="Jupiter",
            scale=EARTH_SCALE * 5.0,
            rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 2.403,
            obliquity_deg=3.13,
            rotation_period_hours=9.93,
            elements=_elements(2.0, 0.0489, 1.303, 100.464, 273.867, 20.020, 0.083056),
            primary="sun",
        ),
        "saturn": BodyParameters(
            name="Saturn",
            scale=EARTH_SCALE * 4.0,
            rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 2.183,
            obliquity_deg=26.73,
            rotation_period_hours=10.66,
            elements=_elements(3.0, 0.0565, 2.485, 113.665, 339.392, 317.020, 0.033371),
            primary="sun",
        ),
        "uranus": BodyParameters(
            name="Uranus",
            scale=EARTH_SCALE * 2.5,
            rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 1.412,
            obliquity_deg=97.77,
            rotation_period_hours=17.24,
            elements=_elements(3.8, 0.0457, 0.773, 74.006, 96.998, 142.2386, 0.011698),
            primary="sun",
        ),
        "neptune": BodyParameters(
            name="Neptune",
            scale=EARTH_SCALE * 2.3,
            rotation_speed_deg_s=EARTH_ROTATION_SPEED_DEG_S * 1.501,
            obliquity_deg=28.32,
            rotation_period_hours=16.11,
            elements=_elements(4.3, 0.0113, 1.770, 131.784, 273.187, 256.228, 0.005965),
            primary="sun",
        ),
    }


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""
    title: str = "Solar system"

    central_body: str = "sun"
    bodies: Dict[str, BodyParameters] = field(default_factory=default_bodies)
    moon: Optional[MoonParameters] = field(default_factory=MoonParameters)
    clock: ClockParameters = field(default_factory=ClockParameters)

    # Numerics
    kepler_iterations: int = 8

    # Scene units to kilometres, for HUD summaries
    km_per_unit: float = AU_KM / EARTH_ORBIT_RADIUS

    # Headless driving and output
    frame_dt: float = 1.0 / 60.0
    orbit_path_points: int = 256
    record_history: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.kepler_iterations < 1:
            raise ConfigurationError("Kepler iterations must be at least 1")
        if self.frame_dt <= 0:
            raise ConfigurationError("Frame time step must be positive")
        if self.km_per_unit <= 0:
            raise ConfigurationError("km_per_unit must be positive")
        if self.central_body not in self.bodies:
            raise ConfigurationError(
                f"Central body '{self.central_body}' missing from body table")
        if self.bodies[self.central_body].elements is not None:
            raise ConfigurationError("The central body cannot have orbital elements")
        if self.bodies[self.central_body].primary is not None:
            raise ConfigurationError("The central body cannot have a primary")

        for key, body in self.bodies.items():
            body.validate()
            if key != self.central_body and body.elements is None:
                raise ConfigurationError(f"{body.name}: orbital elements required")
            # Planets are placed around the origin, so only the central body
            # can be their primary
            if key != self.central_body and body.primary != self.central_body:
                raise ConfigurationError(
                    f"{body.name}: primary must be the central body "
                    f"'{self.central_body}', got '{body.primary}'")

        if self.moon is not None:
            self.moon.validate()
            if self.moon.primary not in self.bodies:
                raise ConfigurationError(
                    f"Moon primary '{self.moon.primary}' missing from body table")
            if self.moon.key in self.bodies:
                raise ConfigurationError(f"Duplicate body key '{self.moon.key}'")

        logger.debug("Configuration validated: %d bodies, moon=%s",
                     len(self.bodies), self.moon.name if self.moon else None)


# Pre-defined configurations
def create_default_config() -> SimulationConfig:
    """Full system: Sun, eight planets and the Moon."""
    return SimulationConfig()


def create_inner_system_config() -> SimulationConfig:
    """Minimal build: Sun, Earth and Mars, with the Moon."""
    return SimulationConfig(
        bodies={"sun": _sun(), "earth": _earth(), "mars": _mars()},
    )
