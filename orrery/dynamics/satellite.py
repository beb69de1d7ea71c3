"""
Satellite Dynamics
==================

Numerically integrated moon orbiting its primary under point-mass gravity.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from .integrators import LeapfrogIntegrator
from .kepler import TWO_PI, gravitational_parameter

logger = logging.getLogger(__name__)


@dataclass
class SatelliteState:
    """Satellite state relative to its primary (non-rotating frame)."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


@dataclass(frozen=True)
class RecoveryEvent:
    """Record of a reset after the integration diverged."""
    sim_time_s: float
    reason: str
    distance: float


class SatelliteIntegrator:
    """
    Two-body satellite propagator.

    Features:
    - mu calibrated from the nominal radius and period (Kepler's third law)
    - Leapfrog integration in bounded sub-steps
    - Divergence check with reset to the nominal circular orbit
    - Deltas too large to sub-step are treated as divergence
    """

    MIN_RADIUS_FACTOR = 0.5
    MAX_RADIUS_FACTOR = 2.0

    def __init__(self,
                 nominal_radius: float,
                 period_s: float,
                 max_step_s: float = 600.0,
                 epsilon_s: float = 1e-6,
                 max_substeps: int = 100_000):
        """
        Initialize satellite on its nominal circular orbit.

        Args:
            nominal_radius: Circular orbit radius [scene units]
            period_s: Orbital period [simulated seconds]
            max_step_s: Largest integration sub-step [s]
            epsilon_s: Remaining time ignored by the sub-step loop [s]
            max_substeps: Sub-step budget for a single advance
        """
        self.nominal_radius = nominal_radius
        self.period_s = period_s
        self.mu = gravitational_parameter(period_s, nominal_radius)

        self.integrator = LeapfrogIntegrator(
            self.acceleration, max_step=max_step_s, epsilon=epsilon_s,
            max_substeps=max_substeps)

        self.state = SatelliteState()
        self.elapsed_s = 0.0
        self.last_substeps = 0

        self.recovery_events: List[RecoveryEvent] = []
        self.recovery_listeners: List[Callable[[RecoveryEvent], None]] = []

        self.reset()

    @property
    def circular_speed(self) -> float:
        """Speed on the nominal circular orbit [units/s]."""
        return TWO_PI * self.nominal_radius / self.period_s

    def reset(self):
        """Place the satellite on the nominal circular orbit."""
        self.state = SatelliteState(
            position=np.array([self.nominal_radius, 0.0, 0.0]),
            velocity=np.array([0.0, 0.0, self.circular_speed]),
        )

    def restart(self):
        """Return to the epoch: circular orbit, no elapsed time, no recoveries."""
        self.reset()
        self.elapsed_s = 0.0
        self.last_substeps = 0
        self.recovery_events.clear()

    def acceleration(self, r: np.ndarray) -> np.ndarray:
        """Point-mass acceleration -mu * r / |r|^3."""
        with np.errstate(divide='ignore', invalid='ignore'):
            r_mag = np.linalg.norm(r)
            return -self.mu * r / r_mag**3

    def advance(self, dt: float) -> Optional[RecoveryEvent]:
        """
        Advance the satellite by a simulated-time delta.

        Args:
            dt: Simulated seconds; negative runs the orbit backwards

        Returns:
            The recovery event if the state had to be reset, else None
        """
        if not np.isfinite(dt) or abs(dt) > self.integrator.max_duration:
            if np.isfinite(dt):
                self.elapsed_s += dt
            self.last_substeps = 0
            return self._recover("time step out of range")

        r, v, steps = self.integrator.integrate(
            self.state.position, self.state.velocity, dt)
        self.state = SatelliteState(position=r, velocity=v)
        self.elapsed_s += dt
        self.last_substeps = steps

        reason = self.check_divergence()
        if reason is None:
            return None
        return self._recover(reason)

    def check_divergence(self) -> Optional[str]:
        """
        Check the state is finite and inside the allowed distance band.

        Returns:
            Reason string if diverged, else None
        """
        distance = self.state.distance
        if not np.isfinite(distance) or not np.all(np.isfinite(self.state.velocity)):
            return "non-finite state"
        if distance < self.MIN_RADIUS_FACTOR * self.nominal_radius:
            return "distance below band"
        if distance > self.MAX_RADIUS_FACTOR * self.nominal_radius:
            return "distance above band"
        return None

    def add_recovery_listener(self, listener: Callable[[RecoveryEvent], None]):
        """Add callback invoked on every recovery."""
        self.recovery_listeners.append(listener)

    def _recover(self, reason: str) -> RecoveryEvent:
        event = RecoveryEvent(
            sim_time_s=self.elapsed_s,
            reason=reason,
            distance=self.state.distance,
        )
        logger.warning("Satellite integration diverged (%s, distance=%s); "
                       "resetting to circular orbit", reason, event.distance)
        self.reset()
        self.recovery_events.append(event)
        for listener in self.recovery_listeners:
            listener(event)
        return event
