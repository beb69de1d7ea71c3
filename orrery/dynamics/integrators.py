"""
Numerical Integrators
=====================

Integration methods for the satellite dynamics.
"""

import math
import numpy as np
from typing import Callable, Tuple


class LeapfrogIntegrator:
    """
    Leapfrog (velocity Verlet) integrator, kick-drift-kick form.

    Symplectic: orbital energy stays bounded over long runs instead of
    drifting as with an explicit Euler step.
    """

    def __init__(self,
                 acceleration_func: Callable[[np.ndarray], np.ndarray],
                 max_step: float = 600.0,
                 epsilon: float = 1e-6,
                 max_substeps: int = 100_000):
        """
        Initialize integrator.

        Args:
            acceleration_func: a = f(r)
            max_step: Largest sub-step taken by integrate()
            epsilon: Remaining time below which integrate() stops
            max_substeps: Most sub-steps integrate() may take in one call
        """
        self.acceleration = acceleration_func
        self.max_step = max_step
        self.epsilon = epsilon
        self.max_substeps = max_substeps

    @property
    def max_duration(self) -> float:
        """Longest duration integrate() accepts."""
        return self.max_step * self.max_substeps

    def step(self, r: np.ndarray, v: np.ndarray, dt: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Perform a single kick-drift-kick step.

        Args:
            r: Position
            v: Velocity
            dt: Time step (may be negative)

        Returns:
            Tuple of (new_position, new_velocity)
        """
        v_half = v + 0.5 * dt * self.acceleration(r)
        r_new = r + dt * v_half
        v_new = v_half + 0.5 * dt * self.acceleration(r_new)

        return r_new, v_new

    def integrate(self,
                  r: np.ndarray,
                  v: np.ndarray,
                  duration: float) -> Tuple[np.ndarray, np.ndarray, int]:
        """
        Integrate over an arbitrary duration in bounded sub-steps.

        Negative durations integrate backwards.

        Args:
            r: Initial position
            v: Initial velocity
            duration: Time to integrate

        Returns:
            Tuple of (position, velocity, sub-step count)

        Raises:
            ValueError: If duration is not finite or exceeds max_duration
        """
        if not math.isfinite(duration) or abs(duration) > self.max_duration:
            raise ValueError(
                f"Cannot integrate over {duration} s "
                f"(limit {self.max_duration} s in {self.max_substeps} sub-steps)")

        remaining = duration
        steps = 0

        while abs(remaining) > self.epsilon:
            h = math.copysign(min(abs(remaining), self.max_step), remaining)
            r, v = self.step(r, v, h)
            remaining -= h
            steps += 1

        return r, v, steps
