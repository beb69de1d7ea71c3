"""
Main Simulator
==============

Per-frame orchestration of clock, orbits, satellite and rotation.
"""

import logging
import numpy as np
from typing import Callable, Dict, List, Optional
from dataclasses import dataclass, field

from .config import SECONDS_PER_DAY, SimulationConfig
from .body import Body, BodyFrame, HudInfo
from .time_manager import SimulationClock
from ..dynamics.kepler import orbital_speed, orbital_state_at_jd, sample_orbit_path
from ..dynamics.rotation import tidal_lock_angle
from ..dynamics.satellite import RecoveryEvent, SatelliteIntegrator

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Snapshot of the simulation for history recording."""
    time_s: float = 0.0
    julian_date: float = 0.0
    positions: Dict[str, np.ndarray] = field(default_factory=dict)
    moon_distance: float = 0.0


class Simulator:
    """
    Orrery simulation engine.

    Integrates:
    - Simulation clock with time dilation and pause
    - Analytic Keplerian orbits for the planets
    - Numerically integrated moon around its primary
    - Self-rotation and axial tilt of every body

    Driven by the frame loop above it: call update() once per frame.
    """

    def __init__(self, config: SimulationConfig = None):
        """
        Initialize simulator.

        Args:
            config: Simulation configuration
        """
        self.config = config or SimulationConfig()

        # Initialize time
        self.clock = SimulationClock(self.config.clock)

        # Initialize bodies
        self.bodies: Dict[str, Body] = {
            key: Body(key, params) for key, params in self.config.bodies.items()
        }

        # Initialize moon
        self.moon: Optional[Body] = None
        self.satellite: Optional[SatelliteIntegrator] = None
        moon_params = self.config.moon
        if moon_params is not None:
            self.moon = Body(moon_params.key, moon_params.to_body_parameters())
            self.bodies[moon_params.key] = self.moon
            self.satellite = SatelliteIntegrator(
                nominal_radius=moon_params.orbit_radius,
                period_s=moon_params.period_seconds,
                max_step_s=moon_params.max_step_s,
                epsilon_s=moon_params.epsilon_s,
            )
            self.satellite.add_recovery_listener(self._on_recovery)

        # Data logging
        self.history: List[SimulationState] = []
        self.recovery_events: List[RecoveryEvent] = []

        # Callbacks
        self.step_callbacks: List[Callable] = []

        self._place_bodies()

        logger.info("Simulator initialized: %d bodies, epoch JD %.1f, %.3f days per real second",
                    len(self.bodies), self.clock.epoch_jd, self.clock.days_per_real_second)
        if self.satellite is not None:
            logger.info("%s calibrated: mu=%.6e units^3/s^2, circular speed %.6e units/s",
                        self.moon.name, self.satellite.mu, self.satellite.circular_speed)

    @property
    def central_body(self) -> Body:
        return self.bodies[self.config.central_body]

    def body(self, key: str) -> Body:
        """Look up a body by identifier (raises KeyError if unknown)."""
        return self.bodies[key]

    def reset(self):
        """Reset simulation to the epoch."""
        self.clock.reset()
        for body in self.bodies.values():
            body.reset()
        if self.satellite is not None:
            self.satellite.restart()
        self.history.clear()
        self.recovery_events.clear()
        self._place_bodies()

    def update(self, real_dt: float) -> Dict[str, BodyFrame]:
        """
        Advance the simulation by one rendered frame.

        Args:
            real_dt: Real seconds since the previous frame

        Returns:
            Frame output per body key
        """
        self.clock.tick(real_dt)

        if not self.clock.paused:
            for body in self.bodies.values():
                body.rotation.advance(real_dt, self.clock.time_dilation)

        self._place_bodies()

        frames = {key: body.frame() for key, body in self.bodies.items()}

        if self.config.record_history:
            self.history.append(self._snapshot())

        for callback in self.step_callbacks:
            callback(self, frames)

        return frames

    def run(self,
            duration_real_s: float,
            frame_dt: float = None,
            progress_callback: Callable = None) -> Dict[str, BodyFrame]:
        """
        Drive the simulation headlessly at a fixed frame step.

        Args:
            duration_real_s: Real-time duration to simulate
            frame_dt: Frame step (default: config frame_dt)
            progress_callback: Called with progress (0-1)

        Returns:
            Frames of the last update
        """
        dt = frame_dt or self.config.frame_dt
        n_frames = int(round(duration_real_s / dt))

        frames = {key: body.frame() for key, body in self.bodies.items()}
        for i in range(n_frames):
            frames = self.update(dt)
            if progress_callback and (i + 1) % 100 == 0:
                progress_callback((i + 1) / n_frames)

        logger.info("Run complete: %d frames, JD %.3f, %d recoveries",
                    n_frames, self.clock.julian_date, len(self.recovery_events))
        return frames

    def _place_bodies(self):
        """Compute world positions for the current clock state."""
        jd = self.clock.julian_date
        km_per_unit = self.config.km_per_unit

        for body in self.bodies.values():
            if body is self.moon:
                continue
            if body.elements is None:
                # Central body stays at the origin
                body.position = np.zeros(3)
                continue

            sample = orbital_state_at_jd(body.elements, jd, self.config.kepler_iterations)
            body.position = sample.position
            body.orbital_radius = sample.radius
            speed_units_day = orbital_speed(body.elements, sample.radius)
            body.speed_km_s = speed_units_day * km_per_unit / SECONDS_PER_DAY

        if self.moon is not None:
            self._place_moon()

    def _place_moon(self):
        delta = self.clock.consume_integration_delta()
        self.satellite.advance(delta)

        state = self.satellite.state
        logger.debug("%s advanced %.1f s in %d sub-steps, distance %.4f",
                     self.moon.name, delta, self.satellite.last_substeps, state.distance)
        primary = self.bodies[self.moon.primary]
        self.moon.position = primary.position + state.position
        self.moon.orbital_radius = state.distance
        self.moon.speed_km_s = state.speed * self.config.km_per_unit

        if self.config.moon.tidally_locked:
            self.moon.rotation.angle_deg = tidal_lock_angle(state.position)

    def _on_recovery(self, event: RecoveryEvent):
        self.recovery_events.append(event)

    def _snapshot(self) -> SimulationState:
        return SimulationState(
            time_s=self.clock.elapsed_seconds,
            julian_date=self.clock.julian_date,
            positions={key: body.position.copy() for key, body in self.bodies.items()},
            moon_distance=self.satellite.state.distance if self.satellite else 0.0,
        )

    def add_step_callback(self, callback: Callable):
        """Add callback to be called each frame with (simulator, frames)."""
        self.step_callbacks.append(callback)

    def hud_summary(self, key: str) -> HudInfo:
        """HUD summary for one body."""
        return self.bodies[key].hud_info(self.config.km_per_unit)

    def orbit_paths(self, num_points: int = None) -> Dict[str, np.ndarray]:
        """
        Sampled orbit loops for every body with orbital elements.

        Returns:
            Body key -> (num_points, 3) world positions
        """
        n = num_points or self.config.orbit_path_points
        return {
            key: sample_orbit_path(body.elements, n, self.config.kepler_iterations)
            for key, body in self.bodies.items()
            if body.elements is not None
        }

    def get_telemetry(self) -> Dict:
        """
        Get current simulation summary.

        Returns:
            Dictionary of telemetry values
        """
        telemetry = {
            'time_s': self.clock.elapsed_seconds,
            'julian_date': self.clock.julian_date,
            'utc': self.clock.current_utc.isoformat(),
            'paused': self.clock.paused,
            'time_dilation': self.clock.time_dilation,
            'positions': {key: body.position.tolist() for key, body in self.bodies.items()},
            'recoveries': len(self.recovery_events),
        }
        if self.satellite is not None:
            telemetry['moon_distance'] = self.satellite.state.distance
            telemetry['moon_speed'] = self.satellite.state.speed
        return telemetry
