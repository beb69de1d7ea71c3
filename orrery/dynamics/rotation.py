"""
Body Rotation
=============

Self-rotation bookkeeping and spin-axis orientation.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from ..core.transforms import UP, Z_AXIS, rotation_matrix

logger = logging.getLogger(__name__)


def wrap_degrees(angle: float) -> float:
    """Wrap into [-360, 360] by whole turns, keeping the sign of motion."""
    if angle > 360.0 or angle < -360.0:
        angle = math.fmod(angle, 360.0)
    return angle


@dataclass
class RotationState:
    """
    Self-rotation of one body.

    Obliquity tilts the spin axis away from world up. Past 90 degrees the
    axis points below the orbit plane, so a positive rate shows as
    retrograde spin.
    """
    rate_deg_s: float = 0.0
    obliquity_deg: float = 0.0
    angle_deg: float = 0.0

    def advance(self, real_dt: float, time_dilation: float = 1.0) -> float:
        """
        Accumulate rotation for one frame.

        Args:
            real_dt: Real seconds since the last frame
            time_dilation: Simulation speed multiplier

        Returns:
            New angle in degrees
        """
        angle = self.angle_deg + self.rate_deg_s * real_dt * time_dilation
        if not math.isfinite(angle):
            logger.warning("Non-finite rotation step ignored (dt=%s, dilation=%s)",
                           real_dt, time_dilation)
            return self.angle_deg
        self.angle_deg = wrap_degrees(angle)
        return self.angle_deg

    @property
    def tilt_matrix(self) -> np.ndarray:
        return rotation_matrix(self.obliquity_deg, Z_AXIS)

    @property
    def spin_axis(self) -> np.ndarray:
        """World up tilted by the obliquity."""
        return self.tilt_matrix @ UP

    def orientation_matrix(self) -> np.ndarray:
        """Tilt, then spin by the accumulated angle about the tilted axis."""
        return self.tilt_matrix @ rotation_matrix(self.angle_deg, UP)


def tidal_lock_angle(relative_position: np.ndarray) -> float:
    """
    Spin angle that keeps a body's +X face toward its primary.

    Args:
        relative_position: Body position relative to the primary

    Returns:
        Angle about world up, degrees
    """
    x, _, z = -np.asarray(relative_position, dtype=float)
    # Ry(theta) maps +X to (cos theta, 0, -sin theta)
    return math.degrees(math.atan2(-z, x))
