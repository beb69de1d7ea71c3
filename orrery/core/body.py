"""
Celestial Bodies
================

Per-body records: static parameters, rotation state and current pose.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .config import BodyParameters, OrbitalElements
from .transforms import model_matrix, normal_matrix
from ..dynamics.rotation import RotationState


@dataclass
class BodyFrame:
    """Per-frame output for one body, consumed by the renderer."""
    key: str
    name: str
    position: np.ndarray
    model_matrix: np.ndarray
    normal_matrix: np.ndarray
    spin_axis: np.ndarray
    orbital_radius: float = 0.0  # scene units
    speed_km_s: float = 0.0


@dataclass
class HudInfo:
    """Informational summary for the HUD."""
    name: str
    orbit_radius_million_km: float
    orbit_speed_km_s: float
    rotation_period_hours: float
    retrograde: bool


class Body:
    """
    One body in the scene.

    Manages:
    - Static parameters (scale, tilt, optional orbital elements)
    - Accumulated self-rotation
    - Current world position and orbital summary
    """

    def __init__(self, key: str, params: BodyParameters):
        """
        Initialize body at the origin.

        Args:
            key: Stable body identifier
            params: Body parameters
        """
        self.key = key
        self.params = params
        self.rotation = RotationState(
            rate_deg_s=params.rotation_speed_deg_s,
            obliquity_deg=params.obliquity_deg,
        )

        self.position = np.zeros(3)
        self.orbital_radius = 0.0
        self.speed_km_s = 0.0

    @property
    def name(self) -> str:
        return self.params.name

    @property
    def elements(self) -> Optional[OrbitalElements]:
        return self.params.elements

    @property
    def primary(self) -> Optional[str]:
        return self.params.primary

    def reset(self):
        self.rotation.angle_deg = 0.0
        self.position = np.zeros(3)
        self.orbital_radius = 0.0
        self.speed_km_s = 0.0

    @property
    def model_matrix(self) -> np.ndarray:
        """Translate to position, tilt and spin, then scale."""
        return model_matrix(self.position,
                            self.rotation.orientation_matrix(),
                            self.params.scale)

    def frame(self) -> BodyFrame:
        model = self.model_matrix
        return BodyFrame(
            key=self.key,
            name=self.name,
            position=self.position.copy(),
            model_matrix=model,
            normal_matrix=normal_matrix(model),
            spin_axis=self.rotation.spin_axis,
            orbital_radius=self.orbital_radius,
            speed_km_s=self.speed_km_s,
        )

    def hud_info(self, km_per_unit: float) -> HudInfo:
        return HudInfo(
            name=self.name,
            orbit_radius_million_km=self.orbital_radius * km_per_unit / 1e6,
            orbit_speed_km_s=self.speed_km_s,
            rotation_period_hours=self.params.rotation_period_hours,
            retrograde=self.params.retrograde,
        )

    def __repr__(self) -> str:
        return f"Body({self.key!r}, position={self.position.round(3).tolist()})"
