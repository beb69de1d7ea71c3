"""
Orrery Simulation Core
======================

Positions and orientations of celestial bodies for a real-time solar
system visualization.

Components:
- Keplerian orbits for the planets (fixed-iteration Kepler solver)
- Leapfrog-integrated moon with divergence recovery
- Simulation clock with time dilation and pause
- Self-rotation with axial tilt
"""

__version__ = "1.0.0"

from orrery.core.simulator import Simulator
from orrery.core.time_manager import SimulationClock
from orrery.core.config import SimulationConfig

__all__ = [
    'Simulator',
    'SimulationClock',
    'SimulationConfig',
]
