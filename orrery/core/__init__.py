"""
Simulation Core Module
======================

Configuration, time, bodies and the frame simulator.
"""

from .simulator import Simulator
from .body import Body, BodyFrame
from .time_manager import SimulationClock
from .config import SimulationConfig, OrbitalElements, ConfigurationError

__all__ = [
    'Simulator',
    'Body',
    'BodyFrame',
    'SimulationClock',
    'SimulationConfig',
    'OrbitalElements',
    'ConfigurationError',
]
