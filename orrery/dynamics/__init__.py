"""
Dynamics Module
===============

Keplerian orbits, satellite integration and body rotation.
"""

from .kepler import solve_kepler, orbital_position_at_jd
from .integrators import LeapfrogIntegrator
from .satellite import SatelliteIntegrator, RecoveryEvent
from .rotation import RotationState

__all__ = [
    'solve_kepler',
    'orbital_position_at_jd',
    'LeapfrogIntegrator',
    'SatelliteIntegrator',
    'RecoveryEvent',
    'RotationState',
]
