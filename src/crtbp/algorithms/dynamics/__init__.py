"""
Propagation of third-body trajectories in the CR3BP.

This package provides:
- Fixed-step RK4 integration of the rotating-frame equations of motion
- Derivation of start states from a picked position and a Jacobi level
- Immutable trajectory snapshots and the tracer that swaps them
"""

from .integrator import propagate_rk4, rk4_step, rk4_step_checked
from .tracer import (
    Tracer,
    Trajectory,
    TrajectoryIntegrator,
    initial_velocity,
    radius_profile,
)

__all__ = [
    # Integrator
    'propagate_rk4',
    'rk4_step',
    'rk4_step_checked',

    # Trajectories
    'Tracer',
    'Trajectory',
    'TrajectoryIntegrator',
    'initial_velocity',
    'radius_profile',
]
