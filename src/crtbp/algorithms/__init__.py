"""
Numerical algorithms for the planar Circular Restricted Three-Body Problem (CR3BP).

This package is organized into several submodules:

- core:      Force model, energy relations and the Lagrange point solver
- dynamics:  RK4 propagation and picked trajectories
- analysis:  Sampling of the Jacobi-constant field
"""

from .core import CRTBPModel, EquilibriumSolver, Result, Status
from .dynamics import Tracer, Trajectory, TrajectoryIntegrator, propagate_rk4
from .analysis import FieldSampler, ScalarField

__all__ = [
    'CRTBPModel',
    'EquilibriumSolver',
    'Result',
    'Status',
    'Tracer',
    'Trajectory',
    'TrajectoryIntegrator',
    'propagate_rk4',
    'FieldSampler',
    'ScalarField',
]
