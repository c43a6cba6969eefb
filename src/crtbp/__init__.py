"""
Numerical core of the planar Circular Restricted Three-Body Problem (CR3BP).

The package provides the rotating-frame force model, a Newton-Raphson solver
for the five Lagrange points, a fixed-step RK4 trajectory integrator driven by
picked start positions, and a sampler of the Jacobi-constant field for
iso-contour extraction.
"""

from .config import CRTBPConfig, DEFAULT_CONFIG
from .algorithms import (
    CRTBPModel,
    EquilibriumSolver,
    FieldSampler,
    Result,
    ScalarField,
    Status,
    Tracer,
    Trajectory,
    TrajectoryIntegrator,
    propagate_rk4,
)
from .models import lagrange_points

__version__ = "0.1.0"

__all__ = [
    'CRTBPConfig',
    'DEFAULT_CONFIG',
    'CRTBPModel',
    'EquilibriumSolver',
    'FieldSampler',
    'Result',
    'ScalarField',
    'Status',
    'Tracer',
    'Trajectory',
    'TrajectoryIntegrator',
    'propagate_rk4',
    'lagrange_points',
]
