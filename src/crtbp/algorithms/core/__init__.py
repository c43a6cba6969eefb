"""
Core mathematical functions for the Circular Restricted Three-Body Problem (CR3BP).

This package contains the analytic force model, the energy relations, the
Lagrange point solver and the status types shared by all numerical routines.
"""

from .model import CRTBPModel
from .energy import (
    critical_jacobi_levels,
    crtbp_energy,
    energy_to_jacobi,
    initial_speed,
    jacobi_history,
    jacobi_to_energy,
    state_jacobi,
)
from .lagrange_points import (
    EquilibriumSolution,
    EquilibriumSolver,
    find_equilibrium,
    get_reference_location,
    newton_step,
    reference_locations,
)
from .status import (
    CRTBPError,
    DidNotConvergeError,
    EnergyUnreachableError,
    Result,
    SingularityEncounteredError,
    SingularJacobianError,
    Status,
)

__all__ = [
    'CRTBPModel',
    'critical_jacobi_levels',
    'crtbp_energy',
    'energy_to_jacobi',
    'initial_speed',
    'jacobi_history',
    'jacobi_to_energy',
    'state_jacobi',
    'EquilibriumSolution',
    'EquilibriumSolver',
    'find_equilibrium',
    'get_reference_location',
    'newton_step',
    'reference_locations',
    'CRTBPError',
    'DidNotConvergeError',
    'EnergyUnreachableError',
    'Result',
    'SingularityEncounteredError',
    'SingularJacobianError',
    'Status',
]
