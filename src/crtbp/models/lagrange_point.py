"""
Lagrange point model for the CR3BP.

This module defines a hierarchy of classes representing Lagrange (libration) points
in the planar Circular Restricted Three-Body Problem (CR3BP). The positions come
from the Newton-Raphson solver; each point also knows its high-precision
reference location, its Jacobi level and the linear stability of the planar
equations of motion around it.

The class hierarchy consists of:
- LagrangePoint (abstract base class)
- CollinearPoint (for L1, L2, L3)
- TriangularPoint (for L4, L5)
- Concrete classes for each point (L1Point, L2Point, etc.)
"""

from abc import ABC, abstractmethod

import numpy as np

from crtbp.algorithms.core.lagrange_points import (
    LABELS,
    check_triangular_stability,
    find_equilibrium,
    get_reference_location,
    EquilibriumSolver,
)
from crtbp.config import config_for_model


class LagrangePoint(ABC):
    """
    Abstract base class for Lagrange points in the CR3BP.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    point_index : int
        The Lagrange point index (1-5)
    config : CRTBPConfig, optional
        Supplies the seed and the Newton-Raphson settings. Must match the
        model's mu and omega.
    solution : EquilibriumSolution, optional
        Already computed solution for this point
    """

    def __init__(self, model, point_index, config=None, solution=None):
        """Initialize a Lagrange point with the model and point index."""
        self.model = model
        self.mu = model.mu
        self.point_index = point_index
        self.config = config_for_model(model, config)
        self._solution = solution
        self._stability_info = None

    def __repr__(self):
        return f"{type(self).__name__}(mu={self.mu:.6e})"

    @property
    def label(self):
        return LABELS[self.point_index - 1]

    @property
    def seed(self):
        return self.config.seeds[self.point_index - 1]

    @property
    def solution(self):
        """Newton-Raphson solution, computed on first access."""
        if self._solution is None:
            self._solution = find_equilibrium(
                self.model, self.seed,
                max_iterations=self.config.max_iterations,
                tolerance=self.config.tolerance,
                max_condition=self.config.max_condition,
            )
        return self._solution

    @property
    def position(self):
        """
        Position of the Lagrange point in the rotating frame.

        Returns
        -------
        ndarray
            2D vector [x, y]
        """
        return self.solution.position

    @property
    def status(self):
        return self.solution.status

    @property
    def reference_position(self):
        """High-precision location (valid for the normalized rotation rate)."""
        return self._calculate_reference_position()

    @property
    def jacobi_constant(self):
        """Jacobi constant of a body at rest at the point."""
        return self.model.jacobi_constant(self.position, 0.0)

    def linearization(self):
        """
        4x4 Jacobian of the planar equations of motion at the point.

        Rows and columns are ordered [x, y, vx, vy].
        """
        H = self.model.pseudo_potential_hessian(self.position)
        w = self.model.omega
        A = np.zeros((4, 4), dtype=np.float64)
        A[0, 2] = 1.0
        A[1, 3] = 1.0
        A[2:, :2] = H
        A[2, 3] = 2.0 * w
        A[3, 2] = -2.0 * w
        return A

    def analyze_stability(self, delta=1e-9):
        """
        Classify the eigenvalues of the linearization.

        Parameters
        ----------
        delta : float, optional
            Real parts within this tolerance of zero count as center directions

        Returns
        -------
        tuple
            (sn, un, cn) stable, unstable and center eigenvalues
        """
        if self._stability_info is None:
            eigvals = np.linalg.eigvals(self.linearization())
            sn = eigvals[eigvals.real < -delta]
            un = eigvals[eigvals.real > delta]
            cn = eigvals[np.abs(eigvals.real) <= delta]
            self._stability_info = (sn, un, cn)
        return self._stability_info

    @property
    def is_stable(self):
        """True if the linearization has no unstable direction."""
        _, un, _ = self.analyze_stability()
        return un.size == 0

    @abstractmethod
    def _calculate_reference_position(self):
        """
        Reference location of the point, independent of the Newton-Raphson seed.

        Returns
        -------
        ndarray
            2D vector [x, y]
        """
        pass


class CollinearPoint(LagrangePoint):
    """
    Base class for collinear Lagrange points (L1, L2, L3).

    The collinear points lie on the x-axis connecting the two primary
    bodies and always have one pair of real eigenvalues (saddle x center).
    """

    def __init__(self, model, point_index, config=None, solution=None):
        if point_index not in [1, 2, 3]:
            raise ValueError(f"Collinear point index must be 1, 2, or 3, not {point_index}")
        super().__init__(model, point_index, config, solution)

    def _calculate_reference_position(self):
        # Root of dU/dx on the x-axis, bracketed on the side of the point
        return get_reference_location(self.mu, self.point_index)


class L1Point(CollinearPoint):
    """L1 Lagrange point, located between the two primary bodies."""

    def __init__(self, model, config=None, solution=None):
        super().__init__(model, 1, config, solution)


class L2Point(CollinearPoint):
    """L2 Lagrange point, located beyond the smaller primary body."""

    def __init__(self, model, config=None, solution=None):
        super().__init__(model, 2, config, solution)


class L3Point(CollinearPoint):
    """L3 Lagrange point, located beyond the larger primary body."""

    def __init__(self, model, config=None, solution=None):
        super().__init__(model, 3, config, solution)


class TriangularPoint(LagrangePoint):
    """
    Base class for triangular Lagrange points (L4, L5).

    The triangular points form equilateral triangles with the two primary
    bodies. They are linearly stable for mass ratios mu < 0.0385 and
    unstable for larger mass ratios.
    """

    def __init__(self, model, point_index, config=None, solution=None):
        if point_index not in [4, 5]:
            raise ValueError(f"Triangular point index must be 4 or 5, not {point_index}")
        super().__init__(model, point_index, config, solution)
        check_triangular_stability(self.mu)

    def _calculate_reference_position(self):
        x = 1 / 2 - self.mu
        y = np.sqrt(3) / 2
        return np.array([x, y if self.point_index == 4 else -y], dtype=np.float64)


class L4Point(TriangularPoint):
    """L4 Lagrange point, above the x-axis (positive y)."""

    def __init__(self, model, config=None, solution=None):
        super().__init__(model, 4, config, solution)


class L5Point(TriangularPoint):
    """L5 Lagrange point, below the x-axis (negative y)."""

    def __init__(self, model, config=None, solution=None):
        super().__init__(model, 5, config, solution)


_POINT_CLASSES = {1: L1Point, 2: L2Point, 3: L3Point, 4: L4Point, 5: L5Point}


def create_lagrange_point(model, point_index, config=None, solution=None):
    """
    Create a specific Lagrange point object by index.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    point_index : int
        The Lagrange point index (1-5)
    config : CRTBPConfig, optional
        Supplies the seed and the solver settings
    solution : EquilibriumSolution, optional
        Already computed solution for this point

    Returns
    -------
    LagrangePoint
        An instance of the appropriate Lagrange point class

    Raises
    ------
    ValueError
        If an invalid point index is provided
    """
    if point_index not in _POINT_CLASSES:
        raise ValueError(f"Invalid Lagrange point index: {point_index}. Must be 1-5.")
    return _POINT_CLASSES[point_index](model, config, solution)


def lagrange_points(model, config=None):
    """
    Solve for all five Lagrange points.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    config : CRTBPConfig, optional
        Supplies the seeds (in L1..L5 order) and the solver settings

    Returns
    -------
    tuple
        L1Point, L2Point, L3Point, L4Point and L5Point, in that order
    """
    solutions = EquilibriumSolver(model, config).solve()
    return tuple(
        create_lagrange_point(model, index, config, solution)
        for index, solution in enumerate(solutions, start=1)
    )
