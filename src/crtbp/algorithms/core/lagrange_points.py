"""
Computation of Lagrange (libration) points in the CR3BP.

The five equilibria are found numerically with a Newton-Raphson iteration on
the gradient of the pseudo-potential, using its analytic Hessian as the
Jacobian. Each seed is iterated independently and the solutions keep the seed
order, so index 0..4 corresponds to L1..L5.

High-precision reference locations (mpmath root of the collinear equilibrium
equation, exact equilateral formula) are provided for validation.
"""

import logging
import warnings
from dataclasses import dataclass

import mpmath as mp
import numpy as np
from scipy import linalg

from crtbp.config import DEFAULT_CONFIG, config_for_model
from .status import Result, Status

# Set mpmath precision to 50 digits for root finding
mp.mp.dps = 50

logger = logging.getLogger(__name__)

LABELS = ("L1", "L2", "L3", "L4", "L5")


@dataclass(frozen=True, eq=False)
class EquilibriumSolution:
    """
    Outcome of a Newton-Raphson search for one equilibrium.

    Attributes
    ----------
    position : ndarray
        Final iterate [x, y], returned whether or not the iteration converged
    seed : ndarray
        Starting guess
    iterations : int
        Number of Newton steps taken
    step_norm : float
        Norm of the last Newton step
    residual : float
        Norm of the pseudo-potential gradient at `position`
    status : Status
        OK, DID_NOT_CONVERGE or SINGULAR_JACOBIAN
    """

    position: np.ndarray
    seed: np.ndarray
    iterations: int
    step_norm: float
    residual: float
    status: Status = Status.OK

    @property
    def converged(self):
        return self.status is Status.OK


def newton_step(model, x, max_condition=DEFAULT_CONFIG.max_condition):
    """
    Newton-Raphson correction for the equilibrium condition grad U = 0.

    Solves H dx = grad U with a linear solve (no explicit inverse). The step is
    flagged SINGULAR_JACOBIAN when the solve fails, when the Hessian is worse
    conditioned than `max_condition`, or when dx is not finite.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    x : array_like
        Current iterate [x, y]
    max_condition : float, optional
        Largest acceptable condition number of the Hessian

    Returns
    -------
    Result
        Step dx (NaN-filled if the solve failed) and status
    """
    v = model.pseudo_potential_grad(x)
    H = model.pseudo_potential_hessian(x)

    try:
        cond = np.linalg.cond(H)
        dx = linalg.solve(H, v, assume_a='sym')
    except (linalg.LinAlgError, ValueError) as exc:
        return Result(np.full(2, np.nan), Status.SINGULAR_JACOBIAN, str(exc))

    if not np.isfinite(cond) or cond > max_condition:
        return Result(dx, Status.SINGULAR_JACOBIAN,
                      f"Hessian condition number {cond:.3e} exceeds {max_condition:.3e}")
    if not np.all(np.isfinite(dx)):
        return Result(dx, Status.SINGULAR_JACOBIAN, "Newton step is not finite")
    return Result(dx)


def find_equilibrium(model, seed, max_iterations=10, tolerance=1e-8,
                     max_condition=DEFAULT_CONFIG.max_condition):
    """
    Newton-Raphson search for a root of the pseudo-potential gradient.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    seed : array_like
        Initial guess [x, y]
    max_iterations : int, optional
        Maximum number of Newton steps. Default is 10.
    tolerance : float, optional
        The iteration stops once the step norm drops below this value.
        Default is 1e-8.
    max_condition : float, optional
        Largest acceptable condition number of the Hessian

    Returns
    -------
    EquilibriumSolution
        Final iterate and convergence information. The final iterate is
        returned even when the iteration fails.
    """
    seed = np.array(seed, dtype=np.float64)
    x = seed.copy()
    step_norm = np.inf
    status = Status.DID_NOT_CONVERGE
    iterations = 0

    for iterations in range(1, max_iterations + 1):
        step = newton_step(model, x, max_condition)
        if step.status is Status.SINGULAR_JACOBIAN and not np.all(np.isfinite(step.value)):
            status = Status.SINGULAR_JACOBIAN
            logger.warning("Newton step from seed %s failed at %s: %s", seed, x, step.message)
            break

        x = x - step.value
        step_norm = float(np.linalg.norm(step.value))

        if not step.ok:
            status = step.status
            logger.warning("Newton step from seed %s is unreliable at %s: %s", seed, x, step.message)
            break
        if step_norm < tolerance:
            status = Status.OK
            break

    residual = float(np.linalg.norm(model.pseudo_potential_grad(x)))
    if status is Status.DID_NOT_CONVERGE:
        logger.warning(
            "Newton-Raphson from seed %s did not converge in %d iterations (|dx| = %.3e)",
            seed, max_iterations, step_norm,
        )

    x.setflags(write=False)
    seed.setflags(write=False)
    return EquilibriumSolution(x, seed, iterations, step_norm, residual, status)


class EquilibriumSolver:
    """
    Newton-Raphson solver for the five Lagrange points.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    config : CRTBPConfig, optional
        Supplies the seeds, the iteration cap, the tolerance and the
        conditioning limit. Must match the model's mu and omega.
    """

    def __init__(self, model, config=None):
        self.model = model
        self.config = config_for_model(model, config)

    def solve(self, seeds=None):
        """
        Solve for one equilibrium per seed.

        Parameters
        ----------
        seeds : array_like, optional
            Five seed positions in L1..L5 order. Defaults to the configured seeds.

        Returns
        -------
        tuple
            EquilibriumSolution for each seed, in seed order
        """
        if seeds is None:
            seeds = self.config.seeds

        solutions = tuple(
            find_equilibrium(
                self.model, seed,
                max_iterations=self.config.max_iterations,
                tolerance=self.config.tolerance,
                max_condition=self.config.max_condition,
            )
            for seed in seeds
        )

        for label, sol in zip(LABELS, solutions):
            logger.debug("%s: position=%s iterations=%d residual=%.3e status=%s",
                         label, sol.position, sol.iterations, sol.residual, sol.status.value)
        return solutions

    def positions(self, seeds=None):
        """Solved positions as a read-only (n, 2) array."""
        out = np.array([sol.position for sol in self.solve(seeds)], dtype=np.float64)
        out.setflags(write=False)
        return out


def reference_locations(mu):
    """
    High-precision locations of all five libration points.

    Parameters
    ----------
    mu : float
        Mass parameter of the CR3BP system (ratio of smaller to total mass)

    Returns
    -------
    tuple
        2D positions of L1, L2, L3, L4 and L5 as ndarrays
    """
    return _l1(mu), _l2(mu), _l3(mu), _l4(mu), _l5(mu)


def get_reference_location(mu, point_index):
    """
    High-precision location of a single libration point.

    Parameters
    ----------
    mu : float
        Mass parameter of the CR3BP system (ratio of smaller to total mass)
    point_index : int
        Lagrange point index (1-5)

    Returns
    -------
    ndarray
        2D vector [x, y]
    """
    if point_index == 1:
        return _l1(mu)
    elif point_index == 2:
        return _l2(mu)
    elif point_index == 3:
        return _l3(mu)
    elif point_index == 4:
        return _l4(mu)
    elif point_index == 5:
        return _l5(mu)
    else:
        raise ValueError("Invalid Lagrange point index. Must be 1-5.")


def _collinear_root(mu, bracket):
    x = mp.findroot(lambda x: _dOmega_dx(x, mu), bracket, solver='bisect', maxsteps=200)
    return np.array([float(x), 0.0], dtype=np.float64)


def _l1(mu):
    """L1, between the two primaries."""
    return _collinear_root(mu, (-mu + 0.01, 1 - mu - 0.01))


def _l2(mu):
    """L2, beyond the smaller primary."""
    return _collinear_root(mu, (1 - mu + 0.01, 2.0))


def _l3(mu):
    """L3, beyond the larger primary."""
    return _collinear_root(mu, (-2.0, -mu - 0.01))


def _l4(mu):
    x = 1 / 2 - mu
    y = np.sqrt(3) / 2
    return np.array([x, y], dtype=np.float64)


def _l5(mu):
    x = 1 / 2 - mu
    y = -np.sqrt(3) / 2
    return np.array([x, y], dtype=np.float64)


def _dOmega_dx(x, mu):
    """
    Derivative of the pseudo-potential along the x-axis (omega = 1).

    The collinear points are the roots of this function.
    """
    x = mp.mpf(x)
    mu = mp.mpf(mu)
    r1 = abs(x + mu)
    r2 = abs(x - (1 - mu))
    return x - (1 - mu) * (x + mu) / (r1**3) - mu * (x - (1 - mu)) / (r2**3)


def check_triangular_stability(mu):
    """Warn when L4/L5 are linearly unstable (Routh criterion)."""
    if mu > 0.0385:
        warnings.warn(f"Triangular points are unstable for mu > 0.0385 (current mu = {mu})")
