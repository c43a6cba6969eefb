"""
Energy computation functions for the Circular Restricted Three-Body Problem (CR3BP).

This module provides functions for calculating and analyzing energies and
related quantities in the planar CR3BP, including:
- Converting between energy and Jacobi constant
- Evaluating the Jacobi constant of full states and of whole trajectories
- Deriving the speed compatible with a target Jacobi constant
- Jacobi levels of the libration points

Convention: wherever a speed enters the Jacobi constant it is the velocity
magnitude v, and C = 2 U(x, y) - v**2.
"""

import logging

import numba
import numpy as np

from .model import _pseudo_potential
from .status import Result, Status

logger = logging.getLogger(__name__)


@numba.njit(error_model="numpy", cache=True)
def _jacobi_states(states, mu, omega):
    n = states.shape[0]
    out = np.empty(n, dtype=np.float64)
    for k in range(n):
        x = states[k, 0]
        y = states[k, 1]
        vx = states[k, 2]
        vy = states[k, 3]
        out[k] = 2.0 * _pseudo_potential(x, y, mu, omega) - (vx * vx + vy * vy)
    return out


def energy_to_jacobi(energy):
    """
    Convert energy to Jacobi constant.

    The Jacobi constant C is related to the energy E by C = -2E.

    Parameters
    ----------
    energy : float
        Energy value

    Returns
    -------
    float
        Corresponding Jacobi constant
    """
    return -2 * energy


def jacobi_to_energy(jacobi):
    """
    Convert Jacobi constant to energy.

    The energy E is related to the Jacobi constant C by E = -C/2.

    Parameters
    ----------
    jacobi : float
        Jacobi constant value

    Returns
    -------
    float
        Corresponding energy value
    """
    return -jacobi / 2


def crtbp_energy(model, state):
    """
    Energy (Hamiltonian) of a planar state, E = v**2/2 - U.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    state : array_like
        State vector [x, y, vx, vy] in the rotating frame

    Returns
    -------
    float
        The energy value
    """
    return jacobi_to_energy(state_jacobi(model, state))


def state_jacobi(model, state):
    """
    Jacobi constant of a full state [x, y, vx, vy].
    """
    x, y, vx, vy = np.asarray(state, dtype=np.float64)
    return model.jacobi_constant((x, y), np.hypot(vx, vy))


def jacobi_history(model, states):
    """
    Jacobi constant at every state of a trajectory.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    states : array_like
        Array of states with shape (n, 4)

    Returns
    -------
    ndarray
        Jacobi constant of each state, shape (n,)
    """
    states = np.ascontiguousarray(states, dtype=np.float64)
    if states.shape[0] == 0:
        return np.empty(0, dtype=np.float64)
    return _jacobi_states(states, model.mu, model.omega)


def initial_speed(model, pos, jacobi_target):
    """
    Speed of a third body at `pos` lying on the Jacobi level `jacobi_target`.

    From C = 2U - v**2 the speed is v = sqrt(2U - C). When the target level
    cannot be reached at this position (2U < C) the radicand is clamped to zero
    and the speed is exactly 0; the result then carries the informational
    status ENERGY_UNREACHABLE.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    pos : array_like
        2D position [x, y]
    jacobi_target : float
        Target Jacobi constant

    Returns
    -------
    Result
        Speed (never NaN for finite input) and status
    """
    radicand = 2.0 * model.pseudo_potential(pos) - jacobi_target
    if radicand < 0.0:
        logger.info(
            "Jacobi level %.6f unreachable at (%.6f, %.6f): speed clamped to zero",
            jacobi_target, pos[0], pos[1],
        )
        return Result(0.0, Status.ENERGY_UNREACHABLE,
                      f"2U - C = {radicand:.3e} < 0 at ({pos[0]:.6f}, {pos[1]:.6f})")
    return Result(float(np.sqrt(radicand)))


def critical_jacobi_levels(model, positions):
    """
    Jacobi constants of a set of equilibria (zero speed).

    Evaluated at the five libration points these are the levels at which the
    zero-velocity curves change topology, which makes them natural iso-levels
    for the sampled Jacobi field.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    positions : iterable
        2D positions of the equilibria

    Returns
    -------
    ndarray
        Jacobi constant at each position
    """
    return np.array([model.jacobi_constant(p, 0.0) for p in positions], dtype=np.float64)
