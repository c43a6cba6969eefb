"""
Fixed-step Runge-Kutta propagation of CR3BP states.

This module provides the classical 4th-order Runge-Kutta scheme applied to
the rotating-frame equations of motion:

    k1 = f(s)
    k2 = f(s + h/2 k1)
    k3 = f(s + h/2 k2)
    k4 = f(s + h k3)
    s' = s + h/6 (k1 + 2 k2 + 2 k3 + k4)

There is no step-size control and no projection back onto the Jacobi level;
the drift of the Jacobi constant along a propagated trajectory is the
integration error. Propagation stops early when a state becomes non-finite or
enters the exclusion radius around one of the massive bodies.
"""

import logging

import numba
import numpy as np

from crtbp.algorithms.core.model import crtbp_direction
from crtbp.algorithms.core.status import Result, Status

logger = logging.getLogger(__name__)


@numba.njit(error_model="numpy", cache=True)
def rk4_step(state, h, mu, omega):
    """
    Advance a state [x, y, vx, vy] by one RK4 step of size h.

    Returns a new array; the input state is not modified.
    """
    k1 = crtbp_direction(state, mu, omega)
    k2 = crtbp_direction(state + 0.5 * h * k1, mu, omega)
    k3 = crtbp_direction(state + 0.5 * h * k2, mu, omega)
    k4 = crtbp_direction(state + h * k3, mu, omega)
    return state + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


@numba.njit(error_model="numpy", cache=True)
def _is_regular(state, mu, radius):
    for k in range(4):
        if not np.isfinite(state[k]):
            return False
    x = state[0]
    y = state[1]
    rp = np.sqrt((x + mu) ** 2 + y * y)
    rs = np.sqrt((x - 1.0 + mu) ** 2 + y * y)
    return rp > radius and rs > radius


@numba.njit(error_model="numpy", cache=True)
def _propagate(state0, steps, h, mu, omega, radius):
    states = np.empty((steps + 1, 4), dtype=np.float64)
    states[0, :] = state0
    state = state0.copy()
    for i in range(1, steps + 1):
        state = rk4_step(state, h, mu, omega)
        if not _is_regular(state, mu, radius):
            return states, i
        states[i, :] = state
    return states, steps + 1


def rk4_step_checked(model, state, h, radius=0.0):
    """
    One RK4 step with a singularity check on the new state.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    state : array_like
        State vector [x, y, vx, vy]
    h : float
        Step size
    radius : float, optional
        Exclusion radius around each massive body. Default is 0.0.

    Returns
    -------
    Result
        New state, with status SINGULARITY_ENCOUNTERED if it is not finite or
        lies within `radius` of a body
    """
    state = np.asarray(state, dtype=np.float64)
    new_state = rk4_step(state, h, model.mu, model.omega)
    if not _is_regular(new_state, model.mu, radius):
        return Result(new_state, Status.SINGULARITY_ENCOUNTERED,
                      f"state {new_state} is singular (exclusion radius {radius:g})")
    return Result(new_state)


def propagate_rk4(model, state0, steps, h, radius=0.0):
    """
    Propagate a state with a fixed number of RK4 steps.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    state0 : array_like
        Initial state vector [x, y, vx, vy]
    steps : int
        Number of RK4 steps. Zero returns the unchanged initial state.
    h : float
        Step size
    radius : float, optional
        Exclusion radius around each massive body. Default is 0.0.

    Returns
    -------
    states : ndarray
        States with shape (steps + 1, 4) in chronological order, starting with
        `state0`. Shorter when the propagation ran into a singularity: the
        array then ends with the last regular state.
    status : Status
        OK or SINGULARITY_ENCOUNTERED
    """
    state0 = np.array(state0, dtype=np.float64)
    if steps < 0:
        raise ValueError(f"Number of steps must be non-negative, got {steps}.")

    states, n_valid = _propagate(state0, int(steps), float(h), model.mu, model.omega, float(radius))
    if n_valid < steps + 1:
        logger.warning(
            "Propagation from %s stopped after %d of %d steps: singularity encountered",
            state0, n_valid - 1, steps,
        )
        return states[:n_valid].copy(), Status.SINGULARITY_ENCOUNTERED
    return states, Status.OK
