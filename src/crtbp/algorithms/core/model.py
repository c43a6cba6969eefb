"""
Analytic force model of the planar Circular Restricted Three-Body Problem.

This module provides the rotating-frame quantities every other part of the
package is built on:
- Gravitational acceleration of the two massive bodies
- Equations of motion (centrifugal, Coriolis and gravitational terms)
- Pseudo-potential, its gradient and its Hessian
- Jacobi constant

The primary (mass fraction 1 - mu) sits at (-mu, 0) and the secondary (mass
fraction mu) at (1 - mu, 0); the frame rotates with angular velocity omega.
All quantities are singular exactly at the two bodies. This is not guarded
here: callers must avoid sampling there (see `CRTBPModel.near_singularity`).

The numerical kernels are compiled with Numba and operate on scalars, the
`CRTBPModel` class wraps them for array input.
"""

import numba
import numpy as np

from crtbp.models.body import create_bodies


# All kernels use the numpy error model: division by zero at a body gives
# inf or nan instead of raising. Equations of motion are compiled without
# fastmath so that non-finite states stay observable by the integrator.

@numba.njit(error_model="numpy", cache=True)
def _gravity(x, y, mu):
    mu1 = 1.0 - mu

    # Vectors from the third body to the primary (-mu, 0) and secondary (1-mu, 0)
    dxp = -mu - x
    dxs = mu1 - x
    dy = -y

    rp3 = (dxp * dxp + dy * dy) ** 1.5
    rs3 = (dxs * dxs + dy * dy) ** 1.5

    ax = mu1 * dxp / rp3 + mu * dxs / rs3
    ay = mu1 * dy / rp3 + mu * dy / rs3
    return ax, ay


@numba.njit(error_model="numpy", cache=True)
def crtbp_direction(state, mu, omega):
    """
    State = [x, y, vx, vy]
    Returns the time derivative of the state vector in the rotating frame.
    """
    x, y, vx, vy = state[0], state[1], state[2], state[3]
    gx, gy = _gravity(x, y, mu)

    w2 = omega * omega
    ax = w2 * x + 2.0 * omega * vy + gx
    ay = w2 * y - 2.0 * omega * vx + gy

    out = np.empty(4, dtype=np.float64)
    out[0] = vx
    out[1] = vy
    out[2] = ax
    out[3] = ay
    return out


@numba.njit(fastmath=True, error_model="numpy", cache=True)
def _pseudo_potential(x, y, mu, omega):
    mu1 = 1.0 - mu
    rp = np.sqrt((x + mu) ** 2 + y * y)      # from primary at (-mu, 0)
    rs = np.sqrt((x - mu1) ** 2 + y * y)     # from secondary at (1-mu, 0)
    return mu / rs + mu1 / rp + 0.5 * omega * omega * (x * x + y * y)


@numba.njit(fastmath=True, error_model="numpy", cache=True)
def _pseudo_potential_grad(x, y, mu, omega):
    mu1 = 1.0 - mu
    rp3 = ((x + mu) ** 2 + y * y) ** 1.5
    rs3 = ((x - mu1) ** 2 + y * y) ** 1.5
    w2 = omega * omega

    ux = mu * (mu1 - x) / rs3 + mu1 * (-mu - x) / rp3 + w2 * x
    uy = -mu * y / rs3 - mu1 * y / rp3 + w2 * y
    return ux, uy


@numba.njit(fastmath=True, error_model="numpy", cache=True)
def _pseudo_potential_hessian(x, y, mu, omega):
    mu1 = 1.0 - mu
    xp = x + mu
    xs = x - mu1
    rp2 = xp * xp + y * y
    rs2 = xs * xs + y * y
    rp3 = rp2 ** 1.5
    rs3 = rs2 ** 1.5
    rp5 = rp2 ** 2.5
    rs5 = rs2 ** 2.5
    w2 = omega * omega

    uxx = -mu / rs3 + 3.0 * mu * xs * xs / rs5 - mu1 / rp3 + 3.0 * mu1 * xp * xp / rp5 + w2
    uyy = -mu / rs3 + 3.0 * mu * y * y / rs5 - mu1 / rp3 + 3.0 * mu1 * y * y / rp5 + w2
    uxy = 3.0 * mu * xs * y / rs5 + 3.0 * mu1 * xp * y / rp5
    return uxx, uxy, uyy


class CRTBPModel:
    """
    Rotating-frame model of the planar CR3BP for a fixed mass ratio.

    The model is stateless apart from its two constants, so a single instance
    can be shared by the Lagrange point solver, the trajectory integrator and
    the field sampler.

    Parameters
    ----------
    mu : float
        Mass parameter of the CR3BP system (ratio of smaller to total mass)
    omega : float, optional
        Angular velocity of the rotating frame. Default is 1.0.
    primary_name, secondary_name : str, optional
        Names of the two massive bodies
    """

    def __init__(self, mu, omega=1.0, primary_name="Sun", secondary_name="Earth"):
        if not 0.0 < mu < 0.5:
            raise ValueError(f"Mass ratio mu must be in (0, 0.5), got {mu}.")
        self.mu = float(mu)
        self.omega = float(omega)
        self.primary, self.secondary = create_bodies(self.mu, primary_name, secondary_name)

    @classmethod
    def from_config(cls, config):
        return cls(config.mu, config.omega)

    def __repr__(self):
        return f"{type(self).__name__}(mu={self.mu:.6e}, omega={self.omega})"

    @property
    def bodies(self):
        return self.primary, self.secondary

    def acceleration(self, pos):
        """
        Gravitational acceleration of both massive bodies at a position.

        Centrifugal and Coriolis terms are not included. The result is
        singular at the position of either body.

        Parameters
        ----------
        pos : array_like
            2D position [x, y]

        Returns
        -------
        ndarray
            Acceleration [ax, ay]
        """
        x, y = _xy(pos)
        return np.array(_gravity(x, y, self.mu), dtype=np.float64)

    def direction(self, state):
        """
        Right-hand side of the rotating-frame equations of motion.

        Parameters
        ----------
        state : array_like
            State vector [x, y, vx, vy]

        Returns
        -------
        ndarray
            Derivative [vx, vy, ax, ay]
        """
        state = np.asarray(state, dtype=np.float64)
        return crtbp_direction(state, self.mu, self.omega)

    def pseudo_potential(self, pos):
        """Effective potential U(x, y) of the rotating frame."""
        x, y = _xy(pos)
        return float(_pseudo_potential(x, y, self.mu, self.omega))

    def pseudo_potential_grad(self, pos):
        """Gradient [dU/dx, dU/dy] of the pseudo-potential."""
        x, y = _xy(pos)
        return np.array(_pseudo_potential_grad(x, y, self.mu, self.omega), dtype=np.float64)

    def pseudo_potential_hessian(self, pos):
        """Symmetric 2x2 Hessian of the pseudo-potential."""
        x, y = _xy(pos)
        uxx, uxy, uyy = _pseudo_potential_hessian(x, y, self.mu, self.omega)
        return np.array([[uxx, uxy], [uxy, uyy]], dtype=np.float64)

    def jacobi_constant(self, pos, v0):
        """
        Jacobi constant C = 2 U(pos) - v0**2.

        Parameters
        ----------
        pos : array_like
            2D position [x, y]
        v0 : float
            Speed (velocity magnitude) of the third body

        Returns
        -------
        float
            Jacobi constant
        """
        return 2.0 * self.pseudo_potential(pos) - v0 * v0

    def distance_to_bodies(self, pos):
        """Distances (r_primary, r_secondary) from a position to the two bodies."""
        x, y = _xy(pos)
        return self.primary.distance(x, y), self.secondary.distance(x, y)

    def near_singularity(self, pos, radius):
        """True if the position lies within `radius` of either body."""
        rp, rs = self.distance_to_bodies(pos)
        return min(rp, rs) <= radius


def _xy(pos):
    pos = np.asarray(pos, dtype=np.float64)
    return float(pos[0]), float(pos[1])
