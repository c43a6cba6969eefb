"""
Sampling of the Jacobi-constant field on a regular grid.

The Jacobi constant at zero speed, C(x, y) = 2 U(x, y), is evaluated on the
nodes of an R x R grid spanning a fixed world rectangle. Node (i, j) maps to

    x = xmin + i (xmax - xmin) / (R - 1)
    y = ymin + j (ymax - ymin) / (R - 1)

so node (0, 0) is (xmin, ymin) and node (R-1, R-1) is (xmax, ymax). Values are
stored as `values[j, i]` (rows follow y), the layout used by numpy meshgrids and
matplotlib contouring. Iso-contours of this field at a level C are the
zero-velocity curves of that Jacobi level; contour extraction itself is left to
the consumer.
"""

import logging
from dataclasses import dataclass

import numba
import numpy as np

from crtbp.algorithms.core.model import _pseudo_potential
from crtbp.algorithms.core.status import Status
from crtbp.config import config_for_model

logger = logging.getLogger(__name__)


@numba.njit(fastmath=True, error_model="numpy", cache=True)
def _sample_jacobi_grid(xs, ys, mu, omega):
    nx = xs.shape[0]
    ny = ys.shape[0]
    values = np.empty((ny, nx), dtype=np.float64)
    for j in range(ny):
        for i in range(nx):
            values[j, i] = 2.0 * _pseudo_potential(xs[i], ys[j], mu, omega)
    return values


def grid_axes(bounds, resolution):
    """
    Node coordinates along x and y.

    Parameters
    ----------
    bounds : tuple
        (xmin, xmax, ymin, ymax)
    resolution : int
        Number of nodes per axis

    Returns
    -------
    tuple
        (xs, ys) 1D arrays of length `resolution`
    """
    xmin, xmax, ymin, ymax = bounds
    idx = np.arange(resolution, dtype=np.float64)
    xs = xmin + idx * (xmax - xmin) / (resolution - 1)
    ys = ymin + idx * (ymax - ymin) / (resolution - 1)
    return xs, ys


@dataclass(frozen=True, eq=False)
class ScalarField:
    """
    Immutable grid of Jacobi-constant samples.

    Attributes
    ----------
    bounds : tuple
        World rectangle (xmin, xmax, ymin, ymax)
    resolution : int
        Number of nodes per axis
    values : ndarray
        Samples, shape (resolution, resolution), indexed values[j, i]
    singular_mask : ndarray
        True for nodes within the exclusion radius of a massive body; their
        values are NaN
    status : Status
        OK or SINGULARITY_ENCOUNTERED
    """

    bounds: tuple
    resolution: int
    values: np.ndarray
    singular_mask: np.ndarray
    status: Status = Status.OK

    @property
    def shape(self):
        return self.values.shape

    @property
    def origin(self):
        xmin, _, ymin, _ = self.bounds
        return xmin, ymin

    @property
    def spacing(self):
        xmin, xmax, ymin, ymax = self.bounds
        return (xmax - xmin) / (self.resolution - 1), (ymax - ymin) / (self.resolution - 1)

    def cell_position(self, i, j):
        """
        World position of node (i, j); i runs along x, j along y.
        """
        if not (0 <= i < self.resolution and 0 <= j < self.resolution):
            raise IndexError(f"Node ({i}, {j}) outside a {self.resolution}x{self.resolution} grid.")
        xs, ys = grid_axes(self.bounds, self.resolution)
        return np.array([xs[i], ys[j]], dtype=np.float64)

    def value(self, i, j):
        return float(self.values[j, i])

    def axes(self):
        return grid_axes(self.bounds, self.resolution)

    def coordinates(self):
        """
        World coordinates of all nodes.

        Returns
        -------
        tuple
            (X, Y) arrays with the same shape as `values`
        """
        xs, ys = self.axes()
        return np.meshgrid(xs, ys)

    def forbidden_region(self, level):
        """
        Nodes that a third body on Jacobi level `level` cannot reach.

        Motion at Jacobi constant C requires 2 U >= C, so nodes whose sampled
        value is below the level are forbidden (Hill region complement).
        Singular nodes are reported as allowed.

        Returns
        -------
        ndarray
            Boolean mask with the shape of `values`
        """
        with np.errstate(invalid="ignore"):
            return np.where(self.singular_mask, False, self.values < level)


class FieldSampler:
    """
    One-shot sampler of the Jacobi constant over the configured grid.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    config : CRTBPConfig, optional
        Supplies the grid bounds, the resolution and the exclusion radius.
        Must match the model's mu and omega.
    """

    def __init__(self, model, config=None):
        self.model = model
        self.config = config_for_model(model, config)

    def sample(self, bounds=None, resolution=None):
        """
        Evaluate the Jacobi constant at zero speed on every grid node.

        Parameters
        ----------
        bounds : tuple, optional
            (xmin, xmax, ymin, ymax). Defaults to the configured bounds.
        resolution : int, optional
            Nodes per axis. Defaults to the configured resolution.

        Returns
        -------
        ScalarField
            The filled, read-only grid
        """
        if bounds is None:
            bounds = self.config.grid_bounds
        if resolution is None:
            resolution = self.config.grid_resolution
        if resolution < 2:
            raise ValueError(f"Grid resolution must be at least 2, got {resolution}.")
        bounds = tuple(float(b) for b in bounds)

        xs, ys = grid_axes(bounds, resolution)
        values = _sample_jacobi_grid(xs, ys, self.model.mu, self.model.omega)

        X, Y = np.meshgrid(xs, ys)
        radius = self.config.singularity_radius
        mask = np.zeros(values.shape, dtype=bool)
        for body in self.model.bodies:
            bx, by = body.position[0], body.position[1]
            mask |= np.hypot(X - bx, Y - by) <= radius

        status = Status.OK
        if mask.any():
            values[mask] = np.nan
            status = Status.SINGULARITY_ENCOUNTERED
            logger.warning("%d grid node(s) within %.1e of a massive body set to NaN",
                           int(mask.sum()), radius)

        values.setflags(write=False)
        mask.setflags(write=False)
        logger.debug("Sampled %dx%d Jacobi field over %s (min %.4f, max %.4f)",
                     resolution, resolution, bounds, np.nanmin(values), np.nanmax(values))
        return ScalarField(bounds, resolution, values, mask, status)
