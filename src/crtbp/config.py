"""
Configuration for the CR3BP numerical core.

All constants that drive the model, the Lagrange point solver, the trajectory
integrator and the field sampler are gathered in a single dataclass so that
they can be tuned and tested independently. The defaults reproduce the
artificial Sun-Earth system (mu = 0.02) of the interactive viewer.
"""

from dataclasses import dataclass, field, replace as _replace
from typing import Tuple

import numpy as np

from crtbp.utils.constants import MU_ARTIFICIAL


#: float: Default mass ratio of the artificial system
DEFAULT_MU = MU_ARTIFICIAL

#: float: Normalized rotation rate of the two massive bodies
DEFAULT_OMEGA = 1.0

#: tuple: Initial guesses for L1, L2, L3 (on the x-axis) and L4, L5 (equilateral)
DEFAULT_EQUILIBRIUM_SEEDS = (
    (0.8, 0.0),
    (1.2, 0.0),
    (-1.0, 0.0),
    (0.5, 0.8),
    (0.5, -0.8),
)


@dataclass(frozen=True)
class CRTBPConfig:
    """
    Construction-time constants of the CR3BP core.

    Parameters
    ----------
    mu : float
        Mass parameter of the CR3BP system (ratio of smaller to total mass)
    omega : float
        Angular velocity of the rotating frame
    grid_bounds : tuple
        World rectangle (xmin, xmax, ymin, ymax) of the sampled Jacobi field
    grid_resolution : int
        Number of grid nodes along each axis of the sampled field
    integration_steps : int
        Number of RK4 steps per trajectory
    step_size : float
        Fixed RK4 step size
    jacobi_target : float
        Jacobi constant that picked trajectories are started on
    angle_offset : float
        Rotation (radians) applied to the tangential start direction
    min_radius, max_radius : float
        End points of the cosmetic tube-radius ramp along a trajectory
    max_iterations : int
        Newton-Raphson iteration cap
    tolerance : float
        Newton-Raphson step-norm tolerance
    max_condition : float
        Largest acceptable condition number of the pseudo-potential Hessian
    singularity_radius : float
        Exclusion radius around each massive body
    equilibrium_seeds : tuple
        Five seed positions, in L1..L5 order
    initial_pick : tuple
        Start position traced when a tracer is created
    contour_level : float
        Initial iso-level for quick-look plots of the Jacobi field
    """

    mu: float = DEFAULT_MU
    omega: float = DEFAULT_OMEGA
    grid_bounds: Tuple[float, float, float, float] = (-2.0, 2.0, -2.0, 2.0)
    grid_resolution: int = 50
    integration_steps: int = 1000
    step_size: float = 0.005
    jacobi_target: float = 3.139855
    angle_offset: float = -0.008
    min_radius: float = 0.002
    max_radius: float = 0.01
    max_iterations: int = 10
    tolerance: float = 1e-8
    max_condition: float = 1e12
    singularity_radius: float = 1e-5
    equilibrium_seeds: Tuple[Tuple[float, float], ...] = field(
        default=DEFAULT_EQUILIBRIUM_SEEDS
    )
    initial_pick: Tuple[float, float, float] = (1.019, -0.008, 0.0)
    contour_level: float = 3.17216

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Check the configuration for values the core cannot work with.

        Raises
        ------
        ValueError
            If any parameter is outside its admissible range
        """
        if not 0.0 < self.mu < 0.5:
            raise ValueError(f"Mass ratio mu must be in (0, 0.5), got {self.mu}.")
        if self.step_size <= 0.0:
            raise ValueError(f"Step size must be positive, got {self.step_size}.")
        if self.integration_steps < 0:
            raise ValueError(f"Number of integration steps must be non-negative, got {self.integration_steps}.")
        if self.grid_resolution < 2:
            raise ValueError(f"Grid resolution must be at least 2, got {self.grid_resolution}.")

        xmin, xmax, ymin, ymax = self.grid_bounds
        if not (xmin < xmax and ymin < ymax):
            raise ValueError(f"Grid bounds must satisfy xmin < xmax and ymin < ymax, got {self.grid_bounds}.")

        if self.min_radius > self.max_radius:
            raise ValueError("Minimum tube radius must not exceed the maximum tube radius.")
        if self.max_iterations < 1:
            raise ValueError("Newton-Raphson needs at least one iteration.")
        if self.tolerance <= 0.0:
            raise ValueError("Newton-Raphson tolerance must be positive.")
        if self.singularity_radius < 0.0:
            raise ValueError("Singularity radius must be non-negative.")
        if len(self.equilibrium_seeds) != 5:
            raise ValueError(f"Exactly five equilibrium seeds are required, got {len(self.equilibrium_seeds)}.")

    def replace(self, **changes):
        """Return a validated copy with some fields changed."""
        return _replace(self, **changes)

    @property
    def seeds(self):
        """Equilibrium seeds as a (5, 2) float64 array."""
        return np.array(self.equilibrium_seeds, dtype=np.float64)


DEFAULT_CONFIG = CRTBPConfig()


def config_for_model(model, config=None):
    """
    Configuration describing the same frame as `model`.

    Parameters
    ----------
    model : CRTBPModel
        Force model the configuration is used with
    config : CRTBPConfig, optional
        Explicit configuration. If omitted, the defaults with the model's
        mass ratio and rotation rate are used.

    Returns
    -------
    CRTBPConfig

    Raises
    ------
    ValueError
        If `config` disagrees with the model on mu or omega
    """
    if config is None:
        return DEFAULT_CONFIG.replace(mu=model.mu, omega=model.omega)
    if config.mu != model.mu or config.omega != model.omega:
        raise ValueError(
            f"Configuration (mu={config.mu}, omega={config.omega}) does not match "
            f"the model (mu={model.mu}, omega={model.omega})."
        )
    return config
