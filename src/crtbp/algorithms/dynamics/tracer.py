"""
Trajectories of the third body started from a picked position.

A pick supplies a starting position only. The initial velocity is derived from
the target Jacobi constant (speed) and from the geometry around the secondary
body (direction): the velocity is tangential to a circle around the secondary,
rotated by a small fixed angle. The state is then propagated with fixed-step
RK4 and the result is packaged as an immutable `Trajectory`, together with a
cosmetic tube-radius profile used by renderers.

The `Tracer` keeps the current trajectory and replaces it wholesale on every
pick or animation tick, so readers only ever see complete snapshots.
"""

import logging
from dataclasses import dataclass, replace

import numpy as np
from tqdm import tqdm

from crtbp.algorithms.core.energy import initial_speed, jacobi_history
from crtbp.algorithms.core.status import Result, Status
from crtbp.config import config_for_model
from .integrator import propagate_rk4

logger = logging.getLogger(__name__)


def initial_velocity(model, pos, speed, angle):
    """
    Initial velocity for a trajectory started at `pos`.

    The direction is perpendicular to the position relative to the secondary
    body (counter-clockwise around it), rotated by `angle` radians.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    pos : array_like
        2D start position [x, y]
    speed : float
        Velocity magnitude
    angle : float
        Rotation of the tangential direction in radians

    Returns
    -------
    ndarray
        Velocity [vx, vy]
    """
    pos = np.asarray(pos, dtype=np.float64)
    rel = pos - model.secondary.position
    vel = np.array([-rel[1], rel[0]], dtype=np.float64)
    vel /= np.linalg.norm(vel)

    cs, sn = np.cos(angle), np.sin(angle)
    rotated = np.array([vel[0] * cs - vel[1] * sn, vel[0] * sn + vel[1] * cs])
    rotated /= np.linalg.norm(rotated)
    return rotated * speed


def radius_profile(n_points, min_radius, max_radius):
    """
    Tube radius growing linearly from `min_radius` to `max_radius` along the points.
    """
    if n_points == 1:
        return np.array([min_radius], dtype=np.float64)
    return min_radius + (max_radius - min_radius) * np.arange(n_points, dtype=np.float64) / (n_points - 1)


def _frozen(array):
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    Immutable polyline of a propagated third body.

    Attributes
    ----------
    states : ndarray
        Full states [x, y, vx, vy], shape (n, 4)
    radii : ndarray
        Tube radius per point, shape (n,)
    jacobi_target : float
        Jacobi constant the trajectory was started on
    speed : float
        Initial speed derived from the Jacobi constant
    step_size : float
        RK4 step size
    status : Status
        OK or SINGULARITY_ENCOUNTERED
    energy_clamped : bool
        True if the target Jacobi level was unreachable at the start position
        and the initial speed was clamped to zero
    """

    states: np.ndarray
    radii: np.ndarray
    jacobi_target: float
    speed: float
    step_size: float
    status: Status = Status.OK
    energy_clamped: bool = False

    def __len__(self):
        return self.states.shape[0]

    @property
    def positions(self):
        """Positions [x, y] of all points, shape (n, 2)."""
        return self.states[:, :2]

    @property
    def start(self):
        return self.states[0, :2]

    @property
    def times(self):
        return self.step_size * np.arange(len(self), dtype=np.float64)

    def polyline(self):
        """Points embedded in the z = 0 plane, shape (n, 3)."""
        return np.column_stack((self.positions, np.zeros(len(self))))

    def jacobi_history(self, model):
        """Jacobi constant at every point."""
        return jacobi_history(model, self.states)

    def energy_drift(self, model):
        """
        Largest relative deviation of the Jacobi constant from its initial value.
        """
        C = self.jacobi_history(model)
        return float(np.max(np.abs(C - C[0])) / abs(C[0]))

    def advance_flow(self):
        """
        Trajectory with the radius profile rotated forward by one point.

        The last radius moves to the front. This is a rendering effect only;
        the states are shared, not copied.
        """
        return replace(self, radii=_frozen(np.roll(self.radii, 1)))


class TrajectoryIntegrator:
    """
    Computes trajectories from picked start positions.

    Parameters
    ----------
    model : CRTBPModel
        Force model
    config : CRTBPConfig, optional
        Supplies the Jacobi target, the angle offset, the number of steps, the
        step size, the radius ramp and the exclusion radius. Must describe
        the same frame as the model; defaults to the standard settings for
        the model's mu and omega.
    """

    def __init__(self, model, config=None):
        self.model = model
        self.config = config_for_model(model, config)

    def initial_state(self, pos, jacobi_target=None):
        """
        Start state [x, y, vx, vy] at `pos` on the Jacobi level.

        Returns
        -------
        tuple
            (state, speed_result)
        """
        if jacobi_target is None:
            jacobi_target = self.config.jacobi_target
        pos = np.asarray(pos, dtype=np.float64)[:2]

        speed = initial_speed(self.model, pos, jacobi_target)
        vel = initial_velocity(self.model, pos, speed.value, self.config.angle_offset)
        return np.concatenate((pos, vel)), speed

    def integrate(self, pos, jacobi_target=None, steps=None):
        """
        Propagate a trajectory from a 2D start position.

        Parameters
        ----------
        pos : array_like
            Start position [x, y]
        jacobi_target : float, optional
            Jacobi level. Defaults to the configured target.
        steps : int, optional
            Number of RK4 steps. Defaults to the configured number.

        Returns
        -------
        Trajectory
            steps + 1 points unless a singularity was encountered
        """
        cfg = self.config
        if jacobi_target is None:
            jacobi_target = cfg.jacobi_target
        if steps is None:
            steps = cfg.integration_steps

        pos = np.asarray(pos, dtype=np.float64)[:2]
        if self.model.near_singularity(pos, cfg.singularity_radius):
            logger.warning("Start position %s lies within %.1e of a massive body",
                           pos, cfg.singularity_radius)
            state0 = np.concatenate((pos, np.zeros(2)))
            speed = Result(0.0, Status.SINGULARITY_ENCOUNTERED)
            states, status = state0[np.newaxis, :], Status.SINGULARITY_ENCOUNTERED
        else:
            state0, speed = self.initial_state(pos, jacobi_target)
            states, status = propagate_rk4(self.model, state0, steps, cfg.step_size,
                                           cfg.singularity_radius)

        radii = radius_profile(states.shape[0], cfg.min_radius, cfg.max_radius)
        logger.debug("Trajectory from (%.6f, %.6f): %d points, speed %.6f, status %s",
                     state0[0], state0[1], states.shape[0], speed.value, status.value)

        return Trajectory(
            states=_frozen(states),
            radii=_frozen(radii),
            jacobi_target=float(jacobi_target),
            speed=speed.value,
            step_size=cfg.step_size,
            status=status,
            energy_clamped=speed.status is Status.ENERGY_UNREACHABLE,
        )

    def pick(self, point):
        """
        Trajectory for a picked world coordinate. Only x and y are used.
        """
        point = np.asarray(point, dtype=np.float64)
        return self.integrate(point[:2])

    def trace_many(self, points, progress=False):
        """
        Trajectories for several picked points.

        Parameters
        ----------
        points : iterable
            Picked coordinates; only x and y are used
        progress : bool, optional
            Show a progress bar. Default is False.

        Returns
        -------
        list
            One Trajectory per point
        """
        points = list(points)
        return [self.pick(p) for p in tqdm(points, desc="Tracing trajectories", disable=not progress)]


class Tracer:
    """
    Holder of the current trajectory.

    Every `pick` computes a complete new trajectory and then replaces the
    reference in one assignment; `update` does the same with the radius
    profile rotated by one point. No locking is done: a single thread is
    expected to drive picks and updates.

    Parameters
    ----------
    integrator : TrajectoryIntegrator
        Integrator used for picks
    initial_pick : array_like, optional
        First picked point. Defaults to the configured initial pick.
    """

    def __init__(self, integrator, initial_pick=None):
        self.integrator = integrator
        if initial_pick is None:
            initial_pick = integrator.config.initial_pick
        self.trajectory = None
        self.pick(initial_pick)

    def pick(self, point):
        """Recompute the trajectory from a picked point and make it current."""
        trajectory = self.integrator.pick(point)
        self.trajectory = trajectory
        return trajectory

    def update(self):
        """Advance the flow effect of the current trajectory by one tick."""
        self.trajectory = self.trajectory.advance_flow()
        return self.trajectory
