"""
Plotting functions for the CR3BP.

Quick-look 2D views of the rotating frame: the zero-velocity curve extracted
from a sampled Jacobi field, the two massive bodies, the Lagrange points and a
traced trajectory. The flow animation replays the `Tracer` tick, rotating the
tube radii of a trajectory one point per frame.
"""

import matplotlib.pyplot as plt
import matplotlib.animation as animation
import numpy as np


def plot_zvc(ax, field, level):
    """
    Draw the zero-velocity curve of Jacobi level `level` and shade the forbidden region.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Target axes
    field : ScalarField
        Sampled Jacobi field
    level : float
        Jacobi constant of the curve

    Returns
    -------
    matplotlib.contour.QuadContourSet or None
        The iso-line, or None if the level lies outside the sampled range
    """
    X, Y = field.coordinates()
    values = np.ma.masked_invalid(field.values)
    if not values.min() < level < values.max():
        return None

    cs = ax.contour(X, Y, values, levels=[level], colors='gold', linewidths=1.2)
    ax.contourf(X, Y, field.forbidden_region(level).astype(float), levels=[0.5, 1.5],
                colors=['gray'], alpha=0.3)
    return cs


def plot_scene(model, field=None, level=None, points=None, trajectory=None, ax=None,
               figsize=(8, 8), show=False):
    """
    Plot the CR3BP scene in the rotating frame.

    Parameters
    ----------
    model : CRTBPModel
        Force model providing the bodies
    field : ScalarField, optional
        Sampled Jacobi field; its iso-line at `level` is drawn
    level : float, optional
        Iso-level of the zero-velocity curve
    points : iterable, optional
        LagrangePoint objects to mark and label
    trajectory : Trajectory, optional
        Trajectory to draw, with line width following its tube radii
    ax : matplotlib.axes.Axes, optional
        Axes to draw into. A new figure is created if omitted.
    figsize : tuple, default=(8, 8)
        Figure size in inches (width, height) of a new figure
    show : bool, default=False
        Call plt.show() when done

    Returns
    -------
    tuple
        (fig, ax)
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if field is not None and level is not None:
        plot_zvc(ax, field, level)

    for body, color in zip(model.bodies, ('orange', 'tab:blue')):
        ax.plot([body.position[0]], [body.position[1]], 'o', color=color, label=body.name)

    if points is not None:
        for point in points:
            x, y = point.position
            ax.plot([x], [y], 'o', color='lightgray', markeredgecolor='k', markersize=5)
            ax.annotate(point.label, (x, y), textcoords="offset points", xytext=(4, 4), fontsize=8)

    if trajectory is not None:
        pos = trajectory.positions
        ax.plot(pos[:, 0], pos[:, 1], '-', color=(0.9, 0.3, 0.3), linewidth=1.0, label='Trajectory')
        ax.plot([pos[0, 0]], [pos[0, 1]], 'x', color=(0.9, 0.3, 0.3))

    if field is not None:
        xmin, xmax, ymin, ymax = field.bounds
        ax.set_xlim(xmin, xmax)
        ax.set_ylim(ymin, ymax)

    ax.set_aspect('equal')
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    title = f"CR3BP rotating frame, mu={model.mu}"
    if level is not None:
        title += f", C={level}"
    ax.set_title(title)
    ax.grid(True)
    ax.legend(loc='upper right', fontsize=8)

    if show:
        plt.show()
    return fig, ax


def animate_flow(tracer, frames=200, interval=20, figsize=(8, 8)):
    """
    Animate the flow effect of a tracer's trajectory.

    Every frame advances the tracer by one tick and redraws the trajectory as
    a scatter whose marker size follows the rotated tube radii.

    Parameters
    ----------
    tracer : Tracer
        Tracer holding the current trajectory
    frames : int, default=200
        Number of frames
    interval : int, default=20
        Delay between frames in milliseconds
    figsize : tuple, default=(8, 8)
        Figure size in inches

    Returns
    -------
    matplotlib.animation.FuncAnimation
    """
    fig, ax = plt.subplots(figsize=figsize)
    pos = tracer.trajectory.positions
    scale = 2000.0 / tracer.integrator.config.max_radius
    scat = ax.scatter(pos[:, 0], pos[:, 1], s=scale * tracer.trajectory.radii ** 2,
                      color=(0.9, 0.3, 0.3))
    ax.set_aspect('equal')
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_title('Trajectory flow')

    def update(frame):
        trajectory = tracer.update()
        scat.set_sizes(scale * trajectory.radii ** 2)
        return scat,

    return animation.FuncAnimation(fig, update, frames=frames, interval=interval, blit=False)
