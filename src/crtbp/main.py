import logging

import numpy as np

from crtbp.algorithms.analysis.field import FieldSampler
from crtbp.algorithms.core.energy import critical_jacobi_levels
from crtbp.algorithms.core.model import CRTBPModel
from crtbp.algorithms.dynamics.tracer import Tracer, TrajectoryIntegrator
from crtbp.config import DEFAULT_CONFIG
from crtbp.logging_config import setup_logging
from crtbp.models.lagrange_point import lagrange_points

logger = logging.getLogger(__name__)


def build_scene(config=DEFAULT_CONFIG):
    """
    Run the start-up computations of the viewer.

    Returns
    -------
    dict
        model, Lagrange points, sampled Jacobi field and a tracer holding the
        trajectory of the initial pick
    """
    model = CRTBPModel.from_config(config)
    points = lagrange_points(model, config)
    field = FieldSampler(model, config).sample()
    tracer = Tracer(TrajectoryIntegrator(model, config))

    for point, level in zip(points, critical_jacobi_levels(model, [p.position for p in points])):
        logger.info("%s at (%.8f, %.8f), C = %.6f, %s", point.label, *point.position, level,
                    "stable" if point.is_stable else "unstable")

    trajectory = tracer.trajectory
    logger.info("Initial pick (%.3f, %.3f): %d points, speed %.6f, Jacobi drift %.2e",
                *trajectory.start, len(trajectory), trajectory.speed, trajectory.energy_drift(model))

    return {"model": model, "points": points, "field": field, "tracer": tracer}


if __name__ == "__main__":
    from crtbp.utils.plot import plot_scene

    setup_logging(log_to_file=False)
    scene = build_scene()

    # Pick a second start point inside the L1 neck, as a user click would
    tracer = scene["tracer"]
    tracer.pick(np.array([0.9, 0.05, 0.0]))

    plot_scene(scene["model"], field=scene["field"], level=DEFAULT_CONFIG.contour_level,
               points=scene["points"], trajectory=tracer.trajectory, show=True)
