import numpy as np

from crtbp.config import CRTBPConfig
from crtbp.main import build_scene


def test_build_scene():
    config = CRTBPConfig(grid_resolution=20, integration_steps=100)
    scene = build_scene(config)

    assert scene["model"].mu == config.mu
    assert len(scene["points"]) == 5
    assert scene["field"].shape == (20, 20)

    trajectory = scene["tracer"].trajectory
    assert len(trajectory) == 101
    np.testing.assert_array_equal(trajectory.start, config.initial_pick[:2])
