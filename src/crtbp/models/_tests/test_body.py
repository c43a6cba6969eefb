import numpy as np
import pytest

from crtbp.models.body import create_bodies


def test_create_bodies():
    primary, secondary = create_bodies(0.02)
    assert primary.name == "Sun"
    assert secondary.name == "Earth"
    np.testing.assert_allclose(primary.position, [-0.02, 0.0])
    np.testing.assert_allclose(secondary.position, [0.98, 0.0])
    assert primary.mass == pytest.approx(0.98)
    assert secondary.mass == pytest.approx(0.02)
    # Barycenter at the origin
    assert primary.mass * primary.position[0] + secondary.mass * secondary.position[0] == pytest.approx(0.0)


def test_distance():
    _, secondary = create_bodies(0.02, secondary_name="Moon")
    assert secondary.name == "Moon"
    assert secondary.distance(0.98, 0.0) == pytest.approx(0.0, abs=1e-15)
    assert secondary.distance(1.98, 0.0) == pytest.approx(1.0)
    assert secondary.distance(0.98 + 3.0, 4.0) == pytest.approx(5.0)
