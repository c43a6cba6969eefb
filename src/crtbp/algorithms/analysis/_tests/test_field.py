import numpy as np
import pytest

from crtbp.algorithms.analysis.field import FieldSampler, grid_axes
from crtbp.algorithms.core.model import CRTBPModel
from crtbp.algorithms.core.status import Status
from crtbp.config import CRTBPConfig


MU = 0.02


@pytest.fixture
def model():
    return CRTBPModel(MU)


@pytest.fixture
def field(model):
    return FieldSampler(model, CRTBPConfig(mu=MU)).sample()


def test_grid_axes():
    xs, ys = grid_axes((-2.0, 2.0, -1.0, 1.0), 5)
    np.testing.assert_allclose(xs, [-2.0, -1.0, 0.0, 1.0, 2.0])
    np.testing.assert_allclose(ys, [-1.0, -0.5, 0.0, 0.5, 1.0])


def test_default_field(model, field):
    assert field.shape == (50, 50)
    assert field.status is Status.OK
    assert not field.singular_mask.any()
    assert np.all(np.isfinite(field.values))
    assert field.origin == (-2.0, -2.0)
    assert field.spacing == pytest.approx((4.0 / 49, 4.0 / 49))


def test_corner_mapping(model, field):
    np.testing.assert_allclose(field.cell_position(0, 0), [-2.0, -2.0])
    np.testing.assert_allclose(field.cell_position(49, 49), [2.0, 2.0])
    np.testing.assert_allclose(field.cell_position(49, 0), [2.0, -2.0])

    assert field.value(0, 0) == pytest.approx(model.jacobi_constant((-2.0, -2.0), 0.0), rel=1e-12)
    assert field.value(49, 0) == pytest.approx(model.jacobi_constant((2.0, -2.0), 0.0), rel=1e-12)

    with pytest.raises(IndexError):
        field.cell_position(50, 0)


def test_values_match_model(model, field):
    xs, ys = field.axes()
    for i, j in [(3, 7), (20, 31), (44, 12)]:
        expected = 2.0 * model.pseudo_potential((xs[i], ys[j]))
        assert field.values[j, i] == pytest.approx(expected, rel=1e-12)


def test_mirror_symmetry(field):
    np.testing.assert_allclose(field.values, field.values[::-1, :], rtol=1e-12)


def test_coordinates_layout(field):
    X, Y = field.coordinates()
    assert X.shape == field.shape
    assert X[0, 1] > X[0, 0]
    assert Y[1, 0] > Y[0, 0]


def test_field_is_read_only(field):
    with pytest.raises(ValueError):
        field.values[0, 0] = 0.0


def test_nodes_on_bodies_are_masked(model):
    sampler = FieldSampler(model, CRTBPConfig(mu=MU))
    # Nodes at x = -1.02, -0.02, 0.98 hit both bodies on y = 0
    field = sampler.sample(bounds=(-1.02, 0.98, -1.0, 1.0), resolution=3)

    assert field.status is Status.SINGULARITY_ENCOUNTERED
    assert field.singular_mask[1, 1] and field.singular_mask[1, 2]
    assert field.singular_mask.sum() == 2
    assert np.isnan(field.values[1, 1]) and np.isnan(field.values[1, 2])
    assert np.isfinite(field.values[0, 0])


def test_large_exclusion_radius(model):
    config = CRTBPConfig(mu=MU, singularity_radius=0.3)
    field = FieldSampler(model, config).sample()
    X, Y = field.coordinates()
    (px, py), (sx, sy) = model.primary.position, model.secondary.position
    near = (np.hypot(X - px, Y - py) <= 0.3) | (np.hypot(X - sx, Y - sy) <= 0.3)
    np.testing.assert_array_equal(field.singular_mask, near)
    assert np.all(np.isnan(field.values[near]))
    assert np.all(np.isfinite(field.values[~near]))


def test_forbidden_region(model, field):
    level = 3.1
    forbidden = field.forbidden_region(level)
    np.testing.assert_array_equal(forbidden, field.values < level)

    # Around L4 the zero-speed level is 3 - mu (1 - mu) < 3.1
    assert field.forbidden_region(3.0 - MU * (1 - MU) + 0.05).any()
    # Far from the bodies the centrifugal term dominates
    assert not forbidden[0, 0]


def test_forbidden_region_skips_singular_nodes(model):
    field = FieldSampler(model).sample(bounds=(-1.02, 0.98, -1.0, 1.0), resolution=3)
    forbidden = field.forbidden_region(100.0)
    assert not forbidden[1, 1] and not forbidden[1, 2]
    assert forbidden[0, 0]


def test_resolution_must_be_at_least_two(model):
    with pytest.raises(ValueError):
        FieldSampler(model).sample(resolution=1)


def test_fields_compare_by_identity(model):
    sampler = FieldSampler(model)
    field = sampler.sample(resolution=4)
    other = sampler.sample(resolution=4)
    assert field == field
    assert field != other
    assert hash(field) != hash(other)


def test_config_must_match_model(model):
    with pytest.raises(ValueError, match="does not match"):
        FieldSampler(model, CRTBPConfig(mu=0.01))
