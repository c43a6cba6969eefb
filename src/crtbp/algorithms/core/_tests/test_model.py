import numpy as np
import pytest

from crtbp.algorithms.core.model import CRTBPModel


MU = 0.02

# Positions well away from both bodies
SAMPLES = [
    (0.3, 0.4),
    (1.3, -0.2),
    (-0.7, 0.9),
    (0.9, 0.1),
    (-1.5, -1.2),
    (0.48, 0.866),
]


@pytest.fixture
def model():
    return CRTBPModel(MU)


def test_body_positions(model):
    np.testing.assert_allclose(model.primary.position, [-MU, 0.0])
    np.testing.assert_allclose(model.secondary.position, [1.0 - MU, 0.0])
    assert model.primary.mass == pytest.approx(1.0 - MU)
    assert model.secondary.mass == pytest.approx(MU)


def test_invalid_mass_ratio():
    with pytest.raises(ValueError):
        CRTBPModel(0.0)
    with pytest.raises(ValueError):
        CRTBPModel(0.5)


def test_pseudo_potential_mass_pairing(model):
    x, y = 0.3, 0.4
    r_primary = np.hypot(x + MU, y)
    r_secondary = np.hypot(x - 1.0 + MU, y)
    expected = MU / r_secondary + (1.0 - MU) / r_primary + 0.5 * (x * x + y * y)
    assert model.pseudo_potential((x, y)) == pytest.approx(expected, rel=1e-12)


def test_acceleration_points_to_bodies(model):
    # Far to the left of the primary the pull is towards +x
    acc = model.acceleration((-2.0, 0.0))
    assert acc[0] > 0.0
    assert acc[1] == pytest.approx(0.0, abs=1e-15)

    # Next to the secondary its pull dominates
    acc = model.acceleration((1.0 - MU, 0.05))
    assert acc[1] < 0.0


@pytest.mark.parametrize("pos", SAMPLES)
def test_gradient_matches_finite_differences(model, pos):
    h = 1e-6
    x, y = pos
    fd = np.array([
        (model.pseudo_potential((x + h, y)) - model.pseudo_potential((x - h, y))) / (2 * h),
        (model.pseudo_potential((x, y + h)) - model.pseudo_potential((x, y - h))) / (2 * h),
    ])
    np.testing.assert_allclose(model.pseudo_potential_grad(pos), fd, rtol=1e-6, atol=1e-7)


@pytest.mark.parametrize("pos", SAMPLES)
def test_gradient_is_centrifugal_plus_gravity(model, pos):
    grad = model.pseudo_potential_grad(pos)
    expected = model.omega ** 2 * np.asarray(pos) + model.acceleration(pos)
    np.testing.assert_allclose(grad, expected, rtol=1e-12, atol=1e-14)


@pytest.mark.parametrize("pos", SAMPLES)
def test_hessian_symmetry(model, pos):
    H = model.pseudo_potential_hessian(pos)
    assert H[0, 1] == H[1, 0]

    # Cross term computed two ways: d(dU/dx)/dy and d(dU/dy)/dx
    h = 1e-5
    x, y = pos
    dgx_dy = (model.pseudo_potential_grad((x, y + h))[0] - model.pseudo_potential_grad((x, y - h))[0]) / (2 * h)
    dgy_dx = (model.pseudo_potential_grad((x + h, y))[1] - model.pseudo_potential_grad((x - h, y))[1]) / (2 * h)
    assert dgx_dy == pytest.approx(dgy_dx, rel=1e-5, abs=1e-7)
    assert H[0, 1] == pytest.approx(dgx_dy, rel=1e-5, abs=1e-7)


@pytest.mark.parametrize("pos", SAMPLES)
def test_hessian_diagonal_matches_finite_differences(model, pos):
    h = 1e-5
    x, y = pos
    H = model.pseudo_potential_hessian(pos)
    dgx_dx = (model.pseudo_potential_grad((x + h, y))[0] - model.pseudo_potential_grad((x - h, y))[0]) / (2 * h)
    dgy_dy = (model.pseudo_potential_grad((x, y + h))[1] - model.pseudo_potential_grad((x, y - h))[1]) / (2 * h)
    assert H[0, 0] == pytest.approx(dgx_dx, rel=1e-5, abs=1e-7)
    assert H[1, 1] == pytest.approx(dgy_dy, rel=1e-5, abs=1e-7)


def test_direction_terms(model):
    state = np.array([0.3, 0.4, 0.2, -0.1])
    deriv = model.direction(state)
    at_rest = model.direction([0.3, 0.4, 0.0, 0.0])

    np.testing.assert_allclose(deriv[:2], state[2:])
    # At rest the acceleration is the pseudo-potential gradient
    np.testing.assert_allclose(at_rest[2:], model.pseudo_potential_grad((0.3, 0.4)), rtol=1e-12)
    # Coriolis: (2 w vy, -2 w vx)
    np.testing.assert_allclose(deriv[2:] - at_rest[2:], [2 * 0.1 * -1.0, -2 * 0.2], rtol=1e-12)


def test_rotation_rate_enters_formulas():
    slow = CRTBPModel(MU, omega=0.5)
    fast = CRTBPModel(MU, omega=1.0)
    pos = (0.3, 0.4)
    r2 = 0.3 ** 2 + 0.4 ** 2
    assert fast.pseudo_potential(pos) - slow.pseudo_potential(pos) == pytest.approx(0.5 * (1.0 - 0.25) * r2)


def test_jacobi_constant_uses_speed(model):
    pos = (0.3, 0.4)
    assert model.jacobi_constant(pos, 0.0) == pytest.approx(2 * model.pseudo_potential(pos))
    assert model.jacobi_constant(pos, 0.5) == pytest.approx(2 * model.pseudo_potential(pos) - 0.25)


def test_near_singularity(model):
    assert model.near_singularity((1.0 - MU + 1e-6, 0.0), 1e-5)
    assert model.near_singularity((-MU, 1e-6), 1e-5)
    assert not model.near_singularity((0.5, 0.5), 1e-5)
    rp, rs = model.distance_to_bodies((1.0 - MU, 0.0))
    assert rp == pytest.approx(1.0)
    assert rs == 0.0
