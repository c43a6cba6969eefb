import numpy as np
import pytest

from crtbp.algorithms.core.lagrange_points import (
    EquilibriumSolver,
    find_equilibrium,
    get_reference_location,
    newton_step,
    reference_locations,
)
from crtbp.algorithms.core.model import CRTBPModel
from crtbp.algorithms.core.status import Status
from crtbp.config import CRTBPConfig


MU = 0.02


@pytest.fixture
def model():
    return CRTBPModel(MU)


def test_reference_collinear_points_are_equilibria(model):
    for point in reference_locations(MU)[:3]:
        assert point[1] == 0.0
        assert np.linalg.norm(model.pseudo_potential_grad(point)) < 1e-10


def test_reference_ordering():
    l1, l2, l3, l4, l5 = reference_locations(MU)
    assert -MU < l1[0] < 1 - MU
    assert l2[0] > 1 - MU
    assert l3[0] < -MU
    np.testing.assert_allclose(l4, [0.5 - MU, np.sqrt(3) / 2])
    np.testing.assert_allclose(l5, [0.5 - MU, -np.sqrt(3) / 2])


def test_invalid_reference_index():
    with pytest.raises(ValueError):
        get_reference_location(MU, 6)


def test_solver_converges_to_known_points(model):
    solutions = EquilibriumSolver(model, CRTBPConfig(mu=MU)).solve()
    assert len(solutions) == 5

    for sol, expected in zip(solutions, reference_locations(MU)):
        assert sol.status is Status.OK
        assert sol.converged
        np.testing.assert_allclose(sol.position, expected, atol=1e-6)
        assert np.linalg.norm(model.pseudo_potential_grad(sol.position)) < 1e-6
        assert sol.residual < 1e-6
        assert sol.iterations <= 10


def test_solutions_keep_seed_order(model):
    seeds = CRTBPConfig().seeds
    positions = EquilibriumSolver(model).positions(seeds[::-1])
    expected = np.array(reference_locations(MU))[::-1]
    np.testing.assert_allclose(positions, expected, atol=1e-6)
    assert not positions.flags.writeable


def test_did_not_converge_returns_last_iterate(model):
    sol = find_equilibrium(model, (0.8, 0.0), max_iterations=1)
    assert sol.status is Status.DID_NOT_CONVERGE
    assert sol.iterations == 1
    assert np.all(np.isfinite(sol.position))
    assert sol.position[0] != 0.8


def test_ill_conditioned_hessian_is_flagged(model):
    # Any Hessian with distinct eigenvalues has condition number > 1
    sol = find_equilibrium(model, (0.5, 0.8), max_condition=1.0)
    assert sol.status is Status.SINGULAR_JACOBIAN
    assert np.all(np.isfinite(sol.position))

    step = newton_step(model, np.array([0.5, 0.8]), max_condition=1.0)
    assert step.status is Status.SINGULAR_JACOBIAN
    assert not step.ok


def test_newton_step_solves_linear_system(model):
    x = np.array([0.5, 0.8])
    step = newton_step(model, x)
    assert step.ok
    H = model.pseudo_potential_hessian(x)
    np.testing.assert_allclose(H @ step.value, model.pseudo_potential_grad(x), rtol=1e-10)


def test_solutions_are_hashable(model):
    sol = find_equilibrium(model, (0.5, 0.8))
    assert sol == sol
    assert sol in {sol}


def test_config_must_match_model(model):
    with pytest.raises(ValueError, match="does not match"):
        EquilibriumSolver(model, CRTBPConfig(mu=0.03))
