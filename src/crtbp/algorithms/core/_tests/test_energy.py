import numpy as np
import pytest

from crtbp.algorithms.core.energy import (
    critical_jacobi_levels,
    crtbp_energy,
    energy_to_jacobi,
    initial_speed,
    jacobi_history,
    jacobi_to_energy,
    state_jacobi,
)
from crtbp.algorithms.core.model import CRTBPModel
from crtbp.algorithms.core.status import Status


MU = 0.02


@pytest.fixture
def model():
    return CRTBPModel(MU)


def test_energy_jacobi_conversion():
    assert energy_to_jacobi(-1.5) == 3.0
    assert jacobi_to_energy(3.0) == -1.5
    assert jacobi_to_energy(energy_to_jacobi(-1.234)) == pytest.approx(-1.234)


def test_state_jacobi_and_energy(model):
    state = np.array([0.3, 0.4, 0.3, -0.4])
    C = state_jacobi(model, state)
    assert C == pytest.approx(2 * model.pseudo_potential((0.3, 0.4)) - 0.25)
    assert crtbp_energy(model, state) == pytest.approx(-C / 2)


def test_jacobi_history(model):
    states = np.array([
        [0.3, 0.4, 0.3, -0.4],
        [1.3, -0.2, 0.0, 0.0],
    ])
    C = jacobi_history(model, states)
    assert C.shape == (2,)
    assert C[0] == pytest.approx(state_jacobi(model, states[0]))
    assert C[1] == pytest.approx(state_jacobi(model, states[1]))
    assert jacobi_history(model, np.empty((0, 4))).shape == (0,)


def test_initial_speed_reachable(model):
    pos = (1.019, -0.008)
    C = 3.139855
    result = initial_speed(model, pos, C)
    assert result.ok
    assert result.value >= 0.0
    assert result.value ** 2 == pytest.approx(2 * model.pseudo_potential(pos) - C)


def test_initial_speed_on_the_level_is_zero(model):
    pos = (0.3, 0.4)
    result = initial_speed(model, pos, model.jacobi_constant(pos, 0.0))
    assert result.ok
    assert result.value == 0.0


def test_initial_speed_clamped(model):
    pos = (0.5 - MU, np.sqrt(3) / 2)
    result = initial_speed(model, pos, 3.5)
    assert result.status is Status.ENERGY_UNREACHABLE
    assert result.value == 0.0
    assert not np.isnan(result.value)


def test_critical_level_of_triangular_points(model):
    l4 = (0.5 - MU, np.sqrt(3) / 2)
    l5 = (0.5 - MU, -np.sqrt(3) / 2)
    levels = critical_jacobi_levels(model, [l4, l5])
    np.testing.assert_allclose(levels, 3.0 - MU * (1.0 - MU), rtol=1e-12)
