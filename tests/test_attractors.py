import numpy as np
import pytest

from strange_attractors.attractors import (
    AVAILABLE_ATTRACTORS,
    CliffordAttractor,
    DeJongAttractor,
    HenonAttractor,
    create_attractor,
)
from strange_attractors.errors import InvalidArity

CLIFFORD_PARAMS = [-1.4, 1.6, 1.0, 0.7]


@pytest.mark.parametrize("params", [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0, 5.0]])
@pytest.mark.parametrize("cls", [CliffordAttractor, DeJongAttractor])
def test_construct_rejects_wrong_arity(cls, params) -> None:
    with pytest.raises(InvalidArity) as excinfo:
        cls(params)
    assert excinfo.value.expected == 4
    assert excinfo.value.got == len(params)
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("params", [[None, None, 2.0], [0.1, 0.2, 0.3, 0.4, 0.5]])
def test_set_params_wrong_arity_leaves_state_untouched(params) -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    bounds = attractor.bounds

    with pytest.raises(InvalidArity):
        attractor.set_params(params)

    assert list(attractor.params.values()) == CLIFFORD_PARAMS
    assert attractor.bounds == bounds
    assert len(attractor.param_history) == 1


def test_construction_state() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    assert attractor.params == {'a': -1.4, 'b': 1.6, 'c': 1.0, 'd': 0.7}
    assert (attractor.x, attractor.y) == (0.0, 0.0)
    assert attractor.history.shape == (1, 2)
    assert attractor.history[0].tolist() == [0.0, 0.0]
    assert attractor.bounds['x'] == (-2.0, 2.0)
    assert attractor.bounds['y'] == pytest.approx((-1.7, 1.7))


@pytest.mark.parametrize("c, d", [(0.0, 0.0), (1.5, -0.25), (-2.0, 3.0), (-0.7, -1.1)])
def test_clifford_bounds_follow_c_and_d(c, d) -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.set_params([None, None, c, d])

    assert attractor.xmin == -1 - abs(c)
    assert attractor.xmax == 1 + abs(c)
    assert attractor.ymin == -1 - abs(d)
    assert attractor.ymax == 1 + abs(d)


def test_clifford_bounds_ignore_a_and_b() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    bounds = attractor.bounds
    attractor.set_params([2.5, -0.3, None, None])
    assert attractor.params['a'] == 2.5
    assert attractor.params['b'] == -0.3
    assert attractor.bounds == bounds


def test_set_params_partial_update() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.set_params([None, 0.5, None, None])
    assert attractor.params == {'a': -1.4, 'b': 0.5, 'c': 1.0, 'd': 0.7}


def test_dejong_bounds_are_constant() -> None:
    attractor = DeJongAttractor([-2.0, -2.0, -1.2, 2.0])
    attractor.set_params([5.0, 6.0, 7.0, 8.0])
    assert attractor.bounds == {'x': (-2.0, 2.0), 'y': (-2.0, 2.0)}


def test_henon_y_bounds_follow_b() -> None:
    attractor = HenonAttractor([1.4, 0.3])
    assert attractor.bounds['y'] == pytest.approx((-0.6, 0.6))
    attractor.set_params([None, -0.2])
    assert attractor.bounds['y'] == pytest.approx((-0.4, 0.4))
    assert attractor.bounds['x'] == (-2.0, 2.0)


@pytest.mark.parametrize("num_steps, added", [(0, 0), (1, 0), (2, 1), (11, 10), (5000, 4999)])
def test_step_appends_num_steps_minus_one(num_steps, added) -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.step(3)
    before = len(attractor.history)
    attractor.step(num_steps)
    assert len(attractor.history) == before + added
    assert len(attractor) == before + added


def test_step_rejects_negative_counts() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    with pytest.raises(ValueError):
        attractor.step(-1)


@pytest.mark.parametrize("name", sorted(AVAILABLE_ATTRACTORS))
def test_compiled_orbit_matches_python_recurrence(name) -> None:
    attractor = create_attractor(name)
    attractor.step(20)

    x, y = 0.0, 0.0
    expected = [(x, y)]
    for _ in range(19):
        x, y = attractor.evolve_point(x, y)
        expected.append((x, y))

    np.testing.assert_allclose(attractor.history, np.array(expected), rtol=1e-9, atol=1e-12)
    assert (attractor.x, attractor.y) == tuple(attractor.history[-1])


def test_step_continues_from_live_position() -> None:
    once = CliffordAttractor(CLIFFORD_PARAMS)
    once.step(101)

    twice = CliffordAttractor(CLIFFORD_PARAMS)
    twice.step(51)
    twice.step(51)

    np.testing.assert_allclose(once.history, twice.history)


def test_clifford_orbit_stays_inside_bounds() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.step(10_000)
    xs, ys = attractor.history[:, 0], attractor.history[:, 1]
    assert xs.min() >= attractor.xmin and xs.max() <= attractor.xmax
    assert ys.min() >= attractor.ymin and ys.max() <= attractor.ymax


def test_reset_restores_origin_only() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    for n in (10, 3000, 1):
        attractor.step(n)
    position = (attractor.x, attractor.y)
    bounds = attractor.bounds

    attractor.reset()
    assert attractor.history.tolist() == [[0.0, 0.0]]
    assert attractor.params == dict(zip('abcd', CLIFFORD_PARAMS))
    assert attractor.bounds == bounds
    assert (attractor.x, attractor.y) == position

    attractor.reset()
    assert len(attractor.history) == 1


def test_history_view_is_read_only() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.step(5)
    with pytest.raises(ValueError):
        attractor.history[0, 0] = 1.0


def test_param_history_records_changes() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.set_params([None, None, None, None])
    attractor.set_params([-1.4, None, None, None])
    assert attractor.param_history == [tuple(CLIFFORD_PARAMS)]

    attractor.set_params([None, None, 0.5, None])
    assert attractor.param_history[-1] == (-1.4, 1.6, 0.5, 0.7)

    attractor.reset()
    assert attractor.param_history == [(-1.4, 1.6, 0.5, 0.7)]


def test_create_attractor_defaults_and_unknown_name() -> None:
    attractor = create_attractor('dejong')
    assert isinstance(attractor, DeJongAttractor)
    assert tuple(attractor.params.values()) == DeJongAttractor.DEFAULT_PARAMS

    with pytest.raises(ValueError, match="unknown attractor"):
        create_attractor('lorenz')


def test_load_history_moves_position_to_last_point() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.load_history([[0.0, 0.0], [0.25, -0.5]])
    assert (attractor.x, attractor.y) == (0.25, -0.5)
    attractor.step(2)
    assert len(attractor.history) == 3

    with pytest.raises(ValueError):
        attractor.load_history([1.0, 2.0])


def test_str_shows_formula() -> None:
    text = str(CliffordAttractor(CLIFFORD_PARAMS))
    assert "Clifford" in text
    assert "-1.4000" in text


def test_load_history_collapses_param_history() -> None:
    attractor = CliffordAttractor(CLIFFORD_PARAMS)
    attractor.set_params([None, None, 0.5, None])
    assert len(attractor.param_history) == 2

    attractor.load_history([[0.0, 0.0], [0.1, 0.2]])
    assert attractor.param_history == [(-1.4, 1.6, 0.5, 0.7)]
