# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
import pysade.common.typing as tp
from pysade.common import errors
from pysade.common import testing
from . import corefuncs
from .base import Problem
from .base import Translate


def test_problem() -> None:
    prob = Problem(corefuncs.sphere, -2, [1, 2, 3])
    assert prob.name == "sphere"
    assert prob.dimension == 3
    lower, upper = prob.bounds
    np.testing.assert_array_equal(lower, [-2, -2, -2])
    lower[0] = 12  # bounds are copies
    np.testing.assert_array_equal(prob.bounds[0], [-2, -2, -2])
    np.testing.assert_array_equal(prob.fitness([1, 1, 1]), [3])
    np.testing.assert_array_equal(prob.fitness(np.zeros(3)), [0])
    assert prob.fevals == 2
    assert prob.num_objectives == 1
    assert prob.num_constraints == 0
    assert not prob.stochastic
    assert repr(prob) == "Problem(sphere, dimension=3, fevals=2)"


@testing.parametrized(
    scalar_lower=(-2, [1, 2, 3], [-2, -2, -2], [1, 2, 3]),
    scalar_upper=([0, 1], 4, [0, 1], [4, 4]),
    scalars=(0, 1, [0], [1]),
)
def test_bounds_broadcast(
    lower: tp.Any, upper: tp.Any, expected_lower: tp.List[float], expected_upper: tp.List[float]
) -> None:
    prob = Problem(corefuncs.sphere, lower, upper)
    assert prob.dimension == len(expected_lower)
    np.testing.assert_array_equal(prob.bounds[0], expected_lower)
    np.testing.assert_array_equal(prob.bounds[1], expected_upper)


def test_incompatible_bounds() -> None:
    with pytest.raises(errors.InvalidProblemError, match="incompatible"):
        Problem(corefuncs.sphere, [0, 0], [1, 1, 1])


def test_problem_feasibility() -> None:
    prob = Problem(corefuncs.sphere, 0, 1, dimension=2)
    assert prob.feasibility_x([0, 1])
    assert not prob.feasibility_x([0.5, 1.1])
    assert prob.fevals == 0


def test_from_registry() -> None:
    prob = Problem.from_registry("rastrigin", 4)
    assert prob.name == "rastrigin"
    np.testing.assert_array_equal(prob.bounds[1], [5.12] * 4)
    np.testing.assert_almost_equal(prob.fitness(np.zeros(4))[0], 0)


@testing.parametrized(
    shapes=([0, 0], [1, 1, 1], None),
    order=(1, 0, 2),
    infinite=(-np.inf, 1, 2),
    broadcast=([0, 0], 1, 3),
    empty=([], [], None),
)
def test_invalid_bounds(lower: tp.Any, upper: tp.Any, dimension: tp.Optional[int]) -> None:
    with pytest.raises(errors.InvalidProblemError):
        Problem(corefuncs.sphere, lower, upper, dimension=dimension)


def test_fitness_errors() -> None:
    prob = Problem(lambda x: [1.0, 2.0], 0, 1, dimension=2)
    with pytest.raises(errors.InvalidProblemError):
        prob.fitness([0.5, 0.5])
    with pytest.raises(errors.InvalidProblemError):
        Problem(corefuncs.sphere, 0, 1, dimension=2).fitness([0.5])
    prob = Problem(lambda x: [1.0, 2.0], 0, 1, dimension=2, num_constraints=1)
    np.testing.assert_array_equal(prob.fitness([0.5, 0.5]), [1, 2])


def test_translate() -> None:
    prob = Problem(corefuncs.sphere, -1, 1, dimension=2)
    translated = Translate(prob, [10, -1])
    assert translated.name == "sphere [translated]"
    assert translated.inner_problem is prob
    lower, upper = translated.bounds
    np.testing.assert_array_equal(lower, [9, -2])
    np.testing.assert_array_equal(upper, [11, 0])
    np.testing.assert_array_equal(translated.fitness([10, -1]), [0])
    np.testing.assert_array_equal(translated.fitness([11, -1]), [1])
    assert translated.fevals == 2
    assert prob.fevals == 2
    with pytest.raises(errors.InvalidProblemError):
        Translate(prob, [1, 2, 3])
