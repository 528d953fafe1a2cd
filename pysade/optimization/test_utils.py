# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from pysade.common import testing
from . import utils


@testing.parametrized(
    minimal=(7,),
    small=(10,),
    large=(100,),
)
def test_sample_indices(popsize: int) -> None:
    rs = np.random.RandomState(12)
    for _ in range(20):
        indices = utils.sample_indices(rs, popsize)
        assert len(indices) == utils.NUM_SAMPLED_INDICES
        assert len(set(indices)) == len(indices), f"Duplicated indices in {indices}"
        assert all(0 <= k < popsize for k in indices)


def test_sample_indices_draws() -> None:
    # replicates the partial shuffle with an identical random state
    popsize = 9
    indices = utils.sample_indices(np.random.RandomState(3), popsize)
    rs = np.random.RandomState(3)
    pool = list(range(popsize))
    expected = []
    for j in range(7):
        last = popsize - 1 - j
        pos = rs.randint(0, last + 1)
        expected.append(pool[pos])
        pool[pos], pool[last] = pool[last], pool[pos]
    assert indices == expected


def test_sample_indices_covers_all() -> None:
    rs = np.random.RandomState(0)
    seen = set()
    for _ in range(200):
        seen.update(utils.sample_indices(rs, 8))
    assert seen == set(range(8)), "Target index must not be excluded from sampling"


def test_sample_indices_too_small() -> None:
    with pytest.raises(AssertionError):
        utils.sample_indices(np.random.RandomState(0), 6)


def test_force_feasibility() -> None:
    lower = np.array([0.0, -1.0, 2.0, 0.0])
    upper = np.array([1.0, 1.0, 2.0, 1.0])
    x = np.array([0.5, -3.0, 5.0, 1.0])
    out = utils.force_feasibility(np.random.RandomState(2), x, lower, upper)
    assert out is x
    np.testing.assert_equal(x[[0, 3]], [0.5, 1.0])  # feasible alleles are untouched (bounds included)
    assert -1.0 <= x[1] <= 1.0
    assert x[2] == 2.0
    # one draw per infeasible allele, in allele order
    rs = np.random.RandomState(2)
    np.testing.assert_equal(x[1], rs.uniform(-1.0, 1.0))


def test_force_feasibility_noop() -> None:
    rs = np.random.RandomState(1)
    state = rs.get_state()[1].copy()
    x = np.array([0.1, 0.2])
    utils.force_feasibility(rs, x, np.zeros(2), np.ones(2))
    np.testing.assert_array_equal(rs.get_state()[1], state)
    np.testing.assert_array_equal(x, [0.1, 0.2])
