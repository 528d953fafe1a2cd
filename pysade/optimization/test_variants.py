# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import numpy as np
from pysade.common import errors
from pysade.common import testing
from . import variants


def _data() -> np.ndarray:
    return np.arange(16, dtype=float).reshape(8, 2) ** 2


@testing.parametrized(
    best1=(variants.best1, [26.0, 30.0]),
    rand1=(variants.rand1, [80.0, 101.0]),
    rand_to_best1=(variants.rand_to_best1, [117.0, 133.5]),
    best2=(variants.best2, [26.0, 30.0]),
    rand2=(variants.rand2, [160.0, 189.0]),
    rand3=(variants.rand3, [-34.0, -31.0]),
    best3=(variants.best3, [-88.0, -102.0]),
    rand_to_current2=(variants.rand_to_current2, [-14.0, -3.0]),
    rand_to_best_and_current2=(variants.rand_to_best_and_current2, [-13.0, -6.5]),
)
def test_mutations(mutation: variants.Mutation, expected: np.ndarray) -> None:
    x = _data()
    best = np.array([10.0, 10.0])
    r = [4, 3, 1, 0, 6, 2, 5]
    output = mutation(x, 7, best, r, 0.5)
    np.testing.assert_array_almost_equal(output, expected)


def test_rand1_vector() -> None:
    x = _data()
    r = [1, 2, 3, 0, 0, 0, 0]
    np.testing.assert_array_almost_equal(variants.rand1(x, 0, x[0], r, 2.0), x[1] + 2 * (x[2] - x[3]))


@testing.parametrized(
    always=(1.0, 5),
    never=(0.0, 1),
)
def test_exponential_crossover_extremes(CR: float, expected: int) -> None:
    rs = np.random.RandomState(12)
    for _ in range(10):
        mask = variants.exponential_crossover(rs, 5, CR)
        assert mask.sum() == expected


def test_exponential_crossover_is_cyclic_block() -> None:
    rs = np.random.RandomState(4)
    for _ in range(50):
        mask = variants.exponential_crossover(rs, 6, 0.7)
        assert 1 <= mask.sum() <= 6
        # a cyclic block has at most one False->True transition
        transitions = np.sum(mask & ~np.roll(mask, 1))
        assert transitions <= 1


def test_exponential_crossover_draws() -> None:
    mask = variants.exponential_crossover(np.random.RandomState(7), 4, 0.5)
    rs = np.random.RandomState(7)
    n = rs.randint(4)
    length = 1
    while rs.uniform() < 0.5 and length < 4:
        length += 1
    expected = np.zeros(4, dtype=bool)
    expected[[(n + k) % 4 for k in range(length)]] = True
    np.testing.assert_array_equal(mask, expected)


@testing.parametrized(
    always=(1.0, 5),
    never=(0.0, 1),
)
def test_binomial_crossover_extremes(CR: float, expected: int) -> None:
    rs = np.random.RandomState(12)
    for _ in range(10):
        mask = variants.binomial_crossover(rs, 5, CR)
        assert mask.sum() == expected


def test_binomial_crossover_draws() -> None:
    rs = np.random.RandomState(3)
    state = rs.get_state()
    mask = variants.binomial_crossover(rs, 5, 0.5)
    rs2 = np.random.RandomState()
    rs2.set_state(state)
    n = rs2.randint(5)
    uniforms = rs2.uniform(size=5)  # all the uniforms are always drawn
    expected = np.zeros(5, dtype=bool)
    for step in range(5):
        if uniforms[step] < 0.5 or step == 4:
            expected[(n + step) % 5] = True
    np.testing.assert_array_equal(mask, expected)
    np.testing.assert_equal(rs.uniform(), rs2.uniform())


@testing.parametrized(**{f"v{k}": (k,) for k in range(1, 19)})
def test_variant_trial_one_dimension(number: int) -> None:
    variant = variants.get_variant(number)
    x = np.arange(8, dtype=float).reshape(8, 1)
    trial = variant.trial(np.random.RandomState(0), x, 2, x[0], [1, 3, 4, 5, 6, 7, 0], 0.5, 0.0)
    expected = variant.form.mutate(x, 2, x[0], [1, 3, 4, 5, 6, 7, 0], 0.5)
    np.testing.assert_array_equal(trial, expected)  # one allele is always taken from the mutant
    assert trial is not x[2]


def test_variant_trial_keeps_target() -> None:
    variant = variants.get_variant(7)  # rand/1/bin
    x = _data()
    trial = variant.trial(np.random.RandomState(1), x, 0, x[0], [1, 2, 3, 4, 5, 6, 7], 0.5, 0.0)
    assert np.sum(trial != x[0]) == 1
    np.testing.assert_array_equal(x, _data())


def test_variants_table() -> None:
    assert sorted(variants.VARIANTS) == list(range(1, 19))
    names = [variants.VARIANTS[k].name for k in range(1, 19)]
    assert names[:4] == ["best/1/exp", "rand/1/exp", "rand-to-best/1/exp", "best/2/exp"]
    assert names[11] == "rand/3/bin"
    assert names[17] == "rand-to-best-and-current/2/bin"
    assert len(set(names)) == 18


@pytest.mark.parametrize("number", [0, 19, -1])  # type: ignore
def test_get_variant_error(number: int) -> None:
    with pytest.raises(errors.ConfigurationError):
        variants.get_variant(number)


def test_ide_adaptations() -> None:
    v = np.array([0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8])
    r = [1, 2, 3, 4, 5, 6, 7]
    # rand3 uses a single sum of four values for CR
    rs = np.random.RandomState(5)
    value = variants.RAND3.adapt_cr(rs, v, 0, 0.9, r)
    rs = np.random.RandomState(5)
    np.testing.assert_almost_equal(value, v[5] + rs.normal() * 0.5 * (v[1] + v[2] - v[3] - v[4]))
    # best1 starts from the best value
    rs = np.random.RandomState(5)
    value = variants.BEST1.adapt_f(rs, v, 0, 0.9, r)
    rs = np.random.RandomState(5)
    np.testing.assert_almost_equal(value, 0.9 + rs.normal() * 0.5 * (v[2] - v[3]))
    # rand-to-best-and-current/2 uses r[3] instead of r[2] for CR
    rs = np.random.RandomState(5)
    f_value = variants.RAND_TO_BEST_AND_CURRENT2.adapt_f(rs, v, 0, 0.9, r)
    cr_value = variants.RAND_TO_BEST_AND_CURRENT2.adapt_cr(rs, v, 0, 0.9, r)
    rs = np.random.RandomState(5)
    n1, n2, n3, n4 = rs.normal(size=4)
    np.testing.assert_almost_equal(f_value, v[1] + n1 * 0.5 * (v[2] - v[0]) - n2 * 0.5 * (v[3] - 0.9))
    np.testing.assert_almost_equal(cr_value, v[1] + n3 * 0.5 * (v[2] - v[0]) - n4 * 0.5 * (v[4] - 0.9))
