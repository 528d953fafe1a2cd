# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Mutation and crossover operators of self-adaptive differential evolution.

A variant is the combination of a mutation form (eg: rand/1, best/2...) and
of a crossover kind (exponential or binomial). In all the mutation forms below,
x is the (popsize, dimension) array of the previous generation, i the index of the
target individual, best the best vector of the previous generation, r the sampled
indices and F the scale factor.

Each form also provides the formulas used by the iDE adaptation scheme to produce
F and CR from the values stored for the sampled individuals. Each difference term
is scaled by 0.5 times an independent standard normal draw, and all the draws for F
are performed before the draws for CR.
"""

import numpy as np
import pysade.common.typing as tp
from pysade.common import errors


Mutation = tp.Callable[[np.ndarray, int, np.ndarray, tp.Sequence[int], float], np.ndarray]
Adaptation = tp.Callable[[np.random.RandomState, np.ndarray, int, float, tp.Sequence[int]], float]
Crossover = tp.Callable[[np.random.RandomState, int, float], np.ndarray]


# mutation forms


def best1(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return best + F * (x[r[1]] - x[r[2]])


def rand1(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return x[r[0]] + F * (x[r[1]] - x[r[2]])


def rand_to_best1(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return x[i] + F * (best - x[i]) + F * (x[r[0]] - x[r[1]])


def best2(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return best + (x[r[0]] - x[r[1]]) * F + (x[r[2]] - x[r[3]]) * F


def rand2(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return x[r[4]] + (x[r[0]] - x[r[1]]) * F + (x[r[2]] - x[r[3]]) * F


def rand3(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return x[r[0]] + (x[r[1]] - x[r[2]]) * F + (x[r[3]] - x[r[4]]) * F + (x[r[5]] - x[r[6]]) * F


def best3(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return best + (x[r[1]] - x[r[2]]) * F + (x[r[3]] - x[r[4]]) * F + (x[r[5]] - x[r[6]]) * F


def rand_to_current2(x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float) -> np.ndarray:
    return x[r[0]] + (x[r[1]] - x[i]) * F + (x[r[2]] - x[r[3]]) * F


def rand_to_best_and_current2(
    x: np.ndarray, i: int, best: np.ndarray, r: tp.Sequence[int], F: float
) -> np.ndarray:
    return x[r[0]] + (x[r[1]] - x[i]) * F - (x[r[2]] - best) * F


# iDE adaptations (v holds the stored F or CR values, vbest the iteration-best one)
# pylint: disable=unused-argument


def _adapt_best1(rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]) -> float:
    return float(vbest + rs.normal() * 0.5 * (v[r[1]] - v[r[2]]))


def _adapt_rand1(rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]) -> float:
    return float(v[r[0]] + rs.normal() * 0.5 * (v[r[1]] - v[r[2]]))


def _adapt_rand_to_best1(
    rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]
) -> float:
    return float(v[i] + rs.normal() * 0.5 * (vbest - v[i]) + rs.normal() * 0.5 * (v[r[0]] - v[r[1]]))


def _adapt_best2(rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]) -> float:
    return float(vbest + rs.normal() * 0.5 * (v[r[0]] - v[r[1]]) + rs.normal() * 0.5 * (v[r[2]] - v[r[3]]))


def _adapt_rand2(rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]) -> float:
    return float(v[r[4]] + rs.normal() * 0.5 * (v[r[0]] - v[r[1]]) + rs.normal() * 0.5 * (v[r[2]] - v[r[3]]))


def _adapt_rand3(rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]) -> float:
    return float(
        v[r[0]]
        + rs.normal() * 0.5 * (v[r[1]] - v[r[2]])
        + rs.normal() * 0.5 * (v[r[3]] - v[r[4]])
        + rs.normal() * 0.5 * (v[r[5]] - v[r[6]])
    )


def _adapt_rand3_cr(
    rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]
) -> float:
    return float(v[r[4]] + rs.normal() * 0.5 * (v[r[0]] + v[r[1]] - v[r[2]] - v[r[3]]))


def _adapt_best3(rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]) -> float:
    return float(
        vbest
        + rs.normal() * 0.5 * (v[r[1]] - v[r[2]])
        + rs.normal() * 0.5 * (v[r[3]] - v[r[4]])
        + rs.normal() * 0.5 * (v[r[5]] - v[r[6]])
    )


def _adapt_best3_cr(
    rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]
) -> float:
    return float(vbest + rs.normal() * 0.5 * (v[r[0]] + v[r[1]] - v[r[2]] - v[r[3]]))


def _adapt_rand_to_current2(
    rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]
) -> float:
    return float(v[r[0]] + rs.normal() * 0.5 * (v[r[1]] - v[i]) + rs.normal() * 0.5 * (v[r[3]] - v[r[4]]))


def _adapt_rand_to_best_and_current2(
    rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]
) -> float:
    return float(v[r[0]] + rs.normal() * 0.5 * (v[r[1]] - v[i]) - rs.normal() * 0.5 * (v[r[2]] - vbest))


def _adapt_rand_to_best_and_current2_cr(
    rs: np.random.RandomState, v: np.ndarray, i: int, vbest: float, r: tp.Sequence[int]
) -> float:
    return float(v[r[0]] + rs.normal() * 0.5 * (v[r[1]] - v[i]) - rs.normal() * 0.5 * (v[r[3]] - vbest))


class MutationForm(tp.NamedTuple):
    name: str
    mutate: Mutation
    adapt_f: Adaptation
    adapt_cr: Adaptation


BEST1 = MutationForm("best/1", best1, _adapt_best1, _adapt_best1)
RAND1 = MutationForm("rand/1", rand1, _adapt_rand1, _adapt_rand1)
RAND_TO_BEST1 = MutationForm("rand-to-best/1", rand_to_best1, _adapt_rand_to_best1, _adapt_rand_to_best1)
BEST2 = MutationForm("best/2", best2, _adapt_best2, _adapt_best2)
RAND2 = MutationForm("rand/2", rand2, _adapt_rand2, _adapt_rand2)
RAND3 = MutationForm("rand/3", rand3, _adapt_rand3, _adapt_rand3_cr)
BEST3 = MutationForm("best/3", best3, _adapt_best3, _adapt_best3_cr)
RAND_TO_CURRENT2 = MutationForm(
    "rand-to-current/2", rand_to_current2, _adapt_rand_to_current2, _adapt_rand_to_current2
)
RAND_TO_BEST_AND_CURRENT2 = MutationForm(
    "rand-to-best-and-current/2",
    rand_to_best_and_current2,
    _adapt_rand_to_best_and_current2,
    _adapt_rand_to_best_and_current2_cr,
)


# crossovers (they return the mask of the alleles taken from the mutant)


def exponential_crossover(rs: np.random.RandomState, dimension: int, CR: float) -> np.ndarray:
    """Copies a cyclic block of consecutive alleles, starting at a random position
    and extended while uniform draws are below CR (between 1 and dimension alleles)
    """
    mask = np.zeros(dimension, dtype=bool)
    n = rs.randint(dimension)
    length = 0
    while True:
        mask[n] = True
        n = (n + 1) % dimension
        length += 1
        # the uniform is drawn even when the block is full
        if not (rs.uniform() < CR and length < dimension):
            return mask


def binomial_crossover(rs: np.random.RandomState, dimension: int, CR: float) -> np.ndarray:
    """Independently copies each allele with probability CR, sweeping cyclically from
    a random position; the last allele of the sweep is always copied
    """
    mask = np.zeros(dimension, dtype=bool)
    n = rs.randint(dimension)
    for step in range(dimension):
        if rs.uniform() < CR or step + 1 == dimension:
            mask[n] = True
        n = (n + 1) % dimension
    return mask


CROSSOVERS: tp.Dict[str, Crossover] = {"exp": exponential_crossover, "bin": binomial_crossover}


class Variant(tp.NamedTuple):
    """One of the 18 mutation variants"""

    number: int
    form: MutationForm
    crossover_kind: str

    @property
    def name(self) -> str:
        return f"{self.form.name}/{self.crossover_kind}"

    def trial(
        self,
        rs: np.random.RandomState,
        x: np.ndarray,
        i: int,
        best: np.ndarray,
        r: tp.Sequence[int],
        F: float,
        CR: float,
    ) -> np.ndarray:
        """Creates the trial vector of individual i (before feasibility correction)"""
        trial = x[i].copy()
        mask = CROSSOVERS[self.crossover_kind](rs, trial.size, CR)
        trial[mask] = self.form.mutate(x, i, best, r, F)[mask]
        return trial


_TABLE = [
    (BEST1, "exp"),
    (RAND1, "exp"),
    (RAND_TO_BEST1, "exp"),
    (BEST2, "exp"),
    (RAND2, "exp"),
    (BEST1, "bin"),
    (RAND1, "bin"),
    (RAND_TO_BEST1, "bin"),
    (BEST2, "bin"),
    (RAND2, "bin"),
    (RAND3, "exp"),
    (RAND3, "bin"),
    (BEST3, "exp"),
    (BEST3, "bin"),
    (RAND_TO_CURRENT2, "exp"),
    (RAND_TO_CURRENT2, "bin"),
    (RAND_TO_BEST_AND_CURRENT2, "exp"),
    (RAND_TO_BEST_AND_CURRENT2, "bin"),
]
VARIANTS: tp.Dict[int, Variant] = {k + 1: Variant(k + 1, form, kind) for k, (form, kind) in enumerate(_TABLE)}


def get_variant(number: int) -> Variant:
    """Returns the variant with the provided number (1 to 18)"""
    if number not in VARIANTS:
        raise errors.ConfigurationError(
            f"The differential evolution mutation variant must be in [1, .., 18], while a value of {number} was detected."
        )
    return VARIANTS[number]
