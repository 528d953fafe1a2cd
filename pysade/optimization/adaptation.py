# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pysade.common.typing as tp
from pysade.common import errors
from .variants import MutationForm


class ParameterAdaptation:
    """Scheme for initializing and updating the per-individual scale factor F
    and crossover rate CR
    """

    number = 0
    name = ""

    def initialize(self, rs: np.random.RandomState, popsize: int) -> tp.Tuple[np.ndarray, np.ndarray]:
        """Returns initial F and CR arrays (values for individual i are drawn before those of i + 1)"""
        raise NotImplementedError

    # pylint: disable=too-many-arguments
    def trial_parameters(
        self,
        rs: np.random.RandomState,
        form: MutationForm,
        F: np.ndarray,
        CR: np.ndarray,
        i: int,
        r: tp.Sequence[int],
        best_F: float,
        best_CR: float,
    ) -> tp.Tuple[float, float]:
        """Returns the F and CR to use for the trial of individual i"""
        raise NotImplementedError

    def __repr__(self) -> str:
        return self.name


class ControlAdaptation(ParameterAdaptation):
    """jDE (Brest et al.): each individual keeps its own F and CR which are
    regenerated at random with probability 0.1 at each trial.
    F is uniform in [0.1, 1) and CR uniform in [0, 1).
    """

    number = 1
    name = "jDE"
    reuse_probability = 0.9

    def initialize(self, rs: np.random.RandomState, popsize: int) -> tp.Tuple[np.ndarray, np.ndarray]:
        F = np.zeros(popsize)
        CR = np.zeros(popsize)
        for i in range(popsize):
            CR[i] = rs.uniform()
            F[i] = rs.uniform() * 0.9 + 0.1
        return F, CR

    def trial_parameters(
        self,
        rs: np.random.RandomState,
        form: MutationForm,
        F: np.ndarray,
        CR: np.ndarray,
        i: int,
        r: tp.Sequence[int],
        best_F: float,
        best_CR: float,
    ) -> tp.Tuple[float, float]:
        new_F = float(F[i]) if rs.uniform() < self.reuse_probability else rs.uniform() * 0.9 + 0.1
        new_CR = float(CR[i]) if rs.uniform() < self.reuse_probability else rs.uniform()
        return new_F, new_CR


class SelfAdaptation(ParameterAdaptation):
    """iDE (Elsayed et al.): F and CR are produced by applying the mutation form
    of the variant to the F and CR values of the sampled individuals.
    Initial values are drawn from a normal distribution N(0.5, 0.15).
    """

    number = 2
    name = "iDE"

    def initialize(self, rs: np.random.RandomState, popsize: int) -> tp.Tuple[np.ndarray, np.ndarray]:
        F = np.zeros(popsize)
        CR = np.zeros(popsize)
        for i in range(popsize):
            CR[i] = rs.normal() * 0.15 + 0.5
            F[i] = rs.normal() * 0.15 + 0.5
        return F, CR

    def trial_parameters(
        self,
        rs: np.random.RandomState,
        form: MutationForm,
        F: np.ndarray,
        CR: np.ndarray,
        i: int,
        r: tp.Sequence[int],
        best_F: float,
        best_CR: float,
    ) -> tp.Tuple[float, float]:
        new_F = form.adapt_f(rs, F, i, best_F, r)
        new_CR = form.adapt_cr(rs, CR, i, best_CR, r)
        return new_F, new_CR


ADAPTATIONS: tp.Dict[int, ParameterAdaptation] = {
    scheme.number: scheme for scheme in (ControlAdaptation(), SelfAdaptation())
}


def get_adaptation(number: int) -> ParameterAdaptation:
    """Returns the adaptation scheme with the provided number (1: jDE, 2: iDE)"""
    if number not in ADAPTATIONS:
        raise errors.ConfigurationError(
            f"The variant for self-adaptation must be in [1, 2], while a value of {number} was detected."
        )
    return ADAPTATIONS[number]
