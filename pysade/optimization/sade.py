# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
import warnings
import numpy as np
import pysade.common.typing as tp
from pysade.common import errors
from . import base
from . import utils
from . import variants
from . import adaptation
from . import callbacks

logger = logging.getLogger(__name__)


class SADE(base.Algorithm):
    """Self-adaptive differential evolution.

    Two variants of differential evolution exploiting the idea of self-adaptation of
    the scale factor F and of the crossover rate CR of each individual:

    - :code:`variant_adptv=1`: jDE (Brest et al.), where F and CR are regenerated at random
      with probability 0.1.
    - :code:`variant_adptv=2`: iDE (Elsayed et al.), where F and CR are produced by applying
      the mutation operator of the variant to the parameters of the selected individuals.

    The following variants are available to produce a mutant vector:

    ====  ==============================  ====  ==============================
    1     best/1/exp                      2     rand/1/exp
    3     rand-to-best/1/exp              4     best/2/exp
    5     rand/2/exp                      6     best/1/bin
    7     rand/1/bin                      8     rand-to-best/1/bin
    9     best/2/bin                      10    rand/2/bin
    11    rand/3/exp                      12    rand/3/bin
    13    best/3/exp                      14    best/3/bin
    15    rand-to-current/2/exp           16    rand-to-current/2/bin
    17    rand-to-best-and-current/2/exp  18    rand-to-best-and-current/2/bin
    ====  ==============================  ====  ==============================

    Alleles of the trial vector which fall out of the bounds are replaced by a random
    value within the bounds.

    Parameters
    ----------
    gen: int
        number of generations
    variant: int
        mutation variant (1 to 18, default is 2: rand/1/exp)
    variant_adptv: int
        F and CR adaptation scheme (1: jDE, 2: iDE)
    ftol: float
        stopping criterion on the fitness tolerance
    xtol: float
        stopping criterion on the decision vector tolerance
    memory: bool
        when True, the adapted parameters F and CR are not reset between successive calls to evolve
    seed: int or None
        seed of the internal random state

    Note
    ----
    The tolerances are checked every 40 generations, on the best and worst individuals of the population.
    """

    name = "Self-adaptive Differential Evolution"
    min_popsize = 7
    check_interval = 40

    # pylint: disable=too-many-arguments,too-many-instance-attributes
    def __init__(
        self,
        gen: int = 1,
        variant: int = 2,
        variant_adptv: int = 1,
        ftol: float = 1e-6,
        xtol: float = 1e-6,
        memory: bool = False,
        seed: tp.Optional[int] = None,
    ) -> None:
        if not base._is_integer(gen) or gen < 0:
            raise errors.ConfigurationError(f"The number of generations must be a non-negative integer, got {gen!r}")
        if not base._is_integer(variant):
            raise errors.ConfigurationError(f"The mutation variant must be an integer, got {variant!r}")
        if not base._is_integer(variant_adptv):
            raise errors.ConfigurationError(f"The adaptation variant must be an integer, got {variant_adptv!r}")
        self._variant = variants.get_variant(int(variant))
        self._adaptation = adaptation.get_adaptation(int(variant_adptv))
        for tolname, tol in [("ftol", ftol), ("xtol", xtol)]:
            if not tol >= 0:  # also catches nan
                raise errors.ConfigurationError(f"{tolname} must be non-negative, got {tol!r}")
        super().__init__(seed=seed)
        self._gen = int(gen)
        self._ftol = float(ftol)
        self._xtol = float(xtol)
        self._memory = bool(memory)
        self._F = np.zeros(0)
        self._CR = np.zeros(0)

    @property
    def gen(self) -> int:
        return self._gen

    @property
    def variant(self) -> int:
        return self._variant.number

    @property
    def variant_adptv(self) -> int:
        return self._adaptation.number

    @property
    def ftol(self) -> float:
        return self._ftol

    @property
    def xtol(self) -> float:
        return self._xtol

    @property
    def memory(self) -> bool:
        return self._memory

    @property
    def adapted_parameters(self) -> tp.Tuple[np.ndarray, np.ndarray]:
        """Copies of the current F and CR of each individual"""
        return self._F.copy(), self._CR.copy()

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(
            gen=self._gen,
            variant=self.variant,
            variant_adptv=self.variant_adptv,
            ftol=self._ftol,
            xtol=self._xtol,
            memory=self._memory,
            seed=self.seed,
        )

    def get_extra_info(self) -> str:
        return (
            f"\tGenerations: {self._gen}\n\tVariant: {self.variant} ({self._variant.name})"
            f"\n\tSelf adaptation variant: {self.variant_adptv} ({self._adaptation.name})"
            f"\n\tStopping xtol: {self._xtol}\n\tStopping ftol: {self._ftol}\n\tMemory: {self._memory}\n"
            + super().get_extra_info()
        )

    def _check_compatibility(self, pop: tp.PopulationLike) -> None:
        prob = pop.problem
        if prob.num_constraints:
            raise errors.CompatibilityError(
                f"Non linear constraints detected in {prob.name} instance. {self.name} cannot deal with them"
            )
        if prob.num_objectives != 1:
            raise errors.CompatibilityError(
                f"Multiple objectives detected in {prob.name} instance. {self.name} cannot deal with them"
            )
        if prob.stochastic:
            raise errors.CompatibilityError(
                f"The problem {prob.name} appears to be stochastic, {self.name} cannot deal with it"
            )

    # pylint: disable=too-many-locals,too-many-branches,too-many-statements
    def evolve(self, pop: base.P) -> base.P:
        """Evolves the population for the configured number of generations, or until
        one of the tolerances on the population flatness is met.
        The population is updated in place, and returned.

        Raises
        ------
        CompatibilityError
            if the problem is constrained, multi-objective or stochastic, or if the
            population has less than 7 individuals. The population is then left untouched.
        """
        prob = pop.problem
        self._check_compatibility(pop)
        if not self._gen:
            self._log = []
            return self._stop(pop, base.StopReason.ZERO_GENERATIONS)
        popsize = len(pop)
        if popsize < self.min_popsize:
            raise errors.CompatibilityError(
                f"{prob.name} needs at least {self.min_popsize} individuals in the population, {popsize} detected"
            )
        # all checks passed
        self._log = []
        rs = self._rng
        form = self._variant.form
        lower, upper = prob.bounds
        fevals0 = prob.fevals
        printer = callbacks.GenerationPrinter() if self._verbosity else None
        # working buffers: popold is read during a generation, popnew is written
        popold = pop.get_x()
        fit = pop.get_f()
        popnew = popold.copy()
        # global best (updated during the sweep) and iteration best (frozen during the sweep)
        best_idx = pop.best_idx()
        best_x = popnew[best_idx].copy()
        best_f = float(fit[best_idx, 0])
        iter_best_x = best_x
        if self._F.size != popsize or self._CR.size != popsize or not self._memory:
            if self._memory and self._F.size:
                warnings.warn(
                    f"Population size changed from {self._F.size} to {popsize}, adapted parameters are reset",
                    errors.MemoryResetWarning,
                )
            self._F, self._CR = self._adaptation.initialize(rs, popsize)
        # initialized on the first individual, will soon be forgotten
        best_F, best_CR = float(self._F[0]), float(self._CR[0])
        iter_best_F, iter_best_CR = best_F, best_CR
        for gen in range(1, self._gen + 1):
            for i in range(popsize):
                r = utils.sample_indices(rs, popsize)
                F, CR = self._adaptation.trial_parameters(
                    rs, form, self._F, self._CR, i, r, iter_best_F, iter_best_CR
                )
                trial = self._variant.trial(rs, popold, i, iter_best_x, r, F, CR)
                utils.force_feasibility(rs, trial, lower, upper)
                new_fitness = prob.fitness(trial)
                if new_fitness[0] <= fit[i, 0]:
                    fit[i] = new_fitness
                    popnew[i] = trial
                    pop.set_xf(i, trial, new_fitness)
                    self._F[i] = F
                    self._CR[i] = CR
                    if new_fitness[0] <= best_f:
                        best_f = float(new_fitness[0])
                        best_x = trial
                        best_F, best_CR = F, CR
                else:
                    popnew[i] = popold[i]
            iter_best_x, iter_best_F, iter_best_CR = best_x, best_F, best_CR
            popold, popnew = popnew, popold
            line: tp.Optional[base.LogLine] = None
            if not gen % self.check_interval:
                line = self._make_line(pop, gen, prob.fevals - fevals0, iter_best_F, iter_best_CR)
                if line.dx < self._xtol:
                    return self._stop(pop, base.StopReason.X_TOLERANCE)
                if line.df < self._ftol:
                    return self._stop(pop, base.StopReason.F_TOLERANCE)
            if self._verbosity and (gen % self._verbosity == 1 or self._verbosity == 1):
                if line is None:
                    line = self._make_line(pop, gen, prob.fevals - fevals0, iter_best_F, iter_best_CR)
                assert printer is not None
                printer(self, line)
                self._log.append(line)
            if self._callbacks.get("generation"):
                if line is None:
                    line = self._make_line(pop, gen, prob.fevals - fevals0, iter_best_F, iter_best_CR)
                self._call_callbacks("generation", line)
        return self._stop(pop, base.StopReason.MAX_GENERATIONS)

    @staticmethod
    def _make_line(pop: tp.PopulationLike, gen: int, fevals: int, F: float, CR: float) -> base.LogLine:
        """Computes the population flatness, from the best and worst individuals of the population"""
        x = pop.get_x()
        f = pop.get_f()
        best_idx = pop.best_idx()
        worst_idx = pop.worst_idx()
        dx = float(np.sum(np.abs(x[worst_idx] - x[best_idx])))
        df = float(abs(f[worst_idx, 0] - f[best_idx, 0]))
        return base.LogLine(gen, fevals, float(f[best_idx, 0]), F, CR, dx, df)

    def _stop(self, pop: base.P, reason: base.StopReason) -> base.P:
        self.stop_reason = reason
        messages = {
            base.StopReason.X_TOLERANCE: f"xtol < {self._xtol}",
            base.StopReason.F_TOLERANCE: f"ftol < {self._ftol}",
            base.StopReason.MAX_GENERATIONS: f"generations = {self._gen}",
        }
        if self._verbosity and reason in messages:
            print(f"Exit condition -- {messages[reason]}")
        logger.debug("%s stopped on %s: %s", self.name, pop.problem.name, reason.value)
        self._call_callbacks("stop", reason)
        return pop


class SelfAdaptiveDE(base.ConfiguredAlgorithm):
    """Configured self-adaptive differential evolution, creating SADE instances
    through :code:`config(gen=None, seed=None)`.

    Parameters
    ----------
    gen: int
        number of generations
    variant: int
        mutation variant (1 to 18)
    variant_adptv: int
        F and CR adaptation scheme (1: jDE, 2: iDE)
    ftol: float
        stopping criterion on the fitness tolerance
    xtol: float
        stopping criterion on the decision vector tolerance
    memory: bool
        whether adapted parameters are kept between successive calls to evolve
    """

    # pylint: disable=unused-argument
    def __init__(
        self,
        *,
        gen: int = 1,
        variant: int = 2,
        variant_adptv: int = 1,
        ftol: float = 1e-6,
        xtol: float = 1e-6,
        memory: bool = False,
    ) -> None:
        super().__init__(SADE, locals())


def make_algorithm(name: str, gen: tp.Optional[int] = None, seed: tp.Optional[int] = None) -> SADE:
    """Creates an algorithm from the name of a registered configuration"""
    if name not in base.registry:
        raise errors.ConfigurationError(f'Unknown algorithm "{name}", available: {sorted(base.registry)}')
    algo = base.registry[name](gen=gen, seed=seed)
    assert isinstance(algo, SADE)
    return algo


DefaultSADE = SelfAdaptiveDE().set_name("SADE", register=True)
jDE = SelfAdaptiveDE(variant_adptv=1).set_name("jDE", register=True)
iDE = SelfAdaptiveDE(variant_adptv=2).set_name("iDE", register=True)
BestOneBinJDE = SelfAdaptiveDE(variant=6, variant_adptv=1).set_name("BestOneBinJDE", register=True)
RandToBestOneBinIDE = SelfAdaptiveDE(variant=8, variant_adptv=2).set_name("RandToBestOneBinIDE", register=True)
RandThreeBinIDE = SelfAdaptiveDE(variant=12, variant_adptv=2).set_name("RandThreeBinIDE", register=True)
