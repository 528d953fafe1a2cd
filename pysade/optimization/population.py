# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pysade.common.typing as tp
from pysade.common import errors


class Population:
    """Fixed-dimension set of individuals (decision vector and fitness vector pairs)
    attached to a problem.

    Parameters
    ----------
    problem: Problem
        the problem the individuals are evaluated on
    size: int
        number of individuals to initialize uniformly at random within the bounds
        of the problem (each of them is evaluated once)
    seed: int or None
        seed of the random state used for the initialization and for random_decision_vector

    Note
    ----
    The champion (best individual ever inserted) is tracked for single objective problems.
    """

    def __init__(self, problem: tp.ProblemLike, size: int = 0, seed: tp.Optional[int] = None) -> None:
        if size < 0:
            raise errors.SadeValueError(f"Population size must be non-negative, got {size}")
        self._problem = problem
        self.seed = seed
        self.random_state = np.random.RandomState(seed)
        self._x: tp.List[np.ndarray] = []
        self._f: tp.List[np.ndarray] = []
        self._champion_x: tp.Optional[np.ndarray] = None
        self._champion_f: tp.Optional[np.ndarray] = None
        for _ in range(size):
            self.push_back(self.random_decision_vector())

    @property
    def problem(self) -> tp.ProblemLike:
        return self._problem

    def __len__(self) -> int:
        return len(self._x)

    @property
    def size(self) -> int:
        return len(self)

    def random_decision_vector(self) -> np.ndarray:
        """Draws a decision vector uniformly within the bounds of the problem"""
        lower, upper = self._problem.bounds
        return np.array([self.random_state.uniform(lb, ub) for lb, ub in zip(lower, upper)])

    def push_back(self, x: tp.ArrayLike, f: tp.Optional[tp.ArrayLike] = None) -> None:
        """Appends an individual, evaluating it if no fitness is provided"""
        x_array = self._check_x(x)
        f_array = self._problem.fitness(x_array) if f is None else self._check_f(f)
        self._x.append(x_array)
        self._f.append(f_array)
        self._update_champion(x_array, f_array)

    def set_xf(self, index: int, x: tp.ArrayLike, f: tp.ArrayLike) -> None:
        """Replaces the individual at the given index (without evaluating it)"""
        if not 0 <= index < len(self):
            raise errors.SadeValueError(f"Index {index} is out of range for a population of size {len(self)}")
        x_array = self._check_x(x)
        f_array = self._check_f(f)
        self._x[index] = x_array
        self._f[index] = f_array
        self._update_champion(x_array, f_array)

    def get_x(self) -> np.ndarray:
        """Copy of the decision vectors, as a (size, dimension) array"""
        if not self._x:
            return np.zeros((0, self._problem.dimension))
        return np.array(self._x)

    def get_f(self) -> np.ndarray:
        """Copy of the fitness vectors, as a (size, num_objectives + num_constraints) array"""
        if not self._f:
            return np.zeros((0, self._problem.num_objectives + self._problem.num_constraints))
        return np.array(self._f)

    def best_idx(self) -> int:
        """Index of the individual with lowest fitness (first one in case of ties)"""
        return int(np.argmin(self._objective_values()))

    def worst_idx(self) -> int:
        """Index of the individual with highest fitness (first one in case of ties)"""
        return int(np.argmax(self._objective_values()))

    @property
    def champion_x(self) -> tp.Optional[np.ndarray]:
        return None if self._champion_x is None else self._champion_x.copy()

    @property
    def champion_f(self) -> tp.Optional[np.ndarray]:
        return None if self._champion_f is None else self._champion_f.copy()

    def _objective_values(self) -> np.ndarray:
        if self._problem.num_objectives != 1:
            raise errors.SadeValueError("Best and worst individuals are only defined for single objective problems")
        if not self._f:
            raise errors.SadeValueError("Cannot look for best or worst individual in an empty population")
        return np.array([f[0] for f in self._f])

    def _update_champion(self, x: np.ndarray, f: np.ndarray) -> None:
        if self._problem.num_objectives != 1:
            return
        if self._champion_f is None or f[0] < self._champion_f[0]:
            self._champion_x = x.copy()
            self._champion_f = f.copy()

    def _check_x(self, x: tp.ArrayLike) -> np.ndarray:
        data = np.array(x, dtype=float, ndmin=1)
        if data.shape != (self._problem.dimension,):
            raise errors.SadeValueError(
                f"Expected a decision vector of size {self._problem.dimension}, got shape {data.shape}"
            )
        return data

    def _check_f(self, f: tp.ArrayLike) -> np.ndarray:
        data = np.array(f, dtype=float, ndmin=1)
        expected = self._problem.num_objectives + self._problem.num_constraints
        if data.shape != (expected,):
            raise errors.SadeValueError(f"Expected a fitness vector of size {expected}, got shape {data.shape}")
        return data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(problem={self._problem.name}, size={len(self)}, seed={self.seed})"
