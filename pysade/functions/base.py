# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pysade.common.typing as tp
from pysade.common import errors
from . import corefuncs


# pylint: disable=too-many-instance-attributes
class Problem:
    """Box-bounded optimization problem, combining a function and its search space

    Parameters
    ----------
    function: callable
        the function to minimize. It takes a 1d numpy array of size dimension and returns
        either a float or a sequence of num_objectives + num_constraints floats
    lower: float or array-like
        lower bounds of the search box
    upper: float or array-like
        upper bounds of the search box
    dimension: int or None
        dimension of the search space, required only if both bounds are scalars
        (otherwise a scalar bound is broadcast to the size of the other one)
    name: str or None
        name of the problem (defaults to the name of the function)
    num_objectives: int
        number of objectives returned by the function
    num_constraints: int
        number of constraints returned by the function, after the objectives
    stochastic: bool
        whether the function is noisy

    Note
    ----
    The number of calls to fitness is recorded in the fevals attribute.
    """

    def __init__(
        self,
        function: tp.Callable[[np.ndarray], tp.Loss],
        lower: tp.BoundValue,
        upper: tp.BoundValue,
        dimension: tp.Optional[int] = None,
        *,
        name: tp.Optional[str] = None,
        num_objectives: int = 1,
        num_constraints: int = 0,
        stochastic: bool = False,
    ) -> None:
        assert callable(function)
        bounds = [np.array(b, dtype=float, ndmin=1) for b in (lower, upper)]
        if dimension is not None:
            try:
                bounds = [np.broadcast_to(b, (dimension,)).copy() for b in bounds]
            except ValueError as e:
                raise errors.InvalidProblemError(f"Bounds cannot be broadcast to dimension {dimension}") from e
        else:
            try:
                bounds = [b.copy() for b in np.broadcast_arrays(*bounds)]
            except ValueError as e:
                raise errors.InvalidProblemError(
                    f"Lower and upper bounds of shapes {bounds[0].shape} and {bounds[1].shape} are incompatible"
                ) from e
        lower_array, upper_array = bounds
        if lower_array.ndim != 1 or lower_array.shape != upper_array.shape or not lower_array.size:
            raise errors.InvalidProblemError(
                f"Lower and upper bounds must be non-empty vectors of the same size, got shapes "
                f"{lower_array.shape} and {upper_array.shape}"
            )
        if not (np.all(np.isfinite(lower_array)) and np.all(np.isfinite(upper_array))):
            raise errors.InvalidProblemError("Bounds must be finite")
        if np.any(lower_array > upper_array):
            raise errors.InvalidProblemError(f"Lower bounds {lower_array} are larger than upper bounds {upper_array}")
        if num_objectives < 1 or num_constraints < 0:
            raise errors.InvalidProblemError(
                f"Invalid number of objectives ({num_objectives}) or constraints ({num_constraints})"
            )
        self._function = function
        self._lower = lower_array
        self._upper = upper_array
        self._num_objectives = int(num_objectives)
        self._num_constraints = int(num_constraints)
        self._stochastic = bool(stochastic)
        if name is None:
            name = function.__name__ if hasattr(function, "__name__") else function.__class__.__name__
        self._name = name
        self._fevals = 0

    @classmethod
    def from_registry(cls, name: str, dimension: int) -> "Problem":
        """Creates a problem from one of the registered benchmark functions,
        with its classical search box
        """
        lower, upper = corefuncs.registry.get_info(name)["bounds"]
        return cls(corefuncs.registry[name], lower, upper, dimension=dimension, name=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def dimension(self) -> int:
        return self._lower.size

    @property
    def bounds(self) -> tp.Tuple[np.ndarray, np.ndarray]:
        """Copies of the lower and upper bounds of the search box"""
        return self._lower.copy(), self._upper.copy()

    @property
    def num_objectives(self) -> int:
        return self._num_objectives

    @property
    def num_constraints(self) -> int:
        return self._num_constraints

    @property
    def stochastic(self) -> bool:
        return self._stochastic

    @property
    def fevals(self) -> int:
        """int: number of fitness evaluations performed so far"""
        return self._fevals

    def fitness(self, x: tp.ArrayLike) -> np.ndarray:
        """Evaluates the function on x and returns the fitness vector
        (objectives followed by constraints)
        """
        data = np.array(x, dtype=float, ndmin=1)
        if data.shape != (self.dimension,):
            raise errors.InvalidProblemError(
                f"Expected a decision vector of size {self.dimension} for {self.name}, got shape {data.shape}"
            )
        output = np.array(self._function(data), dtype=float, ndmin=1).ravel()
        self._fevals += 1
        expected = self._num_objectives + self._num_constraints
        if output.size != expected:
            raise errors.InvalidProblemError(
                f"{self.name} returned a fitness of size {output.size} while {expected} was expected"
            )
        return output

    def feasibility_x(self, x: tp.ArrayLike) -> bool:
        """Checks whether x lies in the search box"""
        data = np.asarray(x, dtype=float)
        return bool(np.all(data >= self._lower) and np.all(data <= self._upper))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name}, dimension={self.dimension}, fevals={self.fevals})"


class Translate(Problem):
    """Meta-problem which translates the whole search space of a problem
    by a constant vector: its bounds are shifted by the translation and the underlying
    problem is evaluated at x - translation

    Parameters
    ----------
    problem: Problem
        the problem to translate
    translation: array-like
        translation vector, of size problem.dimension
    """

    def __init__(self, problem: Problem, translation: tp.ArrayLike) -> None:
        translation_array = np.array(translation, dtype=float, ndmin=1)
        if translation_array.shape != (problem.dimension,):
            raise errors.InvalidProblemError(
                f"Translation of shape {translation_array.shape} does not match "
                f"the dimension of {problem.name} ({problem.dimension})"
            )
        self._problem = problem
        self.translation = translation_array
        lower, upper = problem.bounds
        super().__init__(
            self._translated_fitness,
            lower + translation_array,
            upper + translation_array,
            name=f"{problem.name} [translated]",
            num_objectives=problem.num_objectives,
            num_constraints=problem.num_constraints,
            stochastic=problem.stochastic,
        )

    @property
    def inner_problem(self) -> Problem:
        return self._problem

    def _translated_fitness(self, x: np.ndarray) -> np.ndarray:
        return self._problem.fitness(x - self.translation)
