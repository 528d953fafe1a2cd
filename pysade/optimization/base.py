# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import enum
import numbers
import numpy as np
import pysade.common.typing as tp
from pysade.common import tools
from pysade.common import errors as errors
from pysade.common.decorators import Registry


registry: Registry["ConfiguredAlgorithm"] = Registry()
_AlgoCallBack = tp.Callable[..., None]
P = tp.TypeVar("P", bound=tp.PopulationLike)


class LogLine(tp.NamedTuple):
    """Single entry of the log of an evolution"""

    gen: int  # generation number
    fevals: int  # number of function evaluations used since the start of the run
    best: float  # best fitness in the population
    F: float  # F used to create the best individual so far
    CR: float  # CR used to create the best individual so far
    dx: float  # distance between the best and the worst decision vectors
    df: float  # distance between the best and the worst fitness


class StopReason(enum.Enum):
    MAX_GENERATIONS = "max-generations"
    X_TOLERANCE = "x-tolerance"
    F_TOLERANCE = "f-tolerance"
    ZERO_GENERATIONS = "zero-generations"


def _is_integer(value: tp.Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class Algorithm:
    """Population-based algorithm framework, with one main function :code:`evolve(population)`
    which updates the individuals of the population in place and returns it.

    Each algorithm instance owns its own random state, so that independent instances
    can be used on different populations (but an instance must not be shared between threads).

    Parameters
    ----------
    seed: int or None
        seed of the random state of the algorithm (drawn at random if not provided)
    """

    name = "Algorithm"  # printed name

    def __init__(self, seed: tp.Optional[int] = None) -> None:
        if seed is None:
            seed = int(np.random.randint(0, 2 ** 31 - 1))
        if not _is_integer(seed) or seed < 0:
            raise errors.ConfigurationError(f"Seed must be a non-negative integer, got {seed!r}")
        self._seed = int(seed)
        self._random_state = np.random.RandomState(self._seed)
        self._verbosity = 0
        self._log: tp.List[LogLine] = []
        self._callbacks: tp.Dict[str, tp.List[_AlgoCallBack]] = {}
        self.stop_reason: tp.Optional[StopReason] = None

    @property
    def _rng(self) -> np.random.RandomState:
        """np.random.RandomState: random state the algorithm must pull from"""
        return self._random_state

    @property
    def seed(self) -> int:
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Sets the seed and reinitializes the random state with it"""
        if not _is_integer(seed) or seed < 0:
            raise errors.ConfigurationError(f"Seed must be a non-negative integer, got {seed!r}")
        self._seed = int(seed)
        self._random_state = np.random.RandomState(self._seed)

    @property
    def verbosity(self) -> int:
        return self._verbosity

    def set_verbosity(self, level: int) -> None:
        """Sets the verbosity level of the screen output and of the log.
        0 means no output, and a level > 0 prints and logs one line every :code:`level` generations.
        """
        if not _is_integer(level) or level < 0:
            raise errors.ConfigurationError(f"Verbosity must be a non-negative integer, got {level!r}")
        self._verbosity = int(level)

    def get_log(self) -> tp.List[LogLine]:
        """Log of the last call to evolve (one LogLine every :code:`verbosity` generations)"""
        return list(self._log)

    def get_name(self) -> str:
        return self.name

    def get_extra_info(self) -> str:
        return f"\tVerbosity: {self._verbosity}\n\tSeed: {self._seed}"

    def config(self) -> tp.Dict[str, tp.Any]:
        """Construction parameters of the algorithm"""
        return {"seed": self._seed}

    def register_callback(self, name: str, callback: _AlgoCallBack) -> None:
        """Add a callback method called at the end of each generation or when the evolution stops.
        This can be useful for custom logging, and cannot modify the evolution.

        Parameters
        ----------
        name: str
            name of the event to register the callback for (either :code:`generation` or :code:`stop`)
        callback: callable
            a callable taking the algorithm as first argument, and either the LogLine of the
            generation or the StopReason as second argument
        """
        assert name in ["generation", "stop"], f'Only "generation" and "stop" events can have callbacks (not {name})'
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def _call_callbacks(self, name: str, *args: tp.Any) -> None:
        for callback in self._callbacks.get(name, []):
            callback(self, *args)

    def evolve(self, pop: P) -> P:
        raise NotImplementedError

    def __repr__(self) -> str:
        diff = tools.different_from_defaults(instance=self, instance_dict=self.config())
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        return f"{self.__class__.__name__}({params})"


class ConfiguredAlgorithm:
    """Creates algorithm-like instances with configuration.

    Parameters
    ----------
    AlgorithmClass: type
        class of the algorithm to configure
    config: dict
        dictionnary of all the configurations

    Note
    ----
    This provides a default repr which can be bypassed through set_name
    """

    def __init__(self, AlgorithmClass: tp.Type[Algorithm], config: tp.Dict[str, tp.Any]) -> None:
        self._AlgorithmClass = AlgorithmClass
        config.pop("self", None)  # self comes from "locals()"
        config.pop("__class__", None)  # self comes from "locals()"
        self._config = config
        diff = tools.different_from_defaults(instance=self, instance_dict=config, check_mismatches=True)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self.name = f"{self.__class__.__name__}({params})"
        # try instantiating for init checks
        self(seed=0)

    def config(self) -> tp.Dict[str, tp.Any]:
        return dict(self._config)

    def __call__(self, gen: tp.Optional[int] = None, seed: tp.Optional[int] = None) -> Algorithm:
        """Creates an algorithm from the configuration

        Parameters
        ----------
        gen: int/None
            number of generations, overriding the configured one if provided
        seed: int/None
            seed of the random state of the algorithm
        """
        config = dict(self._config)
        if gen is not None:
            config["gen"] = gen
        return self._AlgorithmClass(seed=seed, **config)  # type: ignore

    def __repr__(self) -> str:
        return self.name

    def set_name(self, name: str, register: bool = False) -> "ConfiguredAlgorithm":
        """Set a new representation for the instance"""
        self.name = name
        if register:
            registry.register_name(name, self)
        return self

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            if self._config == other._config:
                return True
        return False
