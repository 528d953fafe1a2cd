# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Definitions of some convenient types.
If you know better practices, feel free to submit it ;)
"""
# pylint: disable=unused-import
# structures
from typing import Any as Any
from typing import Type as Type
from typing import TypeVar as TypeVar
from typing import Optional as Optional
from typing import Union as Union

# containers
from typing import Dict as Dict
from typing import Tuple as Tuple
from typing import List as List
from typing import Sequence as Sequence
from typing import NamedTuple as NamedTuple
from typing import MutableMapping as MutableMapping

# iterables
from typing import Iterator as Iterator

# others
from typing import Callable as Callable
from typing import Hashable as Hashable
from typing_extensions import Protocol

#
import numpy as _np


ArrayLike = Union[Tuple[float, ...], List[float], _np.ndarray]
Loss = Union[float, ArrayLike]
BoundValue = Optional[Union[float, int, _np.integer, _np.floating, _np.ndarray]]


# %% Protocol definitions for the collaborators of the algorithms


class ProblemLike(Protocol):
    # pylint: disable=pointless-statement

    @property
    def name(self) -> str:
        ...

    @property
    def dimension(self) -> int:
        ...

    @property
    def bounds(self) -> Tuple[_np.ndarray, _np.ndarray]:
        ...

    @property
    def num_objectives(self) -> int:
        ...

    @property
    def num_constraints(self) -> int:
        ...

    @property
    def stochastic(self) -> bool:
        ...

    @property
    def fevals(self) -> int:
        ...

    def fitness(self, x: ArrayLike) -> _np.ndarray:
        ...


class PopulationLike(Protocol):
    # pylint: disable=pointless-statement, unused-argument

    @property
    def problem(self) -> ProblemLike:
        ...

    def __len__(self) -> int:
        ...

    def get_x(self) -> _np.ndarray:
        ...

    def get_f(self) -> _np.ndarray:
        ...

    def best_idx(self) -> int:
        ...

    def worst_idx(self) -> int:
        ...

    def set_xf(self, index: int, x: ArrayLike, f: ArrayLike) -> None:
        ...
