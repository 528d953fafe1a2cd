# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from math import exp, sqrt
import numpy as np
import pysade.common.typing as tp
from pysade.common.decorators import Registry


# each function is registered with its classical search box, as {"bounds": (lower, upper)}
registry: Registry[tp.Callable[[np.ndarray], float]] = Registry()


@registry.register_with_info(bounds=(-5.12, 5.12))
def sphere(x: np.ndarray) -> float:
    """The most classical continuous optimization testbed.

    If you do not solve that one then you have a bug."""
    assert x.ndim == 1
    return float(x.dot(x))


@registry.register_with_info(bounds=(-5.0, 10.0))
def rosenbrock(x: np.ndarray) -> float:
    x_m_1 = x[:-1] - 1
    x_diff = x[:-1] ** 2 - x[1:]
    return float(100 * x_diff.dot(x_diff) + x_m_1.dot(x_m_1))


@registry.register_with_info(bounds=(-5.12, 5.12))
def rastrigin(x: np.ndarray) -> float:
    """Classical multimodal function."""
    cosi = float(np.sum(np.cos(2 * np.pi * x)))
    return float(10 * (len(x) - cosi) + sphere(x))


@registry.register_with_info(bounds=(-15.0, 30.0))
def ackley(x: np.ndarray) -> float:
    dim = x.size
    sum_cos = np.sum(np.cos(2 * np.pi * x))
    return float(-20.0 * exp(-0.2 * sqrt(sphere(x) / dim)) - exp(sum_cos / dim) + 20 + exp(1))


@registry.register_with_info(bounds=(-600.0, 600.0))
def griewank(x: np.ndarray) -> float:
    """Multimodal function, with many regularly distributed local minima."""
    part1 = sphere(x)
    part2 = np.prod(np.cos(x / np.sqrt(1 + np.arange(len(x)))))
    return 1 + (float(part1) / 4000.0) - float(part2)


@registry.register_with_info(bounds=(-5.0, 5.0))
def ellipsoid(x: np.ndarray) -> float:
    """Classical example of ill conditioned function."""
    dim = x.size
    weights = 10 ** np.linspace(0, 6, dim)
    return float(weights.dot(x ** 2))


@registry.register_with_info(bounds=(-65.536, 65.536))
def schwefel_1_2(x: np.ndarray) -> float:
    cx = np.cumsum(x)
    return sphere(cx)
