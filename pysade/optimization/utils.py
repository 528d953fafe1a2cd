# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pysade.common.typing as tp


NUM_SAMPLED_INDICES = 7


def sample_indices(random_state: np.random.RandomState, popsize: int, num: int = NUM_SAMPLED_INDICES) -> tp.List[int]:
    """Draws num distinct indices in [0, popsize) through a partial
    Durstenfeld (Fisher-Yates) shuffle: at step j, a position is drawn in
    [0, popsize - 1 - j] and its value is swapped to position popsize - 1 - j.

    Note
    ----
    The index of the individual being updated is not excluded, so it may
    appear among the sampled indices.
    """
    assert 0 < num <= popsize, f"Cannot sample {num} distinct indices out of {popsize}"
    indices = list(range(popsize))
    selected: tp.List[int] = []
    for j in range(num):
        last = popsize - 1 - j
        pos = random_state.randint(0, last + 1)
        selected.append(indices[pos])
        indices[pos], indices[last] = indices[last], indices[pos]
    return selected


def force_feasibility(
    random_state: np.random.RandomState, x: np.ndarray, lower: np.ndarray, upper: np.ndarray
) -> np.ndarray:
    """Replaces in place each allele lying out of [lower, upper] by a uniform draw
    in its bounds (no clipping). Alleles are processed in order, one draw per
    infeasible allele.
    """
    for j in range(x.size):
        if x[j] < lower[j] or x[j] > upper[j]:
            x[j] = random_state.uniform(lower[j], upper[j])
    return x
