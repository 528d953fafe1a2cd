# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from .functions.base import Problem
from .functions.base import Translate
from .optimization import Population
from .optimization import SADE
from .optimization import SelfAdaptiveDE
from .optimization import registry as algorithms
from .optimization import callbacks as callbacks


__all__ = ["Problem", "Translate", "Population", "SADE", "SelfAdaptiveDE", "algorithms", "callbacks", "errors", "typing"]


__version__ = "0.1.0"
